from .search_params import (
    RELEVANT_KEYS,
    ParsedColorRequest,
    build_export_request,
    extract_numeric_values,
    parse_color_request,
    parse_color_value,
)

__all__ = [
    "RELEVANT_KEYS",
    "ParsedColorRequest",
    "build_export_request",
    "extract_numeric_values",
    "parse_color_request",
    "parse_color_value",
]
