"""Share links: a color and export request encoded as URL search params."""

from typing import Optional
from urllib.parse import urlencode

from colorspace.conversions import format_color_string
from colorspace.models import RGBA


def build_share_query(
    color: RGBA,
    fmt: str,
    width: int,
    height: int,
    download: bool = False,
    extension: str = "png",
) -> str:
    """Encode a color/export request as a query string the request parser reads back."""
    value = format_color_string(color, fmt)
    if fmt == "hex":
        value = value.upper()
    return urlencode({
        "format": fmt,
        "formatValue": value,
        "size": f"{width}x{height}",
        "download": "true" if download else "false",
        "extension": extension,
    })


def build_share_url(
    base_url: Optional[str],
    color: RGBA,
    fmt: str,
    width: int,
    height: int,
    download: bool = False,
    extension: str = "png",
) -> str:
    """Join a base URL with the share query; a bare `?query` without a base."""
    query = build_share_query(color, fmt, width, height, download, extension)
    if base_url:
        return f"{base_url}?{query}"
    return f"?{query}"
