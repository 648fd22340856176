"""
Tolerant parsing of color/export requests from flat string parameters.

The parameter map usually comes from a URL query string (or manual input) and
is user editable, so nothing here raises for malformed input. Every stage runs
regardless of earlier failures and appends its problem to a shared error list,
letting a caller show every problem at once.
"""

import logging
import math
import re
from typing import Callable, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from colorspace.conversions import (
    clamp,
    cmyk_to_rgba,
    hex_to_rgba,
    hsla_to_rgba,
    hsva_to_rgba,
    hwb_to_rgba,
    lab_to_rgba,
    lch_to_rgba,
    round_half_up,
    wrap_hue,
)
from colorspace.models import (
    CMYK,
    DEFAULT_HEIGHT,
    DEFAULT_IMAGE_FORMAT,
    DEFAULT_JPEG_QUALITY,
    DEFAULT_WIDTH,
    HSLA,
    HSVA,
    HWB,
    LAB,
    LCH,
    RGBA,
    SUPPORTED_FORMATS,
    SUPPORTED_IMAGE_FORMATS,
    ColorFormat,
    ExportRequest,
    ImageFormat,
    ImageSize,
)

logger = logging.getLogger(__name__)

RELEVANT_KEYS = ("format", "formatValue", "size", "download", "extension")

TRUE_VALUES = ("true", "1", "yes")
FALSE_VALUES = ("false", "0", "no")
JPEG_ALIASES = ("jpeg", "jpg")

SIZE_RE = re.compile(r"^(\d+)\s*x\s*(\d+)$")
NUMBER_TOKEN_RE = re.compile(r"-?\d*\.?\d+%?")


class ParsedColorRequest(BaseModel):
    """Outcome of parsing one parameter map. Always usable; check `errors`."""

    model_config = ConfigDict(frozen=True)

    active: bool = False
    color: Optional[RGBA] = None
    format: Optional[ColorFormat] = None
    size: ImageSize = ImageSize()
    download: bool = False
    extension: ImageFormat = DEFAULT_IMAGE_FORMAT
    errors: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


class _ErrorCollector:
    """Gathers stage errors in order; never aborts."""

    def __init__(self) -> None:
        self._errors: List[str] = []

    def add(self, error: Optional[str]) -> None:
        if error:
            self._errors.append(error)

    def freeze(self) -> Tuple[str, ...]:
        return tuple(self._errors)


class _Component(NamedTuple):
    value: float
    is_percent: bool


# Top-level parse -------------------------------------------------

def parse_color_request(
    params: Mapping[str, str],
    default_width: int = DEFAULT_WIDTH,
    default_height: int = DEFAULT_HEIGHT,
    max_dimension: Optional[int] = None,
) -> ParsedColorRequest:
    """Parse search params into a color/export request, collecting every error.

    When `max_dimension` is given, larger sizes are rejected as size errors.
    """
    active = any(key in params for key in RELEVANT_KEYS)
    errors = _ErrorCollector()

    extension, error = parse_extension_param(params.get("extension"))
    errors.add(error)

    download, error = parse_download_param(params.get("download"))
    errors.add(error)

    (width, height), error = parse_size_param(params.get("size"), default_width, default_height, max_dimension)
    errors.add(error)

    raw_format = params.get("format")
    raw_value = params.get("formatValue")
    parsed_format: Optional[str] = None
    parsed_color: Optional[RGBA] = None

    if raw_format or raw_value:
        fmt, error = parse_format_param(raw_format)
        if error:
            errors.add(error)
        elif not raw_value:
            errors.add("`formatValue` parameter is required.")
        else:
            parsed_format = fmt
            parsed_color, error = parse_color_value(fmt, raw_value)
            errors.add(error)
    elif active:
        errors.add("`format` and `formatValue` parameters are required.")

    result = ParsedColorRequest(
        active=active,
        color=parsed_color,
        format=parsed_format,
        size=ImageSize(width=width, height=height),
        download=download,
        extension=extension or DEFAULT_IMAGE_FORMAT,
        errors=errors.freeze(),
    )
    logger.debug("Parsed color request active=%s format=%s errors=%d", result.active, result.format, len(result.errors))
    return result


def build_export_request(parsed: ParsedColorRequest, quality: float = DEFAULT_JPEG_QUALITY) -> Optional[ExportRequest]:
    """Resolve a parsed request into exporter input, or None without a color."""
    if parsed.color is None:
        return None
    return ExportRequest(
        color=parsed.color,
        width=parsed.size.width,
        height=parsed.size.height,
        image_format=parsed.extension,
        quality=quality if parsed.extension == "jpeg" else None,
    )


# Stages ----------------------------------------------------------

def parse_format_param(format_param: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """Validate a format tag (case-insensitive)."""
    supported = ", ".join(SUPPORTED_FORMATS)
    if not format_param:
        return None, f"`format` parameter is missing. Supported formats: {supported}"

    normalized = format_param.strip().lower()
    if normalized in SUPPORTED_FORMATS:
        return normalized, None
    return None, f"Invalid format: {format_param}. Supported formats: {supported}"


def parse_extension_param(extension_param: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """Validate the image extension; jpg is an alias for jpeg."""
    if not extension_param:
        return None, None

    normalized = extension_param.strip().lower()
    if normalized in JPEG_ALIASES:
        return "jpeg", None
    if normalized in SUPPORTED_IMAGE_FORMATS:
        return normalized, None
    return None, f"Invalid extension: {extension_param}. Supported values: png, jpeg, svg."


def parse_download_param(download_param: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Parse the download flag."""
    if not download_param:
        return False, None

    normalized = download_param.strip().lower()
    if normalized in TRUE_VALUES:
        return True, None
    if normalized in FALSE_VALUES:
        return False, None
    return False, "`download` parameter must be true or false."


def parse_size_param(
    size_param: Optional[str],
    default_width: int,
    default_height: int,
    max_dimension: Optional[int] = None,
) -> Tuple[Tuple[int, int], Optional[str]]:
    """Parse `<w>x<h>`; defaults stand in for anything unusable."""
    defaults = (default_width, default_height)
    if not size_param:
        return defaults, None

    m = SIZE_RE.match(size_param.strip().lower())
    if not m:
        return defaults, "`size` parameter must follow the `widthxheight` pattern."

    width, height = int(m.group(1)), int(m.group(2))
    if width <= 0 or height <= 0:
        return defaults, "`size` parameter must contain positive numbers."
    if max_dimension is not None and (width > max_dimension or height > max_dimension):
        return defaults, f"`size` parameter must not exceed {max_dimension}x{max_dimension}."
    return (width, height), None


# Color values ----------------------------------------------------

def extract_numeric_values(value: str, expected: int) -> Tuple[List[_Component], Optional[str]]:
    """Pull signed decimals (optionally %-suffixed) out of free-form text."""
    matches = NUMBER_TOKEN_RE.findall(value)
    if len(matches) < expected:
        return [], f"Expected {expected} value(s) but could not parse them from: {value}"

    components = []
    for match in matches:
        is_percent = match.endswith("%")
        try:
            numeric = float(match[:-1] if is_percent else match)
        except ValueError:
            return [], f"Invalid numeric value in: {value}"
        if not math.isfinite(numeric):
            return [], f"Invalid numeric value in: {value}"
        components.append(_Component(numeric, is_percent))
    return components, None


def normalize_rgb_component(component: _Component) -> int:
    if component.is_percent:
        return round_half_up(clamp(component.value, 0, 100) * 2.55)
    return int(clamp(round_half_up(component.value), 0, 255))


def normalize_percent_component(component: _Component) -> float:
    return clamp(component.value, 0, 100)


def normalize_alpha(component: Optional[_Component]) -> float:
    """Alpha given as a percent, or any bare value above 1, is read as a percentage."""
    if component is None:
        return 1.0
    if component.is_percent or component.value > 1:
        return clamp(component.value / 100, 0, 1)
    return clamp(component.value, 0, 1)


def _rgb(c: Sequence[_Component]) -> RGBA:
    return RGBA(r=normalize_rgb_component(c[0]), g=normalize_rgb_component(c[1]), b=normalize_rgb_component(c[2]))


def _alpha_of(c: Sequence[_Component]) -> float:
    return normalize_alpha(c[3] if len(c) > 3 else None)


def _rgba(c: Sequence[_Component]) -> RGBA:
    return _rgb(c).model_copy(update={"a": _alpha_of(c)})


def _hsl(c: Sequence[_Component], with_alpha: bool = False) -> RGBA:
    return hsla_to_rgba(HSLA(
        h=wrap_hue(c[0].value),
        s=normalize_percent_component(c[1]),
        l=normalize_percent_component(c[2]),
        a=_alpha_of(c) if with_alpha else 1.0,
    ))


def _hsv(c: Sequence[_Component], with_alpha: bool = False) -> RGBA:
    return hsva_to_rgba(HSVA(
        h=wrap_hue(c[0].value),
        s=normalize_percent_component(c[1]),
        v=normalize_percent_component(c[2]),
        a=_alpha_of(c) if with_alpha else 1.0,
    ))


def _cmyk(c: Sequence[_Component]) -> RGBA:
    c_, m, y, k = (normalize_percent_component(x) for x in c[:4])
    return cmyk_to_rgba(CMYK(c=c_, m=m, y=y, k=k), 1.0)


def _lab(c: Sequence[_Component]) -> RGBA:
    return lab_to_rgba(LAB(
        l=clamp(c[0].value, 0, 100),
        a=clamp(c[1].value, -128, 127),
        b=clamp(c[2].value, -128, 127),
    ), 1.0)


def _hwb(c: Sequence[_Component]) -> RGBA:
    return hwb_to_rgba(HWB(
        h=wrap_hue(c[0].value),
        w=normalize_percent_component(c[1]),
        b=normalize_percent_component(c[2]),
    ), 1.0)


def _lch(c: Sequence[_Component]) -> RGBA:
    return lch_to_rgba(LCH(
        l=clamp(c[0].value, 0, 100),
        c=clamp(c[1].value, 0, 150),
        h=wrap_hue(c[2].value),
    ), 1.0)


# format tag -> (required token count, builder); alpha tokens are optional
# because opaque rgba renders as rgb(r, g, b)
COLOR_BUILDERS: Dict[str, Tuple[int, Callable[[Sequence[_Component]], RGBA]]] = {
    "rgb": (3, _rgb),
    "rgba": (3, _rgba),
    "hsl": (3, _hsl),
    "hsla": (3, lambda c: _hsl(c, with_alpha=True)),
    "hsv": (3, _hsv),
    "hsva": (3, lambda c: _hsv(c, with_alpha=True)),
    "cmyk": (4, _cmyk),
    "lab": (3, _lab),
    "hwb": (3, _hwb),
    "lch": (3, _lch),
}


def parse_color_value(fmt: str, value: str) -> Tuple[Optional[RGBA], Optional[str]]:
    """Convert a format-specific literal to RGBA, or return an error message."""
    if fmt == "hex":
        trimmed = value.strip()
        normalized = trimmed if trimmed.startswith("#") else f"#{trimmed}"
        return hex_to_rgba(normalized, 1.0), None

    if fmt not in COLOR_BUILDERS:
        return None, f"Unsupported format: {fmt}"

    expected, builder = COLOR_BUILDERS[fmt]
    components, error = extract_numeric_values(value, expected)
    if error:
        return None, error
    return builder(components), None
