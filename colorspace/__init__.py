from .models import (
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
from .conversions import (
    clamp,
    cmyk_to_rgba,
    format_all,
    format_color_string,
    hex_to_rgba,
    hsla_to_rgba,
    hsva_to_rgba,
    hwb_to_rgba,
    is_valid_hex,
    lab_to_rgba,
    lch_to_rgba,
    rgba_to_cmyk,
    rgba_to_css_string,
    rgba_to_hex,
    rgba_to_hsla,
    rgba_to_hsva,
    rgba_to_hwb,
    rgba_to_lab,
    rgba_to_lch,
    round_half_up,
    wrap_hue,
)

__all__ = [
    "RGBA", "HSLA", "HSVA", "CMYK", "LAB", "HWB", "LCH",
    "ColorFormat", "ImageFormat", "ImageSize", "ExportRequest",
    "SUPPORTED_FORMATS", "SUPPORTED_IMAGE_FORMATS",
    "DEFAULT_WIDTH", "DEFAULT_HEIGHT", "DEFAULT_IMAGE_FORMAT", "DEFAULT_JPEG_QUALITY",
    "clamp", "round_half_up", "wrap_hue", "is_valid_hex",
    "rgba_to_hex", "hex_to_rgba",
    "rgba_to_hsla", "hsla_to_rgba",
    "rgba_to_hsva", "hsva_to_rgba",
    "rgba_to_cmyk", "cmyk_to_rgba",
    "rgba_to_lab", "lab_to_rgba",
    "rgba_to_hwb", "hwb_to_rgba",
    "rgba_to_lch", "lch_to_rgba",
    "rgba_to_css_string", "format_color_string", "format_all",
]
