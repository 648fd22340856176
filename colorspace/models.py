"""
Immutable color value types.

RGBA is the canonical color; every other model is a view materialized from it
on demand. Field constraints encode each representation's domain, so building
a model with an out-of-range value raises a pydantic ValidationError.
"""

from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

ColorFormat = Literal["hex", "rgb", "rgba", "hsl", "hsla", "hsv", "hsva", "cmyk", "lab", "hwb", "lch"]
ImageFormat = Literal["png", "jpeg", "svg"]

SUPPORTED_FORMATS: Tuple[str, ...] = (
    "hex",
    "rgb",
    "rgba",
    "hsl",
    "hsla",
    "hsv",
    "hsva",
    "cmyk",
    "lab",
    "hwb",
    "lch",
)
SUPPORTED_IMAGE_FORMATS: Tuple[str, ...] = ("png", "jpeg", "svg")

DEFAULT_WIDTH = 512
DEFAULT_HEIGHT = 512
DEFAULT_IMAGE_FORMAT = "png"
DEFAULT_JPEG_QUALITY = 0.9


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class RGBA(_Frozen):
    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)
    a: float = Field(default=1.0, ge=0.0, le=1.0)


class HSLA(_Frozen):
    h: float = Field(ge=0, lt=360)
    s: float = Field(ge=0, le=100)
    l: float = Field(ge=0, le=100)
    a: float = Field(default=1.0, ge=0.0, le=1.0)


class HSVA(_Frozen):
    h: float = Field(ge=0, lt=360)
    s: float = Field(ge=0, le=100)
    v: float = Field(ge=0, le=100)
    a: float = Field(default=1.0, ge=0.0, le=1.0)


class CMYK(_Frozen):
    c: float = Field(ge=0, le=100)
    m: float = Field(ge=0, le=100)
    y: float = Field(ge=0, le=100)
    k: float = Field(ge=0, le=100)


class LAB(_Frozen):
    l: float = Field(ge=0, le=100)
    a: float = Field(ge=-128, le=127)
    b: float = Field(ge=-128, le=127)


class HWB(_Frozen):
    h: float = Field(ge=0, lt=360)
    w: float = Field(ge=0, le=100)
    b: float = Field(ge=0, le=100)


class LCH(_Frozen):
    l: float = Field(ge=0, le=100)
    c: float = Field(ge=0, le=150)
    h: float = Field(ge=0, lt=360)


class ImageSize(_Frozen):
    width: PositiveInt = DEFAULT_WIDTH
    height: PositiveInt = DEFAULT_HEIGHT


class ExportRequest(_Frozen):
    """Everything an exporter needs to emit one solid-color image."""

    color: RGBA
    width: PositiveInt = DEFAULT_WIDTH
    height: PositiveInt = DEFAULT_HEIGHT
    image_format: ImageFormat = DEFAULT_IMAGE_FORMAT
    # Only honoured for jpeg
    quality: Optional[float] = Field(default=None, gt=0.0, le=1.0)
