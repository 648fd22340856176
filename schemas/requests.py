from pydantic import BaseModel, ConfigDict, Field, PositiveInt
from typing import Literal, Optional

from colorspace.models import RGBA, ColorFormat


class ColorValueRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    format: str = Field(..., description="The format tag the value is written in, e.g. hex or cmyk")
    format_value: str = Field(..., alias="formatValue", description="The color value, e.g. ff5733 or 0,66,87,0")


class ColorConvertRequest(ColorValueRequest):
    target: ColorFormat = Field(..., description="The target color format to convert to")


class ShareLinkRequest(BaseModel):
    color: RGBA = Field(..., description="The color to share")
    format: ColorFormat = Field("hex", description="The format the link encodes the color in")
    width: PositiveInt = Field(512, description="Image width in pixels")
    height: PositiveInt = Field(512, description="Image height in pixels")
    download: bool = Field(False, description="Whether opening the link downloads the image")
    extension: Literal["png", "jpeg", "svg"] = Field("png", description="Image format of the download")
    base_url: Optional[str] = Field(None, description="Page URL the query is appended to")
