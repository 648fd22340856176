from pydantic import BaseModel, Field
from typing import Dict, List

from colorspace.models import RGBA


class SuccessResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    errors: List[str] = Field(default_factory=list)


class ColorFormatsResponse(BaseModel):
    color: RGBA
    formats: Dict[str, str]
