from .requests import ColorConvertRequest, ColorValueRequest, ShareLinkRequest
from .responses import ColorFormatsResponse, SuccessResponse, ErrorResponse

__all__ = [
    "ColorConvertRequest",
    "ColorValueRequest",
    "ShareLinkRequest",
    "ColorFormatsResponse",
    "SuccessResponse",
    "ErrorResponse",
]
