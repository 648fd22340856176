"""
Server settings read from COLOR_SERVER_* environment variables.
"""

import os
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, Field, PositiveInt

ENV_PREFIX = "COLOR_SERVER_"


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(8973, ge=1, le=65535)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    default_width: PositiveInt = 512
    default_height: PositiveInt = 512
    max_image_dimension: PositiveInt = 4096
    jpeg_quality: float = Field(0.9, gt=0.0, le=1.0)
    enable_mcp: bool = True


def load_settings(environ: Optional[Mapping[str, str]] = None) -> ServerSettings:
    """Build settings from the environment; unset variables keep their defaults."""
    if environ is None:
        environ = os.environ
    values = {}
    for name in ServerSettings.model_fields:
        raw = environ.get(ENV_PREFIX + name.upper())
        if raw is not None and raw != "":
            values[name] = raw.upper() if name == "log_level" else raw
    return ServerSettings(**values)
