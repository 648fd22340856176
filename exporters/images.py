"""
Solid-color image export.

Renders an ExportRequest to PNG/JPEG bytes with Pillow, or to an SVG document.
Files are written atomically: the image lands under a temporary name in the
target directory and is renamed into place only once fully written.
"""

import io
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Optional, Union

from PIL import Image

from colorspace.conversions import rgba_to_css_string, round_half_up
from colorspace.models import DEFAULT_JPEG_QUALITY, ExportRequest

logger = logging.getLogger(__name__)

MEDIA_TYPES = {
    "png": "image/png",
    "jpeg": "image/jpeg",
    "svg": "image/svg+xml",
}

SVG_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<svg width="{width}" height="{height}" xmlns="http://www.w3.org/2000/svg">
  <rect width="100%" height="100%" fill="{fill}" />
</svg>"""


def media_type_for(image_format: str) -> str:
    """MIME type of an image format."""
    try:
        return MEDIA_TYPES[image_format]
    except KeyError:
        raise ValueError(f"Unsupported format: {image_format}") from None


def export_filename(image_format: str, stamp: Optional[int] = None) -> str:
    """Download name, e.g. color-1700000000000.png."""
    if stamp is None:
        stamp = int(time.time() * 1000)
    return f"color-{stamp}.{image_format}"


def render_svg(export: ExportRequest) -> bytes:
    fill = rgba_to_css_string(export.color)
    return SVG_TEMPLATE.format(width=export.width, height=export.height, fill=fill).encode("utf-8")


def render_raster(export: ExportRequest) -> bytes:
    """PNG keeps alpha; JPEG has none, so the color is composited over black."""
    color = export.color
    alpha = round_half_up(color.a * 255)
    buffer = io.BytesIO()

    if export.image_format == "png":
        image = Image.new("RGBA", (export.width, export.height), (color.r, color.g, color.b, alpha))
        image.save(buffer, format="PNG")
    elif export.image_format == "jpeg":
        layer = Image.new("RGBA", (export.width, export.height), (color.r, color.g, color.b, alpha))
        background = Image.new("RGBA", layer.size, (0, 0, 0, 255))
        image = Image.alpha_composite(background, layer).convert("RGB")
        quality = export.quality if export.quality is not None else DEFAULT_JPEG_QUALITY
        image.save(buffer, format="JPEG", quality=round_half_up(quality * 100))
    else:
        raise ValueError(f"Unsupported raster format: {export.image_format}")

    return buffer.getvalue()


def render_color_image(export: ExportRequest) -> bytes:
    """Render an export request to encoded image bytes."""
    if export.image_format == "svg":
        data = render_svg(export)
    else:
        data = render_raster(export)
    logger.info(
        "Rendered %s %dx%d (%d bytes) for %s",
        export.image_format, export.width, export.height, len(data), rgba_to_css_string(export.color),
    )
    return data


def save_color_image(
    export: ExportRequest,
    directory: Union[str, Path],
    filename: Optional[str] = None,
) -> Path:
    """Write the rendered image into directory; either the whole file appears or nothing does."""
    directory = Path(directory)
    target = directory / (filename or export_filename(export.image_format))
    data = render_color_image(export)

    fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=".color-", suffix=".part")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        os.replace(tmp_name, target)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    logger.info("Saved color image to %s", target)
    return target
