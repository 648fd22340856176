from .images import export_filename, media_type_for, render_color_image, save_color_image
from .share_links import build_share_query, build_share_url

__all__ = [
    "export_filename",
    "media_type_for",
    "render_color_image",
    "save_color_image",
    "build_share_query",
    "build_share_url",
]
