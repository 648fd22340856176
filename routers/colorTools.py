"""
Color tools endpoints: conversion between the eleven color formats, tolerant
parsing of search-param requests, share links and solid-color image export.
"""

import logging

from fastapi import APIRouter, HTTPException, Request, Response

from colorspace.conversions import format_all, format_color_string
from colorspace.models import RGBA
from config import ServerSettings, load_settings
from exporters.images import export_filename, media_type_for, render_color_image
from exporters.share_links import build_share_url
from parsers.search_params import (
    ParsedColorRequest,
    build_export_request,
    parse_color_request,
    parse_color_value,
    parse_format_param,
)
from schemas.requests import ColorConvertRequest, ColorValueRequest, ShareLinkRequest
from schemas.responses import ColorFormatsResponse, ErrorResponse, SuccessResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def get_settings(request: Request) -> ServerSettings:
    settings = getattr(request.app.state, "settings", None)
    return settings if settings is not None else load_settings()


def bad_request(*errors: str) -> HTTPException:
    return HTTPException(status_code=400, detail=ErrorResponse(errors=list(errors)).model_dump())


def resolve_color(body: ColorValueRequest) -> RGBA:
    """Parse a (format, formatValue) pair or raise a 400 listing the problem."""
    fmt, error = parse_format_param(body.format)
    if error:
        raise bad_request(error)
    rgba, error = parse_color_value(fmt, body.format_value)
    if error:
        raise bad_request(error)
    return rgba


def parse_query(request: Request) -> ParsedColorRequest:
    settings = get_settings(request)
    return parse_color_request(
        request.query_params,
        default_width=settings.default_width,
        default_height=settings.default_height,
        max_dimension=settings.max_image_dimension,
    )


# Conversion ------------------------------------------------------

@router.post("/convert_color_code", response_model=SuccessResponse, operation_id="convert_color_code", description="Convert a color value from one format to a target format")
async def convert_color_code(request: ColorConvertRequest):
    """Parse a color in its declared format and render it in the target format."""
    rgba = resolve_color(request)
    return SuccessResponse(success=True, message=format_color_string(rgba, request.target))


@router.post("/color_formats", response_model=ColorFormatsResponse, operation_id="color_formats", description="Render a color value in every supported format")
async def color_formats(request: ColorValueRequest):
    """Parse a color and list it in all eleven formats."""
    rgba = resolve_color(request)
    return ColorFormatsResponse(color=rgba, formats=format_all(rgba))


# Search-param requests -------------------------------------------

@router.get("/color_request", response_model=ParsedColorRequest, operation_id="parse_color_request", description="Parse format, formatValue, size, download and extension query parameters")
async def color_request(request: Request):
    """Parse query parameters; problems are reported in `errors`, never as HTTP errors."""
    return parse_query(request)


@router.get("/color_image", operation_id="color_image", description="Render the color described by the query parameters as a png, jpeg or svg image")
async def color_image(request: Request):
    """Export the requested color as an image."""
    parsed = parse_query(request)
    if parsed.errors:
        raise bad_request(*parsed.errors)

    export = build_export_request(parsed, quality=get_settings(request).jpeg_quality)
    if export is None:
        raise bad_request("`format` and `formatValue` parameters are required.")

    content = render_color_image(export)
    disposition = "attachment" if parsed.download else "inline"
    filename = export_filename(export.image_format)
    logger.info("Serving %s as %s", filename, disposition)
    return Response(
        content=content,
        media_type=media_type_for(export.image_format),
        headers={"Content-Disposition": f'{disposition}; filename="{filename}"'},
    )


@router.post("/share_link", response_model=SuccessResponse, operation_id="share_link", description="Build a share link encoding a color and export request")
async def share_link(request: ShareLinkRequest):
    """Build a link that the search-param parser reads back into the same request."""
    url = build_share_url(
        request.base_url,
        request.color,
        request.format,
        request.width,
        request.height,
        download=request.download,
        extension=request.extension,
    )
    return SuccessResponse(success=True, message=url)
