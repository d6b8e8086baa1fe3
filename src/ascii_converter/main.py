"""
ASCII Converter API
===================

FastAPI entry point for the image/video to ASCII service.

Endpoints:
    GET  /               - Service information
    GET  /health         - Liveness probe
    POST /convert        - Image -> grayscale ASCII string
    POST /convert/color  - Image -> coloured glyph grid
    POST /convert/video  - Video -> timestamped ASCII frames + metadata
    POST /export/svg     - Image -> SVG download

Request parameters (multipart form, query string accepted as fallback for
width and palette):
    image / video  - uploaded file
    width          - characters per row; missing or non-positive -> default
    palette        - normal | dense | sparse | unicode (unknown -> normal)
    color          - "true" to render colour (video, svg)
    fps            - video sampling rate, 1..max_fps (default 10)
    fontSize       - SVG font size (default 12)
"""

import asyncio
import json
import logging
import os
import time
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, File, Form, Query, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from ascii_converter.config import settings
from ascii_converter.models.output import (
    AsciiResponse,
    ColorAsciiResponse,
    ErrorResponse,
    VideoAsciiResponse,
)
from ascii_converter.raster import ImageDecodeError, decode_image_bytes, resize
from ascii_converter.render import export_svg, raster_to_grid, raster_to_text
from ascii_converter.video import (
    FrameRenderError,
    VideoExtractionError,
    extract_frames,
    render_video,
)


logger = logging.getLogger(__name__)


_startup_time: float = time.time()


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title="ASCII Converter",
    description="Convert images and videos to ASCII art",
    version=settings.app.version,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.allow_origins,
    allow_methods=settings.cors.allow_methods,
    allow_headers=["Content-Type"],
)


# =============================================================================
# Request helpers
# =============================================================================

def _error(message: str, status_code: int = 400) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def parse_positive_int(value: Optional[str], default: int) -> int:
    """Parse a positive integer parameter, falling back to ``default``."""
    if value is None or value == "":
        return default
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def parse_fps(value: Optional[str]) -> int:
    """Sampling rate in [1, max_fps]; anything else uses the default."""
    fps = parse_positive_int(value, settings.video.default_fps)
    if fps > settings.video.max_fps:
        return settings.video.default_fps
    return fps


def is_true(value: Optional[str]) -> bool:
    return (value or "").strip().lower() == "true"


def export_filename(original: Optional[str], suffix: str = "_svg", extension: str = ".svg") -> str:
    """photo.png -> photo_svg.svg"""
    stem = Path(original or "ascii").stem or "ascii"
    return f"{stem}{suffix}{extension}"


async def _read_image(upload: Optional[UploadFile]) -> tuple:
    """Read and decode an uploaded image. Returns (raster, size_in_bytes)."""
    data = await upload.read()
    raster = decode_image_bytes(data, source=upload.filename or "upload")
    return raster, len(data)


# =============================================================================
# HTTP Endpoints
# =============================================================================

@app.get("/")
async def root() -> JSONResponse:
    """Service information endpoint."""
    return JSONResponse({
        "service": "ASCII Converter",
        "name": settings.app.name,
        "version": settings.app.version,
        "status": "running",
        "palettes": ["normal", "dense", "sparse", "unicode"],
    })


@app.get("/health")
async def health() -> JSONResponse:
    """Liveness probe. Always 200 while the process is up."""
    return JSONResponse({
        "status": "healthy",
        "uptime_seconds": round(time.time() - _startup_time, 1),
    })


@app.post("/convert", response_model=AsciiResponse, responses={400: {"model": ErrorResponse}})
async def convert(
    image: Optional[UploadFile] = File(None),
    width: Optional[str] = Form(None),
    palette: Optional[str] = Form(None),
    width_query: Optional[str] = Query(None, alias="width"),
    palette_query: Optional[str] = Query(None, alias="palette"),
) -> JSONResponse:
    """Convert an image to grayscale ASCII text."""
    if image is None:
        return _error("Missing or invalid image file. Please upload an image using the 'image' field.")

    target_width = parse_positive_int(width or width_query, settings.converter.default_width)
    palette_name = palette or palette_query or settings.converter.default_palette

    try:
        raster, file_size = await _read_image(image)
    except ImageDecodeError as e:
        return _error(str(e))

    ascii_art = raster_to_text(resize(raster, target_width), palette_name)

    response = AsciiResponse(
        ascii=ascii_art,
        original_size=file_size,
        original_width=raster.width,
        original_height=raster.height,
        ascii_size=len(ascii_art.encode("utf-8")),
    )
    logger.info(
        f"/convert {raster.width}x{raster.height} -> width={target_width} "
        f"palette={palette_name} ({response.ascii_size} bytes)"
    )
    return JSONResponse(response.model_dump(by_alias=True))


@app.post("/convert/color", response_model=ColorAsciiResponse, responses={400: {"model": ErrorResponse}})
async def convert_color(
    image: Optional[UploadFile] = File(None),
    width: Optional[str] = Form(None),
    palette: Optional[str] = Form(None),
    width_query: Optional[str] = Query(None, alias="width"),
    palette_query: Optional[str] = Query(None, alias="palette"),
) -> JSONResponse:
    """Convert an image to a coloured glyph grid."""
    if image is None:
        return _error("Missing or invalid image file. Please upload an image using the 'image' field.")

    target_width = parse_positive_int(width or width_query, settings.converter.default_width)
    palette_name = palette or palette_query or settings.converter.default_palette

    try:
        raster, file_size = await _read_image(image)
    except ImageDecodeError as e:
        return _error(str(e))

    grid = raster_to_grid(resize(raster, target_width), palette_name)
    lines = grid.to_lines_payload()

    # Size of the JSON representation of the coloured art
    ascii_size = len(json.dumps({"lines": lines}, ensure_ascii=False, separators=(",", ":")).encode("utf-8"))

    response = ColorAsciiResponse(
        lines=lines,
        original_size=file_size,
        original_width=raster.width,
        original_height=raster.height,
        ascii_size=ascii_size,
    )
    logger.info(
        f"/convert/color {raster.width}x{raster.height} -> {grid.width}x{grid.height} "
        f"palette={palette_name}"
    )
    return JSONResponse(response.model_dump(by_alias=True))


@app.post("/export/svg")
async def export_svg_endpoint(
    image: Optional[UploadFile] = File(None),
    width: Optional[str] = Form(None),
    palette: Optional[str] = Form(None),
    color: Optional[str] = Form(None),
    font_size: Optional[str] = Form(None, alias="fontSize"),
    color_query: Optional[str] = Query(None, alias="color"),
) -> Response:
    """Convert an image and return the art as an SVG attachment."""
    if image is None:
        return _error("Missing or invalid image file. Please upload an image using the 'image' field.")

    target_width = parse_positive_int(width, settings.converter.default_width)
    palette_name = palette or settings.converter.default_palette
    use_color = is_true(color) or is_true(color_query)
    size = parse_positive_int(font_size, settings.converter.default_font_size)

    try:
        raster, _ = await _read_image(image)
    except ImageDecodeError as e:
        return _error(str(e))

    resized = resize(raster, target_width)
    if use_color:
        svg = export_svg(raster_to_grid(resized, palette_name), size)
    else:
        svg = export_svg(raster_to_text(resized, palette_name), size)

    filename = export_filename(image.filename)
    logger.info(f"/export/svg {filename} color={use_color} font_size={size}")
    return Response(
        content=svg,
        media_type="image/svg+xml",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@app.post(
    "/convert/video",
    response_model=VideoAsciiResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def convert_video(
    video: Optional[UploadFile] = File(None),
    width: Optional[str] = Form(None),
    palette: Optional[str] = Form(None),
    fps: Optional[str] = Form(None),
    color: Optional[str] = Form(None),
) -> JSONResponse:
    """Sample a video and convert every frame to ASCII."""
    if video is None:
        return _error("Missing or invalid video file. Please upload a video using the 'video' field.")

    data = await video.read()
    max_bytes = settings.video.max_file_size_mb * 1024 * 1024
    if len(data) > max_bytes:
        return _error(
            f"Video file too large. Maximum size is {settings.video.max_file_size_mb} MB."
        )

    target_width = parse_positive_int(width, settings.converter.default_width)
    palette_name = palette or settings.converter.default_palette
    sample_fps = parse_fps(fps)
    use_color = is_true(color)
    suffix = os.path.splitext(video.filename or "")[1] or ".webm"

    try:
        frames, metadata = await asyncio.to_thread(
            extract_frames,
            data,
            sample_fps,
            settings.video.max_frame_count,
            settings.video.max_duration_seconds,
            suffix,
        )
    except VideoExtractionError as e:
        logger.error(f"Frame extraction failed: {e}")
        return _error(f"Failed to extract frames: {e}", status_code=500)

    try:
        results = await asyncio.to_thread(
            render_video,
            frames,
            target_width,
            palette_name,
            sample_fps,
            use_color,
            settings.video.workers,
            settings.video.isolate_frame_errors,
        )
    except FrameRenderError as e:
        logger.error(f"Frame conversion failed: {e}")
        return _error(f"Failed to convert frames: {e}", status_code=500)

    return JSONResponse({
        "frames": [result.to_dict() for result in results],
        "metadata": metadata.model_dump(by_alias=True),
    })


# =============================================================================
# Main Entry Point
# =============================================================================

def run_server() -> None:
    """Run the API with uvicorn using the configured host/port."""
    import uvicorn

    logger.info(f"Starting {settings.app.name} {settings.app.version} on port {settings.server.port}")
    uvicorn.run(
        "ascii_converter.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=False,
    )


if __name__ == "__main__":
    run_server()
