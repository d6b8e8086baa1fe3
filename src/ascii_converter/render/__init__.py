"""
Render Module
=============

Brightness mapping, ASCII rendering and SVG export.

    - luminance / luminance_array: RGB -> 8-bit luma
    - render_plain / render_colored: resize + render entry points
    - raster_to_text / raster_to_grid / raster_to_ansi: render a resized raster
    - export_svg: plain text or glyph grid -> SVG document
"""

from ascii_converter.render.luminance import luminance, luminance_array
from ascii_converter.render.renderer import (
    ANSI_RESET,
    ansi_color,
    glyph_table,
    grid_to_ansi,
    raster_to_ansi,
    raster_to_grid,
    raster_to_text,
    render_colored,
    render_plain,
)
from ascii_converter.render.svg import CHAR_WIDTH_RATIO, escape_xml, export_svg


__all__ = [
    "luminance",
    "luminance_array",
    "ANSI_RESET",
    "ansi_color",
    "glyph_table",
    "grid_to_ansi",
    "raster_to_ansi",
    "raster_to_grid",
    "raster_to_text",
    "render_colored",
    "render_plain",
    "CHAR_WIDTH_RATIO",
    "escape_xml",
    "export_svg",
]
