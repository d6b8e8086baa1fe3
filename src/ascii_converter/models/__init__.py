"""
Data Models
===========

Types shared across the converter.

Models:
    Palette:
        - Palette: Enumerated palette names with their glyph tables
        - glyph_for: Brightness -> glyph selection

    Glyphs:
        - GlyphCell: One character with optional colour
        - GlyphGrid: Rows of cells (the rendered image)

    Video:
        - VideoMetadata: Probed source information
        - FrameResult: One rendered, timestamped frame

    Output:
        - AsciiResponse, ColorAsciiResponse, VideoAsciiResponse: API payloads
"""

from ascii_converter.models.palette import Palette, get_palette, glyph_for
from ascii_converter.models.glyph import GlyphCell, GlyphGrid
from ascii_converter.models.video import FrameResult, VideoMetadata
from ascii_converter.models.output import (
    AsciiResponse,
    ColorAsciiResponse,
    ColoredChar,
    ErrorResponse,
    FrameAscii,
    FrameColorAscii,
    VideoAsciiResponse,
)

__all__ = [
    # Palette
    "Palette",
    "get_palette",
    "glyph_for",
    # Glyphs
    "GlyphCell",
    "GlyphGrid",
    # Video
    "VideoMetadata",
    "FrameResult",
    # Output
    "AsciiResponse",
    "ColorAsciiResponse",
    "ColoredChar",
    "ErrorResponse",
    "FrameAscii",
    "FrameColorAscii",
    "VideoAsciiResponse",
]
