"""
ASCII Converter
===============

Convert raster images and sampled video frames into ASCII art, with optional
per-character colour and SVG export.

Pipeline:
    raster -> resize (aspect corrected) -> luminance -> palette glyph
           -> plain text | coloured glyph grid | ANSI text -> (optional) SVG

Components:
    - raster: Raster type, image decoding, resizing
    - render: Luminance, ASCII rendering, SVG export
    - video: Frame extraction and batch rendering
    - models: Palettes, glyph grids, video metadata, API payloads
    - main: FastAPI service
    - cli: Command line entry point

Example:
    from ascii_converter.raster import load_image
    from ascii_converter.render import render_plain

    print(render_plain(load_image("photo.jpg"), width=100, palette="dense"))
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
