"""
Raster Module
=============

Image input for the rendering pipeline.

    - Raster: Immutable RGB grid with bounds and format adapters
    - decode_image_bytes / load_image: Encoded image -> Raster
    - resize: Width scaling with glyph aspect correction

Example:
    from ascii_converter.raster import load_image, resize

    raster = resize(load_image("photo.jpg"), width=100)
"""

from ascii_converter.raster.raster import Raster
from ascii_converter.raster.decoder import (
    ImageDecodeError,
    adapt_decoded,
    decode_image_bytes,
    load_image,
)
from ascii_converter.raster.resizer import (
    GLYPH_ASPECT_CORRECTION,
    resize,
    target_size,
)


__all__ = [
    "Raster",
    "ImageDecodeError",
    "adapt_decoded",
    "decode_image_bytes",
    "load_image",
    "GLYPH_ASPECT_CORRECTION",
    "resize",
    "target_size",
]
