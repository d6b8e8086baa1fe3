"""
Resizer
=======

Scale a raster to a target character width.

Monospace glyph cells are roughly twice as tall as they are wide, so the
height is halved after the aspect-preserving scale to keep the rendered art
from looking vertically stretched:

    scale      = width / original_width
    new_height = round(original_height * scale)
    new_height = round(new_height * 0.5)

Resampling uses Lanczos (OpenCV INTER_LANCZOS4).
"""

import logging
from typing import Tuple

import cv2

from ascii_converter.raster.raster import Raster


logger = logging.getLogger(__name__)


# Glyph cell height/width compensation
GLYPH_ASPECT_CORRECTION = 0.5


def target_size(
    original_width: int,
    original_height: int,
    width: int,
    aspect_correction: float = GLYPH_ASPECT_CORRECTION,
) -> Tuple[int, int]:
    """
    Compute (width, height) of the resized raster.

    The height never drops below one row.

    Raises:
        ValueError: If either width is not positive
    """
    if width <= 0:
        raise ValueError(f"Target width must be positive, got {width}")
    if original_width <= 0:
        raise ValueError(f"Source width must be positive, got {original_width}")

    scale = width / original_width
    height = round(original_height * scale)
    height = round(height * aspect_correction)
    return width, max(1, height)


def resize(
    raster: Raster,
    width: int,
    aspect_correction: float = GLYPH_ASPECT_CORRECTION,
) -> Raster:
    """
    Resize a raster to ``width`` columns with glyph aspect correction.

    Args:
        raster: Source image
        width: Target width in characters (> 0)
        aspect_correction: Vertical compression factor

    Returns:
        New Raster of size target_size(...)
    """
    new_width, new_height = target_size(
        raster.width, raster.height, width, aspect_correction
    )
    resized = cv2.resize(
        raster.pixels,
        (new_width, new_height),
        interpolation=cv2.INTER_LANCZOS4,
    )
    logger.debug(
        f"Resized {raster.width}x{raster.height} -> {new_width}x{new_height}"
    )
    return Raster.from_rgb(resized)
