"""
Luminance Mapper
================

Perceptual brightness of an RGB pixel:

    Y = 0.299 * R + 0.587 * G + 0.114 * B

evaluated in double precision in exactly that order and truncated (not
rounded) to an integer in [0, 255]. The scalar and array forms produce
identical values.
"""

import numpy as np


LUMA_R = 0.299
LUMA_G = 0.587
LUMA_B = 0.114


def luminance(r: int, g: int, b: int) -> int:
    """Brightness of one pixel in [0, 255]."""
    y = int(LUMA_R * r + LUMA_G * g + LUMA_B * b)
    return min(max(y, 0), 255)


def luminance_array(pixels: np.ndarray) -> np.ndarray:
    """
    Brightness of every pixel of an (H, W, 3) RGB array.

    Returns:
        (H, W) uint8 array
    """
    rgb = pixels.astype(np.float64)
    y = LUMA_R * rgb[..., 0] + LUMA_G * rgb[..., 1] + LUMA_B * rgb[..., 2]
    return np.clip(np.trunc(y), 0, 255).astype(np.uint8)
