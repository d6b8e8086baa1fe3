"""
Raster Model
============

Minimal "queryable 2D grid of RGB triples with known bounds".

Every decoded image or video frame is adapted into a Raster before it enters
the rendering pipeline, whatever layout it was decoded in.

Design Rules:
    - Pixels are stored as an (H, W, 3) uint8 RGB array
    - The array is read-only; a Raster is never modified after creation
    - Format adapters (BGR, RGBA, grayscale) live here as constructors
"""

from dataclasses import dataclass
from typing import Tuple

import cv2
import numpy as np


@dataclass(frozen=True, slots=True, eq=False)
class Raster:
    """
    Immutable RGB image.

    Attributes:
        pixels: (H, W, 3) uint8 array in RGB order
        origin: (x, y) of the top-left pixel in source coordinates
    """

    pixels: np.ndarray
    origin: Tuple[int, int] = (0, 0)

    def __post_init__(self) -> None:
        pixels = self.pixels
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"Raster expects an (H, W, 3) array, got shape {pixels.shape}")
        if pixels.dtype != np.uint8:
            raise ValueError(f"Raster expects uint8 pixels, got {pixels.dtype}")
        if pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise ValueError(f"Raster must not be empty, got shape {pixels.shape}")
        if pixels.flags.writeable:
            pixels = pixels.copy()
            pixels.setflags(write=False)
            object.__setattr__(self, "pixels", pixels)

    # -------------------------------------------------------------------------
    # Format adapters
    # -------------------------------------------------------------------------

    @classmethod
    def from_rgb(cls, array: np.ndarray) -> "Raster":
        return cls(pixels=np.ascontiguousarray(array, dtype=np.uint8))

    @classmethod
    def from_bgr(cls, array: np.ndarray) -> "Raster":
        """Adapt an OpenCV BGR matrix."""
        return cls(pixels=cv2.cvtColor(array, cv2.COLOR_BGR2RGB))

    @classmethod
    def from_rgba(cls, array: np.ndarray) -> "Raster":
        """Adapt an RGBA array; alpha is dropped."""
        return cls(pixels=np.ascontiguousarray(array[:, :, :3], dtype=np.uint8))

    @classmethod
    def from_gray(cls, array: np.ndarray) -> "Raster":
        """Adapt a single-channel array by replicating it into R, G and B."""
        return cls(pixels=cv2.cvtColor(array, cv2.COLOR_GRAY2RGB))

    @classmethod
    def solid(cls, width: int, height: int, rgb: Tuple[int, int, int]) -> "Raster":
        """Build a single-colour raster."""
        pixels = np.empty((height, width, 3), dtype=np.uint8)
        pixels[:, :] = rgb
        return cls(pixels=pixels)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def bounds(self) -> Tuple[int, int, int, int]:
        """(min_x, min_y, max_x, max_y), max exclusive."""
        x0, y0 = self.origin
        return x0, y0, x0 + self.width, y0 + self.height

    def pixel(self, x: int, y: int) -> Tuple[int, int, int]:
        """RGB triple at source coordinates (x, y)."""
        x0, y0, x1, y1 = self.bounds
        if not (x0 <= x < x1 and y0 <= y < y1):
            raise IndexError(f"Pixel ({x}, {y}) outside bounds {self.bounds}")
        r, g, b = self.pixels[y - y0, x - x0]
        return int(r), int(g), int(b)

    def __repr__(self) -> str:
        return f"Raster(width={self.width}, height={self.height}, origin={self.origin})"
