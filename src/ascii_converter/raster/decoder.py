"""
Image Decoder
=============

Decoding of encoded image bytes (JPEG, PNG, BMP, ...) into Rasters.

Design Rules:
    - This is the ONLY place in the codebase that decodes still images
    - Validates shape and dtype
    - Fails fast with ImageDecodeError, keeping the underlying cause
"""

import logging
from pathlib import Path
from typing import Union

import cv2
import numpy as np

from ascii_converter.raster.raster import Raster


logger = logging.getLogger(__name__)


class ImageDecodeError(Exception):
    """Raised when image decoding fails."""
    pass


def decode_image_bytes(data: bytes, source: str = "upload") -> Raster:
    """
    Decode an encoded image into an RGB Raster.

    Args:
        data: Encoded image file contents
        source: Label used in error messages and logs

    Returns:
        Decoded Raster

    Raises:
        ImageDecodeError: If the bytes are empty or not a decodable image
    """
    if not data:
        raise ImageDecodeError(f"Failed to decode image from {source}: no data")

    try:
        nparr = np.frombuffer(data, np.uint8)
        decoded = cv2.imdecode(nparr, cv2.IMREAD_UNCHANGED)
    except cv2.error as e:
        raise ImageDecodeError(f"Failed to decode image from {source}: {e}") from e

    if decoded is None:
        raise ImageDecodeError(
            f"Failed to decode image from {source}: unsupported or corrupt image data"
        )

    raster = adapt_decoded(decoded, source)
    logger.debug(f"Decoded {source}: {raster.width}x{raster.height}")
    return raster


def adapt_decoded(decoded: np.ndarray, source: str = "frame") -> Raster:
    """
    Adapt an OpenCV-decoded matrix (gray, BGR or BGRA) into a Raster.

    16-bit images are scaled down to 8 bits per channel.
    """
    if decoded.dtype == np.uint16:
        decoded = (decoded >> 8).astype(np.uint8)
    elif decoded.dtype != np.uint8:
        raise ImageDecodeError(f"Invalid dtype for {source}: {decoded.dtype}")

    if decoded.ndim == 2:
        return Raster.from_gray(decoded)
    if decoded.ndim == 3 and decoded.shape[2] == 3:
        return Raster.from_bgr(decoded)
    if decoded.ndim == 3 and decoded.shape[2] == 4:
        return Raster.from_rgb(cv2.cvtColor(decoded, cv2.COLOR_BGRA2RGB))

    raise ImageDecodeError(f"Invalid image shape for {source}: {decoded.shape}")


def load_image(path: Union[str, Path]) -> Raster:
    """
    Read and decode an image file.

    Raises:
        ImageDecodeError: If the file cannot be read or decoded
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ImageDecodeError(f"Failed to open image file {path}: {e}") from e

    raster = decode_image_bytes(data, source=path.name)
    logger.info(f"Loaded image {path.name} ({raster.width}x{raster.height})")
    return raster
