"""
API Output Models
=================

Response contracts for the HTTP API.

Grayscale conversion:
    {
        "ascii": " .:-\\n...",
        "originalSize": 20480,
        "originalWidth": 640,
        "originalHeight": 480,
        "asciiSize": 3900
    }

Colour conversion:
    {
        "lines": [[{"char": "@", "r": 255, "g": 0, "b": 0}, ...], ...],
        "originalSize": 20480,
        "originalWidth": 640,
        "originalHeight": 480,
        "asciiSize": 120455
    }

Video conversion:
    {
        "frames": [{"index": 0, "timestamp": 0.0, "ascii": "..."}, ...],
        "metadata": {...}
    }

Design Rules:
    - Field names are snake_case in Python and camelCase on the wire
    - Errors are always {"error": "<message>"}
"""

from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field

from ascii_converter.models.video import VideoMetadata


class ColoredChar(BaseModel):
    """A glyph with its 8-bit RGB colour."""

    char: str
    r: int = Field(..., ge=0, le=255)
    g: int = Field(..., ge=0, le=255)
    b: int = Field(..., ge=0, le=255)


class ConversionInfo(BaseModel):
    """Size information shared by the image conversion responses."""

    original_size: int = Field(..., ge=0, alias="originalSize")
    original_width: int = Field(..., ge=0, alias="originalWidth")
    original_height: int = Field(..., ge=0, alias="originalHeight")
    ascii_size: int = Field(..., ge=0, alias="asciiSize")

    model_config = ConfigDict(populate_by_name=True)


class AsciiResponse(ConversionInfo):
    """Grayscale conversion result."""

    ascii: str


class ColorAsciiResponse(ConversionInfo):
    """Colour conversion result."""

    lines: List[List[ColoredChar]]


class FrameAscii(BaseModel):
    """Single grayscale video frame."""

    index: int = Field(..., ge=0)
    timestamp: float = Field(..., ge=0)
    ascii: str


class FrameColorAscii(BaseModel):
    """Single colour video frame."""

    index: int = Field(..., ge=0)
    timestamp: float = Field(..., ge=0)
    lines: List[List[ColoredChar]]


class VideoAsciiResponse(BaseModel):
    """Video conversion result (either mode)."""

    frames: List[Union[FrameColorAscii, FrameAscii]]
    metadata: VideoMetadata


class ErrorResponse(BaseModel):
    """Error payload."""

    error: str
