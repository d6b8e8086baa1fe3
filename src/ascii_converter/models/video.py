"""
Video Models
============

Metadata and per-frame results for video conversion.

Output Contract (serialized with camelCase aliases):
    {
        "originalSize": 1048576,
        "duration": 5.0,
        "originalFps": 30.0,
        "sampledFps": 10,
        "frameCount": 50,
        "width": 640,
        "height": 480
    }

Design Rules:
    - Metadata is derived once per video and never modified afterwards
    - Frame results are ordered; index is strictly increasing from 0
    - timestamp = index / sampled_fps
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from ascii_converter.models.glyph import GlyphGrid


class VideoMetadata(BaseModel):
    """
    Information about the source video and how it was sampled.

    Attributes:
        original_size: Upload size in bytes
        duration: Probed duration in seconds
        original_fps: Probed frame rate of the source
        sampled_fps: Rate at which frames were sampled
        frame_count: Number of frames actually extracted
        width: Source frame width in pixels
        height: Source frame height in pixels
    """

    original_size: int = Field(default=0, ge=0, alias="originalSize")
    duration: float = Field(default=10.0, ge=0)
    original_fps: float = Field(default=30.0, ge=0, alias="originalFps")
    sampled_fps: int = Field(default=10, ge=1, alias="sampledFps")
    frame_count: int = Field(default=0, ge=0, alias="frameCount")
    width: int = Field(default=640, ge=0)
    height: int = Field(default=480, ge=0)

    model_config = ConfigDict(frozen=True, populate_by_name=True)


@dataclass(frozen=True, slots=True)
class FrameResult:
    """
    One rendered video frame.

    Exactly one of ``ascii`` (plain mode) or ``grid`` (colour mode) is set.

    Attributes:
        index: Position of the frame in the sampled sequence
        timestamp: Seconds from the start of the video
        ascii: Plain text rendering
        grid: Coloured glyph grid
    """

    index: int
    timestamp: float
    ascii: Optional[str] = None
    grid: Optional[GlyphGrid] = None

    @property
    def is_colored(self) -> bool:
        return self.grid is not None

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape: {index, timestamp, ascii} or {index, timestamp, lines}."""
        payload: Dict[str, Any] = {"index": self.index, "timestamp": self.timestamp}
        if self.grid is not None:
            payload["lines"] = self.grid.to_lines_payload()
        else:
            payload["ascii"] = self.ascii or ""
        return payload

    def __repr__(self) -> str:
        return (
            f"FrameResult(index={self.index}, "
            f"timestamp={self.timestamp:.3f}, "
            f"colored={self.is_colored})"
        )
