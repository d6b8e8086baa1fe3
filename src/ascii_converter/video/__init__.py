"""
Video Module
============

Frame extraction and batch rendering for video input.

    - extract_frames: Encoded video -> sampled Rasters + VideoMetadata
    - FrameBatchProcessor / render_video: Rasters -> ordered FrameResults

Example:
    from ascii_converter.video import extract_frames, render_video

    frames, metadata = extract_frames(data, target_fps=10)
    results = render_video(frames, width=80, palette="normal", sampled_fps=10)
"""

from ascii_converter.video.batch import (
    FrameBatchProcessor,
    FrameFailure,
    FrameRenderError,
    render_video,
)
from ascii_converter.video.extractor import VideoExtractionError, extract_frames


__all__ = [
    "FrameBatchProcessor",
    "FrameFailure",
    "FrameRenderError",
    "render_video",
    "VideoExtractionError",
    "extract_frames",
]
