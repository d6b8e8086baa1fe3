"""
Video Frame Extractor
=====================

Sample decoded frames from an uploaded video.

The upload is written into a temporary directory that is always removed,
whether extraction succeeds, fails to decode, or is aborted. The video is
read with OpenCV, probed for its frame rate, frame count and size, and
frames are sampled at the requested rate.

Limits:
    - At most ``max_frames`` frames are returned
    - Only the first ``max_duration`` seconds are sampled

Probe defaults (used when the container does not report a value):
    duration 10 s, 30 fps, 640x480
"""

import logging
import os
import tempfile
from typing import List, Optional, Tuple

import cv2

from ascii_converter.models.video import VideoMetadata
from ascii_converter.raster.decoder import ImageDecodeError, adapt_decoded
from ascii_converter.raster.raster import Raster


logger = logging.getLogger(__name__)


DEFAULT_DURATION = 10.0
DEFAULT_FPS = 30.0
DEFAULT_WIDTH = 640
DEFAULT_HEIGHT = 480


class VideoExtractionError(Exception):
    """Raised when frames cannot be extracted from a video."""
    pass


def _probe(capture: "cv2.VideoCapture") -> Tuple[float, float, int, int]:
    """Return (duration, fps, width, height) with defaults for unknown values."""
    fps = capture.get(cv2.CAP_PROP_FPS)
    if not fps or fps <= 0 or fps != fps:
        fps = DEFAULT_FPS

    frame_count = capture.get(cv2.CAP_PROP_FRAME_COUNT)
    if frame_count and frame_count > 0:
        duration = frame_count / fps
    else:
        duration = DEFAULT_DURATION

    width = int(capture.get(cv2.CAP_PROP_FRAME_WIDTH)) or DEFAULT_WIDTH
    height = int(capture.get(cv2.CAP_PROP_FRAME_HEIGHT)) or DEFAULT_HEIGHT
    return duration, fps, width, height


def _sample_frames(
    capture: "cv2.VideoCapture",
    source_fps: float,
    target_fps: int,
    total: int,
) -> List[Raster]:
    """
    Read frames sequentially, keeping the source frame closest to each
    sample time i / target_fps.

    Exactly one raster is produced per sample until the stream ends. When
    the source is slower than the sampling rate, or a frame cannot be
    decoded, the previous raster is repeated so index / target_fps stays
    aligned with video time.
    """
    frames: List[Raster] = []
    previous: Optional[Raster] = None
    position = -1  # index of the last frame read

    for i in range(total):
        wanted = int(round(i / target_fps * source_fps))

        if wanted <= position and previous is not None:
            frames.append(previous)
            continue

        # Skip ahead to the frame before the wanted one
        ok = True
        while position < wanted - 1:
            ok = capture.grab()
            if not ok:
                break
            position += 1
        if not ok:
            break

        ok, frame = capture.read()
        if not ok or frame is None:
            break
        position += 1

        try:
            previous = adapt_decoded(frame, source=f"frame {i}")
        except ImageDecodeError as e:
            if previous is None:
                raise VideoExtractionError(f"Failed to decode first frame: {e}") from e
            logger.warning(f"Failed to decode frame {i}, repeating previous frame: {e}")
        frames.append(previous)

    return frames


def extract_frames(
    data: bytes,
    target_fps: int = 10,
    max_frames: int = 200,
    max_duration: Optional[float] = 20.0,
    suffix: str = ".webm",
) -> Tuple[List[Raster], VideoMetadata]:
    """
    Extract frames from an encoded video.

    Args:
        data: Video file contents
        target_fps: Sampling rate in frames per second (> 0)
        max_frames: Upper bound on returned frames
        max_duration: Only sample this many seconds (None = no limit)
        suffix: File extension hint for the container format

    Returns:
        (frames, metadata)

    Raises:
        VideoExtractionError: If the video cannot be opened or yields no frames
    """
    if target_fps <= 0:
        raise ValueError(f"target_fps must be positive, got {target_fps}")
    if not data:
        raise VideoExtractionError("Empty video upload")

    with tempfile.TemporaryDirectory(prefix="frames-") as tmp_dir:
        video_path = os.path.join(tmp_dir, f"video{suffix}")
        with open(video_path, "wb") as f:
            f.write(data)

        capture = cv2.VideoCapture(video_path)
        try:
            if not capture.isOpened():
                raise VideoExtractionError("Failed to open video: unsupported or corrupt data")

            duration, source_fps, width, height = _probe(capture)
            logger.debug(f"Probed video: {duration:.2f}s, {source_fps:.2f} fps, {width}x{height}")

            span = duration if max_duration is None else min(duration, max_duration)
            total = int(span * target_fps)
            if total > max_frames:
                logger.warning(f"Limiting frames to {max_frames} (video is too long)")
                total = max_frames

            frames = _sample_frames(capture, source_fps, target_fps, total)
        finally:
            capture.release()

    if not frames:
        raise VideoExtractionError("No frames were extracted from video")

    first = frames[0]
    metadata = VideoMetadata(
        original_size=len(data),
        duration=duration,
        original_fps=source_fps,
        sampled_fps=target_fps,
        frame_count=len(frames),
        width=first.width,
        height=first.height,
    )

    logger.info(
        f"Extracted {len(frames)} frames at {target_fps} fps "
        f"(source {source_fps:.2f} fps, {duration:.2f}s, {metadata.width}x{metadata.height})"
    )
    return frames, metadata
