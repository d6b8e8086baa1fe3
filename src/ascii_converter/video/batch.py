"""
Frame Batch Processor
=====================

Render a sequence of decoded frames through the image pipeline.

Every frame is resized and rendered independently (no inter-frame state),
and results come back in the original frame order with
timestamp = index / sampled_fps.

Failure policy:
    - Default: the first frame that fails to render aborts the whole batch
      with FrameRenderError (the original exception is chained)
    - isolate_errors=True: failed frames are skipped, logged and recorded in
      ``failures``; the remaining results keep their original indexes

Frames can be rendered on a bounded thread pool (max_workers > 1). Output
order is unaffected.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from ascii_converter.models.palette import Palette
from ascii_converter.models.video import FrameResult
from ascii_converter.raster.raster import Raster
from ascii_converter.raster.resizer import resize
from ascii_converter.render.renderer import raster_to_grid, raster_to_text


logger = logging.getLogger(__name__)


class FrameRenderError(Exception):
    """Raised when a frame cannot be rendered; aborts the batch."""

    def __init__(self, index: int, message: str) -> None:
        super().__init__(f"Failed to render frame {index}: {message}")
        self.index = index


@dataclass(frozen=True, slots=True)
class FrameFailure:
    """A frame skipped under per-frame error isolation."""

    index: int
    error: str


class FrameBatchProcessor:
    """
    Render frames to ASCII in order.

    Attributes:
        width: Target width in characters
        palette: Resolved palette
        sampled_fps: Rate the frames were sampled at
        color: Produce coloured glyph grids instead of plain text
        failures: Frames skipped during the last run (isolation mode only)

    Example:
        processor = FrameBatchProcessor(width=80, palette="dense", sampled_fps=10)
        results = processor.process(frames)
    """

    def __init__(
        self,
        width: int,
        palette: Union[str, Palette, None] = None,
        sampled_fps: float = 10,
        color: bool = False,
        max_workers: int = 1,
        isolate_errors: bool = False,
    ) -> None:
        """
        Initialize the processor.

        Args:
            width: Target width in characters (> 0)
            palette: Palette name; unknown names use "normal"
            sampled_fps: Sampling rate used for timestamps (> 0)
            color: Render coloured grids
            max_workers: Render threads (1 = sequential)
            isolate_errors: Skip failing frames instead of aborting
        """
        if width <= 0:
            raise ValueError(f"width must be positive, got {width}")
        if sampled_fps <= 0:
            raise ValueError(f"sampled_fps must be positive, got {sampled_fps}")
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")

        self.width = width
        self.palette = Palette.from_name(palette)
        self.sampled_fps = sampled_fps
        self.color = color
        self.max_workers = max_workers
        self.isolate_errors = isolate_errors
        self.failures: List[FrameFailure] = []

    def timestamp(self, index: int) -> float:
        return index / self.sampled_fps

    def render_frame(self, index: int, frame: Raster) -> FrameResult:
        """Resize and render a single frame."""
        resized = resize(frame, self.width)
        if self.color:
            return FrameResult(
                index=index,
                timestamp=self.timestamp(index),
                grid=raster_to_grid(resized, self.palette),
            )
        return FrameResult(
            index=index,
            timestamp=self.timestamp(index),
            ascii=raster_to_text(resized, self.palette),
        )

    def _render_guarded(self, item: Tuple[int, Raster]) -> Union[FrameResult, FrameFailure]:
        index, frame = item
        try:
            return self.render_frame(index, frame)
        except Exception as e:
            if not self.isolate_errors:
                raise FrameRenderError(index, str(e)) from e
            logger.warning(f"Skipping frame {index}: {e}")
            return FrameFailure(index=index, error=str(e))

    def process(self, frames: Sequence[Raster]) -> List[FrameResult]:
        """
        Render all frames.

        Args:
            frames: Decoded frames in playback order

        Returns:
            Frame results in the same order

        Raises:
            FrameRenderError: On the first failing frame (unless isolating)
        """
        self.failures = []
        start_time = time.time()
        items = list(enumerate(frames))

        if self.max_workers > 1 and len(items) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                outcomes = list(executor.map(self._render_guarded, items))
        else:
            outcomes = [self._render_guarded(item) for item in items]

        results: List[FrameResult] = []
        for outcome in outcomes:
            if isinstance(outcome, FrameFailure):
                self.failures.append(outcome)
            else:
                results.append(outcome)

        elapsed = time.time() - start_time
        logger.info(
            f"Rendered {len(results)}/{len(items)} frames in {elapsed:.2f}s "
            f"(width={self.width}, palette={self.palette.value}, color={self.color}, "
            f"workers={self.max_workers})"
        )
        if self.failures:
            logger.warning(f"{len(self.failures)} frame(s) skipped")

        return results


def render_video(
    frames: Sequence[Raster],
    width: int,
    palette: Union[str, Palette, None],
    sampled_fps: float,
    color: bool = False,
    max_workers: int = 1,
    isolate_errors: bool = False,
    failures: Optional[List[FrameFailure]] = None,
) -> List[FrameResult]:
    """
    Render a frame sequence to timestamped ASCII results.

    If ``failures`` is given, skipped frames (isolation mode) are appended to it.
    """
    processor = FrameBatchProcessor(
        width=width,
        palette=palette,
        sampled_fps=sampled_fps,
        color=color,
        max_workers=max_workers,
        isolate_errors=isolate_errors,
    )
    results = processor.process(frames)
    if failures is not None:
        failures.extend(processor.failures)
    return results
