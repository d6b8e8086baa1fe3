"""
Video Extractor Tests
=====================

Videos are written with OpenCV's MJPG writer; tests are skipped when the
local OpenCV build cannot write AVI files.
"""

import numpy as np
import pytest

from ascii_converter.video import VideoExtractionError, extract_frames, render_video
from ascii_converter.video.extractor import _sample_frames


class TestExtractFrames:
    """Tests for sampling frames out of a video upload."""

    def test_samples_at_requested_rate(self, video_bytes):
        """Verify a 2 s, 20 fps clip sampled at 10 fps gives 20 frames."""
        frames, metadata = extract_frames(video_bytes, target_fps=10, suffix=".avi")

        assert len(frames) == 20
        assert metadata.frame_count == 20
        assert metadata.sampled_fps == 10
        assert metadata.original_fps == pytest.approx(20.0)
        assert metadata.duration == pytest.approx(2.0)
        assert (metadata.width, metadata.height) == (32, 24)
        assert metadata.original_size == len(video_bytes)

    def test_slow_source_repeats_frames(self, write_video):
        """Verify a 5 s, 5 fps clip sampled at 10 fps still gives 50 frames."""
        data = write_video(frame_count=25, fps=5.0)
        frames, metadata = extract_frames(data, target_fps=10, suffix=".avi")

        assert len(frames) == 50
        assert metadata.frame_count == 50
        assert metadata.duration == pytest.approx(5.0)

        brightness = [frame.pixel(16, 12)[0] for frame in frames]
        assert brightness == sorted(brightness)
        assert brightness[-1] > 230

        results = render_video(frames, 8, "normal", metadata.sampled_fps)
        assert results[-1].timestamp == pytest.approx(4.9)

    def test_frame_limit(self, video_bytes):
        frames, metadata = extract_frames(video_bytes, target_fps=10, max_frames=5, suffix=".avi")
        assert len(frames) == 5
        assert metadata.frame_count == 5

    def test_duration_limit(self, video_bytes):
        frames, _ = extract_frames(video_bytes, target_fps=10, max_duration=1.0, suffix=".avi")
        assert len(frames) == 10

    def test_frames_get_brighter(self, video_bytes):
        frames, _ = extract_frames(video_bytes, target_fps=5, suffix=".avi")
        first = frames[0].pixel(16, 12)[0]
        last = frames[-1].pixel(16, 12)[0]
        assert last > first

    def test_extracted_frames_render(self, video_bytes):
        frames, metadata = extract_frames(video_bytes, target_fps=10, suffix=".avi")
        results = render_video(frames, 8, "normal", metadata.sampled_fps)
        assert len(results) == metadata.frame_count
        assert results[-1].timestamp == pytest.approx(1.9)

    def test_metadata_serializes_with_aliases(self, video_bytes):
        _, metadata = extract_frames(video_bytes, target_fps=10, suffix=".avi")
        payload = metadata.model_dump(by_alias=True)
        assert set(payload) == {
            "originalSize", "duration", "originalFps", "sampledFps",
            "frameCount", "width", "height",
        }

    def test_garbage_raises(self):
        with pytest.raises(VideoExtractionError):
            extract_frames(b"not a video at all", suffix=".webm")

    def test_empty_raises(self):
        with pytest.raises(VideoExtractionError):
            extract_frames(b"")

    def test_invalid_rate(self, video_bytes):
        with pytest.raises(ValueError):
            extract_frames(video_bytes, target_fps=0)


class FakeCapture:
    """Minimal stand-in for cv2.VideoCapture over in-memory frames."""

    def __init__(self, frames):
        self.frames = frames
        self.position = 0

    def grab(self):
        if self.position >= len(self.frames):
            return False
        self.position += 1
        return True

    def read(self):
        if self.position >= len(self.frames):
            return False, None
        frame = self.frames[self.position]
        self.position += 1
        return True, frame


def _solid(value, dtype=np.uint8):
    return np.full((4, 4, 3), value, dtype=dtype)


def _values(frames):
    return [frame.pixel(0, 0)[0] for frame in frames]


class TestSampleFrames:
    """Tests for mapping sample times onto source frames."""

    def test_faster_source_skips_frames(self):
        capture = FakeCapture([_solid(v * 10) for v in range(6)])
        frames = _sample_frames(capture, source_fps=20, target_fps=10, total=3)
        assert _values(frames) == [0, 20, 40]

    def test_slower_source_repeats_frames(self):
        """Verify one raster per sample when the source has fewer frames."""
        capture = FakeCapture([_solid(v) for v in (0, 50, 100, 150, 200)])
        frames = _sample_frames(capture, source_fps=5, target_fps=10, total=10)
        # wanted source frame = round(i / 2), halves round to even
        assert _values(frames) == [0, 0, 50, 100, 100, 100, 150, 200, 200, 200]

    def test_undecodable_frame_repeats_previous(self):
        """Verify a bad frame keeps later frames at their own timestamps."""
        capture = FakeCapture([_solid(10), _solid(0.5, np.float32), _solid(30)])
        frames = _sample_frames(capture, source_fps=10, target_fps=10, total=3)
        assert _values(frames) == [10, 10, 30]

    def test_undecodable_first_frame_raises(self):
        capture = FakeCapture([_solid(0.5, np.float32), _solid(30)])
        with pytest.raises(VideoExtractionError):
            _sample_frames(capture, source_fps=10, target_fps=10, total=2)

    def test_stops_at_end_of_stream(self):
        capture = FakeCapture([_solid(v) for v in (1, 2)])
        frames = _sample_frames(capture, source_fps=10, target_fps=10, total=5)
        assert _values(frames) == [1, 2]
