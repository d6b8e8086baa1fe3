"""
Test Configuration
==================

Pytest fixtures and test configuration for the ASCII converter.
"""

import cv2
import numpy as np
import pytest


@pytest.fixture
def white_raster():
    """2 wide x 4 tall all-white raster (renders to 2x2 glyphs at width 2)."""
    from ascii_converter.raster import Raster

    return Raster.solid(width=2, height=4, rgb=(255, 255, 255))


@pytest.fixture
def gradient_raster():
    """64x32 raster with a horizontal gray ramp and a red/blue vertical split."""
    from ascii_converter.raster import Raster

    pixels = np.zeros((32, 64, 3), dtype=np.uint8)
    ramp = np.linspace(0, 255, 64).astype(np.uint8)
    pixels[:, :, 1] = ramp
    pixels[:16, :, 0] = 200
    pixels[16:, :, 2] = 180
    return Raster.from_rgb(pixels)


@pytest.fixture
def png_bytes():
    """Encoded 40x20 PNG with a left-dark / right-bright split."""
    bgr = np.zeros((20, 40, 3), dtype=np.uint8)
    bgr[:, 20:] = (255, 255, 255)
    ok, encoded = cv2.imencode(".png", bgr)
    assert ok
    return encoded.tobytes()


@pytest.fixture
def sample_frames():
    """Ten small solid frames with increasing brightness."""
    from ascii_converter.raster import Raster

    return [
        Raster.solid(width=16, height=8, rgb=(v, v, v))
        for v in range(0, 250, 25)
    ]


@pytest.fixture
def write_video(tmp_path):
    """
    Factory writing a solid-frame MJPG AVI and returning its bytes.

    Frames brighten from black to white. Tests are skipped when the local
    OpenCV build cannot write AVI files.
    """

    def _write(frame_count=40, fps=20.0, size=(32, 24), name="clip.avi"):
        path = tmp_path / name
        writer = cv2.VideoWriter(str(path), cv2.VideoWriter_fourcc(*"MJPG"), fps, size)
        if not writer.isOpened():
            pytest.skip("OpenCV cannot write MJPG video")
        try:
            for i in range(frame_count):
                value = int(i * 255 / max(frame_count - 1, 1))
                writer.write(np.full((size[1], size[0], 3), value, dtype=np.uint8))
        finally:
            writer.release()
        return path.read_bytes()

    return _write


@pytest.fixture
def video_bytes(write_video):
    """Two seconds of 32x24 video at 20 fps."""
    return write_video()
