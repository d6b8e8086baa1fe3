"""
Command Line Interface
======================

Usage:
    ascii-converter [--color] [--width N] [--palette P] image.jpg
    ascii-converter --svg out.svg [--font-size N] [--color] image.png
    ascii-converter --video [--fps N] [--color] clip.mp4
    ascii-converter --server

Examples:
    ascii-converter -color -width 120 -palette dense images/apple.png
    ascii-converter --video --fps 12 --width 80 clip.webm
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

from ascii_converter.config import settings
from ascii_converter.models.palette import Palette
from ascii_converter.raster import ImageDecodeError, load_image, resize
from ascii_converter.render import (
    export_svg,
    grid_to_ansi,
    raster_to_ansi,
    raster_to_grid,
    raster_to_text,
)
from ascii_converter.video import (
    FrameRenderError,
    VideoExtractionError,
    extract_frames,
    render_video,
)


logger = logging.getLogger(__name__)


CLEAR_SCREEN = "\033[H\033[J"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ascii-converter",
        description="Convert images and videos to ASCII art",
    )
    p.add_argument("path", nargs="?", help="Image (or video with --video) to convert")
    p.add_argument("-color", "--color", action="store_true",
                   help="Enable coloured (24-bit ANSI) output")
    p.add_argument("-width", "--width", type=int, default=settings.converter.default_width,
                   help=f"Width of ASCII output in characters (default: {settings.converter.default_width})")
    p.add_argument("-palette", "--palette", default=settings.converter.default_palette,
                   choices=[palette.value for palette in Palette],
                   help="Character palette")
    p.add_argument("--svg", metavar="OUT", default=None,
                   help="Write the art as an SVG file instead of printing it")
    p.add_argument("--font-size", type=int, default=settings.converter.default_font_size,
                   help="SVG font size (default: %(default)s)")
    p.add_argument("--video", action="store_true",
                   help="Treat the input as a video and play it in the terminal")
    p.add_argument("--fps", type=int, default=settings.video.default_fps,
                   help="Video sampling rate (default: %(default)s)")
    p.add_argument("-server", "--server", action="store_true",
                   help="Start the REST API server")
    return p


def convert_image(args: argparse.Namespace) -> str:
    """Render a single image according to the parsed arguments."""
    raster = resize(load_image(args.path), args.width)

    if args.svg:
        art = raster_to_grid(raster, args.palette) if args.color else raster_to_text(raster, args.palette)
        svg = export_svg(art, args.font_size)
        Path(args.svg).write_text(svg, encoding="utf-8")
        return f"Saved SVG: {args.svg}"

    if args.color:
        return raster_to_ansi(raster, args.palette)
    return raster_to_text(raster, args.palette)


def play_video(args: argparse.Namespace) -> None:
    """Extract, render and play a video in the terminal."""
    data = Path(args.path).read_bytes()
    frames, metadata = extract_frames(
        data,
        target_fps=args.fps,
        max_frames=settings.video.max_frame_count,
        max_duration=settings.video.max_duration_seconds,
        suffix=Path(args.path).suffix or ".mp4",
    )
    results = render_video(
        frames,
        args.width,
        args.palette,
        metadata.sampled_fps,
        color=args.color,
        max_workers=settings.video.workers,
    )

    start = time.time()
    for result in results:
        # Throttle to the frame's timestamp
        delay = result.timestamp - (time.time() - start)
        if delay > 0:
            time.sleep(delay)
        art = grid_to_ansi(result.grid) if result.grid is not None else result.ascii
        sys.stdout.write(CLEAR_SCREEN)
        sys.stdout.write(art)
        sys.stdout.flush()

    print(
        f"Played {metadata.frame_count} frames "
        f"({metadata.duration:.1f}s source at {metadata.original_fps:.1f} fps, sampled {metadata.sampled_fps} fps)"
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.server:
        from ascii_converter.main import run_server
        run_server()
        return 0

    if not args.path:
        parser.print_usage(sys.stderr)
        print("error: an image path is required (or --server)", file=sys.stderr)
        return 1
    if args.width <= 0:
        parser.error("--width must be positive")
    if args.fps <= 0:
        parser.error("--fps must be positive")

    try:
        if args.video:
            play_video(args)
        else:
            print(convert_image(args))
    except (ImageDecodeError, VideoExtractionError, FrameRenderError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
