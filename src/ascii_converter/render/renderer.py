"""
ASCII Renderer
==============

Turn a raster into ASCII art.

Traversal is row-major: top to bottom, left to right. Each pixel's glyph is
chosen from its luminance; colour mode keeps the pixel's original RGB next
to the glyph. Glyph and colour always come from the same RGB source.

Output forms:
    - Plain text: rows joined, every row terminated by "\\n"
    - GlyphGrid: structured rows of GlyphCells (JSON / SVG)
    - ANSI text: each glyph prefixed with ESC[38;2;R;G;Bm, each row ending
      with ESC[0m before the newline (terminal display)

The high-level entry points (render_plain, render_colored) resize first;
the raster_* functions render an already-resized raster.
"""

import logging
from typing import Dict, List, Union

import numpy as np

from ascii_converter.models.glyph import GlyphCell, GlyphGrid
from ascii_converter.models.palette import Palette, glyph_for
from ascii_converter.raster.raster import Raster
from ascii_converter.raster.resizer import resize
from ascii_converter.render.luminance import luminance_array


logger = logging.getLogger(__name__)


ANSI_RESET = "\033[0m"

PaletteLike = Union[str, Palette, None]


def ansi_color(r: int, g: int, b: int) -> str:
    """24-bit foreground colour escape sequence."""
    return f"\033[38;2;{r};{g};{b}m"


# =============================================================================
# Glyph mapping
# =============================================================================

_GLYPH_TABLES: Dict[Palette, np.ndarray] = {}


def glyph_table(palette: PaletteLike = None) -> np.ndarray:
    """
    Lookup table mapping every brightness 0..255 to its glyph.

    Entries come from glyph_for; tables are cached per palette.

    Returns:
        (256,) array of single-glyph strings
    """
    resolved = Palette.from_name(palette)
    table = _GLYPH_TABLES.get(resolved)
    if table is None:
        glyphs = resolved.glyphs
        table = np.array([glyph_for(b, glyphs) for b in range(256)])
        table.setflags(write=False)
        _GLYPH_TABLES[resolved] = table
    return table


def glyph_rows(raster: Raster, palette: PaletteLike = None) -> np.ndarray:
    """
    Glyph for every pixel of a raster.

    Returns:
        (H, W) array of single-glyph strings
    """
    return glyph_table(palette)[luminance_array(raster.pixels)]


# =============================================================================
# Raster renderers (input already resized)
# =============================================================================

def raster_to_text(raster: Raster, palette: PaletteLike = None) -> str:
    """Plain text rendering; every row ends with a newline."""
    chars = glyph_rows(raster, palette)
    return "".join("".join(row) + "\n" for row in chars)


def raster_to_grid(raster: Raster, palette: PaletteLike = None) -> GlyphGrid:
    """Glyph grid rendering with per-cell RGB colour."""
    chars = glyph_rows(raster, palette)
    pixels = raster.pixels

    rows: List[List[GlyphCell]] = []
    for y in range(raster.height):
        row = []
        for x in range(raster.width):
            r, g, b = pixels[y, x]
            row.append(GlyphCell(glyph=str(chars[y, x]), color=(int(r), int(g), int(b))))
        rows.append(row)

    return GlyphGrid.from_rows(rows)


def raster_to_ansi(raster: Raster, palette: PaletteLike = None) -> str:
    """ANSI truecolor rendering for terminals."""
    chars = glyph_rows(raster, palette)
    pixels = raster.pixels

    parts: List[str] = []
    for y in range(raster.height):
        for x in range(raster.width):
            r, g, b = pixels[y, x]
            parts.append(ansi_color(int(r), int(g), int(b)))
            parts.append(str(chars[y, x]))
        parts.append(ANSI_RESET + "\n")

    return "".join(parts)


def grid_to_ansi(grid: GlyphGrid) -> str:
    """ANSI rendering of an existing glyph grid (uncoloured cells print plain)."""
    parts: List[str] = []
    for row in grid.rows:
        for cell in row:
            if cell.color is not None:
                parts.append(ansi_color(*cell.color))
            parts.append(cell.glyph)
        parts.append(ANSI_RESET + "\n")
    return "".join(parts)


# =============================================================================
# Pipeline entry points
# =============================================================================

def render_plain(image: Raster, width: int, palette: PaletteLike = None) -> str:
    """
    Resize and render an image as plain ASCII text.

    Args:
        image: Source raster
        width: Target width in characters (> 0)
        palette: Palette name; unknown names use "normal"

    Returns:
        Text with one line per resized row
    """
    resized = resize(image, width)
    return raster_to_text(resized, palette)


def render_colored(
    image: Raster,
    width: int,
    palette: PaletteLike = None,
    ansi: bool = False,
) -> Union[GlyphGrid, str]:
    """
    Resize and render an image keeping per-glyph colour.

    Args:
        image: Source raster
        width: Target width in characters (> 0)
        palette: Palette name; unknown names use "normal"
        ansi: Return an ANSI-escaped string instead of a GlyphGrid

    Returns:
        GlyphGrid, or ANSI text when ``ansi`` is set
    """
    resized = resize(image, width)
    if ansi:
        return raster_to_ansi(resized, palette)
    return raster_to_grid(resized, palette)
