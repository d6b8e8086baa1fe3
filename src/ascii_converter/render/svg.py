"""
SVG Exporter
============

Lay out rendered ASCII art as a self-contained SVG document.

Geometry:
    char_width = 0.6 * font_size   (monospace advance approximation)
    width      = longest row (in glyphs) * char_width
    height     = row count * font_size
    baseline y = font_size for the first row, + font_size per row

Plain art produces one <text> element per row (white fill). Coloured grids
produce one <text> element per cell at x = column * char_width with an
rgb(r,g,b) fill. The background is black. Empty input yields "".
"""

import logging
from typing import List, Sequence, Union
from xml.sax.saxutils import escape

from ascii_converter.models.glyph import GlyphGrid


logger = logging.getLogger(__name__)


CHAR_WIDTH_RATIO = 0.6

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}

AsciiArt = Union[GlyphGrid, str, Sequence[str]]


def escape_xml(text: str) -> str:
    """Escape & < > " ' for element content."""
    return escape(text, _XML_ENTITIES)


def _num(value: float) -> str:
    """Compact number formatting: 12.0 -> '12', 7.2 -> '7.2'."""
    value = round(value, 4)
    if value == int(value):
        return str(int(value))
    return repr(value)


def split_rows(text: str) -> List[str]:
    """Split plain art into rows; a single trailing newline ends the last row."""
    if not text:
        return []
    if text.endswith("\n"):
        text = text[:-1]
    return text.split("\n")


def export_svg(art: AsciiArt, font_size: int = 12) -> str:
    """
    Render ASCII art as an SVG document.

    Args:
        art: Plain text, a list of row strings, or a GlyphGrid. Grids whose
            cells all carry colour are drawn per cell in colour.
        font_size: Font size in points (> 0)

    Returns:
        SVG markup, or "" when there are no rows
    """
    if font_size <= 0:
        raise ValueError(f"Font size must be positive, got {font_size}")

    colored_grid = None
    if isinstance(art, GlyphGrid):
        lines = art.lines()
        if art.is_colored:
            colored_grid = art
    elif isinstance(art, str):
        lines = split_rows(art)
    else:
        lines = list(art)

    if not lines:
        return ""

    char_width = font_size * CHAR_WIDTH_RATIO
    max_width = max(len(line) for line in lines)
    width = max_width * char_width
    height = len(lines) * font_size

    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{_num(width)}" '
        f'height="{_num(height)}" xml:space="preserve" style="background:black;">',
        "\n",
    ]

    if colored_grid is not None:
        y = font_size
        for row in colored_grid.rows:
            for col, cell in enumerate(row):
                r, g, b = cell.color
                parts.append(
                    f'<text x="{_num(col * char_width)}" y="{y}" fill="rgb({r},{g},{b})" '
                    f'font-family="monospace" font-size="{font_size}">'
                    f"{escape_xml(cell.glyph)}</text>"
                )
            y += font_size
    else:
        y = font_size
        for line in lines:
            parts.append(
                f'<text x="0" y="{y}" fill="white" font-family="monospace" '
                f'font-size="{font_size}">{escape_xml(line)}</text>'
            )
            y += font_size

    parts.append("\n</svg>")

    logger.debug(
        f"SVG export: {len(lines)} rows, {max_width} cols, "
        f"colored={colored_grid is not None}"
    )
    return "".join(parts)
