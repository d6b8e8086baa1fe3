"""
Glyph Grid Model
================

Rendered output of the ASCII renderer.

A GlyphGrid is an ordered sequence of rows (top to bottom), each an ordered
sequence of GlyphCells (left to right). All rows share the same length.

Design Rules:
    - Cells and grids are immutable once produced
    - Colour is optional; plain grids carry glyphs only
    - Flattening a grid to text gives the plain rendering format
      (every row terminated by a newline)
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple


RGB = Tuple[int, int, int]


@dataclass(frozen=True, slots=True)
class GlyphCell:
    """
    One output character.

    Attributes:
        glyph: The displayed character
        color: Source pixel colour as (r, g, b), or None for plain cells
    """

    glyph: str
    color: Optional[RGB] = None

    def to_dict(self) -> Dict[str, object]:
        """JSON shape used by the HTTP API: {char, r, g, b}."""
        r, g, b = self.color if self.color is not None else (255, 255, 255)
        return {"char": self.glyph, "r": r, "g": g, "b": b}


@dataclass(frozen=True, slots=True)
class GlyphGrid:
    """
    Rows of glyph cells forming a rendered image.

    Attributes:
        rows: Tuple of rows, each a tuple of GlyphCell
    """

    rows: Tuple[Tuple[GlyphCell, ...], ...]

    def __post_init__(self) -> None:
        if self.rows:
            width = len(self.rows[0])
            if any(len(row) != width for row in self.rows):
                raise ValueError("All glyph grid rows must have the same length")

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[GlyphCell]]) -> "GlyphGrid":
        return cls(rows=tuple(tuple(row) for row in rows))

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def is_colored(self) -> bool:
        """True when every cell carries a colour."""
        return bool(self.rows) and all(
            cell.color is not None for row in self.rows for cell in row
        )

    def lines(self) -> List[str]:
        """Glyph rows as strings, colour dropped."""
        return ["".join(cell.glyph for cell in row) for row in self.rows]

    def to_text(self) -> str:
        """Plain text form: each row followed by a newline."""
        return "".join(line + "\n" for line in self.lines())

    def to_lines_payload(self) -> List[List[Dict[str, object]]]:
        """Nested list of {char, r, g, b} dicts for JSON responses."""
        return [[cell.to_dict() for cell in row] for row in self.rows]

    def __repr__(self) -> str:
        return f"GlyphGrid(width={self.width}, height={self.height}, colored={self.is_colored})"
