"""
Palette Table
=============

Named glyph palettes used to quantize brightness into characters.

Each palette is ordered from the lightest visual weight to the darkest, so
brightness 0 maps to the first glyph and brightness 255 to the last.

    normal  " .:-=+*#%@"   (default, also used for unknown names)
    dense   ".oO0@#"
    sparse  " .'`^\""
    unicode "░▒▓█"

Glyphs are indexed by code point, so multi-byte characters such as the
unicode block shades count as one glyph each.
"""

from enum import Enum
from typing import Optional, Sequence, Union


class Palette(str, Enum):
    """
    Enumerated palette names.

    Attributes:
        NORMAL: Ten-step classic ramp (the default)
        DENSE: Six heavy glyphs
        SPARSE: Six light punctuation glyphs
        UNICODE: Four block shade characters
    """

    NORMAL = "normal"
    DENSE = "dense"
    SPARSE = "sparse"
    UNICODE = "unicode"

    @classmethod
    def from_name(cls, name: Union[str, "Palette", None]) -> "Palette":
        """
        Resolve a palette name.

        Unrecognized, empty, or missing names resolve to NORMAL.
        """
        if isinstance(name, Palette):
            return name
        if name:
            try:
                return cls(name.strip().lower())
            except ValueError:
                pass
        return cls.NORMAL

    @property
    def glyphs(self) -> str:
        """Ordered glyph sequence for this palette."""
        return _GLYPHS[self]


_GLYPHS = {
    Palette.NORMAL: " .:-=+*#%@",
    Palette.DENSE: ".oO0@#",
    Palette.SPARSE: " .'`^\"",
    Palette.UNICODE: "░▒▓█",
}

# Returned when a caller hands in an empty glyph sequence
FALLBACK_GLYPH = " "


def get_palette(name: Union[str, Palette, None]) -> str:
    """Return the glyph sequence for a palette name (unknown names -> normal)."""
    return Palette.from_name(name).glyphs


def glyph_for(brightness: int, glyphs: Optional[Sequence[str]]) -> str:
    """
    Select the glyph for a brightness value.

    index = floor(brightness / 255 * (n - 1)), clamped into [0, n - 1].

    Args:
        brightness: Luminance in [0, 255]
        glyphs: Ordered glyph sequence (lightest first)

    Returns:
        The selected glyph, or a single space for an empty sequence
    """
    if not glyphs:
        return FALLBACK_GLYPH
    n = len(glyphs)
    index = int(brightness / 255.0 * (n - 1))
    index = min(max(index, 0), n - 1)
    return glyphs[index]
