"""
Luminance and Palette Tests
===========================
"""

import numpy as np
import pytest

from ascii_converter.models.palette import Palette, get_palette, glyph_for
from ascii_converter.raster import Raster
from ascii_converter.render import glyph_table, raster_to_text
from ascii_converter.render.luminance import luminance, luminance_array


class TestLuminance:
    """Tests for the weighted luma formula."""

    def test_black_and_white(self):
        """Verify the luminance range end points."""
        assert luminance(0, 0, 0) == 0
        assert luminance(255, 255, 255) == 255

    def test_weighting_is_not_an_average(self):
        # Pure green is much brighter than pure blue
        assert luminance(0, 255, 0) == 149
        assert luminance(0, 0, 255) == 29
        assert luminance(255, 0, 0) == 76

    def test_truncates_instead_of_rounding(self):
        # Each of these is above 0.5 and would round up to 1
        assert luminance(0, 1, 0) == 0
        assert luminance(2, 0, 0) == 0
        assert luminance(0, 0, 8) == 0
        # 0.587 * 3 = 1.761
        assert luminance(0, 3, 0) == 1

    @pytest.mark.parametrize("channel", [0, 1, 2])
    def test_monotonic_per_channel(self, channel):
        """Verify brightness never drops when one channel increases."""
        base = [37, 120, 201]
        previous = -1
        for v in range(256):
            rgb = list(base)
            rgb[channel] = v
            y = luminance(*rgb)
            assert 0 <= y <= 255
            assert y >= previous
            previous = y

    def test_array_matches_scalar(self):
        """Verify the vectorized path agrees with the scalar formula."""
        rng = np.random.default_rng(7)
        pixels = rng.integers(0, 256, size=(20, 30, 3), dtype=np.uint8)
        result = luminance_array(pixels)
        assert result.dtype == np.uint8
        assert result.shape == (20, 30)
        for y in range(20):
            for x in range(30):
                r, g, b = (int(c) for c in pixels[y, x])
                assert result[y, x] == luminance(r, g, b)


class TestPalette:
    """Tests for palette lookup and glyph selection."""

    def test_palette_tables(self):
        assert get_palette("normal") == " .:-=+*#%@"
        assert get_palette("dense") == ".oO0@#"
        assert get_palette("sparse") == " .'`^\""
        assert get_palette("unicode") == "░▒▓█"

    def test_unicode_palette_counts_code_points(self):
        assert len(Palette.UNICODE.glyphs) == 4
        assert glyph_for(255, Palette.UNICODE.glyphs) == "█"
        assert glyph_for(0, Palette.UNICODE.glyphs) == "░"

    @pytest.mark.parametrize("palette", list(Palette))
    def test_end_points(self, palette):
        glyphs = palette.glyphs
        assert glyph_for(0, glyphs) == glyphs[0]
        assert glyph_for(255, glyphs) == glyphs[-1]

    def test_unknown_name_falls_back_to_normal(self):
        """Verify unknown palette names behave exactly like normal."""
        assert Palette.from_name("bogus") is Palette.NORMAL
        assert Palette.from_name("") is Palette.NORMAL
        assert Palette.from_name(None) is Palette.NORMAL
        bogus = get_palette("bogus")
        normal = get_palette("normal")
        for b in range(256):
            assert glyph_for(b, bogus) == glyph_for(b, normal)

    def test_name_is_case_insensitive(self):
        assert Palette.from_name("DENSE") is Palette.DENSE

    def test_index_formula(self):
        glyphs = get_palette("normal")
        # floor(128 / 255 * 9) = floor(4.517...) = 4
        assert glyph_for(128, glyphs) == glyphs[4]
        # floor(254 / 255 * 9) = 8
        assert glyph_for(254, glyphs) == glyphs[8]

    def test_empty_palette_returns_space(self):
        assert glyph_for(100, "") == " "
        assert glyph_for(100, None) == " "

    def test_out_of_range_brightness_is_clamped(self):
        glyphs = get_palette("dense")
        assert glyph_for(-20, glyphs) == glyphs[0]
        assert glyph_for(400, glyphs) == glyphs[-1]


class TestRenderedGlyphs:
    """Tests that the raster renderer applies the same glyph mapping."""

    @pytest.mark.parametrize("palette", list(Palette))
    def test_lookup_table_matches_glyph_for(self, palette):
        table = glyph_table(palette)
        assert table.shape == (256,)
        for b in range(256):
            assert table[b] == glyph_for(b, palette.glyphs)

    @pytest.mark.parametrize("palette", list(Palette))
    def test_rendered_ramp_matches_glyph_for(self, palette):
        """Verify every brightness renders through the palette formula."""
        pixels = np.zeros((1, 256, 3), dtype=np.uint8)
        pixels[0, :, 0] = np.arange(256)
        pixels[0, :, 1] = np.arange(256)[::-1]
        pixels[0, :, 2] = 128
        text = raster_to_text(Raster.from_rgb(pixels), palette)

        expected = "".join(
            glyph_for(luminance(*(int(c) for c in pixels[0, x])), palette.glyphs)
            for x in range(256)
        )
        assert text == expected + "\n"

    def test_rendered_end_points(self):
        black = Raster.solid(width=1, height=1, rgb=(0, 0, 0))
        white = Raster.solid(width=1, height=1, rgb=(255, 255, 255))
        for palette in Palette:
            assert raster_to_text(black, palette) == palette.glyphs[0] + "\n"
            assert raster_to_text(white, palette) == palette.glyphs[-1] + "\n"

    def test_unknown_palette_renders_as_normal(self, gradient_raster):
        assert raster_to_text(gradient_raster, "bogus") == raster_to_text(gradient_raster, "normal")
