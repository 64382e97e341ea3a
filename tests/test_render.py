"""
Render Tests
============

Glyph mapping and raster -> text rendering.
"""

import logging

import numpy as np
import pytest

from ascii_player.render.glyphs import DETAILED_RAMP, SIMPLE_RAMP, GlyphRamp
from ascii_player.render.renderer import FrameRenderer, target_height


class TestGlyphRamp:
    """Tests for brightness quantization."""

    def test_boundaries(self, detailed_ramp, simple_ramp):
        """0 maps to the first glyph and 255 to the last."""
        for ramp in (detailed_ramp, simple_ramp, GlyphRamp("#")):
            assert ramp.map(0) == ramp.glyphs[0]
            assert ramp.map(255) == ramp.glyphs[-1]

    def test_monotonic(self, detailed_ramp):
        """Brighter pixels never map to a denser glyph."""
        positions = [detailed_ramp.glyphs.index(detailed_ramp.map(b)) for b in range(256)]
        assert positions == sorted(positions)

    def test_linear_quantization(self, simple_ramp):
        # floor(128 / 255 * 9) == 4
        assert simple_ramp.map(128) == SIMPLE_RAMP[4]
        # floor(254 / 255 * 9) == 8
        assert simple_ramp.map(254) == SIMPLE_RAMP[8]

    def test_out_of_range_is_clamped(self, simple_ramp):
        assert simple_ramp.map(-40) == simple_ramp.map(0)
        assert simple_ramp.map(300) == simple_ramp.map(255)

    def test_empty_ramp_rejected(self):
        with pytest.raises(ValueError):
            GlyphRamp("")

    def test_presets_and_literal(self):
        assert "".join(GlyphRamp.from_name("detailed").glyphs) == DETAILED_RAMP
        assert "".join(GlyphRamp.from_name("simple").glyphs) == SIMPLE_RAMP
        assert "".join(GlyphRamp.from_name("#o. ").glyphs) == "#o. "

    def test_detailed_ramp_ends_lightest(self):
        assert DETAILED_RAMP[0] == "@"
        assert DETAILED_RAMP[-1] == " "
        assert len(DETAILED_RAMP) == 54

    def test_lookup_table_matches_map(self, detailed_ramp):
        table = detailed_ramp.lookup_table()
        assert table.shape == (256,)
        assert all(table[b] == detailed_ramp.map(b) for b in range(256))

    def test_lookup_table_read_only(self, simple_ramp):
        with pytest.raises(ValueError):
            simple_ramp.lookup_table()[0] = "x"


class TestFrameRenderer:
    """Tests for the text grid renderer."""

    @pytest.mark.parametrize("width,height", [(1, 1), (1, 7), (9, 1), (100, 56), (13, 4)])
    def test_shape_invariant(self, detailed_ramp, width, height):
        rng = np.random.default_rng(width * 1000 + height)
        raster = rng.integers(0, 256, size=(height, width), dtype=np.uint8)

        text = FrameRenderer(detailed_ramp).render(raster)

        assert text.endswith("\n")
        lines = text.split("\n")[:-1]
        assert len(lines) == height
        assert all(len(line) == width for line in lines)

    def test_row_major_mapping(self, simple_ramp):
        raster = np.array([[0, 255], [255, 0]], dtype=np.uint8)
        assert FrameRenderer(simple_ramp).render(raster) == "@ \n @\n"

    def test_deterministic(self, detailed_ramp):
        raster = np.arange(60, dtype=np.uint8).reshape(6, 10)
        renderer = FrameRenderer(detailed_ramp)
        assert renderer.render(raster) == renderer.render(raster.copy())

    def test_non_uint8_raster_is_clamped(self, simple_ramp):
        raster = np.array([[-5.0, 400.0]])
        assert FrameRenderer(simple_ramp).render(raster) == "@ \n"

    def test_clamping_is_logged(self, simple_ramp, caplog):
        with caplog.at_level(logging.DEBUG, logger="ascii_player.render.renderer"):
            FrameRenderer(simple_ramp).render(np.array([[0.0, 255.0]]))
        assert "Clamping float64 raster" in caplog.text

        caplog.clear()
        with caplog.at_level(logging.DEBUG, logger="ascii_player.render.renderer"):
            FrameRenderer(simple_ramp).render(np.zeros((1, 2), dtype=np.uint8))
        assert caplog.text == ""

    def test_rejects_color_raster(self, simple_ramp):
        with pytest.raises(ValueError):
            FrameRenderer(simple_ramp).render(np.zeros((2, 2, 3), dtype=np.uint8))

    def test_rejects_empty_raster(self, simple_ramp):
        with pytest.raises(ValueError):
            FrameRenderer(simple_ramp).render(np.zeros((0, 4), dtype=np.uint8))


class TestTargetHeight:
    """Tests for aspect-ratio height derivation."""

    def test_widescreen(self):
        assert target_height(100, 1920, 1080) == 56

    def test_portrait(self):
        assert target_height(10, 1080, 1920) == 18

    def test_rounds_half_up(self):
        # 5 / (4 / 1) == 1.25 -> 1; 6 / 4 == 1.5 -> 2
        assert target_height(5, 4, 1) == 1
        assert target_height(6, 4, 1) == 2

    def test_minimum_one_row(self):
        assert target_height(1, 1000, 1) == 1

    def test_rejects_non_positive(self):
        with pytest.raises(ValueError):
            target_height(0, 10, 10)
        with pytest.raises(ValueError):
            target_height(10, 0, 10)
