"""Tests for canvas_pipeline.color (color parsing and terminal palette lookup)."""

from __future__ import annotations

import pytest

from canvas_pipeline.color import (CursesPalette, parse_color, rgb_to_nearest_ansi8,
                                   rgb_to_nearest_xterm)


class TestParseColor:
    @pytest.mark.parametrize("value, expected", [
        ("#ff0000", (255, 0, 0)),
        ("#f00", (255, 0, 0)),
        ("rgb(0, 128, 255)", (0, 128, 255)),
        ("red", (255, 0, 0)),
        ("  #00ff00  ", (0, 255, 0)),
        ((10, 20, 30), (10, 20, 30)),
        ([10, 20, 30, 40], (10, 20, 30)),
    ])
    def test_accepted_forms(self, value, expected) -> None:
        assert parse_color(value) == expected

    def test_tuple_channels_are_clamped(self) -> None:
        assert parse_color((300, -5, 10)) == (255, 0, 10)

    @pytest.mark.parametrize("value", [None, "notacolor", "#12", (1.0, 2, 3), (1, 2)])
    def test_rejected_forms(self, value) -> None:
        assert parse_color(value) is None


class TestNearestIndex:
    def test_xterm_primary_hits_cube(self) -> None:
        assert rgb_to_nearest_xterm(255, 0, 0) == 196
        assert rgb_to_nearest_xterm(0, 0, 0) == 16

    def test_xterm_mid_gray_uses_ramp(self) -> None:
        assert rgb_to_nearest_xterm(128, 128, 128) == 244

    def test_ansi8(self) -> None:
        assert rgb_to_nearest_ansi8(250, 10, 10) == 1
        assert rgb_to_nearest_ansi8(0, 0, 0) == 0
        assert rgb_to_nearest_ansi8(200, 200, 200) == 7


class TestCursesPalette:
    def test_mono_palette_always_returns_default_pair(self) -> None:
        palette = CursesPalette(use_color=False)
        palette.start()
        assert palette.pair("#ff0000", "#ffffff") == 0
        assert palette.pairs == {}

    def test_index_depends_on_color_depth(self) -> None:
        palette = CursesPalette()
        palette.num_colors = 256
        assert palette.color_index((255, 0, 0)) == 196
        palette.num_colors = 8
        assert palette.color_index((255, 0, 0)) == 1
