# Copyright (c) 2026 Csspectrum
# SPDX-License-Identifier: MIT

"""Tests for luminance, contrast and perceptual predicates."""

import pytest

from csspectrum import Color, ContrastLevel, InvalidArgumentError


class TestLuminance:

    def test_extremes(self):
        assert Color.from_string("white").luminance() == pytest.approx(1.0)
        assert Color.from_string("black").luminance() == pytest.approx(0.0)

    def test_red(self):
        assert Color.from_string("red").luminance() == pytest.approx(0.2126, abs=1e-4)

    def test_translucent_over_white(self):
        assert Color.from_string("rgba(0, 0, 0, 0.5)").luminance() == pytest.approx(0.5)

    def test_translucent_over_background(self):
        c = Color.from_string("rgba(255, 255, 255, 0.25)")
        assert c.luminance("black") == pytest.approx(0.25)

    def test_transparent_takes_background(self):
        assert Color.from_string("transparent").luminance("red") == pytest.approx(0.2126, abs=1e-4)


class TestContrast:

    def test_black_white(self):
        assert Color.contrast_ratio("#fff", "#000") == pytest.approx(21.0)

    def test_symmetric(self):
        assert Color.contrast_ratio("red", "white") == pytest.approx(Color.contrast_ratio("white", "red"))
        assert Color.contrast_ratio("red", "white") == pytest.approx(3.998, abs=0.01)

    def test_identical(self):
        assert Color.contrast_ratio("#777", Color.from_string("#777777")) == pytest.approx(1.0)

    def test_aa(self):
        assert not Color.is_accessible_pair("#777", "#fff")
        assert Color.is_accessible_pair("#777", "#fff", large_text=True)

    def test_aaa(self):
        assert Color.is_accessible_pair("black", "white", "AAA")
        assert Color.is_accessible_pair("black", "white", "aaa", large_text=True)
        assert not Color.is_accessible_pair("#777", "#fff", ContrastLevel.AAA, large_text=True)
        assert Color.is_accessible_pair("#fff", "#000", "AA")
        assert not Color.is_accessible_pair("#fff", "#ccc", "AAA")

    def test_invalid_level(self):
        with pytest.raises(InvalidArgumentError, match="Invalid WCAG level"):
            Color.is_accessible_pair("black", "white", "AAAA")


class TestPredicates:

    def test_dark_light(self):
        assert Color.from_string("black").is_dark()
        assert Color.from_string("navy").is_dark()
        assert Color.from_string("white").is_light()
        assert Color.from_string("yellow").is_light()

    def test_dark_over_background(self):
        c = Color.from_string("rgba(255, 255, 255, 0.2)")
        assert c.is_dark("black")
        assert c.is_light()

    @pytest.mark.parametrize("text", ["blue", "lime", "cyan", "hsl(200, 50%, 50%)"])
    def test_cool(self, text):
        assert Color.from_string(text).is_cool()

    @pytest.mark.parametrize("text", ["red", "orange", "yellow", "hsl(330, 50%, 50%)"])
    def test_warm(self, text):
        assert Color.from_string(text).is_warm()

    def test_hue_rounded_before_comparison(self):
        assert Color.from_string("hsl(60.4, 100%, 50%)").is_warm()
        assert Color.from_string("hsl(60.6, 100%, 50%)").is_cool()
        assert Color.from_string("hsl(299.6, 100%, 50%)").is_warm()


class TestGamut:

    def test_srgb_colors(self):
        assert Color.from_string("red").is_in_gamut()
        assert Color.from_string("white").is_in_gamut("srgb")

    def test_wide_gamut(self):
        c = Color.from_string("color(display-p3 1 0 0)")
        assert not c.is_in_gamut()
        assert c.is_in_gamut("display-p3")
        assert c.is_in_gamut("rec2020")

    def test_opaque_format_uses_rgb(self):
        assert not Color.from_string("color(display-p3 1 0 0)").is_in_gamut("hex")
        assert Color.from_string("red").is_in_gamut("named")
