# Copyright (c) 2026 Csspectrum
# SPDX-License-Identifier: MIT

"""Tests for color grammars and the composite pattern library."""

import re

import pytest

from csspectrum.convert.patterns import (
    HEX_PATTERN,
    PERCENTAGE,
    RGB_COMPONENT,
    PatternLibrary,
    functional_pattern,
    named_pattern,
    space_pattern,
    strip_anchors,
)


class TestFragments:

    @pytest.mark.parametrize("text", ["0%", "50%", "99.5%", "100%", "100.0%", ".5%"])
    def test_percentage_accepts(self, text):
        assert re.fullmatch(PERCENTAGE, text)

    @pytest.mark.parametrize("text", ["101%", "50", "-5%"])
    def test_percentage_rejects(self, text):
        assert not re.fullmatch(PERCENTAGE, text)

    @pytest.mark.parametrize("text", ["0", "255", "127.5", "40%"])
    def test_rgb_component_accepts(self, text):
        assert re.fullmatch(RGB_COMPONENT, text)

    def test_rgb_component_rejects_out_of_range(self):
        assert not re.fullmatch(RGB_COMPONENT, "256")


class TestPatternBuilders:

    def test_functional_pattern_groups(self):
        pattern = functional_pattern("rgba?", RGB_COMPONENT, RGB_COMPONENT, RGB_COMPONENT)
        assert pattern.match("rgb(1, 2, 3)").groups() == ("1", "2", "3", None)
        assert pattern.match("rgba(1 2 3 / 0.5)").groups() == ("1", "2", "3", "0.5")
        assert pattern.match("RGB(1,2,3,50%)").group(4) == "50%"
        assert pattern.match("rgb(1, 2)") is None

    def test_space_pattern(self):
        pattern = space_pattern("display-p3")
        assert pattern.match("color(display-p3 1 0.5 0)")
        assert pattern.match("color(display-p3 1 0.5 0 / 0.4)").group(4) == "0.4"
        assert pattern.match("color(srgb 1 0.5 0)") is None

    def test_space_pattern_requires_whitespace_after_name(self):
        assert space_pattern("srgb").match("color(srgb-linear 1 0 0)") is None

    def test_named_pattern_whole_word(self):
        pattern = named_pattern(["red", "rebeccapurple"])
        assert pattern.match("red")
        assert pattern.match("RebeccaPurple")
        assert pattern.match("reddish") is None

    @pytest.mark.parametrize("text", ["#fff", "#ffff", "#ff5733", "#FF573380"])
    def test_hex_accepts(self, text):
        assert HEX_PATTERN.match(text)

    @pytest.mark.parametrize("text", ["#ff", "#fffff", "#ff57339", "ff5733", "#ggg"])
    def test_hex_rejects(self, text):
        assert HEX_PATTERN.match(text) is None

    def test_strip_anchors(self):
        assert strip_anchors(re.compile(r"^abc$")) == "abc"
        assert strip_anchors(re.compile(r"abc\$")) == r"abc\$"


class TestPatternLibrary:

    @pytest.fixture
    def library(self, registry):
        return registry.patterns

    def test_match_simple_order(self, library):
        assert library.match_simple("#ff5733") == "hex"
        assert library.match_simple("rgba(1, 2, 3, 0.5)") == "rgb"
        assert library.match_simple("color(srgb-linear 1 0 0)") == "srgb-linear"
        assert library.match_simple("nope") is None

    @pytest.mark.parametrize("text", [
        "hsl(from red h s l)",
        "rgb(from #ff5733 b g r)",
        "hsl(from red calc(h + 100) s l)",
        "rgb(from red r g b / calc(alpha / 2))",
        "color(from red display-p3 r g b)",
        "lch(from rgb(10, 20, 30) l c calc(h + (10 * 2)))",
    ])
    def test_relative(self, library, text):
        assert library.is_relative(text)

    def test_relative_groups(self, library):
        match = library.relative.match("color(from red display-p3 r g b / 0.5)")
        assert match.group("space_base") == "red"
        assert match.group("space") == "display-p3"
        assert match.group("alpha") == "0.5"

    def test_not_relative(self, library):
        assert not library.is_relative("hsl(0, 100%, 50%)")
        assert not library.is_relative("hsl(from notacolor h s l)")

    def test_color_mix_groups(self, library):
        match = library.color_mix.match("color-mix(in hsl longer hue, red 30%, #00f)")
        assert match.group("model") == "hsl"
        assert match.group("hue_method") == "longer"
        assert match.group("first") == "red"
        assert match.group("first_weight") == "30%"
        assert match.group("second") == "#00f"
        assert match.group("second_weight") is None

    def test_color_mix_nested_commas(self, library):
        assert library.is_color_mix("color-mix(in srgb, rgb(255, 0, 0) 25%, hsl(240, 100%, 50%))")

    def test_empty_library(self):
        library = PatternLibrary({})
        assert library.match_simple("red") is None
        assert not library.is_relative("rgb(from red r g b)")
        assert not library.is_color_mix("color-mix(in srgb, red, blue)")


VALID = {
    "rgb": ["rgb(255, 87, 51)", "rgba(255, 87, 51, 0.5)", "rgb(100% 0% 50%)", "rgb(255 87 51 / 50%)"],
    "hsl": ["hsl(9, 100%, 60%)", "hsla(9deg 100% 60% / .5)", "hsl(-30 50% 50%)"],
    "hwb": ["hwb(9 0% 0%)", "hwb(9, 10%, 20%, 0.5)"],
    "lab": ["lab(53.2% 80.1 67.2)", "lab(50% -20 -30 / 0.5)"],
    "lch": ["lch(53.2% 104.5 40)", "lch(50 30 120deg)"],
    "oklab": ["oklab(62.8% 0.22 0.13)", "oklab(50% -0.1 0.1 / 1)"],
    "oklch": ["oklch(62.8% 0.26 29.2)", "oklch(70% 0.1 200deg / 0.5)"],
    "hex": ["#abc", "#abcd", "#aabbcc", "#aabbccdd"],
    "named": ["red", "RebeccaPurple", "transparent"],
    "display-p3": ["color(display-p3 1 0.5 0)", "color(display-p3 100% 50% 0% / 0.5)"],
}

INVALID = {
    "rgb": ["rgb(256, 0, 0)", "rgb(0, 0)", "rgb(0, 0, 0, 2)"],
    "hsl": ["hsl(9, 100, 60%)", "hsl(9, 100%)"],
    "hwb": ["hwb(9 0 0)"],
    "lab": ["lab(50 20 30)"],
    "lch": ["lch(50% -30 120)"],
    "oklab": ["oklab(0.5 0.1 0.1)"],
    "oklch": ["oklch(62.8% -0.1 29)"],
    "hex": ["#ab", "abc", "#abcde"],
    "named": ["reddish", "not-a-color"],
    "display-p3": ["color(display-p3 1 0.5)", "color(display-p3 -1 0 0)"],
}


class TestGrammarSets:

    @pytest.mark.parametrize("name,text", [(n, t) for n, texts in VALID.items() for t in texts])
    def test_valid(self, registry, name, text):
        assert registry.get(name).pattern.match(text)
        assert registry.classify(text)[1] == name

    @pytest.mark.parametrize("name,text", [(n, t) for n, texts in INVALID.items() for t in texts])
    def test_invalid(self, registry, name, text):
        assert registry.get(name).pattern.match(text) is None
