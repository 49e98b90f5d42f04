# Copyright (c) 2026 Csspectrum
# SPDX-License-Identifier: MIT

"""Tests for positional component helpers and number formatting."""

import pytest

from csspectrum.convert.components import (
    alpha_suffix,
    format_number,
    format_percent,
    normalize_components,
    read_components,
)
from csspectrum.convert.formats import build_hsl
from csspectrum.errors import MissingComponentMetadataError
from csspectrum.schema import ComponentDefinition, FormattingOptions, alpha_definition

HSL = build_hsl().with_alpha()
ALPHA = alpha_definition(3)


class TestFormatNumber:

    @pytest.mark.parametrize("value,decimals,expected", [
        (80.0, 1, "80"),
        (0.5, 3, "0.5"),
        (12.3456, 2, "12.35"),
        (255.0, 0, "255"),
        (-0.0004, 3, "0"),
        (-0.0, 3, "0"),
        (-12.5, 1, "-12.5"),
    ])
    def test_format(self, value, decimals, expected):
        assert format_number(value, decimals) == expected

    def test_percent_uses_two_fewer_decimals(self):
        d = ComponentDefinition(index=0, min=0, max=1, step=0.00001)
        assert format_percent(0.62796, d, FormattingOptions()) == "62.796%"
        assert format_percent(0.62796, d, FormattingOptions(precision=1)) == "62.8%"


class TestAlphaSuffix:

    def test_opaque_is_empty(self):
        assert alpha_suffix(1.0, ALPHA, FormattingOptions()) == ""

    def test_modern(self):
        assert alpha_suffix(0.5, ALPHA, FormattingOptions()) == " / 0.5"

    def test_legacy(self):
        assert alpha_suffix(0.25, ALPHA, FormattingOptions(), legacy=True) == ", 0.25"


class TestComponentArrays:

    def test_read_clamps_and_steps(self):
        assert read_components(HSL, [400.0, 50.04, -3.0, 1.2]) == [360, 50.0, 0, 1.0]

    def test_normalize_wraps_hue(self):
        assert normalize_components(HSL, [400.0, 50.04, -3.0, 0.5]) == [40, 50.0, 0, 0.5]

    def test_too_many_values(self):
        with pytest.raises(MissingComponentMetadataError, match="index 4"):
            read_components(HSL, [0.0, 0.0, 0.0, 1.0, 9.0])
        with pytest.raises(MissingComponentMetadataError):
            normalize_components(HSL, [0.0, 0.0, 0.0, 1.0, 9.0])
