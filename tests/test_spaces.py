# Copyright (c) 2026 Csspectrum
# SPDX-License-Identifier: MIT

"""Tests for CSS color() device spaces."""

import numpy as np
import pytest

from csspectrum import Color
from csspectrum.convert import colorspace as cs
from csspectrum.convert.spaces import (
    SPACE_SPECS,
    a98_decode,
    a98_encode,
    build_space_converter,
    prophoto_decode,
    prophoto_encode,
    rec2020_decode,
    rec2020_encode,
    srgb_decode,
    srgb_encode,
)
from csspectrum.errors import InvalidFormatError
from csspectrum.schema import WhitePoint

TRANSFERS = [
    (srgb_decode, srgb_encode),
    (rec2020_decode, rec2020_encode),
    (a98_decode, a98_encode),
    (prophoto_decode, prophoto_encode),
]


class TestTransferFunctions:

    @pytest.mark.parametrize("decode,encode", TRANSFERS)
    @pytest.mark.parametrize("value", [0.0, 0.001, 0.02, 0.3, 0.75, 1.0])
    def test_roundtrip(self, decode, encode, value):
        assert encode(decode(value)) == pytest.approx(value, abs=1e-9)

    @pytest.mark.parametrize("decode,encode", TRANSFERS)
    def test_sign_preserving(self, decode, encode):
        assert decode(-0.5) == pytest.approx(-decode(0.5))
        assert encode(-0.5) == pytest.approx(-encode(0.5))

    def test_endpoints(self):
        for decode, _ in TRANSFERS:
            assert decode(1.0) == pytest.approx(1.0)


class TestSpaceSpecs:

    def test_builtin_order(self):
        assert list(SPACE_SPECS) == [
            "srgb", "srgb-linear", "display-p3", "rec2020", "a98-rgb",
            "prophoto-rgb", "xyz-d65", "xyz-d50", "xyz",
        ]

    def test_d50_spaces(self):
        d50 = [name for name, spec in SPACE_SPECS.items() if spec.white_point is WhitePoint.D50]
        assert d50 == ["prophoto-rgb", "xyz-d50"]

    @pytest.mark.parametrize("name", ["srgb", "srgb-linear", "display-p3", "rec2020", "a98-rgb", "prophoto-rgb"])
    def test_white_maps_to_d65(self, name):
        converter = build_space_converter(name, SPACE_SPECS[name])
        xyza = converter.to_xyza([1.0, 1.0, 1.0])
        np.testing.assert_allclose(xyza.xyz, cs.WHITE_D65, atol=2e-4)


class TestSpaceConverters:

    def test_parse(self):
        converter = build_space_converter("srgb", SPACE_SPECS["srgb"])
        assert converter.parse("color(srgb 1 50% 0 / 0.5)") == pytest.approx([1.0, 0.5, 0.0, 0.5])

    def test_parse_rejects_other_space(self):
        converter = build_space_converter("srgb", SPACE_SPECS["srgb"])
        with pytest.raises(InvalidFormatError):
            converter.parse("color(display-p3 1 0 0)")

    def test_srgb_to_rgb(self):
        assert Color.from_string("color(srgb 1 0 0)").to("rgb") == "rgb(255, 0, 0)"

    def test_serialize(self):
        assert Color.from_string("rgb(255, 0, 0)").to("srgb") == "color(srgb 1 0 0)"

    def test_serialize_alpha(self):
        assert Color.from_string("color(srgb 1 0 0 / 0.25)").to("srgb") == "color(srgb 1 0 0 / 0.25)"

    def test_precision(self):
        c = Color.from_string("color(srgb 0.123 0.5 1)")
        assert c.to("srgb", precision=2) == "color(srgb 0.12 0.5 1)"

    def test_srgb_linear(self):
        c = Color.from_string("rgb(128, 128, 128)").in_model("srgb-linear")
        assert c.get("r") == pytest.approx(0.2158605, abs=1e-6)

    def test_red_in_display_p3(self):
        values = Color.from_string("red").in_model("display-p3").get_array()
        np.testing.assert_allclose(values, [0.9175, 0.2003, 0.1386, 1.0], atol=1e-3)

    def test_display_p3_red_clamps_in_srgb(self):
        assert Color.from_string("color(display-p3 1 0 0)").to("srgb") == "color(srgb 1 0 0)"

    def test_prophoto_white(self):
        values = Color.from_string("white").in_model("prophoto-rgb").get_array()
        np.testing.assert_allclose(values, [1.0, 1.0, 1.0, 1.0], atol=1e-4)

    def test_xyz_d50_white(self):
        values = Color.from_string("white").in_model("xyz-d50").get_array()
        np.testing.assert_allclose(values, [0.9642, 1.0, 0.8252, 1.0], atol=1e-3)

    def test_xyz_alias(self):
        a = Color.from_string("color(xyz 0.2 0.3 0.4)")
        b = Color.from_string("color(xyz-d65 0.2 0.3 0.4)")
        assert a.equals(b)

    def test_xyz_open_range(self):
        c = Color.from_string("color(xyz-d65 0.5 1.2 0.3)")
        assert c.in_model("xyz-d65").get("y") == pytest.approx(1.2)

    def test_from_xyza_does_not_clamp(self):
        converter = build_space_converter("srgb", SPACE_SPECS["srgb"])
        raw = converter.from_xyza(Color.from_string("color(display-p3 1 0 0)").xyza)
        assert raw[0] > 1.0
        assert raw[1] < 0.0
