# Copyright (c) 2026 Csspectrum
# SPDX-License-Identifier: MIT

"""Tests for color-mix() and component mixing."""

import pytest

from csspectrum import Color, HueMethod
from csspectrum.convert.mix import normalize_weights, parse_color_mix
from csspectrum.errors import InvalidArgumentError, InvalidFormatError


class TestNormalizeWeights:

    def test_defaults(self):
        assert normalize_weights(None, None) == (0.5, 0.5, 1.0)

    def test_complement(self):
        assert normalize_weights(0.3, None) == pytest.approx((0.3, 0.7, 1.0))
        assert normalize_weights(None, 0.25) == pytest.approx((0.75, 0.25, 1.0))

    def test_scaled_down(self):
        assert normalize_weights(0.75, 0.75) == pytest.approx((0.5, 0.5, 1.0))

    def test_under_mixed(self):
        assert normalize_weights(0.2, 0.2) == pytest.approx((0.2, 0.2, 0.4))

    def test_both_zero(self):
        with pytest.raises(InvalidFormatError, match="both be 0%"):
            normalize_weights(0.0, 0.0)


class TestParseColorMix:

    def test_spec(self, registry):
        spec = parse_color_mix("color-mix(in hsl longer hue, red 30%, blue)", registry)
        assert spec.model == "hsl"
        assert spec.hue_method is HueMethod.LONGER
        assert (spec.first, spec.second) == ("red", "blue")
        assert spec.amount == pytest.approx(0.7)
        assert spec.alpha_multiplier == 1.0

    def test_default_method(self, registry):
        assert parse_color_mix("color-mix(in oklch, red, blue)", registry).hue_method is HueMethod.SHORTER

    def test_bad_method(self, registry):
        with pytest.raises(InvalidFormatError, match="hue interpolation method"):
            parse_color_mix("color-mix(in hsl sideways hue, red, blue)", registry)

    def test_weight_out_of_range(self, registry):
        with pytest.raises(InvalidFormatError, match="0-100%"):
            parse_color_mix("color-mix(in srgb, red 150%, blue)", registry)


class TestColorMix:

    def test_srgb(self):
        assert Color.from_string("color-mix(in srgb, red 50%, blue)").to("srgb") == "color(srgb 0.5 0 0.5)"

    def test_weighted(self):
        assert Color.from_string("color-mix(in srgb, red 30%, blue)").to("srgb") == "color(srgb 0.3 0 0.7)"

    def test_under_mixed_alpha(self):
        c = Color.from_string("color-mix(in srgb, red 20%, blue 20%)")
        assert c.to("srgb") == "color(srgb 0.5 0 0.5 / 0.4)"

    def test_shorter_hue(self):
        assert Color.from_string("color-mix(in hsl, red, blue)").to("hsl") == "hsl(300, 100%, 50%)"

    def test_longer_hue(self):
        c = Color.from_string("color-mix(in hsl longer hue, red, blue)")
        assert c.to("hsl") == "hsl(120, 100%, 50%)"

    def test_nested_operands(self):
        c = Color.from_string("color-mix(in srgb, rgb(255, 0, 0), color(srgb 0 0 1))")
        assert c.to("srgb") == "color(srgb 0.5 0 0.5)"

    def test_type_of(self):
        assert Color.type_of("color-mix(in oklch, red, blue)") == "oklch"
        assert Color.is_color_mix("color-mix(in oklch, red, blue)")

    def test_unknown_model(self):
        with pytest.raises(InvalidFormatError, match="interpolation model"):
            Color.from_string("color-mix(in foo, red, blue)")

    def test_opaque_model(self):
        with pytest.raises(InvalidFormatError):
            Color.from_string("color-mix(in hex, red, blue)")

    def test_both_zero(self):
        with pytest.raises(InvalidFormatError):
            Color.from_string("color-mix(in srgb, red 0%, blue 0%)")


class TestMixWith:

    def test_hsl(self):
        c = Color.from_string("hsl(0, 100%, 50%)")
        assert c.in_model("hsl").mix_with("hsl(120, 50%, 50%)").to("hsl") == "hsl(60, 75%, 50%)"

    def test_rgb(self):
        c = Color.from_string("rgb(0, 0, 0)")
        assert c.in_model("rgb").mix_with("rgb(200, 100, 50)").to("rgb") == "rgb(100, 50, 25)"

    def test_amount(self):
        c = Color.from_string("rgb(0, 0, 0)")
        assert c.in_model("rgb").mix_with(Color.from_string("rgb(200, 100, 40)"), 0.25).to("rgb") == "rgb(50, 25, 10)"

    def test_endpoints(self):
        c = Color.from_string("red")
        c.in_model("oklch").mix_with("blue", 1.0)
        assert c.to("hex") == "#0000ff"

    def test_hue_method(self):
        c = Color.from_string("hsl(0, 100%, 50%)")
        assert c.in_model("hsl").mix_with("hsl(240, 100%, 50%)", hue_method="longer").to("hsl") == "hsl(120, 100%, 50%)"

    def test_amount_out_of_range(self):
        with pytest.raises(InvalidArgumentError, match=r"\[0, 1\]"):
            Color.from_string("red").in_model("rgb").mix_with("blue", 1.5)

    def test_bad_method(self):
        with pytest.raises(InvalidArgumentError):
            Color.from_string("red").in_model("hsl").mix_with("blue", hue_method="sideways")

    def test_opaque_model(self):
        with pytest.raises(InvalidArgumentError, match="has no components"):
            Color.from_string("red").in_model("hex")
