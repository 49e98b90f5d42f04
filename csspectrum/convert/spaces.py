# Copyright (c) 2026 Csspectrum
# SPDX-License-Identifier: MIT

"""
Predefined device spaces for CSS color().

A SpaceSpec only declares transfer functions and matrices; build_space_converter
turns it into a structured converter:

    encoded → to_linear → to_xyz_matrix → [Bradford D50→D65] → XYZ (D65)

Matrices follow CSS Color 4. Inverse matrices are derived by NumPy.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from csspectrum.convert import colorspace as cs
from csspectrum.convert.components import alpha_suffix, format_component
from csspectrum.convert.formats import parse_alpha, parse_scaled
from csspectrum.convert.patterns import space_pattern
from csspectrum.errors import InvalidFormatError
from csspectrum.schema import (
    XYZA,
    ComponentDefinition,
    FormattingOptions,
    SpaceSpec,
    StructuredConverter,
    WhitePoint,
    alpha_definition,
)

SPACE_STEP = 1e-7


# =============================================================================
# Transfer Functions
# =============================================================================


def _signed_power(value: float, exponent: float) -> float:
    return math.copysign(abs(value) ** exponent, value)


def _identity(value: float) -> float:
    return value


def srgb_decode(value: float) -> float:
    return float(cs.srgb_to_linear(value))


def srgb_encode(value: float) -> float:
    return float(cs.linear_to_srgb(value))


_REC2020_ALPHA = 1.09929682680944
_REC2020_BETA = 0.018053968510807


def rec2020_decode(value: float) -> float:
    magnitude = abs(value)
    if magnitude < _REC2020_BETA * 4.5:
        return value / 4.5
    return math.copysign(((magnitude + _REC2020_ALPHA - 1) / _REC2020_ALPHA) ** (1 / 0.45), value)


def rec2020_encode(value: float) -> float:
    magnitude = abs(value)
    if magnitude < _REC2020_BETA:
        return value * 4.5
    return math.copysign(_REC2020_ALPHA * magnitude ** 0.45 - (_REC2020_ALPHA - 1), value)


def a98_decode(value: float) -> float:
    return _signed_power(value, 563 / 256)


def a98_encode(value: float) -> float:
    return _signed_power(value, 256 / 563)


def prophoto_decode(value: float) -> float:
    if abs(value) <= 16 / 512:
        return value / 16
    return _signed_power(value, 1.8)


def prophoto_encode(value: float) -> float:
    if abs(value) >= 1 / 512:
        return _signed_power(value, 1 / 1.8)
    return value * 16


# =============================================================================
# Matrices (linear channels → XYZ relative to the space's white)
# =============================================================================

DISPLAY_P3_TO_XYZ = np.array([
    [608311 / 1250200, 189793 / 714400, 198249 / 1000160],
    [35783 / 156275, 247089 / 357200, 198249 / 2500400],
    [0, 32229 / 714400, 5220557 / 5000800],
], dtype=np.float64)

REC2020_TO_XYZ = np.array([
    [63426534 / 99577255, 20160776 / 139408157, 47086771 / 278816314],
    [26158966 / 99577255, 472592308 / 697040785, 8267143 / 139408157],
    [0, 19567812 / 697040785, 295819943 / 278816314],
], dtype=np.float64)

A98_TO_XYZ = np.array([
    [573536 / 994567, 263643 / 1420810, 187206 / 994567],
    [591459 / 1989134, 6239551 / 9945670, 374412 / 4972835],
    [53769 / 1989134, 351524 / 4972835, 4929758 / 4972835],
], dtype=np.float64)

# D50-relative
PROPHOTO_TO_XYZ = np.array([
    [0.7977604896723027, 0.13518583717574031, 0.0313493495815248],
    [0.2880711282292934, 0.7118432178101014, 0.00008565396060525902],
    [0.0, 0.0, 0.8251046025104601],
], dtype=np.float64)

IDENTITY = np.eye(3, dtype=np.float64)

_RGB = ("r", "g", "b")
_XYZ = ("x", "y", "z")
_OPEN_RANGE = (0.0, math.inf)

SPACE_SPECS: dict[str, SpaceSpec] = {
    "srgb": SpaceSpec(_RGB, srgb_decode, srgb_encode, cs.SRGB_TO_XYZ),
    "srgb-linear": SpaceSpec(_RGB, _identity, _identity, cs.SRGB_TO_XYZ),
    "display-p3": SpaceSpec(_RGB, srgb_decode, srgb_encode, DISPLAY_P3_TO_XYZ),
    "rec2020": SpaceSpec(_RGB, rec2020_decode, rec2020_encode, REC2020_TO_XYZ),
    "a98-rgb": SpaceSpec(_RGB, a98_decode, a98_encode, A98_TO_XYZ),
    "prophoto-rgb": SpaceSpec(
        _RGB, prophoto_decode, prophoto_encode, PROPHOTO_TO_XYZ, white_point=WhitePoint.D50
    ),
    "xyz-d65": SpaceSpec(_XYZ, _identity, _identity, IDENTITY, component_range=_OPEN_RANGE),
    "xyz-d50": SpaceSpec(
        _XYZ, _identity, _identity, IDENTITY,
        white_point=WhitePoint.D50, component_range=_OPEN_RANGE,
    ),
    "xyz": SpaceSpec(_XYZ, _identity, _identity, IDENTITY, component_range=_OPEN_RANGE),
}


# =============================================================================
# Factory
# =============================================================================


def build_space_converter(name: str, spec: SpaceSpec) -> StructuredConverter:
    """
    Build the converter for color(<name> ...) from a declarative spec.

    D50 spaces get the Bradford adaptation folded into their matrices so the
    interchange color stays D65-relative. Components read as [min, max] from
    spec.component_range with step 1e-7; from_xyza does not clamp.

    Args:
        name: Space identifier as written inside color()
        spec: Transfer functions, matrices and white point

    Returns:
        Converter without the alpha component (the registry appends it)
    """
    low, high = spec.component_range
    components = {
        component: ComponentDefinition(
            index=i, min=low, max=high, step=SPACE_STEP, percent_scale=1.0
        )
        for i, component in enumerate(spec.components)
    }
    definitions = list(components.values())
    alpha = alpha_definition(3)
    pattern = space_pattern(name)

    to_xyz = spec.to_xyz_matrix
    from_xyz = spec.from_xyz_matrix
    if spec.white_point is WhitePoint.D50:
        to_xyz = cs.D50_TO_D65 @ to_xyz
        from_xyz = from_xyz @ cs.D65_TO_D50

    def parse(text: str) -> list[float]:
        match = pattern.match(text.strip())
        if match is None:
            raise InvalidFormatError(f"Invalid color({name}) value: {text}")
        first, second, third, alpha_token = match.groups()
        return [
            parse_scaled(first, 1.0),
            parse_scaled(second, 1.0),
            parse_scaled(third, 1.0),
            parse_alpha(alpha_token),
        ]

    def to_xyza(values: Sequence[float]) -> XYZA:
        linear = np.array([spec.to_linear(float(v)) for v in values[:3]], dtype=np.float64)
        alpha_value = float(values[3]) if len(values) > 3 else 1.0
        return XYZA.from_xyz(to_xyz @ linear, alpha_value)

    def from_xyza(xyza: XYZA) -> list[float]:
        linear = from_xyz @ xyza.xyz
        return [*(float(spec.from_linear(float(c))) for c in linear), xyza.alpha]

    def serialize(values: Sequence[float], options: FormattingOptions) -> str:
        channels = " ".join(
            format_component(value, definition, options)
            for value, definition in zip(values, definitions)
        )
        alpha_value = float(values[3]) if len(values) > 3 else 1.0
        return f"color({name} {channels}{alpha_suffix(alpha_value, alpha, options)})"

    return StructuredConverter(
        pattern=pattern,
        components=components,
        parse=parse,
        serialize=serialize,
        to_xyza=to_xyza,
        from_xyza=from_xyza,
    )
