# Copyright (c) 2026 Csspectrum
# SPDX-License-Identifier: MIT

"""
Built-in CSS color formats.

Structured formats (rgb, hsl, hwb, lab, lch, oklab, oklch) expose numeric
components. Opaque formats (hex, named) are string-only and borrow the rgb
model for component access.

Converters here declare their components without alpha; the registry
appends the synthetic alpha channel on registration.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

import numpy as np

from csspectrum.convert import colorspace as cs
from csspectrum.convert.components import (
    alpha_suffix,
    format_component,
    format_percent,
    read_components,
)
from csspectrum.convert.named import RGBA, normalize_name
from csspectrum.convert.patterns import (
    ALPHA,
    HEX_PATTERN,
    HUE,
    LAB_COMPONENT,
    LCH_CHROMA,
    LCH_LIGHTNESS,
    PERCENTAGE,
    RGB_COMPONENT,
    functional_pattern,
    named_pattern,
)
from csspectrum.errors import InvalidFormatError, NoNamedMatchError
from csspectrum.schema import (
    XYZA,
    ComponentDefinition,
    FormattingOptions,
    OpaqueConverter,
    StructuredConverter,
    alpha_definition,
)

_ALPHA = alpha_definition(3)


# =============================================================================
# Parsing Helpers
# =============================================================================


def _match(converter_name: str, pattern, text: str):
    match = pattern.match(text.strip())
    if match is None:
        raise InvalidFormatError(f"Invalid {converter_name} color: {text}")
    return match


def parse_number(token: str) -> float:
    """Parse a plain CSS number; "none" reads as 0."""
    token = token.strip()
    if token.lower() == "none":
        return 0.0
    try:
        return float(token)
    except ValueError:
        raise InvalidFormatError(f"Invalid number: {token}") from None


def parse_scaled(token: str, scale: float) -> float:
    """Parse a number or a percentage of `scale`."""
    token = token.strip()
    if token.endswith("%"):
        return parse_number(token[:-1]) / 100.0 * scale
    return parse_number(token)


def parse_hue(token: str) -> float:
    token = token.strip()
    if token.lower().endswith("deg"):
        token = token[:-3]
    return parse_number(token)


def parse_alpha(token: Optional[str]) -> float:
    """Alpha as 0-1; a missing token means fully opaque."""
    if token is None:
        return 1.0
    return parse_scaled(token, 1.0)


def _alpha_of(values: Sequence[float]) -> float:
    return float(values[3]) if len(values) > 3 else 1.0


# =============================================================================
# sRGB Bridge
# =============================================================================


def rgb255_to_xyza(values: Sequence[float]) -> XYZA:
    srgb = np.asarray(values[:3], dtype=np.float64) / 255.0
    return XYZA.from_xyz(cs.srgb_to_xyz(srgb), _alpha_of(values))


def xyza_to_rgb255(xyza: XYZA) -> list[float]:
    """Unclamped 0-255 channels plus alpha."""
    rgb = cs.xyz_to_srgb(xyza.xyz) * 255.0
    return [float(rgb[0]), float(rgb[1]), float(rgb[2]), xyza.alpha]


def _unit_srgb(xyza: XYZA) -> tuple[float, float, float]:
    """sRGB channels clipped to [0, 1], as the cylindrical sRGB models expect."""
    srgb = np.clip(cs.xyz_to_srgb(xyza.xyz), 0.0, 1.0)
    return float(srgb[0]), float(srgb[1]), float(srgb[2])


def _unit_srgb_to_xyza(srgb: Sequence[float], alpha: float) -> XYZA:
    return XYZA.from_xyz(cs.srgb_to_xyz(np.asarray(srgb, dtype=np.float64)), alpha)


# =============================================================================
# rgb()
# =============================================================================

RGB_COMPONENTS = {
    "r": ComponentDefinition(index=0, min=0, max=255, step=1),
    "g": ComponentDefinition(index=1, min=0, max=255, step=1),
    "b": ComponentDefinition(index=2, min=0, max=255, step=1),
}

_RGB_PATTERN = functional_pattern("rgba?", RGB_COMPONENT, RGB_COMPONENT, RGB_COMPONENT)


def _parse_rgb(text: str) -> list[float]:
    match = _match("rgb", _RGB_PATTERN, text)
    r, g, b, a = match.groups()
    return [
        parse_scaled(r, 255.0),
        parse_scaled(g, 255.0),
        parse_scaled(b, 255.0),
        parse_alpha(a),
    ]


def _serialize_rgb(values: Sequence[float], options: FormattingOptions) -> str:
    r, g, b = (
        format_component(value, definition, options)
        for value, definition in zip(values, RGB_COMPONENTS.values())
    )
    alpha = _alpha_of(values)
    if options.modern:
        return f"rgb({r} {g} {b}{alpha_suffix(alpha, _ALPHA, options)})"
    if alpha < 1.0:
        return f"rgba({r}, {g}, {b}{alpha_suffix(alpha, _ALPHA, options, legacy=True)})"
    return f"rgb({r}, {g}, {b})"


def build_rgb() -> StructuredConverter:
    return StructuredConverter(
        pattern=_RGB_PATTERN,
        components=RGB_COMPONENTS,
        parse=_parse_rgb,
        serialize=_serialize_rgb,
        to_xyza=rgb255_to_xyza,
        from_xyza=xyza_to_rgb255,
    )


_RGB_READER = build_rgb().with_alpha()


def read_rgb255(xyza: XYZA) -> list[float]:
    """Clamped, integer-stepped rgb channels plus stepped alpha."""
    return read_components(_RGB_READER, xyza_to_rgb255(xyza))


# =============================================================================
# Hex
# =============================================================================


def _hex_to_xyza(text: str) -> XYZA:
    text = text.strip()
    if not HEX_PATTERN.match(text):
        raise InvalidFormatError(f"Invalid hex color: {text}")
    digits = text[1:]
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)
    channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
    alpha = channels[3] / 255.0 if len(channels) == 4 else 1.0
    return rgb255_to_xyza([*channels[:3], alpha])


def _xyza_to_hex(xyza: XYZA) -> str:
    r, g, b, alpha = read_rgb255(xyza)
    text = f"#{int(r):02x}{int(g):02x}{int(b):02x}"
    if alpha < 1.0:
        text += f"{int(round(alpha * 255)):02x}"
    return text


def build_hex() -> OpaqueConverter:
    return OpaqueConverter(
        pattern=HEX_PATTERN,
        model="rgb",
        to_xyza=_hex_to_xyza,
        from_xyza=_xyza_to_hex,
    )


# =============================================================================
# Named Colors
# =============================================================================


def match_named(table: Mapping[str, RGBA], xyza: XYZA) -> Optional[str]:
    """
    First table entry equal to the color's rgb channels and alpha.

    Channels are compared after the rgb round trip (clamped, integer) and
    alpha after rounding to its step. Entries without alpha are opaque.
    """
    r, g, b, alpha = read_rgb255(xyza)
    for name, rgba in table.items():
        entry_alpha = rgba[3] if len(rgba) > 3 else 1.0
        if (r, g, b) == tuple(float(c) for c in rgba[:3]) and _ALPHA.read(entry_alpha) == alpha:
            return name
    return None


def build_named(table: Mapping[str, RGBA]) -> OpaqueConverter:
    """
    Named-color converter over a live table.

    The pattern is a snapshot of the table's keys, so the registry rebuilds
    this converter after every registration.
    """

    def to_xyza(text: str) -> XYZA:
        try:
            rgba = table[normalize_name(text)]
        except KeyError:
            raise InvalidFormatError(f"Unknown color name: {text}") from None
        return rgb255_to_xyza([*rgba[:3], rgba[3] if len(rgba) > 3 else 1.0])

    def from_xyza(xyza: XYZA) -> str:
        name = match_named(table, xyza)
        if name is None:
            r, g, b, alpha = read_rgb255(xyza)
            raise NoNamedMatchError(
                f"No named color matches rgba({r:g}, {g:g}, {b:g}, {alpha:g})"
            )
        return name

    return OpaqueConverter(
        pattern=named_pattern(table.keys()),
        model="rgb",
        to_xyza=to_xyza,
        from_xyza=from_xyza,
    )


# =============================================================================
# hsl()
# =============================================================================

HSL_COMPONENTS = {
    "h": ComponentDefinition(index=0, min=0, max=360, loop=True, step=1),
    "s": ComponentDefinition(index=1, min=0, max=100, step=0.1),
    "l": ComponentDefinition(index=2, min=0, max=100, step=0.1),
}

_HSL_PATTERN = functional_pattern(
    "hsla?", f"{HUE}|none", f"{PERCENTAGE}|none", f"{PERCENTAGE}|none"
)


def _parse_hsl(text: str) -> list[float]:
    match = _match("hsl", _HSL_PATTERN, text)
    h, s, l, a = match.groups()
    return [parse_hue(h), parse_scaled(s, 100.0), parse_scaled(l, 100.0), parse_alpha(a)]


def _hsl_to_xyza(values: Sequence[float]) -> XYZA:
    h, s, l = values[:3]
    return _unit_srgb_to_xyza(cs.hsl_to_srgb(h, s / 100.0, l / 100.0), _alpha_of(values))


def _xyza_to_hsl(xyza: XYZA) -> list[float]:
    h, s, l = cs.srgb_to_hsl(*_unit_srgb(xyza))
    return [h, s * 100.0, l * 100.0, xyza.alpha]


def _serialize_hsl(values: Sequence[float], options: FormattingOptions) -> str:
    h = format_component(values[0], HSL_COMPONENTS["h"], options)
    s = format_component(values[1], HSL_COMPONENTS["s"], options)
    l = format_component(values[2], HSL_COMPONENTS["l"], options)
    alpha = _alpha_of(values)
    if options.modern:
        return f"hsl({h} {s}% {l}%{alpha_suffix(alpha, _ALPHA, options)})"
    if alpha < 1.0:
        return f"hsla({h}, {s}%, {l}%{alpha_suffix(alpha, _ALPHA, options, legacy=True)})"
    return f"hsl({h}, {s}%, {l}%)"


def build_hsl() -> StructuredConverter:
    return StructuredConverter(
        pattern=_HSL_PATTERN,
        components=HSL_COMPONENTS,
        parse=_parse_hsl,
        serialize=_serialize_hsl,
        to_xyza=_hsl_to_xyza,
        from_xyza=_xyza_to_hsl,
    )


# =============================================================================
# hwb()
# =============================================================================

HWB_COMPONENTS = {
    "h": ComponentDefinition(index=0, min=0, max=360, loop=True, step=0.001),
    "w": ComponentDefinition(index=1, min=0, max=100, step=0.001),
    "b": ComponentDefinition(index=2, min=0, max=100, step=0.001),
}

_HWB_PATTERN = functional_pattern(
    "hwb", f"{HUE}|none", f"{PERCENTAGE}|none", f"{PERCENTAGE}|none"
)


def _parse_hwb(text: str) -> list[float]:
    match = _match("hwb", _HWB_PATTERN, text)
    h, w, b, a = match.groups()
    return [parse_hue(h), parse_scaled(w, 100.0), parse_scaled(b, 100.0), parse_alpha(a)]


def _hwb_to_xyza(values: Sequence[float]) -> XYZA:
    h, w, b = values[:3]
    return _unit_srgb_to_xyza(cs.hwb_to_srgb(h, w / 100.0, b / 100.0), _alpha_of(values))


def _xyza_to_hwb(xyza: XYZA) -> list[float]:
    h, w, b = cs.srgb_to_hwb(*_unit_srgb(xyza))
    return [h, w * 100.0, b * 100.0, xyza.alpha]


def _serialize_hwb(values: Sequence[float], options: FormattingOptions) -> str:
    h = format_component(values[0], HWB_COMPONENTS["h"], options)
    w = format_component(values[1], HWB_COMPONENTS["w"], options)
    b = format_component(values[2], HWB_COMPONENTS["b"], options)
    return f"hwb({h} {w}% {b}%{alpha_suffix(_alpha_of(values), _ALPHA, options)})"


def build_hwb() -> StructuredConverter:
    return StructuredConverter(
        pattern=_HWB_PATTERN,
        components=HWB_COMPONENTS,
        parse=_parse_hwb,
        serialize=_serialize_hwb,
        to_xyza=_hwb_to_xyza,
        from_xyza=_xyza_to_hwb,
    )


# =============================================================================
# lab() / lch()
# =============================================================================

LAB_COMPONENTS = {
    "l": ComponentDefinition(index=0, min=0, max=100, step=0.001),
    "a": ComponentDefinition(index=1, min=-np.inf, max=np.inf, step=0.001, percent_scale=125.0),
    "b": ComponentDefinition(index=2, min=-np.inf, max=np.inf, step=0.001, percent_scale=125.0),
}

LCH_COMPONENTS = {
    "l": ComponentDefinition(index=0, min=0, max=100, step=0.001),
    "c": ComponentDefinition(index=1, min=0, max=150, step=0.001),
    "h": ComponentDefinition(index=2, min=0, max=360, loop=True, step=0.001),
}

_LAB_PATTERN = functional_pattern(
    "lab", f"{PERCENTAGE}|none", f"{LAB_COMPONENT}|none", f"{LAB_COMPONENT}|none"
)
_LCH_PATTERN = functional_pattern(
    "lch", f"{LCH_LIGHTNESS}|none", f"{LCH_CHROMA}|none", f"{HUE}|none"
)


def _parse_lab(text: str) -> list[float]:
    match = _match("lab", _LAB_PATTERN, text)
    l, a, b, alpha = match.groups()
    return [parse_scaled(l, 100.0), parse_number(a), parse_number(b), parse_alpha(alpha)]


def _parse_lch(text: str) -> list[float]:
    match = _match("lch", _LCH_PATTERN, text)
    l, c, h, alpha = match.groups()
    return [parse_scaled(l, 100.0), parse_number(c), parse_hue(h), parse_alpha(alpha)]


def _lab_to_xyza(values: Sequence[float]) -> XYZA:
    return XYZA.from_xyz(cs.lab_to_xyz(values[:3]), _alpha_of(values))


def _xyza_to_lab(xyza: XYZA) -> list[float]:
    lab = cs.xyz_to_lab(xyza.xyz)
    return [float(lab[0]), float(lab[1]), float(lab[2]), xyza.alpha]


def _lch_to_xyza(values: Sequence[float]) -> XYZA:
    return XYZA.from_xyz(cs.lab_to_xyz(cs.from_polar(values[:3])), _alpha_of(values))


def _xyza_to_lch(xyza: XYZA) -> list[float]:
    lch = cs.to_polar(cs.xyz_to_lab(xyza.xyz))
    return [float(lch[0]), float(lch[1]), float(lch[2]), xyza.alpha]


def _lab_like_serializer(function: str, components: Mapping[str, ComponentDefinition]):
    first, second, third = components.values()

    def serialize(values: Sequence[float], options: FormattingOptions) -> str:
        l = format_component(values[0], first, options)
        x = format_component(values[1], second, options)
        y = format_component(values[2], third, options)
        return f"{function}({l}% {x} {y}{alpha_suffix(_alpha_of(values), _ALPHA, options)})"

    return serialize


def build_lab() -> StructuredConverter:
    return StructuredConverter(
        pattern=_LAB_PATTERN,
        components=LAB_COMPONENTS,
        parse=_parse_lab,
        serialize=_lab_like_serializer("lab", LAB_COMPONENTS),
        to_xyza=_lab_to_xyza,
        from_xyza=_xyza_to_lab,
    )


def build_lch() -> StructuredConverter:
    return StructuredConverter(
        pattern=_LCH_PATTERN,
        components=LCH_COMPONENTS,
        parse=_parse_lch,
        serialize=_lab_like_serializer("lch", LCH_COMPONENTS),
        to_xyza=_lch_to_xyza,
        from_xyza=_xyza_to_lch,
    )


# =============================================================================
# oklab() / oklch()
# =============================================================================

OKLAB_COMPONENTS = {
    "l": ComponentDefinition(index=0, min=0, max=1, step=0.00001),
    "a": ComponentDefinition(index=1, min=-np.inf, max=np.inf, step=0.00001, percent_scale=0.4),
    "b": ComponentDefinition(index=2, min=-np.inf, max=np.inf, step=0.00001, percent_scale=0.4),
}

OKLCH_COMPONENTS = {
    "l": ComponentDefinition(index=0, min=0, max=1, step=0.00001),
    "c": ComponentDefinition(index=1, min=0, max=np.inf, step=0.00001, percent_scale=0.4),
    "h": ComponentDefinition(index=2, min=0, max=360, loop=True, step=0.00001),
}

_OKLAB_PATTERN = functional_pattern(
    "oklab", f"{PERCENTAGE}|none", f"{LAB_COMPONENT}|none", f"{LAB_COMPONENT}|none"
)
_OKLCH_PATTERN = functional_pattern(
    "oklch", f"{LCH_LIGHTNESS}|none", f"{LCH_CHROMA}|none", f"{HUE}|none"
)


def _parse_oklab(text: str) -> list[float]:
    match = _match("oklab", _OKLAB_PATTERN, text)
    l, a, b, alpha = match.groups()
    return [parse_scaled(l, 1.0), parse_number(a), parse_number(b), parse_alpha(alpha)]


def _parse_oklch(text: str) -> list[float]:
    match = _match("oklch", _OKLCH_PATTERN, text)
    l, c, h, alpha = match.groups()
    return [parse_scaled(l, 1.0), parse_number(c), parse_hue(h), parse_alpha(alpha)]


def _oklab_to_xyza(values: Sequence[float]) -> XYZA:
    return XYZA.from_xyz(cs.oklab_to_xyz(values[:3]), _alpha_of(values))


def _xyza_to_oklab(xyza: XYZA) -> list[float]:
    lab = cs.xyz_to_oklab(xyza.xyz)
    return [float(lab[0]), float(lab[1]), float(lab[2]), xyza.alpha]


def _oklch_to_xyza(values: Sequence[float]) -> XYZA:
    return XYZA.from_xyz(cs.oklab_to_xyz(cs.from_polar(values[:3])), _alpha_of(values))


def _xyza_to_oklch(xyza: XYZA) -> list[float]:
    lch = cs.to_polar(cs.xyz_to_oklab(xyza.xyz))
    return [float(lch[0]), float(lch[1]), float(lch[2]), xyza.alpha]


def _ok_serializer(function: str, components: Mapping[str, ComponentDefinition]):
    first, second, third = components.values()

    def serialize(values: Sequence[float], options: FormattingOptions) -> str:
        # Lightness is stored 0-1 and printed as a percentage.
        l = format_percent(values[0], first, options)
        x = format_component(values[1], second, options)
        y = format_component(values[2], third, options)
        return f"{function}({l} {x} {y}{alpha_suffix(_alpha_of(values), _ALPHA, options)})"

    return serialize


def build_oklab() -> StructuredConverter:
    return StructuredConverter(
        pattern=_OKLAB_PATTERN,
        components=OKLAB_COMPONENTS,
        parse=_parse_oklab,
        serialize=_ok_serializer("oklab", OKLAB_COMPONENTS),
        to_xyza=_oklab_to_xyza,
        from_xyza=_xyza_to_oklab,
    )


def build_oklch() -> StructuredConverter:
    return StructuredConverter(
        pattern=_OKLCH_PATTERN,
        components=OKLCH_COMPONENTS,
        parse=_parse_oklch,
        serialize=_ok_serializer("oklch", OKLCH_COMPONENTS),
        to_xyza=_oklch_to_xyza,
        from_xyza=_xyza_to_oklch,
    )
