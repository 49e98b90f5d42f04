# Copyright (c) 2026 Csspectrum
# SPDX-License-Identifier: MIT

"""
Component interpolation.

Linear components blend as a + (b - a) * t. Hue components follow a CSS
hue-interpolation method and are returned normalized to [0, 360).
"""

from __future__ import annotations

from typing import Sequence, Union

from csspectrum.errors import InvalidArgumentError
from csspectrum.schema import ComponentDefinition, HueMethod


def parse_hue_method(method: Union[str, HueMethod]) -> HueMethod:
    """Coerce a method name to HueMethod, rejecting unknown names."""
    try:
        return HueMethod(method.lower() if isinstance(method, str) else method)
    except ValueError:
        valid = ", ".join(m.value for m in HueMethod)
        raise InvalidArgumentError(
            f"Invalid hue interpolation method: {method!r}. Expected one of: {valid}"
        ) from None


def hue_delta(start: float, end: float, method: HueMethod) -> float:
    """
    Signed angular distance to travel from start to end.

    - shorter: delta wrapped into (-180, 180]
    - longer: the other way around the circle (a zero delta stays zero)
    - increasing: never negative
    - decreasing: never positive
    """
    if method is HueMethod.SHORTER or method is HueMethod.LONGER:
        delta = (end - start) % 360.0
        if delta > 180.0:
            delta -= 360.0
        if method is HueMethod.LONGER and delta != 0.0:
            delta = delta - 360.0 if delta > 0.0 else delta + 360.0
        return delta
    if method is HueMethod.INCREASING:
        if end < start:
            end += 360.0
        return end - start
    if end > start:
        end -= 360.0
    return end - start


def interpolate_hue(start: float, end: float, t: float, method: HueMethod = HueMethod.SHORTER) -> float:
    """Interpolate two hues in degrees; the result is in [0, 360)."""
    return (start + t * hue_delta(start, end, method)) % 360.0


def interpolate_linear(start: float, end: float, t: float) -> float:
    return start + (end - start) * t


def interpolate_components(
    definitions: Sequence[ComponentDefinition],
    start: Sequence[float],
    end: Sequence[float],
    t: float,
    method: HueMethod = HueMethod.SHORTER,
) -> list[float]:
    """
    Blend two positional arrays component by component.

    Components flagged loop (hues) use the hue method; the rest blend
    linearly.
    """
    return [
        interpolate_hue(a, b, t, method) if definition.loop else interpolate_linear(a, b, t)
        for definition, a, b in zip(definitions, start, end)
    ]
