# Copyright (c) 2026 Csspectrum
# SPDX-License-Identifier: MIT

"""
color-mix() parsing.

    color-mix(in <model> [<method> hue], <color> [<p1>%], <color> [<p2>%])

Weights:
- none given: 50% / 50%
- one given: the other is its complement
- sum above 100%: both scaled down proportionally
- sum below 100%: kept as written; the mixed alpha is multiplied by the sum
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from csspectrum.convert.interpolate import parse_hue_method
from csspectrum.errors import InvalidArgumentError, InvalidFormatError
from csspectrum.schema import HueMethod

if TYPE_CHECKING:
    from csspectrum.registry import Registry


@dataclass(frozen=True, slots=True)
class MixSpec:
    """
    A parsed color-mix().

    Attributes:
        model: Interpolation model (format or space with components)
        hue_method: How hue components travel around the circle
        first, second: Operand color strings
        amount: Interpolation parameter t (0 = first, 1 = second)
        alpha_multiplier: Applied to the mixed alpha (1 unless under-mixed)
    """
    model: str
    hue_method: HueMethod
    first: str
    second: str
    amount: float
    alpha_multiplier: float = 1.0


def resolve_mix_model(match: re.Match, registry: Registry) -> str:
    model = match.group("model").lower()
    if registry.structured_or_none(model) is None:
        raise InvalidFormatError(f"Unknown color-mix interpolation model: {match.group('model')}")
    return model


def _weight(token: Optional[str]) -> Optional[float]:
    if token is None:
        return None
    percent = float(token.rstrip("%"))
    if not 0.0 <= percent <= 100.0:
        raise InvalidFormatError(f"color-mix() percentages must be 0-100%, got {token}")
    return percent / 100.0


def normalize_weights(
    first: Optional[float],
    second: Optional[float],
) -> tuple[float, float, float]:
    """
    Resolve optional operand weights (fractions).

    Returns:
        (first weight, second weight, alpha multiplier)
    """
    if first is None and second is None:
        return 0.5, 0.5, 1.0
    if second is None:
        return first, 1.0 - first, 1.0
    if first is None:
        return 1.0 - second, second, 1.0

    total = first + second
    if total == 0.0:
        raise InvalidFormatError("color-mix() weights cannot both be 0%")
    if total > 1.0:
        return first / total, second / total, 1.0
    return first, second, total


def parse_color_mix(text: str, registry: Registry) -> MixSpec:
    """
    Parse a color-mix() string.

    Raises:
        InvalidFormatError: bad model, hue method or weights
    """
    match = registry.patterns.color_mix.match(text.strip())
    if match is None:
        raise InvalidFormatError(f"Invalid color-mix(): {text}")

    model = resolve_mix_model(match, registry)

    method_token = match.group("hue_method")
    try:
        hue_method = parse_hue_method(method_token) if method_token else HueMethod.SHORTER
    except InvalidArgumentError as err:
        raise InvalidFormatError(str(err)) from err

    first_weight, second_weight, multiplier = normalize_weights(
        _weight(match.group("first_weight")),
        _weight(match.group("second_weight")),
    )

    return MixSpec(
        model=model,
        hue_method=hue_method,
        first=match.group("first"),
        second=match.group("second"),
        amount=second_weight / (first_weight + second_weight),
        alpha_multiplier=multiplier,
    )
