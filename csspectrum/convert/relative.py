# Copyright (c) 2026 Csspectrum
# SPDX-License-Identifier: MIT

"""
Relative color syntax.

    hsl(from red calc(h + 100) s l)
    color(from #ff5733 display-p3 r g b / 0.5)

The base color is read in the target model (clamped, stepped, as getters
see it) and each component token is resolved in order:

1. number, optionally with an angle unit (deg, rad, grad, turn)
2. percentage, mapped onto the component's range
3. calc() expression over numbers, percentages and component names
4. bare component name
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping

from csspectrum.convert.colorspace import angle_to_degrees
from csspectrum.convert.components import read_components
from csspectrum.convert.expression import evaluate
from csspectrum.errors import InvalidFormatError, UnsupportedFormatError
from csspectrum.schema import ComponentDefinition, StructuredConverter

if TYPE_CHECKING:
    from csspectrum.registry import Registry

_NUMBER_RE = re.compile(r"^([+-]?(?:\d+(?:\.\d+)?|\.\d+))(deg|rad|grad|turn)?$", re.IGNORECASE)
_PERCENT_RE = re.compile(r"^([+-]?(?:\d+(?:\.\d+)?|\.\d+))%$")

# Legacy aliases accepted as relative function names
_FUNCTION_ALIASES = {"rgba": "rgb", "hsla": "hsl"}


@dataclass(frozen=True, slots=True)
class RelativeColor:
    """A resolved relative color: target model and its positional values."""
    model: str
    values: tuple[float, ...]


def resolve_relative_model(match: re.Match, registry: Registry) -> str:
    """
    Identify the target model of a matched relative color.

    Raises:
        InvalidFormatError: unknown space or function, or color() without a space
    """
    space = match.group("space")
    if space is not None:
        name = space.lower()
        if name not in registry.spaces:
            raise InvalidFormatError(f"Unknown color space in relative color: {space}")
        return name

    func = match.group("func").lower()
    func = _FUNCTION_ALIASES.get(func, func)
    if func == "color":
        raise InvalidFormatError("color(from ...) requires a color space")
    if not isinstance(registry.formats.get(func), StructuredConverter):
        raise InvalidFormatError(f"Unknown relative color function: {match.group('func')}")
    return func


def split_components(text: str) -> list[str]:
    """Split on whitespace outside parentheses."""
    tokens: list[str] = []
    current = []
    depth = 0
    for char in text:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        if char.isspace() and depth == 0:
            if current:
                tokens.append("".join(current))
                current = []
            continue
        current.append(char)
    if current:
        tokens.append("".join(current))
    return tokens


def resolve_component(
    token: str,
    definition: ComponentDefinition,
    base: Mapping[str, float],
) -> float:
    """Resolve one component token against the base color's components."""
    number = _NUMBER_RE.match(token)
    if number:
        value = float(number.group(1))
        unit = number.group(2)
        return angle_to_degrees(value, unit) if unit else value

    percent = _PERCENT_RE.match(token)
    if percent:
        return definition.from_percentage(float(percent.group(1)))

    def lookup(name: str) -> float:
        try:
            return base[name.lower()]
        except KeyError:
            raise InvalidFormatError(f"Unknown component in relative color: {name}") from None

    if token.lower().startswith("calc("):
        return evaluate(token, lookup)
    return lookup(token)


def parse_relative(text: str, registry: Registry) -> RelativeColor:
    """
    Parse a relative color into its target model and values.

    Args:
        text: Relative color string
        registry: Supplies patterns, converters and the base color parser

    Returns:
        RelativeColor with 3 components plus alpha. An omitted alpha keeps
        the base color's alpha.

    Raises:
        InvalidFormatError: the string is not relative color syntax, names an
            unknown model, has an unparseable base or an unresolvable token
    """
    match = registry.patterns.relative.match(text.strip())
    if match is None:
        raise InvalidFormatError(f"Invalid relative color: {text}")

    model = resolve_relative_model(match, registry)
    converter = registry.structured(model)
    names = converter.names
    if len(names) != 4:
        raise InvalidFormatError(
            f"Relative colors need a three-component model, '{model}' has {len(names) - 1}"
        )

    base_text = match.group("space_base") or match.group("base")
    try:
        base_xyza = registry.parse_simple(base_text)
    except (UnsupportedFormatError, InvalidFormatError) as err:
        raise InvalidFormatError(f"Invalid base color in relative color: {base_text}") from err
    base = dict(zip(names, read_components(converter, converter.from_xyza(base_xyza))))

    tokens = split_components(match.group("components"))
    alpha_token = match.group("alpha")
    if len(tokens) == 4:
        if alpha_token is not None:
            raise InvalidFormatError(f"Too many components in relative color: {text}")
        alpha_token = tokens.pop()

    # Non-finite calc() results are absorbed per channel
    values = [
        converter.components[name].finite(resolve_component(token, converter.components[name], base))
        for token, name in zip(tokens, names)
    ]
    if alpha_token is None:
        values.append(base["alpha"])
    else:
        alpha = converter.components["alpha"]
        values.append(alpha.finite(resolve_component(alpha_token, alpha, base)))

    return RelativeColor(model=model, values=tuple(values))
