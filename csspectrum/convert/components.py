# Copyright (c) 2026 Csspectrum
# SPDX-License-Identifier: MIT

"""
Positional component arrays: reading, normalizing and number formatting.

Two views exist on the same unclamped numeric array a converter produces:
- read_components: what getters return (clamped, stepped)
- normalize_components: what serializers print (hues wrapped, stepped)
"""

from __future__ import annotations

from typing import Sequence

from csspectrum.errors import MissingComponentMetadataError
from csspectrum.schema import ComponentDefinition, FormattingOptions, StructuredConverter


def _checked_definitions(
    converter: StructuredConverter,
    values: Sequence[float],
) -> list[ComponentDefinition]:
    definitions = converter.definitions
    if len(values) > len(definitions):
        raise MissingComponentMetadataError(
            f"No component definition for index {len(definitions)}; "
            f"converter declares {len(definitions)} components but produced {len(values)}"
        )
    return definitions


def read_components(converter: StructuredConverter, values: Sequence[float]) -> list[float]:
    """Clamp each value into its range and round it to its step."""
    definitions = _checked_definitions(converter, values)
    return [definition.read(float(value)) for definition, value in zip(definitions, values)]


def normalize_components(converter: StructuredConverter, values: Sequence[float]) -> list[float]:
    """Wrap hues, clamp the rest, round to step."""
    definitions = _checked_definitions(converter, values)
    return [definition.normalize(float(value)) for definition, value in zip(definitions, values)]


def format_number(value: float, decimals: int) -> str:
    """
    Format a number with at most `decimals` places and no trailing zeros.

    Examples: (80.0, 1) -> "80", (0.5, 3) -> "0.5", (-0.0004, 3) -> "0"
    """
    text = f"{value:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


def format_component(
    value: float,
    definition: ComponentDefinition,
    options: FormattingOptions,
) -> str:
    return format_number(value, options.decimals_for(definition))


def format_percent(
    fraction: float,
    definition: ComponentDefinition,
    options: FormattingOptions,
) -> str:
    """Format a 0-1 component as a percentage (two fewer decimals needed)."""
    if options.precision is None:
        decimals = max(0, definition.decimals - 2)
    else:
        decimals = options.precision
    return format_number(fraction * 100.0, decimals) + "%"


def alpha_suffix(
    alpha: float,
    definition: ComponentDefinition,
    options: FormattingOptions,
    *,
    legacy: bool = False,
) -> str:
    """
    Serialize the alpha tail of a functional color.

    Opaque colors get no alpha at all. Legacy syntax uses ", a"; everything
    else uses " / a".
    """
    if alpha >= 1.0:
        return ""
    text = format_component(alpha, definition, options)
    return f", {text}" if legacy else f" / {text}"
