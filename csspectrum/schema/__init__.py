# Copyright (c) 2026 Csspectrum
# SPDX-License-Identifier: MIT

"""
Schema definitions for colors and converters.

All types in this module are immutable (frozen dataclasses).
Mutable state lives only in Color handles and in the Registry.
"""

from csspectrum.schema.color_model import (
    DEFAULT_OPTIONS,
    XYZA,
    ComponentDefinition,
    ContrastLevel,
    Converter,
    FormattingOptions,
    HueMethod,
    OpaqueConverter,
    SpaceSpec,
    StructuredConverter,
    WhitePoint,
    alpha_definition,
)

__all__ = [
    # Interchange
    "XYZA",
    # Component metadata
    "ComponentDefinition",
    "alpha_definition",
    # Converters (tagged union)
    "Converter",
    "StructuredConverter",
    "OpaqueConverter",
    "SpaceSpec",
    "WhitePoint",
    # Configuration
    "FormattingOptions",
    "DEFAULT_OPTIONS",
    "HueMethod",
    "ContrastLevel",
]
