# Copyright (c) 2026 Csspectrum
# SPDX-License-Identifier: MIT

"""
Csspectrum -- CSS color parsing, conversion and manipulation.

Every CSS Color 4/5 notation (hex, named, rgb, hsl, hwb, lab, lch, oklab,
oklch, color() spaces, relative colors, color-mix()) is parsed into one
interchange value and serialized back into any other.

Quick start::

    from csspectrum import Color

    c = Color.from_string("#ff5733")
    c.to("hsl")                              # "hsl(11, 100%, 60%)"
    c.in_model("hsl").set(l=lambda l: l - 20).to("hex")
    Color.contrast_ratio("#fff", "#000")     # 21.0
"""

from __future__ import annotations

import logging

__version__ = "1.0.0"

from csspectrum.color import Color, ComponentSetter, ComponentView
from csspectrum.errors import (
    AlreadyRegisteredError,
    ColorError,
    InvalidArgumentError,
    InvalidFormatError,
    MissingComponentMetadataError,
    NoNamedMatchError,
    UnsupportedFormatError,
)
from csspectrum.registry import (
    Registry,
    get_default_registry,
    register_format,
    register_named_color,
    register_space,
)
from csspectrum.schema import (
    XYZA,
    ComponentDefinition,
    ContrastLevel,
    FormattingOptions,
    HueMethod,
    OpaqueConverter,
    SpaceSpec,
    StructuredConverter,
    WhitePoint,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core API
    "Color",
    "ComponentView",
    "ComponentSetter",
    # Registry
    "Registry",
    "get_default_registry",
    "register_named_color",
    "register_format",
    "register_space",
    # Types (commonly needed)
    "XYZA",
    "ComponentDefinition",
    "FormattingOptions",
    "StructuredConverter",
    "OpaqueConverter",
    "SpaceSpec",
    "WhitePoint",
    "HueMethod",
    "ContrastLevel",
    # Errors
    "ColorError",
    "UnsupportedFormatError",
    "InvalidFormatError",
    "InvalidArgumentError",
    "AlreadyRegisteredError",
    "NoNamedMatchError",
    "MissingComponentMetadataError",
    # Version
    "__version__",
]
