# Copyright (c) 2026 Csspectrum
# SPDX-License-Identifier: MIT

"""
Conversion machinery.

Pipeline: string → grammar match → converter.parse → to_xyza → XYZA (D65)
          XYZA → converter.from_xyza → normalize → converter.serialize → string

Modules:
- colorspace: numeric transforms between sRGB, XYZ, Lab, OKLab, HSL, HWB
- formats / spaces: built-in converters and the device-space factory
- patterns: grammar fragments and composite grammars
- relative / mix / expression: relative colors, color-mix(), calc()
- interpolate / filters: blending and CSS filter math
"""

from csspectrum.convert.expression import evaluate
from csspectrum.convert.formats import (
    build_hex,
    build_hsl,
    build_hwb,
    build_lab,
    build_lch,
    build_named,
    build_oklab,
    build_oklch,
    build_rgb,
)
from csspectrum.convert.named import NAMED_COLORS, normalize_name
from csspectrum.convert.patterns import PatternLibrary
from csspectrum.convert.spaces import SPACE_SPECS, build_space_converter

__all__ = [
    # Format builders
    "build_rgb",
    "build_hex",
    "build_named",
    "build_hsl",
    "build_hwb",
    "build_lab",
    "build_lch",
    "build_oklab",
    "build_oklch",
    # Device spaces
    "SPACE_SPECS",
    "build_space_converter",
    # Named colors
    "NAMED_COLORS",
    "normalize_name",
    # Grammar
    "PatternLibrary",
    # calc()
    "evaluate",
]
