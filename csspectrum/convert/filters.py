# Copyright (c) 2026 Csspectrum
# SPDX-License-Identifier: MIT

"""
CSS filter functions applied to a single color.

Reference: https://www.w3.org/TR/filter-effects-1/#ShorthandEquivalents

Filters operate on gamma-encoded sRGB channels in [0, 1]. Matrix filters
(saturate, hue-rotate, sepia, grayscale) multiply by a 3x3 matrix; the
component-transfer filters (brightness, contrast, invert) are linear
functions slope * c + intercept. Results are clipped to [0, 1].
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from csspectrum.errors import InvalidArgumentError


# =============================================================================
# Argument Validation
# =============================================================================


def check_amount(filter_name: str, amount: float, upper: float = 1.0) -> float:
    """
    Validate a filter argument against [0, upper].

    Raises:
        InvalidArgumentError: amount is not a finite number in range
    """
    try:
        value = float(amount)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"{filter_name}() amount must be a number, got {amount!r}") from None
    if not math.isfinite(value) or not 0.0 <= value <= upper:
        bound = "inf" if math.isinf(upper) else f"{upper:g}"
        raise InvalidArgumentError(f"{filter_name}() amount must be in [0, {bound}], got {amount}")
    return value


# =============================================================================
# Matrices
# =============================================================================

_LUMA = np.array([0.2126, 0.7152, 0.0722], dtype=np.float64)

_SEPIA = np.array([
    [0.393, 0.769, 0.189],
    [0.349, 0.686, 0.168],
    [0.272, 0.534, 0.131],
], dtype=np.float64)

_SAT_BASE = np.array([0.213, 0.715, 0.072], dtype=np.float64)

_HUE_COS = np.array([
    [0.787, -0.715, -0.072],
    [-0.213, 0.285, -0.072],
    [-0.213, -0.715, 0.928],
], dtype=np.float64)

_HUE_SIN = np.array([
    [-0.213, -0.715, 0.928],
    [0.143, 0.140, -0.283],
    [-0.787, 0.715, 0.072],
], dtype=np.float64)

_IDENTITY = np.eye(3, dtype=np.float64)


def grayscale_matrix(amount: float) -> NDArray[np.float64]:
    """Blend between identity (0) and full luma projection (1)."""
    full = np.tile(_LUMA, (3, 1))
    return _IDENTITY * (1.0 - amount) + full * amount


def sepia_matrix(amount: float) -> NDArray[np.float64]:
    return _IDENTITY * (1.0 - amount) + _SEPIA * amount


def saturate_matrix(amount: float) -> NDArray[np.float64]:
    """saturate(0) is fully desaturated, 1 is identity, >1 oversaturates."""
    base = np.tile(_SAT_BASE, (3, 1))
    return base + (_IDENTITY - base) * amount


def hue_rotate_matrix(degrees: float) -> NDArray[np.float64]:
    angle = math.radians(degrees)
    base = np.tile(_SAT_BASE, (3, 1))
    return base + _HUE_COS * math.cos(angle) + _HUE_SIN * math.sin(angle)


# =============================================================================
# Application
# =============================================================================


def apply_matrix(srgb: NDArray[np.float64], matrix: NDArray[np.float64]) -> NDArray[np.float64]:
    """Multiply channels by a 3x3 matrix and clip to [0, 1]."""
    srgb = np.asarray(srgb, dtype=np.float64)
    return np.clip(np.einsum('...j,ij->...i', srgb, matrix), 0.0, 1.0)


def apply_transfer(srgb: NDArray[np.float64], slope: float, intercept: float = 0.0) -> NDArray[np.float64]:
    """Apply the linear transfer function slope * c + intercept to each channel."""
    srgb = np.asarray(srgb, dtype=np.float64)
    return np.clip(srgb * slope + intercept, 0.0, 1.0)
