# Copyright (c) 2026 Csspectrum
# SPDX-License-Identifier: MIT

"""
Color space conversions.

Interchange space: CIE XYZ relative to D65 (Y = 1 for white).

    sRGB ↔ Linear sRGB ↔ XYZ (D65) ↔ Lab ↔ LCH
                          XYZ (D65) ↔ OKLab ↔ OKLCH
    sRGB ↔ HSL, sRGB ↔ HWB

References:
- CSS Color 4 sample code: https://www.w3.org/TR/css-color-4/#color-conversion-code
- OKLab: https://bottosson.github.io/posts/oklab/
- Bradford adaptation: http://www.brucelindbloom.com/Eqn_ChromAdapt.html

Transfer functions are sign-preserving so out-of-gamut channels never turn
into NaN. All matrix inverses are derived with NumPy from a single declared
matrix, which keeps every round trip numerically exact.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from csspectrum.errors import InvalidFormatError


# =============================================================================
# Reference Whites & Chromatic Adaptation
# =============================================================================

# D65 from its chromaticity (x = 0.3127, y = 0.3290)
WHITE_D65 = np.array([0.3127 / 0.3290, 1.0, (1.0 - 0.3127 - 0.3290) / 0.3290], dtype=np.float64)

# Bradford adaptation, D50 → D65 and its inverse
D50_TO_D65 = np.array([
    [0.9555766, -0.0230393, 0.0631636],
    [-0.0282895, 1.0099416, 0.0210077],
    [0.0122982, -0.0204830, 1.3299098],
], dtype=np.float64)

D65_TO_D50 = np.linalg.inv(D50_TO_D65)


# =============================================================================
# sRGB ↔ Linear sRGB
# =============================================================================


def srgb_to_linear(srgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert gamma-encoded sRGB channels to linear light.

    sRGB uses a piecewise gamma curve:
    - For |value| <= 0.04045: value/12.92
    - Otherwise: sign(value) * ((|value| + 0.055) / 1.055) ^ 2.4
    """
    srgb = np.asarray(srgb, dtype=np.float64)
    magnitude = np.abs(srgb)
    linear = np.where(
        magnitude <= 0.04045,
        srgb / 12.92,
        np.sign(srgb) * np.power((magnitude + 0.055) / 1.055, 2.4),
    )
    return linear


def linear_to_srgb(linear: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert linear light to gamma-encoded sRGB channels.

    Inverse of srgb_to_linear. No clipping: values outside [0, 1] stay
    outside so gamut checks can see them.
    """
    linear = np.asarray(linear, dtype=np.float64)
    magnitude = np.abs(linear)
    srgb = np.where(
        magnitude <= 0.0031308,
        linear * 12.92,
        np.sign(linear) * (1.055 * np.power(magnitude, 1.0 / 2.4) - 0.055),
    )
    return srgb


# =============================================================================
# Linear sRGB ↔ XYZ (D65)
# =============================================================================

SRGB_TO_XYZ = np.array([
    [506752 / 1228815, 87881 / 245763, 12673 / 70218],
    [87098 / 409605, 175762 / 245763, 12673 / 175545],
    [7918 / 409605, 87881 / 737289, 1001167 / 1053270],
], dtype=np.float64)

XYZ_TO_SRGB = np.linalg.inv(SRGB_TO_XYZ)


def srgb_to_xyz(srgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert gamma-encoded sRGB [0,1] to XYZ (D65).

    Args:
        srgb: Array of shape (..., 3)

    Returns:
        Array of shape (..., 3) with X, Y, Z
    """
    linear = srgb_to_linear(srgb)
    return np.einsum('...j,ij->...i', linear, SRGB_TO_XYZ)


def xyz_to_srgb(xyz: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert XYZ (D65) to gamma-encoded sRGB, unclipped.

    Args:
        xyz: Array of shape (..., 3)

    Returns:
        Array of shape (..., 3) with sRGB channels (nominally 0-1)
    """
    xyz = np.asarray(xyz, dtype=np.float64)
    linear = np.einsum('...j,ij->...i', xyz, XYZ_TO_SRGB)
    return linear_to_srgb(linear)


# =============================================================================
# XYZ (D65) ↔ CIE Lab
# =============================================================================

_LAB_DELTA = 6.0 / 29.0
_LAB_EPSILON = _LAB_DELTA ** 3


def _lab_f(t: NDArray[np.float64]) -> NDArray[np.float64]:
    return np.where(
        t > _LAB_EPSILON,
        np.cbrt(t),
        t / (3.0 * _LAB_DELTA ** 2) + 4.0 / 29.0,
    )


def _lab_f_inv(t: NDArray[np.float64]) -> NDArray[np.float64]:
    return np.where(
        t > _LAB_DELTA,
        t ** 3,
        3.0 * _LAB_DELTA ** 2 * (t - 4.0 / 29.0),
    )


def xyz_to_lab(xyz: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert XYZ to CIE Lab relative to D65.

    Args:
        xyz: Array of shape (..., 3)

    Returns:
        Array of shape (..., 3) with L (0-100), a, b
    """
    xyz = np.asarray(xyz, dtype=np.float64)
    f = _lab_f(xyz / WHITE_D65)
    L = 116.0 * f[..., 1] - 16.0
    a = 500.0 * (f[..., 0] - f[..., 1])
    b = 200.0 * (f[..., 1] - f[..., 2])
    return np.stack([L, a, b], axis=-1)


def lab_to_xyz(lab: NDArray[np.float64]) -> NDArray[np.float64]:
    """Convert CIE Lab (D65) to XYZ. Inverse of xyz_to_lab."""
    lab = np.asarray(lab, dtype=np.float64)
    fy = (lab[..., 0] + 16.0) / 116.0
    fx = fy + lab[..., 1] / 500.0
    fz = fy - lab[..., 2] / 200.0
    f = np.stack([fx, fy, fz], axis=-1)
    return _lab_f_inv(f) * WHITE_D65


# =============================================================================
# XYZ (D65) ↔ OKLab
# =============================================================================

# XYZ to LMS (cone responses)
_M1 = np.array([
    [0.8189330101, 0.3618667424, -0.1288597137],
    [0.0329845436, 0.9293118715, 0.0361456387],
    [0.0482003018, 0.2643662691, 0.6338517070],
], dtype=np.float64)

# LMS to OKLab
_M2 = np.array([
    [0.2104542553, 0.7936177850, -0.0040720468],
    [1.9779984951, -2.4285922050, 0.4505937099],
    [0.0259040371, 0.7827717662, -0.8086757660],
], dtype=np.float64)

# Inverse matrices
_M1_INV = np.linalg.inv(_M1)
_M2_INV = np.linalg.inv(_M2)


def xyz_to_oklab(xyz: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert XYZ (D65) to OKLab.

    Args:
        xyz: Array of shape (..., 3)

    Returns:
        Array of shape (..., 3) with OKLab values (L, a, b)
    """
    xyz = np.asarray(xyz, dtype=np.float64)

    lms = np.einsum('...j,ij->...i', xyz, _M1)

    # Cube root (handle negative values for out-of-gamut colors)
    lms_cbrt = np.cbrt(lms)

    return np.einsum('...j,ij->...i', lms_cbrt, _M2)


def oklab_to_xyz(lab: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert OKLab to XYZ (D65).

    Args:
        lab: Array of shape (..., 3) with OKLab values (L, a, b)

    Returns:
        Array of shape (..., 3) with X, Y, Z
    """
    lab = np.asarray(lab, dtype=np.float64)
    lms_cbrt = np.einsum('...j,ij->...i', lab, _M2_INV)
    lms = lms_cbrt ** 3
    return np.einsum('...j,ij->...i', lms, _M1_INV)


# =============================================================================
# Rectangular ↔ Cylindrical (Lab → LCH, OKLab → OKLCH)
# =============================================================================


def to_polar(lab: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert (L, a, b) to (L, C, H).

    Returns:
        Array of shape (..., 3); H is in degrees [0, 360)
    """
    lab = np.asarray(lab, dtype=np.float64)

    L = lab[..., 0]
    a = lab[..., 1]
    b = lab[..., 2]

    C = np.sqrt(a**2 + b**2)
    H = np.degrees(np.arctan2(b, a)) % 360.0

    return np.stack([L, C, H], axis=-1)


def from_polar(lch: NDArray[np.float64]) -> NDArray[np.float64]:
    """Convert (L, C, H) with H in degrees back to (L, a, b)."""
    lch = np.asarray(lch, dtype=np.float64)

    L = lch[..., 0]
    C = lch[..., 1]
    H_rad = np.radians(lch[..., 2])

    a = C * np.cos(H_rad)
    b = C * np.sin(H_rad)

    return np.stack([L, a, b], axis=-1)


# =============================================================================
# sRGB ↔ HSL / HWB
# =============================================================================


def srgb_to_hsl(r: float, g: float, b: float) -> tuple[float, float, float]:
    """
    Convert sRGB channels [0,1] to HSL.

    Returns:
        (hue in degrees [0, 360), saturation 0-1, lightness 0-1).
        Achromatic colors report hue 0.
    """
    high = max(r, g, b)
    low = min(r, g, b)
    lightness = (high + low) / 2.0
    delta = high - low

    if delta == 0:
        return 0.0, 0.0, lightness

    denom = min(lightness, 1.0 - lightness)
    saturation = 0.0 if denom == 0 else (high - lightness) / denom

    if high == r:
        hue = (g - b) / delta + (6.0 if g < b else 0.0)
    elif high == g:
        hue = (b - r) / delta + 2.0
    else:
        hue = (r - g) / delta + 4.0

    return (hue * 60.0) % 360.0, saturation, lightness


def hsl_to_srgb(hue: float, saturation: float, lightness: float) -> tuple[float, float, float]:
    """
    Convert HSL to sRGB channels [0,1].

    Args:
        hue: Degrees (any real; wrapped)
        saturation: 0-1
        lightness: 0-1
    """
    hue = hue % 360.0
    a = saturation * min(lightness, 1.0 - lightness)

    def channel(n: float) -> float:
        k = (n + hue / 30.0) % 12.0
        return lightness - a * max(-1.0, min(k - 3.0, 9.0 - k, 1.0))

    return channel(0.0), channel(8.0), channel(4.0)


def srgb_to_hwb(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Convert sRGB [0,1] to (hue degrees, whiteness 0-1, blackness 0-1)."""
    hue, _, _ = srgb_to_hsl(r, g, b)
    return hue, min(r, g, b), 1.0 - max(r, g, b)


def hwb_to_srgb(hue: float, whiteness: float, blackness: float) -> tuple[float, float, float]:
    """
    Convert HWB to sRGB [0,1].

    When whiteness + blackness >= 1 the result is the gray
    whiteness / (whiteness + blackness).
    """
    total = whiteness + blackness
    if total >= 1.0:
        gray = whiteness / total
        return gray, gray, gray
    pure = hsl_to_srgb(hue, 1.0, 0.5)
    scale = 1.0 - whiteness - blackness
    return tuple(channel * scale + whiteness for channel in pure)


# =============================================================================
# Angles
# =============================================================================

_ANGLE_UNITS = {
    "deg": 1.0,
    "grad": 0.9,
    "rad": 180.0 / math.pi,
    "turn": 360.0,
}


def angle_to_degrees(value: float, unit: str = "deg") -> float:
    """Convert an angle in a CSS angle unit to degrees."""
    try:
        return value * _ANGLE_UNITS[unit.lower()]
    except KeyError:
        raise InvalidFormatError(f"Unknown angle unit: {unit}") from None
