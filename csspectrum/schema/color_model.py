# Copyright (c) 2026 Csspectrum
# SPDX-License-Identifier: MIT

"""
Value types shared by every converter.

Design principles:
- Immutable: All types are frozen dataclasses
- Interchange: Every color passes through XYZ (D65) plus alpha
- Declarative: Components describe their own range, wrapping and precision

Component semantics:
    get-style reads clamp into [min, max] and round to step.
    Serialization wraps loop components (hues) into [min, max) instead of
    clamping them, then rounds to step.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum
from typing import Callable, Mapping, Optional, Sequence, Union

import numpy as np
from numpy.typing import NDArray

from csspectrum.errors import InvalidArgumentError, InvalidFormatError


# =============================================================================
# Enumerations
# =============================================================================


class WhitePoint(Enum):
    """Reference white of a device space's native XYZ matrices."""
    D65 = "D65"
    D50 = "D50"


class HueMethod(str, Enum):
    """Hue interpolation strategies (CSS Color 4 hue-interpolation-method)."""
    SHORTER = "shorter"
    LONGER = "longer"
    INCREASING = "increasing"
    DECREASING = "decreasing"


class ContrastLevel(str, Enum):
    """WCAG 2 conformance levels."""
    AA = "AA"
    AAA = "AAA"


# =============================================================================
# Interchange Color
# =============================================================================


@dataclass(frozen=True, slots=True)
class XYZA:
    """
    A color in the interchange space: CIE XYZ (D65) plus alpha.

    Nothing is clamped here. Out-of-gamut and out-of-range values are kept
    so that later conversions can decide what to do with them.

    Attributes:
        x, y, z: Tristimulus values (Y = 1 for reference white)
        alpha: Opacity, nominally 0-1
    """
    x: float
    y: float
    z: float
    alpha: float = 1.0

    @classmethod
    def from_xyz(cls, xyz: Sequence[float], alpha: float = 1.0) -> XYZA:
        """Build from any length-3 sequence (list, tuple or NumPy array)."""
        return cls(float(xyz[0]), float(xyz[1]), float(xyz[2]), float(alpha))

    @property
    def xyz(self) -> NDArray[np.float64]:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def with_alpha(self, alpha: float) -> XYZA:
        return replace(self, alpha=float(alpha))

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"x": self.x, "y": self.y, "z": self.z, "alpha": self.alpha}

    @classmethod
    def from_dict(cls, data: dict) -> XYZA:
        """Deserialize from dictionary."""
        return cls(
            x=data["x"],
            y=data["y"],
            z=data["z"],
            alpha=data.get("alpha", 1.0),
        )


# =============================================================================
# Component Metadata
# =============================================================================


@dataclass(frozen=True, slots=True)
class ComponentDefinition:
    """
    Metadata for one addressable channel of a color model.

    Attributes:
        index: Position in the model's numeric array
        min: Lower bound (may be -inf)
        max: Upper bound (may be +inf)
        loop: True for angular components that wrap instead of clamp
        step: Rounding granularity; also drives serialized precision
        percent_scale: Magnitude that 100% maps to when the range is
            unbounded (e.g. Lab a/b). Bounded components map percentages
            across [min, max].
    """
    index: int
    min: float
    max: float
    loop: bool = False
    step: float = 0.001
    percent_scale: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate the declared range and step."""
        if self.index < 0:
            raise InvalidArgumentError(f"Component index must be >= 0, got {self.index}")
        if self.min > self.max:
            raise InvalidArgumentError(
                f"Component min must not exceed max, got [{self.min}, {self.max}]"
            )
        if not self.step > 0:
            raise InvalidArgumentError(f"Component step must be > 0, got {self.step}")
        if self.loop and not self.bounded:
            raise InvalidArgumentError("Looping components need a finite range")

    @property
    def bounded(self) -> bool:
        return math.isfinite(self.min) and math.isfinite(self.max)

    @property
    def decimals(self) -> int:
        """Number of decimal places implied by step (0.001 -> 3, 1 -> 0)."""
        exponent = Decimal(repr(self.step)).normalize().as_tuple().exponent
        return max(0, -int(exponent))

    def clamp(self, value: float) -> float:
        value = self._sanitize(value)
        return min(max(value, self.min), self.max)

    def wrap(self, value: float) -> float:
        value = self._sanitize(value)
        span = self.max - self.min
        return self.min + (value - self.min) % span

    def finite(self, value: float) -> float:
        """Replace NaN with min and infinities with the nearest bound (0 if unbounded)."""
        if math.isfinite(value):
            return value
        if math.isnan(value):
            return self._sanitize(value)
        bound = self.max if value > 0 else self.min
        return bound if math.isfinite(bound) else 0.0

    def quantize(self, value: float) -> float:
        """Round half-up to the nearest step, then to 10 decimals."""
        if not math.isfinite(value):
            return value
        return round(math.floor(value / self.step + 0.5) * self.step, 10)

    def read(self, value: float) -> float:
        """Clamp and round, as seen through component getters."""
        return self.quantize(self.clamp(value))

    def normalize(self, value: float) -> float:
        """Wrap or clamp, then round, as written by serializers."""
        if self.loop:
            result = self.quantize(self.wrap(value))
            if result >= self.max:
                result = self.quantize(result - (self.max - self.min))
        else:
            result = self.quantize(self.clamp(value))
        # Unbounded components cannot absorb inf; emit a parseable zero.
        return result if math.isfinite(result) else 0.0

    def from_percentage(self, percent: float) -> float:
        """Map a percentage onto this component's range."""
        if self.bounded:
            return self.min + percent / 100.0 * (self.max - self.min)
        if self.percent_scale is not None:
            return percent / 100.0 * self.percent_scale
        raise InvalidFormatError("Percentages are not defined for unbounded components")

    def _sanitize(self, value: float) -> float:
        if math.isnan(value):
            return self.min if math.isfinite(self.min) else 0.0
        return value


ALPHA_DEFINITION_STEP = 0.001


def alpha_definition(index: int) -> ComponentDefinition:
    """The synthetic alpha component appended to every structured model."""
    return ComponentDefinition(index=index, min=0.0, max=1.0, step=ALPHA_DEFINITION_STEP)


# =============================================================================
# Formatting Configuration
# =============================================================================


@dataclass(frozen=True, slots=True)
class FormattingOptions:
    """
    Serialization options.

    Attributes:
        modern: Space-separated components and "/" alpha for formats that
            also have a legacy comma syntax (rgb, hsl)
        precision: Decimal places override for every component; None uses
            the precision implied by each component's step
    """
    modern: bool = False
    precision: Optional[int] = None

    def __post_init__(self) -> None:
        if self.precision is not None and self.precision < 0:
            raise InvalidArgumentError(f"Precision must be >= 0, got {self.precision}")

    def decimals_for(self, definition: ComponentDefinition) -> int:
        return definition.decimals if self.precision is None else self.precision


DEFAULT_OPTIONS = FormattingOptions()


# =============================================================================
# Converters
# =============================================================================


@dataclass(frozen=True)
class StructuredConverter:
    """
    A color model with addressable numeric components.

    Attributes:
        pattern: Anchored grammar recognizing the model's string form
        components: Component name -> metadata
        parse: String -> positional numeric array (alpha last)
        serialize: Positional array + options -> string
        to_xyza: Positional array -> interchange color
        from_xyza: Interchange color -> positional array (unclamped)
    """
    pattern: re.Pattern[str]
    components: Mapping[str, ComponentDefinition]
    parse: Callable[[str], list[float]]
    serialize: Callable[[Sequence[float], FormattingOptions], str]
    to_xyza: Callable[[Sequence[float]], XYZA]
    from_xyza: Callable[[XYZA], list[float]]

    @property
    def names(self) -> list[str]:
        """Component names in positional order."""
        return [name for name, _ in sorted(self.components.items(), key=lambda kv: kv[1].index)]

    @property
    def definitions(self) -> list[ComponentDefinition]:
        """Component definitions in positional order."""
        return sorted(self.components.values(), key=lambda d: d.index)

    def component(self, name: str) -> ComponentDefinition:
        try:
            return self.components[name]
        except KeyError:
            raise InvalidArgumentError(
                f"Unknown component '{name}'; expected one of: {', '.join(self.names)}"
            ) from None

    def with_alpha(self) -> StructuredConverter:
        """Return a copy whose components end with the synthetic alpha channel."""
        if "alpha" in self.components:
            return self
        components = dict(self.components)
        components["alpha"] = alpha_definition(len(components))
        return replace(self, components=components)


@dataclass(frozen=True)
class OpaqueConverter:
    """
    A string-only format (hex, named) that delegates component access to
    another model.
    """
    pattern: re.Pattern[str]
    model: str
    to_xyza: Callable[[str], XYZA]
    from_xyza: Callable[[XYZA], str]


Converter = Union[StructuredConverter, OpaqueConverter]


# =============================================================================
# Device Space Specification
# =============================================================================


def _as_matrix(values, label: str) -> NDArray[np.float64]:
    matrix = np.asarray(values, dtype=np.float64)
    if matrix.shape != (3, 3):
        raise InvalidArgumentError(f"{label} must be 3x3, got shape {matrix.shape}")
    return matrix


@dataclass(frozen=True)
class SpaceSpec:
    """
    Declarative description of an RGB-like device space (CSS color()).

    Attributes:
        components: The three component names, in order
        to_linear: Transfer function, encoded channel -> linear channel
        from_linear: Inverse transfer function
        to_xyz_matrix: Linear channels -> XYZ relative to white_point
        from_xyz_matrix: XYZ -> linear channels; derived by inversion when None
        white_point: Reference white of the two matrices
        component_range: Shared [min, max] for the three components
    """
    components: tuple[str, str, str]
    to_linear: Callable[[float], float]
    from_linear: Callable[[float], float]
    to_xyz_matrix: NDArray[np.float64]
    from_xyz_matrix: Optional[NDArray[np.float64]] = None
    white_point: WhitePoint = WhitePoint.D65
    component_range: tuple[float, float] = field(default=(0.0, 1.0))

    def __post_init__(self) -> None:
        """Validate names and coerce matrices to float arrays."""
        if len(self.components) != 3 or len(set(self.components)) != 3:
            raise InvalidArgumentError(
                f"A space needs three distinct component names, got {self.components}"
            )
        to_xyz = _as_matrix(self.to_xyz_matrix, "to_xyz_matrix")
        from_xyz = (
            np.linalg.inv(to_xyz)
            if self.from_xyz_matrix is None
            else _as_matrix(self.from_xyz_matrix, "from_xyz_matrix")
        )
        object.__setattr__(self, "components", tuple(self.components))
        object.__setattr__(self, "to_xyz_matrix", to_xyz)
        object.__setattr__(self, "from_xyz_matrix", from_xyz)
        object.__setattr__(self, "white_point", WhitePoint(self.white_point))
