# Copyright (c) 2026 Csspectrum
# SPDX-License-Identifier: MIT

"""
Color handles.

A Color stores one interchange value (XYZ D65 + alpha) and the registry it
was parsed with. Everything else is derived on demand:

    color = Color.from_string("hsl(9 100% 60%)")
    color.to("rgb")                          # "rgb(255, 82, 51)"
    color.in_model("hsl").set(l=lambda l: l + 10).to("hsl")
    color.sepia(0.5).to("hex")               # filters return new colors

ComponentView methods that change components mutate the underlying Color in
place and return the same view, so calls chain.
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, Union

import numpy as np

from csspectrum.convert import colorspace as cs
from csspectrum.convert import filters
from csspectrum.convert.components import normalize_components, read_components
from csspectrum.convert.formats import rgb255_to_xyza
from csspectrum.convert.interpolate import interpolate_components, parse_hue_method
from csspectrum.convert.mix import parse_color_mix
from csspectrum.convert.relative import parse_relative
from csspectrum.errors import InvalidArgumentError
from csspectrum.registry import COLOR_MIX, RELATIVE, Registry, get_default_registry
from csspectrum.schema import (
    XYZA,
    ContrastLevel,
    FormattingOptions,
    HueMethod,
    OpaqueConverter,
    StructuredConverter,
)

ColorLike = Union[str, "Color"]
ComponentUpdate = Union[float, Callable[[float], float]]

DEFAULT_BACKGROUND = "rgb(255, 255, 255)"

# (normal text, large text) minimum contrast ratios
WCAG_THRESHOLDS: dict[ContrastLevel, tuple[float, float]] = {
    ContrastLevel.AA: (4.5, 3.0),
    ContrastLevel.AAA: (7.0, 4.5),
}

# Slack for floating-point noise when testing gamut membership
_GAMUT_EPSILON = 1e-6

# Canonical rounding used by equals(): XYZ to 1e-7, alpha to 1e-3
_XYZ_DECIMALS = 7
_ALPHA_DECIMALS = 3


def _resolve_registry(registry: Optional[Registry]) -> Registry:
    return registry if registry is not None else get_default_registry()


# =============================================================================
# Color
# =============================================================================


class Color:
    """
    A mutable color handle.

    Args:
        xyza: Interchange value; defaults to opaque black
        registry: Formats, spaces and named colors to use; defaults to the
            process-wide registry
    """

    __slots__ = ("_xyza", "_name", "_registry")

    def __init__(self, xyza: XYZA = XYZA(0.0, 0.0, 0.0, 1.0), *, registry: Optional[Registry] = None):
        self._registry = _resolve_registry(registry)
        self._xyza = xyza
        self._name: Optional[str] = None
        self._set_xyza(xyza)

    def _set_xyza(self, xyza: XYZA) -> None:
        """Single mutation point: store the value and refresh the cached name."""
        self._xyza = xyza
        self._name = self._registry.match_named(xyza)

    def __repr__(self) -> str:
        x, y, z, alpha = self._xyza.x, self._xyza.y, self._xyza.z, self._xyza.alpha
        label = f" {self._name}" if self._name else ""
        return f"<Color{label} xyza=({x:.6f}, {y:.6f}, {z:.6f}, {alpha:g})>"

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_string(cls, text: str, *, registry: Optional[Registry] = None) -> Color:
        """
        Parse any supported color string.

        Handles simple formats and spaces, relative colors and color-mix().

        Raises:
            UnsupportedFormatError: no grammar matches
            InvalidFormatError: a grammar matched but the content is invalid
        """
        registry = _resolve_registry(registry)
        kind, _ = registry.classify(text)

        if kind == RELATIVE:
            relative = parse_relative(text, registry)
            color = cls(registry=registry)
            color.in_model(relative.model).set_array(relative.values)
            return color

        if kind == COLOR_MIX:
            spec = parse_color_mix(text, registry)
            color = cls(registry.parse_simple(spec.first), registry=registry)
            color.in_model(spec.model).mix_with(spec.second, spec.amount, spec.hue_method)
            if spec.alpha_multiplier != 1.0:
                color._set_xyza(color._xyza.with_alpha(color._xyza.alpha * spec.alpha_multiplier))
            return color

        return cls(registry.parse_simple(text), registry=registry)

    @classmethod
    def define(cls, model: str, *, registry: Optional[Registry] = None) -> ComponentSetter:
        """
        Build a color from components, starting from opaque black.

        Example::

            Color.define("hsl").set(h=260, s=100, l=50).to("hsl")
        """
        color = cls(registry=registry)
        return ComponentSetter(ComponentView(color, model))

    def copy(self) -> Color:
        return Color(self._xyza, registry=self._registry)

    # -------------------------------------------------------------------------
    # Introspection (static)
    # -------------------------------------------------------------------------

    @staticmethod
    def type_of(text: str, *, registry: Optional[Registry] = None) -> str:
        """
        Identify the format or space of a color string.

        Relative colors report their target model, color-mix() its
        interpolation model.
        """
        return _resolve_registry(registry).classify(text)[1]

    @staticmethod
    def is_valid(target: str, text: str, *, registry: Optional[Registry] = None) -> bool:
        """True if text matches the grammar of the given format or space."""
        converter = _resolve_registry(registry).get(target)
        return converter.pattern.match(text.strip()) is not None

    @staticmethod
    def is_relative(text: str, *, registry: Optional[Registry] = None) -> bool:
        return _resolve_registry(registry).patterns.is_relative(text.strip())

    @staticmethod
    def is_color_mix(text: str, *, registry: Optional[Registry] = None) -> bool:
        return _resolve_registry(registry).patterns.is_color_mix(text.strip())

    @staticmethod
    def supported_formats(*, registry: Optional[Registry] = None) -> list[str]:
        return list(_resolve_registry(registry).formats)

    @staticmethod
    def supported_spaces(*, registry: Optional[Registry] = None) -> list[str]:
        return list(_resolve_registry(registry).spaces)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def xyza(self) -> XYZA:
        return self._xyza

    @property
    def name(self) -> Optional[str]:
        """Exact named-color match at the last mutation, or None."""
        return self._name

    @property
    def registry(self) -> Registry:
        return self._registry

    def in_model(self, model: str) -> ComponentView:
        """Bind a component view in the given format or space."""
        return ComponentView(self, model)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to(
        self,
        target: str,
        options: Optional[FormattingOptions] = None,
        *,
        modern: Optional[bool] = None,
        precision: Optional[int] = None,
    ) -> str:
        """
        Serialize to a format or space.

        Args:
            target: Format or space identifier
            options: Formatting options; keyword overrides win over it

        Raises:
            UnsupportedFormatError: unknown target
            NoNamedMatchError: target is "named" and no name matches exactly
        """
        options = options or FormattingOptions()
        if modern is not None:
            options = replace(options, modern=modern)
        if precision is not None:
            options = replace(options, precision=precision)

        converter = self._registry.get(target)
        if isinstance(converter, OpaqueConverter):
            return converter.from_xyza(self._xyza)
        values = normalize_components(converter, converter.from_xyza(self._xyza))
        return converter.serialize(values, options)

    def _has_name(self) -> bool:
        return self._registry.match_named(self._xyza) is not None

    def to_all_formats(self, options: Optional[FormattingOptions] = None) -> dict[str, str]:
        """Every registered format; "named" only when an exact name exists."""
        return {
            name: self.to(name, options)
            for name in self._registry.formats
            if name != "named" or self._has_name()
        }

    def to_all_spaces(self, options: Optional[FormattingOptions] = None) -> dict[str, str]:
        return {name: self.to(name, options) for name in self._registry.spaces}

    def to_next_color(
        self,
        current: str,
        options: Optional[FormattingOptions] = None,
        *,
        exclude: Iterable[str] = (),
    ) -> str:
        """
        Serialize into the format or space after the one `current` is written in.

        Cycles through formats then spaces in registration order, skipping
        excluded identifiers and skipping "named" when there is no exact name.

        Raises:
            InvalidArgumentError: every identifier is excluded
        """
        _, current_model = self._registry.classify(current)
        order = self._registry.identifiers
        excluded = {name.lower() for name in exclude}
        has_name = self._has_name()

        start = order.index(current_model)
        for offset in range(1, len(order) + 1):
            name = order[(start + offset) % len(order)]
            if name in excluded or (name == "named" and not has_name):
                continue
            return self.to(name, options)
        raise InvalidArgumentError("Every format and space is excluded")

    # -------------------------------------------------------------------------
    # Comparison & Accessibility
    # -------------------------------------------------------------------------

    def _coerce(self, other: ColorLike) -> Color:
        if isinstance(other, Color):
            return other
        return Color.from_string(other, registry=self._registry)

    def _canonical(self) -> tuple[float, ...]:
        xyza = self._xyza
        return (
            round(xyza.x, _XYZ_DECIMALS) + 0.0,
            round(xyza.y, _XYZ_DECIMALS) + 0.0,
            round(xyza.z, _XYZ_DECIMALS) + 0.0,
            round(min(max(xyza.alpha, 0.0), 1.0), _ALPHA_DECIMALS) + 0.0,
        )

    def equals(self, other: ColorLike) -> bool:
        """True if both colors are the same interchange value (rounded)."""
        return self._canonical() == self._coerce(other)._canonical()

    def luminance(self, background: ColorLike = DEFAULT_BACKGROUND) -> float:
        """
        Relative luminance (CIE Y, 0-1).

        Translucent colors are composited over `background` first.
        """
        y = self._xyza.y
        alpha = min(max(self._xyza.alpha, 0.0), 1.0)
        if alpha < 1.0:
            backdrop = self._coerce(background).xyza.y
            y = y * alpha + backdrop * (1.0 - alpha)
        return min(max(y, 0.0), 1.0)

    def is_dark(self, background: ColorLike = DEFAULT_BACKGROUND) -> bool:
        return self.luminance(background) < 0.5

    def is_light(self, background: ColorLike = DEFAULT_BACKGROUND) -> bool:
        return not self.is_dark(background)

    def is_cool(self) -> bool:
        """
        Hue strictly between 60° and 300° (greens, cyans, blues, violets).

        The hue is read through the hsl getter, so it is first rounded to a
        whole degree: 60.4 counts as 60 and is warm.
        """
        hue = self.in_model("hsl").get("h")
        return 60.0 < hue < 300.0

    def is_warm(self) -> bool:
        return not self.is_cool()

    def is_in_gamut(self, space: str = "srgb") -> bool:
        """
        True if every non-alpha component in `space` lies within its range.

        String-only formats are checked through the model they borrow.
        """
        converter = self._registry.get(space)
        if isinstance(converter, OpaqueConverter):
            converter = self._registry.structured(converter.model)
        raw = converter.from_xyza(self._xyza)
        for name in converter.names:
            if name == "alpha":
                continue
            definition = converter.components[name]
            value = raw[definition.index]
            if not definition.min - _GAMUT_EPSILON <= value <= definition.max + _GAMUT_EPSILON:
                return False
        return True

    @staticmethod
    def contrast_ratio(first: ColorLike, second: ColorLike, *, registry: Optional[Registry] = None) -> float:
        """WCAG contrast ratio, 1 (identical) to 21 (black on white)."""
        registry = _resolve_registry(registry)
        a = first if isinstance(first, Color) else Color.from_string(first, registry=registry)
        b = second if isinstance(second, Color) else Color.from_string(second, registry=registry)
        la, lb = a.luminance(), b.luminance()
        return (max(la, lb) + 0.05) / (min(la, lb) + 0.05)

    @staticmethod
    def is_accessible_pair(
        first: ColorLike,
        second: ColorLike,
        level: Union[str, ContrastLevel] = ContrastLevel.AA,
        large_text: bool = False,
        *,
        registry: Optional[Registry] = None,
    ) -> bool:
        """
        Check a foreground/background pair against WCAG 2.

        Thresholds: AA 4.5 (3.0 large text), AAA 7.0 (4.5 large text).

        Raises:
            InvalidArgumentError: unknown level
        """
        try:
            level = ContrastLevel(level.upper() if isinstance(level, str) else level)
        except ValueError:
            raise InvalidArgumentError(f"Invalid WCAG level: {level!r}. Expected AA or AAA") from None
        normal, large = WCAG_THRESHOLDS[level]
        threshold = large if large_text else normal
        return Color.contrast_ratio(first, second, registry=registry) >= threshold

    @staticmethod
    def random(
        target: str = "rgb",
        *,
        rng: Optional[np.random.Generator] = None,
        registry: Optional[Registry] = None,
    ) -> str:
        """
        A random color string in the target format or space.

        "named" picks a random table entry; anything else draws rgb channels
        uniformly from 30-229 (avoiding the extremes) and serializes them.

        Raises:
            UnsupportedFormatError: unknown target
        """
        registry = _resolve_registry(registry)
        registry.get(target)
        rng = rng if rng is not None else np.random.default_rng()
        if target.lower() == "named":
            names = list(registry.named_colors)
            return names[int(rng.integers(len(names)))]
        channels = rng.integers(30, 230, size=3)
        return Color(rgb255_to_xyza([*channels.tolist(), 1.0]), registry=registry).to(target)

    # -------------------------------------------------------------------------
    # Filters (each returns a new Color)
    # -------------------------------------------------------------------------
    # Filters work on clipped sRGB. Identity amounts return an unclipped copy.

    def _srgb(self) -> np.ndarray:
        return np.clip(cs.xyz_to_srgb(self._xyza.xyz), 0.0, 1.0)

    def _with_srgb(self, srgb: np.ndarray) -> Color:
        xyza = XYZA.from_xyz(cs.srgb_to_xyz(srgb), self._xyza.alpha)
        return Color(xyza, registry=self._registry)

    def opacity(self, amount: float) -> Color:
        """Multiply alpha by amount in [0, 1]."""
        amount = filters.check_amount("opacity", amount)
        return Color(self._xyza.with_alpha(self._xyza.alpha * amount), registry=self._registry)

    def saturate(self, amount: float) -> Color:
        """0 is fully desaturated, 1 unchanged, above 1 oversaturated."""
        amount = filters.check_amount("saturate", amount, math.inf)
        if amount == 1.0:
            return self.copy()
        return self._with_srgb(filters.apply_matrix(self._srgb(), filters.saturate_matrix(amount)))

    def hue_rotate(self, degrees: float) -> Color:
        try:
            degrees = float(degrees)
        except (TypeError, ValueError):
            raise InvalidArgumentError(f"hue_rotate() angle must be a number, got {degrees!r}") from None
        if not math.isfinite(degrees):
            raise InvalidArgumentError(f"hue_rotate() angle must be finite, got {degrees}")
        if degrees % 360.0 == 0.0:
            return self.copy()
        return self._with_srgb(filters.apply_matrix(self._srgb(), filters.hue_rotate_matrix(degrees)))

    def contrast(self, amount: float) -> Color:
        """0 is mid gray, 1 unchanged, above 1 more contrast."""
        amount = filters.check_amount("contrast", amount, math.inf)
        if amount == 1.0:
            return self.copy()
        return self._with_srgb(filters.apply_transfer(self._srgb(), amount, 0.5 - 0.5 * amount))

    def sepia(self, amount: float = 1.0) -> Color:
        amount = filters.check_amount("sepia", amount)
        if amount == 0.0:
            return self.copy()
        return self._with_srgb(filters.apply_matrix(self._srgb(), filters.sepia_matrix(amount)))

    def brightness(self, amount: float) -> Color:
        """Scale every channel; 0 is black, 1 unchanged."""
        amount = filters.check_amount("brightness", amount, math.inf)
        if amount == 1.0:
            return self.copy()
        return self._with_srgb(filters.apply_transfer(self._srgb(), amount))

    def grayscale(self, amount: float = 1.0) -> Color:
        amount = filters.check_amount("grayscale", amount)
        if amount == 0.0:
            return self.copy()
        return self._with_srgb(filters.apply_matrix(self._srgb(), filters.grayscale_matrix(amount)))

    def invert(self, amount: float = 1.0) -> Color:
        amount = filters.check_amount("invert", amount)
        if amount == 0.0:
            return self.copy()
        return self._with_srgb(filters.apply_transfer(self._srgb(), 1.0 - 2.0 * amount, amount))


# =============================================================================
# Component Views
# =============================================================================


class ComponentView:
    """
    A Color seen through one structured model.

    Getters clamp into each component's range and round to its step.
    Setters write unclamped values; clamping or wrapping happens only when
    reading or serializing. Non-finite values are replaced on write:
    NaN by the minimum, infinities by the nearest bound.
    """

    __slots__ = ("_color", "_model", "_converter")

    def __init__(self, color: Color, model: str):
        self._converter: StructuredConverter = color.registry.structured(model)
        self._color = color
        self._model = model.lower()

    def __repr__(self) -> str:
        return f"<ComponentView {self._model} {self.get_components()}>"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def model(self) -> str:
        return self._model

    def _raw(self) -> list[float]:
        return list(self._converter.from_xyza(self._color.xyza))

    def get(self, component: str) -> float:
        """
        One component, clamped and rounded.

        Raises:
            InvalidArgumentError: unknown component name
        """
        definition = self._converter.component(component)
        return definition.read(float(self._raw()[definition.index]))

    def get_components(self) -> dict[str, float]:
        return dict(zip(self._converter.names, self.get_array()))

    def get_array(self) -> list[float]:
        return read_components(self._converter, self._raw())

    def set(
        self,
        values: Optional[Mapping[str, ComponentUpdate]] = None,
        **updates: ComponentUpdate,
    ) -> ComponentView:
        """
        Update some components.

        Each update is a number or a function of the current (unclamped)
        value. Accepts a mapping, keyword arguments, or both.

        Example::

            color.in_model("hsl").set(l=lambda l: l + 10, s=50)
        """
        changes: dict[str, ComponentUpdate] = dict(values or {})
        changes.update(updates)

        raw = self._raw()
        for name, update in changes.items():
            definition = self._converter.component(name)
            current = raw[definition.index]
            raw[definition.index] = definition.finite(float(update(current) if callable(update) else update))

        self._color._set_xyza(self._converter.to_xyza(raw))
        return self

    def set_array(self, values: Sequence[float]) -> ComponentView:
        """
        Replace every component at once (alpha optional, defaulting to 1).

        Raises:
            InvalidArgumentError: wrong number of values
        """
        count = len(self._converter.components)
        if len(values) not in (count - 1, count):
            raise InvalidArgumentError(
                f"Expected {count - 1} or {count} values for '{self._model}', got {len(values)}"
            )
        definitions = self._converter.definitions
        self._color._set_xyza(
            self._converter.to_xyza([definition.finite(float(v)) for definition, v in zip(definitions, values)])
        )
        return self

    def mix_with(
        self,
        other: ColorLike,
        amount: float = 0.5,
        hue_method: Union[str, HueMethod] = HueMethod.SHORTER,
    ) -> ComponentView:
        """
        Blend toward another color in this model.

        Args:
            other: Color or color string
            amount: 0 keeps this color, 1 gives the other
            hue_method: shorter, longer, increasing or decreasing

        Raises:
            InvalidArgumentError: amount outside [0, 1] or unknown hue method
        """
        method = parse_hue_method(hue_method)
        amount = float(amount)
        if not 0.0 <= amount <= 1.0:
            raise InvalidArgumentError(f"Mix amount must be in [0, 1], got {amount}")

        other_color = self._color._coerce(other)
        start = self.get_array()
        end = other_color.in_model(self._model).get_array()
        mixed = interpolate_components(self._converter.definitions, start, end, amount, method)

        self._color._set_xyza(self._converter.to_xyza(mixed))
        return self

    # Passthroughs so chains can end in serialization
    def to(self, target: str, options: Optional[FormattingOptions] = None, **overrides: Any) -> str:
        return self._color.to(target, options, **overrides)

    def in_model(self, model: str) -> ComponentView:
        return self._color.in_model(model)


class ComponentSetter:
    """Setter-only handle returned by Color.define()."""

    __slots__ = ("_view",)

    def __init__(self, view: ComponentView):
        self._view = view

    @property
    def model(self) -> str:
        return self._view.model

    def set(
        self,
        values: Optional[Mapping[str, ComponentUpdate]] = None,
        **updates: ComponentUpdate,
    ) -> ComponentView:
        return self._view.set(values, **updates)

    def set_array(self, values: Sequence[float]) -> ComponentView:
        return self._view.set_array(values)
