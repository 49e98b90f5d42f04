# Copyright (c) 2026 Csspectrum
# SPDX-License-Identifier: MIT

"""
Registry of named colors, formats and device spaces.

A Registry is a plain object: build as many as needed (one per test, one per
host configuration). Color handles default to a lazily created process-wide
instance returned by get_default_registry().

Dispatch order is registration order: formats first, then spaces. The
pattern library derived from the registered grammars is cached and rebuilt
after every registration.
"""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Mapping, Optional, Sequence

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
    match_named,
)
from csspectrum.convert.mix import resolve_mix_model
from csspectrum.convert.named import NAMED_COLORS, RGBA, normalize_name
from csspectrum.convert.patterns import PatternLibrary
from csspectrum.convert.relative import resolve_relative_model
from csspectrum.convert.spaces import SPACE_SPECS, build_space_converter
from csspectrum.errors import (
    AlreadyRegisteredError,
    InvalidArgumentError,
    MissingComponentMetadataError,
    UnsupportedFormatError,
)
from csspectrum.schema import (
    XYZA,
    Converter,
    OpaqueConverter,
    SpaceSpec,
    StructuredConverter,
)

logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"^[a-z][a-z0-9-]*$")

# Classification kinds returned by Registry.classify
SIMPLE = "simple"
RELATIVE = "relative"
COLOR_MIX = "color-mix"


class Registry:
    """
    Named colors, format converters and device-space converters.

    Args:
        defaults: Install the built-in formats, spaces and CSS named colors.
            Pass False to start from an empty registry.
    """

    def __init__(self, *, defaults: bool = True):
        self._named: dict[str, RGBA] = {}
        self._formats: dict[str, Converter] = {}
        self._spaces: dict[str, StructuredConverter] = {}
        self._space_specs: dict[str, SpaceSpec] = {}
        self._patterns: Optional[PatternLibrary] = None
        if defaults:
            self._install_defaults()

    def _install_defaults(self) -> None:
        self._named.update(NAMED_COLORS)
        self._formats["rgb"] = build_rgb().with_alpha()
        self._formats["named"] = build_named(self._named)
        self._formats["hex"] = build_hex()
        self._formats["hsl"] = build_hsl().with_alpha()
        self._formats["hwb"] = build_hwb().with_alpha()
        self._formats["lab"] = build_lab().with_alpha()
        self._formats["lch"] = build_lch().with_alpha()
        self._formats["oklab"] = build_oklab().with_alpha()
        self._formats["oklch"] = build_oklch().with_alpha()
        for name, spec in SPACE_SPECS.items():
            self._space_specs[name] = spec
            self._spaces[name] = build_space_converter(name, spec).with_alpha()

    def __repr__(self) -> str:
        return (
            f"Registry(formats={len(self._formats)}, spaces={len(self._spaces)}, "
            f"named_colors={len(self._named)})"
        )

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def formats(self) -> Mapping[str, Converter]:
        return MappingProxyType(self._formats)

    @property
    def spaces(self) -> Mapping[str, StructuredConverter]:
        return MappingProxyType(self._spaces)

    @property
    def space_specs(self) -> Mapping[str, SpaceSpec]:
        return MappingProxyType(self._space_specs)

    @property
    def named_colors(self) -> Mapping[str, RGBA]:
        return MappingProxyType(self._named)

    @property
    def identifiers(self) -> list[str]:
        """Every format and space identifier, in dispatch order."""
        return [*self._formats, *self._spaces]

    @property
    def patterns(self) -> PatternLibrary:
        if self._patterns is None:
            simple = {name: converter.pattern for name, converter in self._formats.items()}
            simple.update((name, converter.pattern) for name, converter in self._spaces.items())
            self._patterns = PatternLibrary(simple)
        return self._patterns

    def get(self, name: str) -> Converter:
        """
        Look up a format or space converter.

        Raises:
            UnsupportedFormatError: nothing is registered under that name
        """
        key = name.lower()
        converter = self._formats.get(key) or self._spaces.get(key)
        if converter is None:
            raise UnsupportedFormatError(name, self.identifiers)
        return converter

    def structured_or_none(self, name: str) -> Optional[StructuredConverter]:
        key = name.lower()
        converter = self._formats.get(key) or self._spaces.get(key)
        return converter if isinstance(converter, StructuredConverter) else None

    def structured(self, name: str) -> StructuredConverter:
        """
        Look up a converter that exposes components.

        Raises:
            UnsupportedFormatError: unknown name
            InvalidArgumentError: the format is string-only (hex, named)
        """
        converter = self.get(name)
        if isinstance(converter, OpaqueConverter):
            raise InvalidArgumentError(
                f"Format '{name}' has no components; use the '{converter.model}' model instead"
            )
        return converter

    def match_named(self, xyza: XYZA) -> Optional[str]:
        """First named color exactly equal to xyza (rgb round trip and alpha)."""
        return match_named(self._named, xyza)

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def classify(self, text: str) -> tuple[str, str]:
        """
        Classify a color string.

        Relative syntax is checked first, then color-mix(), then simple
        grammars in dispatch order.

        Returns:
            (kind, model): kind is "relative", "color-mix" or "simple"; model
            is the target format or space identifier

        Raises:
            UnsupportedFormatError: no grammar matches
            InvalidFormatError: a meta-syntax matched but names an unknown model
        """
        text = text.strip()
        patterns = self.patterns

        match = patterns.relative.match(text)
        if match:
            return RELATIVE, resolve_relative_model(match, self)

        match = patterns.color_mix.match(text)
        if match:
            return COLOR_MIX, resolve_mix_model(match, self)

        name = patterns.match_simple(text)
        if name is None:
            raise UnsupportedFormatError(text, self.identifiers)
        return SIMPLE, name

    def parse_simple(self, text: str) -> XYZA:
        """
        Parse a non-relative, non-mix color string into the interchange space.

        Raises:
            UnsupportedFormatError: no simple grammar matches
        """
        text = text.strip()
        name = self.patterns.match_simple(text)
        if name is None:
            raise UnsupportedFormatError(text, self.identifiers)
        converter = self.get(name)
        if isinstance(converter, StructuredConverter):
            return converter.to_xyza(converter.parse(text))
        return converter.to_xyza(text)

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def _check_identifier(self, name: str) -> str:
        """Lowercase an identifier and validate its shape."""
        key = name.lower() if isinstance(name, str) else name
        if not isinstance(key, str) or not _IDENTIFIER_RE.match(key):
            raise InvalidArgumentError(
                f"Identifiers must start with a letter and contain only "
                f"letters, digits and hyphens, got {name!r}"
            )
        return key

    def register_named_color(self, name: str, rgba: Sequence[float]) -> None:
        """
        Add a named color.

        The name is normalized (spaces and hyphens removed, lowercased).

        Args:
            name: Color name, e.g. "Brand Blue"
            rgba: (r, g, b) with channels 0-255, optionally followed by alpha 0-1

        Raises:
            InvalidArgumentError: empty name or malformed rgba
            AlreadyRegisteredError: the normalized name exists
        """
        key = normalize_name(name)
        if not key:
            raise InvalidArgumentError("Named color must have a non-empty name")
        if len(rgba) not in (3, 4):
            raise InvalidArgumentError(f"Expected 3 or 4 values for {name!r}, got {len(rgba)}")
        if any(not 0 <= channel <= 255 for channel in rgba[:3]):
            raise InvalidArgumentError(f"RGB channels must be 0-255 for {name!r}, got {tuple(rgba)}")
        if len(rgba) == 4 and not 0 <= rgba[3] <= 1:
            raise InvalidArgumentError(f"Alpha must be 0-1 for {name!r}, got {rgba[3]}")
        if key in self._named:
            raise AlreadyRegisteredError(f"Named color '{key}' is already registered")

        self._named[key] = tuple(rgba)
        if "named" in self._formats:
            self._formats["named"] = build_named(self._named)
        self._patterns = None
        logger.debug("Registered named color '%s' = %s", key, tuple(rgba))

    def register_format(self, name: str, converter: Converter) -> None:
        """
        Add a format converter.

        Structured converters get the synthetic alpha component appended.
        An existing format under the same identifier is replaced in place,
        keeping its dispatch position. A space of that name is removed.

        Raises:
            InvalidArgumentError: bad identifier or converter type
            MissingComponentMetadataError: component indices are not 0..n-1
        """
        name = self._check_identifier(name)
        if isinstance(converter, StructuredConverter):
            indices = sorted(definition.index for definition in converter.components.values())
            if indices != list(range(len(indices))):
                raise MissingComponentMetadataError(
                    f"Components of '{name}' must use indices 0..{len(indices) - 1}, got {indices}"
                )
            converter = converter.with_alpha()
        elif not isinstance(converter, OpaqueConverter):
            raise InvalidArgumentError(
                f"Expected a StructuredConverter or OpaqueConverter, got {type(converter).__name__}"
            )

        self._spaces.pop(name, None)
        self._space_specs.pop(name, None)
        self._formats[name] = converter
        self._patterns = None
        logger.debug("Registered format '%s' (%s)", name, type(converter).__name__)

    def register_space(self, name: str, spec: SpaceSpec) -> None:
        """
        Add a device space built from a declarative spec.

        An existing space under the same identifier is replaced in place. A
        format of that name is removed.

        Raises:
            InvalidArgumentError: bad identifier or spec type
        """
        name = self._check_identifier(name)
        if not isinstance(spec, SpaceSpec):
            raise InvalidArgumentError(f"Expected a SpaceSpec, got {type(spec).__name__}")

        self._formats.pop(name, None)
        self._space_specs[name] = spec
        self._spaces[name] = build_space_converter(name, spec).with_alpha()
        self._patterns = None
        logger.debug("Registered space '%s' (%s)", name, spec.white_point.value)


# =============================================================================
# Default Registry
# =============================================================================

_default_registry: Optional[Registry] = None


def get_default_registry() -> Registry:
    """The process-wide registry used when no registry is passed explicitly."""
    global _default_registry
    if _default_registry is None:
        _default_registry = Registry()
    return _default_registry


def register_named_color(name: str, rgba: Sequence[float]) -> None:
    """Add a named color to the default registry."""
    get_default_registry().register_named_color(name, rgba)


def register_format(name: str, converter: Converter) -> None:
    """Add a format to the default registry."""
    get_default_registry().register_format(name, converter)


def register_space(name: str, spec: SpaceSpec) -> None:
    """Add a device space to the default registry."""
    get_default_registry().register_space(name, spec)
