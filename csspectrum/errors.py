# Copyright (c) 2026 Csspectrum
# SPDX-License-Identifier: MIT

"""
Exception hierarchy.

Every error raised by csspectrum derives from ColorError, which is itself a
ValueError so callers that only care about "bad color input" can catch that.
"""

from __future__ import annotations

from typing import Iterable


class ColorError(ValueError):
    """Base class for all csspectrum errors."""


class UnsupportedFormatError(ColorError):
    """No registered grammar recognizes the input string."""

    def __init__(self, value: str, supported: Iterable[str] = ()):
        self.value = value
        self.supported = tuple(supported)
        message = f"Unsupported color format: {value}"
        if self.supported:
            message += "\nSupported formats: " + ", ".join(self.supported)
        super().__init__(message)


class InvalidFormatError(ColorError):
    """A grammar matched but the content is structurally invalid."""


class InvalidArgumentError(ColorError):
    """A method argument is outside its contract."""


class AlreadyRegisteredError(ColorError):
    """A named color, format or space with that identifier already exists."""


class NoNamedMatchError(ColorError):
    """Serialization to a named color found no exact table entry."""


class MissingComponentMetadataError(ColorError):
    """A converter produced a component it never declared."""
