# Copyright (c) 2026 Csspectrum
# SPDX-License-Identifier: MIT

"""
Color grammars.

Every simple format and device space owns one anchored, case-insensitive
pattern. Two composite grammars are derived from the full set:

    <func>(from <any simple color> [<space>] c1 c2 c3 [/ alpha])
    color-mix(in <model> [<method> hue], <color> [p%], <color> [p%])

Composites are rebuilt whenever the registered set changes.
"""

from __future__ import annotations

import re
from typing import Mapping, Optional


# =============================================================================
# Grammar Fragments
# =============================================================================

PERCENTAGE = r"(?:(?:100(?:\.0+)?|(?:\d{1,2}(?:\.\d+)?|\.[0-9]+))%)"
RGB_NUMBER = r"(?:25[0-5]|2[0-4]\d|1\d\d|\d{1,2})(?:\.\d+)?"
RGB_COMPONENT = rf"(?:{RGB_NUMBER}|{PERCENTAGE})"
HUE = r"[-+]?(?:\d+(?:\.\d+)?|\.\d+)(?:deg)?"
ALPHA_NUMBER = r"(?:0|1|0?\.\d+)"
ALPHA = rf"(?:(?:{ALPHA_NUMBER})|(?:{PERCENTAGE}))"
LAB_COMPONENT = r"-?(?:\d+(?:\.\d+)?|\.\d+)"
LCH_CHROMA = r"(?:\d+(?:\.\d+)?|\.\d+)"
LCH_LIGHTNESS = rf"{PERCENTAGE}|{LAB_COMPONENT}"
SPACE_COMPONENT = r"[\d.]+%?"

_SEPARATOR = r"\s*(?:,\s*|\s+)"
_ALPHA_TAIL = rf"(?:\s*(?:,\s*|\s+|\/\s*)({ALPHA}))?\s*\)$"

# Relative-color component: identifier, calc() with one level of nested
# parentheses, or a number with an optional percent sign or unit.
RELATIVE_COMPONENT = r"(?:[a-z]+|calc\((?:[^()]|\([^()]*\))*\)|[+-]?\d*\.?\d+(?:%|[a-z]+)?)"

_IDENTIFIER = r"[a-z][a-z0-9-]*"
_MIX_WEIGHT = r"[+-]?(?:\d+(?:\.\d+)?|\.\d+)%"


def functional_pattern(prefix: str, first: str, second: str, third: str) -> re.Pattern[str]:
    """
    Build the pattern of a CSS functional notation with three components
    and an optional alpha, accepting both comma and space separators.

    Args:
        prefix: Function name regex, e.g. "rgba?"
        first, second, third: Regexes for the three components

    Returns:
        Compiled pattern whose groups 1-4 are the components and alpha
    """
    return re.compile(
        rf"^{prefix}\(\s*({first}){_SEPARATOR}({second}){_SEPARATOR}({third}){_ALPHA_TAIL}",
        re.IGNORECASE,
    )


def space_pattern(name: str) -> re.Pattern[str]:
    """Pattern for color(<name> c1 c2 c3 [/ alpha])."""
    return re.compile(
        rf"^color\(\s*{re.escape(name)}\s+({SPACE_COMPONENT})\s+({SPACE_COMPONENT})"
        rf"\s+({SPACE_COMPONENT})(?:\s*\/\s*({SPACE_COMPONENT}))?\s*\)$",
        re.IGNORECASE,
    )


def named_pattern(names) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(name) for name in names)
    return re.compile(rf"^\b({alternatives})\b$", re.IGNORECASE)


HEX_PATTERN = re.compile(r"^#(?:[A-Fa-f0-9]{3,4}|[A-Fa-f0-9]{6}|[A-Fa-f0-9]{8})\b$")


def strip_anchors(pattern: re.Pattern[str]) -> str:
    """Remove a leading ^ and trailing $ so the pattern can be embedded."""
    source = pattern.pattern
    if source.startswith("^"):
        source = source[1:]
    if source.endswith("$") and not source.endswith("\\$"):
        source = source[:-1]
    return source


# =============================================================================
# Pattern Library
# =============================================================================


class PatternLibrary:
    """
    Simple patterns in dispatch order plus the composites built from them.

    Attributes:
        simple: Identifier -> anchored pattern, in registration order
        any_color: Unanchored alternation of every simple pattern
        relative: Relative-color grammar
        color_mix: color-mix() grammar
    """

    def __init__(self, simple: Mapping[str, re.Pattern[str]]):
        self.simple = dict(simple)
        self.any_color = "|".join(
            f"(?:{strip_anchors(pattern)})" for pattern in self.simple.values()
        )
        any_color = self.any_color or r"(?!)"
        components = rf"\s+{RELATIVE_COMPONENT}(?:\s+{RELATIVE_COMPONENT}){{2,3}}"

        self.relative = re.compile(
            rf"^(?:color\(\s*from\s+(?P<space_base>{any_color})\s+(?P<space>{_IDENTIFIER})"
            rf"|(?P<func>{_IDENTIFIER})\(\s*from\s+(?P<base>{any_color}))"
            rf"(?P<components>{components})"
            rf"(?:\s*/\s*(?P<alpha>{RELATIVE_COMPONENT}))?\s*\)$",
            re.IGNORECASE,
        )
        self.color_mix = re.compile(
            rf"^color-mix\(\s*in\s+(?P<model>{_IDENTIFIER})"
            rf"(?:\s+(?P<hue_method>{_IDENTIFIER})\s+hue)?"
            rf"\s*,\s*(?P<first>{any_color})(?:\s+(?P<first_weight>{_MIX_WEIGHT}))?"
            rf"\s*,\s*(?P<second>{any_color})(?:\s+(?P<second_weight>{_MIX_WEIGHT}))?"
            rf"\s*\)$",
            re.IGNORECASE,
        )

    def match_simple(self, text: str) -> Optional[str]:
        """First identifier whose pattern matches, or None."""
        for name, pattern in self.simple.items():
            if pattern.match(text):
                return name
        return None

    def is_relative(self, text: str) -> bool:
        return self.relative.match(text) is not None

    def is_color_mix(self, text: str) -> bool:
        return self.color_mix.match(text) is not None
