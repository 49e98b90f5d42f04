# Copyright (c) 2026 Csspectrum
# SPDX-License-Identifier: MIT

"""Tests for calc() evaluation."""

import math

import pytest

from csspectrum.convert.expression import Token, evaluate, to_postfix, tokenize
from csspectrum.errors import InvalidFormatError


def no_names(name):
    raise AssertionError(f"unexpected identifier {name}")


class TestTokenize:

    def test_tokens(self):
        assert tokenize("h+10%") == [Token("ident", "h"), Token("op", "+"), Token("number", "10%")]

    def test_whitespace(self):
        assert [t.text for t in tokenize("  ( 1 * .5 ) ")] == ["(", "1", "*", ".5", ")"]

    def test_bad_character(self):
        with pytest.raises(InvalidFormatError, match="Unexpected character"):
            tokenize("1 $ 2")


class TestPostfix:

    def test_precedence(self):
        postfix = to_postfix(tokenize("1 + 2 * 3"))
        assert [t.text for t in postfix] == ["1", "2", "3", "*", "+"]

    def test_left_associative(self):
        postfix = to_postfix(tokenize("8 - 2 - 1"))
        assert [t.text for t in postfix] == ["8", "2", "-", "1", "-"]

    def test_unbalanced(self):
        with pytest.raises(InvalidFormatError, match="Unbalanced"):
            to_postfix(tokenize("(1 + 2"))
        with pytest.raises(InvalidFormatError, match="Unbalanced"):
            to_postfix(tokenize("1 + 2)"))


class TestEvaluate:

    @pytest.mark.parametrize("expression,expected", [
        ("calc(1 + 2 * 3)", 7.0),
        ("(1 + 2) * 3", 9.0),
        ("10 - 4 - 3", 3.0),
        ("8 / 2 / 2", 2.0),
        ("50%", 0.5),
        ("calc((2 + (3 * 4)) / 7)", 2.0),
    ])
    def test_arithmetic(self, expression, expected):
        assert evaluate(expression, no_names) == pytest.approx(expected)

    def test_identifiers(self):
        values = {"h": 30.0, "s": 50.0}
        assert evaluate("calc(h + s / 2)", values.__getitem__) == pytest.approx(55.0)

    def test_percent_of_identifier(self):
        assert evaluate("l * 50%", {"l": 80.0}.__getitem__) == pytest.approx(40.0)

    def test_division_by_zero(self):
        assert evaluate("1 / 0", no_names) == math.inf
        assert evaluate("0 - 1 / 0", no_names) == -math.inf
        assert math.isnan(evaluate("0 / 0", no_names))

    def test_missing_operand(self):
        with pytest.raises(InvalidFormatError, match="missing an operand"):
            evaluate("1 +", no_names)

    def test_malformed(self):
        with pytest.raises(InvalidFormatError, match="Malformed"):
            evaluate("1 2", no_names)

    def test_empty(self):
        with pytest.raises(InvalidFormatError, match="Empty"):
            evaluate("calc()", no_names)
