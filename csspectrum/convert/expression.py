# Copyright (c) 2026 Csspectrum
# SPDX-License-Identifier: MIT

"""
calc() arithmetic for relative colors.

Supports + - * /, parentheses, numbers, percentages (as fractions, 50% -> 0.5)
and identifiers resolved through a caller-supplied lookup. Evaluation is a
shunting-yard conversion to postfix followed by a stack machine. Division
follows IEEE 754 (x/0 -> ±inf, 0/0 -> nan). There is no unary minus.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

import numpy as np

from csspectrum.errors import InvalidFormatError

_TOKEN_RE = re.compile(
    r"\s*(?:(?P<number>(?:\d+(?:\.\d+)?|\.\d+)%?)|(?P<ident>[a-z_][a-z0-9_]*)|(?P<op>[-+*/()]))",
    re.IGNORECASE,
)

_PRECEDENCE = {"+": 1, "-": 1, "*": 2, "/": 2}


@dataclass(frozen=True, slots=True)
class Token:
    kind: str  # "number", "ident" or "op"
    text: str


def tokenize(expression: str) -> list[Token]:
    """Split an expression into tokens; unknown characters are an error."""
    tokens: list[Token] = []
    position = 0
    expression = expression.rstrip()
    while position < len(expression):
        match = _TOKEN_RE.match(expression, position)
        if match is None or match.end() == position:
            raise InvalidFormatError(
                f"Unexpected character in calc(): {expression[position:].strip()!r}"
            )
        kind = match.lastgroup
        tokens.append(Token(kind, match.group(kind)))
        position = match.end()
    return tokens


def to_postfix(tokens: list[Token]) -> list[Token]:
    """Shunting-yard: infix tokens to postfix, all operators left-associative."""
    output: list[Token] = []
    stack: list[Token] = []

    for token in tokens:
        if token.kind != "op":
            output.append(token)
        elif token.text == "(":
            stack.append(token)
        elif token.text == ")":
            while stack and stack[-1].text != "(":
                output.append(stack.pop())
            if not stack:
                raise InvalidFormatError("Unbalanced parentheses in calc()")
            stack.pop()
        else:
            precedence = _PRECEDENCE[token.text]
            while stack and _PRECEDENCE.get(stack[-1].text, 0) >= precedence:
                output.append(stack.pop())
            stack.append(token)

    while stack:
        token = stack.pop()
        if token.text == "(":
            raise InvalidFormatError("Unbalanced parentheses in calc()")
        output.append(token)

    return output


def _apply(operator: str, left: float, right: float) -> float:
    if operator == "+":
        return left + right
    if operator == "-":
        return left - right
    if operator == "*":
        return left * right
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(left) / np.float64(right))


def evaluate_postfix(postfix: list[Token], resolve: Callable[[str], float]) -> float:
    stack: list[float] = []
    for token in postfix:
        if token.kind == "number":
            if token.text.endswith("%"):
                stack.append(float(token.text[:-1]) / 100.0)
            else:
                stack.append(float(token.text))
        elif token.kind == "ident":
            stack.append(float(resolve(token.text)))
        else:
            if len(stack) < 2:
                raise InvalidFormatError(f"Operator '{token.text}' is missing an operand")
            right = stack.pop()
            left = stack.pop()
            stack.append(_apply(token.text, left, right))

    if len(stack) != 1:
        raise InvalidFormatError("Malformed calc() expression")
    return stack[0]


def evaluate(expression: str, resolve: Callable[[str], float]) -> float:
    """
    Evaluate an arithmetic expression.

    Args:
        expression: Either a bare expression or a full "calc(...)" call
        resolve: Maps identifiers (component names) to numbers

    Returns:
        The result as a float (may be inf or nan)
    """
    body = expression.strip()
    if body.lower().startswith("calc(") and body.endswith(")"):
        body = body[5:-1]
    tokens = tokenize(body)
    if not tokens:
        raise InvalidFormatError("Empty calc() expression")
    return evaluate_postfix(to_postfix(tokens), resolve)
