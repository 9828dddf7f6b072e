"""
Safe arithmetic evaluator used as the trusted source of every value.

No eval(), no ast module.  Handles + - * /, parentheses, unary signs and
decimal numbers, and computes with IEEE-754 doubles so the narrator's own
left-to-right folds agree with it exactly.
"""

import re
from typing import Callable, List, Optional

import numpy as np


# Only digits, operators, brackets, the decimal point and plain spaces.
_ALLOWED_CHARS = re.compile(r"^[0-9+\-*/(). ]+$")


class CalculationError(ValueError):
    """Base class for everything that stops a calculation."""
    kind = "error"


class InvalidCharacter(CalculationError):
    kind = "invalid_character"


class EvaluationFailure(CalculationError):
    kind = "evaluation_failure"


class NonFiniteResult(CalculationError):
    kind = "non_finite_result"


# Anything that maps an expression string to a float, raising
# CalculationError on failure.
Evaluator = Callable[[str], float]


def check_characters(expr: str) -> None:
    """Raise InvalidCharacter unless *expr* only uses keypad characters."""
    if not _ALLOWED_CHARS.fullmatch(expr):
        bad = sorted({ch for ch in expr if not _ALLOWED_CHARS.fullmatch(ch)})
        raise InvalidCharacter(
            f"Invalid character(s): {' '.join(repr(c) for c in bad)}"
        )


def evaluate(expr: str) -> float:
    """Evaluate *expr* and return its value as a float.

    Raises:
        InvalidCharacter: a character outside the keypad allow-list.
        EvaluationFailure: empty input or malformed syntax such as ``"5+"``.
        NonFiniteResult: division by zero or overflow to infinity.
    """
    if not expr or not expr.strip():
        raise EvaluationFailure("Empty expression")
    check_characters(expr)

    parser = _Parser(_tokenize(expr))
    value = parser.parse_expression()
    if parser.pos < len(parser.tokens):
        raise EvaluationFailure(
            f"Unexpected token after end of expression: "
            f"{parser.tokens[parser.pos]!r}"
        )
    if not np.isfinite(value):
        raise NonFiniteResult(f"Result is not a finite number: {value}")
    return value


def _tokenize(expr: str) -> List[str]:
    """Tokenize for parsing; unlike the display tokenizer, a space between
    two numbers is kept significant so ``"1 2"`` is rejected."""
    tokens = []
    i = 0
    while i < len(expr):
        ch = expr[i]
        if ch == " ":
            i += 1
            continue
        if ch.isdigit() or ch == ".":
            j = i
            while j < len(expr) and (expr[j].isdigit() or expr[j] == "."):
                j += 1
            tokens.append(expr[i:j])
            i = j
        else:
            tokens.append(ch)
            i += 1
    return tokens


class _Parser:
    """Recursive descent parser.

    Grammar:
        expression := term (('+' | '-') term)*
        term       := factor (('*' | '/') factor)*
        factor     := ('+' | '-') factor | NUMBER | '(' expression ')'
    """

    def __init__(self, tokens: List[str]):
        self.tokens = tokens
        self.pos = 0

    def _peek(self) -> Optional[str]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def _consume(self) -> str:
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def parse_expression(self) -> float:
        result = self._parse_term()
        while self._peek() in ("+", "-"):
            op = self._consume()
            right = self._parse_term()
            result = result + right if op == "+" else result - right
        return result

    def _parse_term(self) -> float:
        result = self._parse_factor()
        while self._peek() in ("*", "/"):
            op = self._consume()
            right = self._parse_factor()
            if op == "*":
                result = result * right
            else:
                if right == 0:
                    raise NonFiniteResult("Division by zero")
                result = result / right
        return result

    def _parse_factor(self) -> float:
        token = self._peek()
        if token is None:
            raise EvaluationFailure("Unexpected end of expression")

        if token in ("+", "-"):
            op = self._consume()
            value = self._parse_factor()
            return value if op == "+" else -value

        if token == "(":
            self._consume()
            value = self.parse_expression()
            if self._peek() != ")":
                raise EvaluationFailure("Unmatched opening parenthesis")
            self._consume()
            return value

        if token == ")":
            raise EvaluationFailure("Unmatched closing parenthesis")

        if token[0].isdigit() or token[0] == ".":
            self._consume()
            try:
                return float(token)
            except ValueError:
                raise EvaluationFailure(f"Malformed number: {token!r}") from None

        raise EvaluationFailure(f"Unexpected token: {token!r}")
