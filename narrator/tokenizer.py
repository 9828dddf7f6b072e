"""Split a flat arithmetic string into number, operator and bracket tokens."""

from dataclasses import dataclass
from enum import Enum

OPERATORS = "+-*/"
MUL_DIV = "*/"
ADD_SUB = "+-"

_NUMBER_CHARS = "0123456789."


class TokenKind(Enum):
    NUMBER = "number"
    OPERATOR = "operator"
    OPEN_PAREN = "open_paren"
    CLOSE_PAREN = "close_paren"


@dataclass(frozen=True)
class Token:
    """One atomic unit of an expression.

    Numbers keep the exact text the child typed (``"12.50"`` stays
    ``"12.50"``) so they can be shown back unchanged.
    """
    kind: TokenKind
    text: str

    def __str__(self) -> str:
        return self.text

    @property
    def is_number(self) -> bool:
        return self.kind is TokenKind.NUMBER

    @property
    def is_operator(self) -> bool:
        return self.kind is TokenKind.OPERATOR


def _symbol_token(ch: str) -> Token:
    if ch == "(":
        return Token(TokenKind.OPEN_PAREN, ch)
    if ch == ")":
        return Token(TokenKind.CLOSE_PAREN, ch)
    return Token(TokenKind.OPERATOR, ch)


def tokenize(expr: str) -> list:
    """Scan *expr* left to right and return its tokens.

    Consecutive digits and dots form one number.  ``+ - * / ( )`` are
    emitted as single tokens.  Anything else (spaces) is dropped and
    ends the number being read, so ``"1 2"`` gives two numbers.
    A leading ``-`` is a plain operator token; no sign is inferred.
    """
    tokens = []
    current = ""
    for ch in expr:
        if ch in _NUMBER_CHARS:
            current += ch
            continue
        if current:
            tokens.append(Token(TokenKind.NUMBER, current))
            current = ""
        if ch in OPERATORS or ch in "()":
            tokens.append(_symbol_token(ch))
    if current:
        tokens.append(Token(TokenKind.NUMBER, current))
    return tokens


def token_texts(tokens) -> list:
    return [t.text for t in tokens]
