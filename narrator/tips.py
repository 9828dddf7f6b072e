"""Pick the short lessons that fit the shape of an expression."""

import re
from dataclasses import dataclass

from narrator.messages import messages_for

_DIVIDE_BY_ZERO = re.compile(r"/\s*0(?![\d.])")


@dataclass(frozen=True)
class Tip:
    key: str
    text: str

    def as_dict(self) -> dict:
        return {"key": self.key, "text": self.text}


def _tip_keys(expr: str) -> list:
    has_add = "+" in expr
    has_sub = "-" in expr
    has_mul = "*" in expr
    has_div = "/" in expr

    keys = []
    if (has_mul or has_div) and (has_add or has_sub):
        keys.append("precedence")
    if "(" in expr:
        keys.append("brackets")
    if has_add:
        keys.append("add")
    if has_sub:
        keys.append("subtract")
    if has_mul:
        keys.append("multiply")
    if has_div:
        keys.append("divide")
    if "." in expr:
        keys.append("decimal")
    if _DIVIDE_BY_ZERO.search(expr):
        keys.append("divide_by_zero")
    return keys


def select_tips(expr: str, messages=None) -> list:
    """Return the tips for *expr* in fixed priority order."""
    messages = messages or messages_for()
    return [Tip(key, messages.text("tip." + key)) for key in _tip_keys(expr)]
