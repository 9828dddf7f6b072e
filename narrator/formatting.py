"""Display helpers for expressions and numeric results."""

import re
from decimal import ROUND_HALF_UP, Decimal

import numpy as np

# Keypad glyphs shown to the child.  Order matters for format_expression:
# each rule must not create characters a later rule would match.
_SPACED = (
    ("*", " × "),
    ("/", " ÷ "),
    ("+", " + "),
    ("-", " − "),
    ("(", "( "),
    (")", " )"),
)

_DISPLAY = str.maketrans({"*": "×", "/": "÷", "-": "−"})

RESULT_DECIMALS = 8
_RESULT_QUANTUM = Decimal(1).scaleb(-RESULT_DECIMALS)


def format_expression(expr: str) -> str:
    """Return *expr* with one space around every operator and bracket.

    ``"(1+2)*3"`` → ``"( 1 + 2 ) × 3"``.  Works on the raw text, not on
    tokens, so an already formatted string comes back unchanged.
    """
    s = expr
    for symbol, spaced in _SPACED:
        s = s.replace(symbol, spaced)
    return re.sub(r"\s+", " ", s).strip()


def format_display(expr: str) -> str:
    """Keypad display form of the live buffer (``"0"`` when empty)."""
    return expr.translate(_DISPLAY) or "0"


def format_result(value) -> str:
    """Format a numeric result for display.

    - Whole numbers have no decimal point (``3.0`` → ``3``).
    - Anything else is rounded to 8 decimals, ties away from zero, with
      trailing zeros stripped, so ``0.1 + 0.2`` shows as ``0.3``.
    - Strings (the ``"?"`` placeholder) pass through unchanged.
    """
    if isinstance(value, str):
        return value
    value = float(value)
    if value.is_integer():
        return str(int(value))
    # Decimal(value) is the exact binary value, so ties are real ties.
    rounded = Decimal(value).quantize(_RESULT_QUANTUM, rounding=ROUND_HALF_UP)
    if rounded == rounded.to_integral_value():
        return str(int(rounded))
    return format(rounded, "f").rstrip("0").rstrip(".")


def format_number(value: float) -> str:
    """Unrounded text of *value*, used when a result goes back into the buffer.

    Always positional (``0.00005``, never ``5e-05``) so the buffer stays
    within the keypad characters.
    """
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return np.format_float_positional(value, trim="-")
