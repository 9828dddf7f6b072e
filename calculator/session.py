"""
KidCalc: Keypad session.

Owns the single current-expression buffer that the keypad edits and
hands it to the narrator on submit.
"""

from typing import Callable, Optional

from narrator import calculate, evaluate
from narrator.evaluator import InvalidCharacter
from narrator.formatting import format_display, format_number

KEYPAD_CHARS = "0123456789.+-*/() "


class Calculator:
    """One child's calculator: buffer, last steps and last tips."""

    def __init__(self, language: Optional[str] = None, evaluator=evaluate,
                 history: Optional[Callable[[str, float], object]] = None):
        if language is None or history is None:
            from calculator import storage
            if language is None:
                language = storage.get_settings()["language"]
            if history is None:
                history = storage.add_history
        self.language = language
        self.expression = ""
        self.steps = []
        self.tips = []
        self._evaluator = evaluator
        self._history = history

    @property
    def display(self) -> str:
        return format_display(self.expression)

    def append(self, ch: str) -> None:
        """Add one or more keypad characters to the buffer."""
        bad = [c for c in ch if c not in KEYPAD_CHARS]
        if bad:
            raise InvalidCharacter(f"Not a keypad key: {''.join(bad)!r}")
        self.expression += ch

    def backspace(self) -> None:
        self.expression = self.expression[:-1]

    def clear(self) -> None:
        self.expression = ""
        self.steps = []
        self.tips = []

    def submit(self) -> Optional[dict]:
        """Calculate the buffer.

        On success the result is recorded in history and replaces the
        buffer so the child can keep going; on failure the buffer is left
        as typed.  Returns the calculation dict, or None for an empty buffer.
        """
        if self.expression == "":
            return None
        result = calculate(self.expression, self.language, self._evaluator)
        self.steps = result["steps"]
        self.tips = result["tips"]
        if result["error"] is None:
            self._history(self.expression, result["value"])
            self.expression = format_number(result["value"])
        return result
