"""Keypad session and local storage around the narrator."""

from calculator.session import Calculator

__all__ = ["Calculator"]
