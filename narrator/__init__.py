"""Arithmetic step narrator: tokenizing, precedence extraction and explanations."""

from narrator.engine import Step, StepKind, calculate, error_steps, narrate
from narrator.evaluator import (
    CalculationError, EvaluationFailure, InvalidCharacter, NonFiniteResult, evaluate,
)
from narrator.extractor import extract_bracket_expressions, find_mul_div_sub_expressions
from narrator.formatting import format_display, format_expression, format_number, format_result
from narrator.messages import available_languages, messages_for
from narrator.tips import Tip, select_tips
from narrator.tokenizer import Token, TokenKind, tokenize

__all__ = [
    "calculate", "narrate", "error_steps", "Step", "StepKind",
    "evaluate", "CalculationError", "InvalidCharacter", "EvaluationFailure",
    "NonFiniteResult",
    "extract_bracket_expressions", "find_mul_div_sub_expressions",
    "format_display", "format_expression", "format_number", "format_result",
    "available_languages", "messages_for",
    "Tip", "select_tips",
    "Token", "TokenKind", "tokenize",
]
