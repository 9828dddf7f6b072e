"""Step-by-step narration of arithmetic expressions for young learners.

Given an expression such as "2+3*4", explain how the answer is reached
following the usual order of operations (brackets, then multiply/divide,
then add/subtract) as a numbered list of short sentences.  All values
shown come from the host evaluator; the only arithmetic done here is the
left-to-right fold of expressions that use a single operator class.
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

import numpy as np

from narrator.evaluator import (
    CalculationError, EvaluationFailure, NonFiniteResult, Evaluator,
    check_characters, evaluate,
)
from narrator.extractor import extract_bracket_expressions, find_mul_div_sub_expressions
from narrator.formatting import format_expression, format_result
from narrator.messages import OPERATOR_SYMBOLS, Messages, messages_for
from narrator.tips import select_tips
from narrator.tokenizer import ADD_SUB, MUL_DIV, TokenKind, tokenize

logger = logging.getLogger(__name__)

PLACEHOLDER = "?"


class StepKind(Enum):
    NORMAL = "normal"
    RESULT = "result"
    ERROR = "error"


@dataclass(frozen=True)
class Step:
    ordinal: int
    text: str
    kind: StepKind = StepKind.NORMAL

    def as_dict(self) -> dict:
        return {"step_number": self.ordinal, "text": self.text, "kind": self.kind.value}


class _Steps:
    """Append-only step list that numbers its entries."""

    def __init__(self, messages: Messages):
        self._messages = messages
        self.items = []

    def add(self, key: str, kind: StepKind = StepKind.NORMAL, **slots) -> None:
        n = len(self.items) + 1
        self.items.append(Step(n, self._messages.step(n, key, **slots), kind))


# ── Evaluator wrapping ───────────────────────────────────────────────────

def _run_evaluator(evaluator: Evaluator, expr: str) -> float:
    """Call *evaluator* and normalise whatever goes wrong to CalculationError."""
    try:
        value = evaluator(expr)
    except CalculationError:
        raise
    except (ZeroDivisionError, OverflowError) as exc:
        raise NonFiniteResult(str(exc)) from exc
    except (ValueError, SyntaxError, TypeError) as exc:
        raise EvaluationFailure(str(exc)) from exc
    if not np.isfinite(value):
        raise NonFiniteResult(f"Result is not a finite number: {value}")
    return float(value)


def _sub_value(evaluator: Evaluator, expr: str):
    """Value of a bracket body or multiply/divide run, or "?" if it fails.

    One bad sub-expression must not hide an otherwise valid final answer.
    """
    try:
        return _run_evaluator(evaluator, expr)
    except CalculationError as exc:
        logger.info("Sub-expression %r could not be evaluated: %s", expr, exc)
        return PLACEHOLDER


# ── Operand grouping for bracket-free expressions ───────────────────────

def _group_operands(tokens):
    """Split bracket-free tokens into signed operands and binary operators.

    An operator seen where an operand is expected is a sign and is glued
    to the following number, so ``-5+3`` gives ``(["-5", "3"], ["+"])``.
    Returns None when the tokens do not alternate properly.
    """
    operands = []
    operators = []
    sign = ""
    expect_operand = True
    for tok in tokens:
        if tok.kind is TokenKind.NUMBER:
            if not expect_operand:
                return None
            operands.append(sign + tok.text)
            sign = ""
            expect_operand = False
        elif tok.kind is TokenKind.OPERATOR:
            if expect_operand:
                sign += tok.text
            else:
                operators.append(tok.text)
                expect_operand = True
        else:
            return None
    if expect_operand:
        return None
    return operands, operators


def _split_sign(operand: str):
    digits = operand.lstrip("+-")
    negative = operand[:len(operand) - len(digits)].count("-") % 2 == 1
    return negative, digits


def _operand_value(operand: str) -> float:
    # Negating the parsed literal mirrors the evaluator's unary minus.
    negative, digits = _split_sign(operand)
    value = float(digits)
    return -value if negative else value


def _operand_text(operand: str) -> str:
    """Typed text of a signed operand with its signs collapsed to one."""
    negative, digits = _split_sign(operand)
    return "-" + digits if negative else digits


def _apply(op: str, left: float, right: float) -> float:
    if op == "+":
        return left + right
    if op == "-":
        return left - right
    if op == "*":
        return left * right
    if right == 0:
        raise NonFiniteResult("Division by zero")
    return left / right


# ── Narration policies ──────────────────────────────────────────────────

def _narrate_single(steps: _Steps, number: str, final_result) -> None:
    steps.add("take_number", number=number)
    steps.add("result_is", StepKind.RESULT, result=format_result(final_result))


def _narrate_brackets(steps: _Steps, expr: str, evaluator: Evaluator) -> None:
    # Each group's value is taken from the evaluator as a whole, even when
    # the body mixes operators.
    for body in extract_bracket_expressions(expr):
        value = _sub_value(evaluator, body)
        steps.add("bracket_first", expr=format_expression(body),
                  value=format_result(value))


def _narrate_mixed(steps: _Steps, expr: str, tokens, final_result,
                   evaluator: Evaluator) -> None:
    for run in find_mul_div_sub_expressions(tokens):
        value = _sub_value(evaluator, run.text)
        steps.add("mul_div_first", expr=format_expression(run.text),
                  value=format_result(value))
    steps.add("then_add_sub", StepKind.RESULT, expr=format_expression(expr),
              result=format_result(final_result))


def _fold(operands: list, operators: list):
    """Yield ``(op, operand, previous, value)`` for each left-to-right step."""
    acc = _operand_value(operands[0])
    for op, operand in zip(operators, operands[1:]):
        new = _apply(op, acc, _operand_value(operand))
        yield op, operand, acc, new
        acc = new


def _narrate_fold(steps: _Steps, operands: list, operators: list,
                  messages: Messages) -> None:
    steps.add("take_number", number=_operand_text(operands[0]))
    for op, operand, previous, value in _fold(operands, operators):
        steps.add(
            "fold",
            op_name=messages.op_name(op),
            operand=_operand_text(operand),
            previous=format_result(previous),
            symbol=OPERATOR_SYMBOLS[op],
            value=format_result(value),
        )


def _final_step(steps: _Steps, expr: str, final_result) -> None:
    steps.add("final_result", StepKind.RESULT, expr=format_expression(expr),
              result=format_result(final_result))


def narrate(expr: str, final_result, messages: Messages = None,
            evaluator: Evaluator = evaluate) -> list:
    """Explain how *expr* evaluates to *final_result*, one Step per stage.

    The expression is classified once:

    1. a single number → "take number N", "result is N";
    2. brackets → one step per top-level group, then the final result;
    3. multiply/divide mixed with add/subtract → one step per
       multiply/divide run, then "then add/subtract" as the result step;
    4. a single operator class → fold left to right, one step per
       operator, then the final result.

    Call only after *final_result* has been obtained from *evaluator*.
    """
    messages = messages or messages_for()
    steps = _Steps(messages)
    tokens = tokenize(expr)

    if len(tokens) == 1:
        logger.debug("Narrating %r as a single value", expr)
        _narrate_single(steps, tokens[0].text, final_result)
        return steps.items

    if any(t.kind is TokenKind.OPEN_PAREN for t in tokens):
        logger.debug("Narrating %r bracket groups first", expr)
        _narrate_brackets(steps, expr, evaluator)
        _final_step(steps, expr, final_result)
        return steps.items

    grouped = _group_operands(tokens)
    if grouped is None:
        _final_step(steps, expr, final_result)
        return steps.items
    operands, operators = grouped

    if not operators:
        logger.debug("Narrating %r as a signed single value", expr)
        _narrate_single(steps, _operand_text(operands[0]), final_result)
        return steps.items

    used = set(operators)
    if used & set(MUL_DIV) and used & set(ADD_SUB):
        logger.debug("Narrating %r multiply/divide first", expr)
        _narrate_mixed(steps, expr, tokens, final_result, evaluator)
        return steps.items

    logger.debug("Narrating %r left to right", expr)
    _narrate_fold(steps, operands, operators, messages)
    _final_step(steps, expr, final_result)
    return steps.items


def error_steps(kind: str = None, messages: Messages = None) -> list:
    """The single step shown instead of a narration when calculation fails."""
    messages = messages or messages_for()
    return [Step(1, messages.error(kind), StepKind.ERROR)]


# ── Main public entry point ─────────────────────────────────────────────

def calculate(expr: str, language: str = None,
              evaluator: Evaluator = evaluate) -> dict:
    """
    Evaluate *expr* and explain it step by step.

    Never raises for a bad expression: an invalid character, a syntax
    error or a non-finite result all produce a single error step and
    ``status == "fail"``.

    Returns a dict with:
      - expression, display_expression
      - value (float or None), final_answer (formatted or None)
      - steps, tips (lists of dicts)
      - error (None or {kind, message})
      - summary (runtime_ms, total_steps, timestamp, language, status)
    """
    t_start = time.perf_counter()
    messages = messages_for(language)

    value = None
    error = None
    try:
        if not expr or not expr.strip():
            raise EvaluationFailure("Empty expression")
        check_characters(expr)
        value = _run_evaluator(evaluator, expr)
        steps = narrate(expr, value, messages, evaluator)
    except CalculationError as exc:
        logger.info("Could not calculate %r (%s): %s", expr, exc.kind, exc)
        value = None
        error = {"kind": exc.kind, "message": messages.error(exc.kind)}
        steps = error_steps(exc.kind, messages)

    tips = select_tips(expr, messages)
    runtime_ms = round((time.perf_counter() - t_start) * 1000, 2)

    return {
        "expression": expr,
        "display_expression": format_expression(expr),
        "value": value,
        "final_answer": None if value is None else format_result(value),
        "steps": [s.as_dict() for s in steps],
        "tips": [t.as_dict() for t in tips],
        "error": error,
        "summary": {
            "runtime_ms": runtime_ms,
            "total_steps": len(steps),
            "timestamp": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            "language": messages.language,
            "status": "fail" if error else "pass",
        },
    }
