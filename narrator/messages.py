"""
Per-language message catalog.

Every sentence the narrator produces comes from here: a table keyed by
language tag, then by message key.  Values are ``str.format`` templates
with named slots.
"""

import logging
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "zh-TW"

CATALOGS = {
    "zh-TW": {
        "step": "第{n}步：{text}",
        "take_number": "取數字 {number}",
        "result_is": "結果就是 {result}",
        "bracket_first": "先算括號裡面：{expr} = {value}",
        "mul_div_first": "先算乘除：{expr} = {value}",
        "then_add_sub": "再算加減：{expr} = {result}",
        "fold": "{op_name}數字 {operand} → {previous} {symbol} {operand} = {value}",
        "final_result": "計算結果 {expr} = {result}",
        "op.+": "加上",
        "op.-": "減去",
        "op.*": "乘以",
        "op./": "除以",
        "error": "算式有誤，請重新輸入！",
        "error.invalid_character": "算式裡有不認識的符號，請重新輸入！",
        "error.evaluation_failure": "算式有誤，請重新輸入！",
        "error.non_finite_result": "這個算式算不出答案（不能除以 0），請重新輸入！",
        "tip.precedence": "先乘除、後加減：有 × 或 ÷ 的地方要先算喔！",
        "tip.brackets": "括號裡面的要最先算！",
        "tip.add": "加法：把兩個數合起來。",
        "tip.subtract": "減法：從一個數拿走另一個數。",
        "tip.multiply": "乘法：好幾個一樣的數加起來。",
        "tip.divide": "除法：把一個數平均分成好幾份。",
        "tip.decimal": "小數點要對齊再計算喔！",
        "tip.divide_by_zero": "小心！任何數都不能除以 0。",
    },
    "en": {
        "step": "Step {n}: {text}",
        "take_number": "Take the number {number}",
        "result_is": "The result is {result}",
        "bracket_first": "Brackets first: {expr} = {value}",
        "mul_div_first": "Multiply/divide first: {expr} = {value}",
        "then_add_sub": "Then add/subtract: {expr} = {result}",
        "fold": "{op_name} {operand} → {previous} {symbol} {operand} = {value}",
        "final_result": "Result: {expr} = {result}",
        "op.+": "Add",
        "op.-": "Subtract",
        "op.*": "Multiply by",
        "op./": "Divide by",
        "error": "Something is wrong with this expression, please try again!",
        "error.invalid_character": "This expression has a symbol I don't know, please try again!",
        "error.evaluation_failure": "Something is wrong with this expression, please try again!",
        "error.non_finite_result": "This has no answer (you can't divide by 0), please try again!",
        "tip.precedence": "Multiply and divide before you add and subtract!",
        "tip.brackets": "Work out what is inside the brackets first!",
        "tip.add": "Adding puts two numbers together.",
        "tip.subtract": "Subtracting takes one number away from another.",
        "tip.multiply": "Multiplying adds the same number several times.",
        "tip.divide": "Dividing shares a number out into equal parts.",
        "tip.decimal": "Line up the decimal points before you calculate!",
        "tip.divide_by_zero": "Careful! No number can be divided by 0.",
    },
}

# Symbols shown in narration, matching the formatted expression.
OPERATOR_SYMBOLS = {"+": "+", "-": "−", "*": "×", "/": "÷"}


class Messages:
    """Template lookup for one language."""

    def __init__(self, language: str, catalog: Mapping[str, str]):
        self.language = language
        self._catalog = catalog

    def text(self, key: str, **slots) -> str:
        return self._catalog[key].format(**slots)

    def step(self, n: int, key: str, **slots) -> str:
        """Render *key* and prefix it with the ordinal of step *n*."""
        return self.text("step", n=n, text=self.text(key, **slots))

    def op_name(self, symbol: str) -> str:
        return self._catalog["op." + symbol]

    def error(self, kind: Optional[str] = None) -> str:
        key = f"error.{kind}"
        if kind and key in self._catalog:
            return self._catalog[key]
        return self._catalog["error"]


def available_languages(catalogs: Mapping = CATALOGS) -> list:
    return sorted(catalogs)


def messages_for(language: Optional[str] = None,
                 catalogs: Mapping = CATALOGS) -> Messages:
    """Return the Messages for *language*, falling back to the default."""
    if language is None:
        language = DEFAULT_LANGUAGE
    if language not in catalogs:
        logger.warning("Unknown language %r, using %r", language, DEFAULT_LANGUAGE)
        language = DEFAULT_LANGUAGE
    return Messages(language, catalogs[language])
