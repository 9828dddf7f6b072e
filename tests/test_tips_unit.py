import pytest

from narrator.messages import messages_for
from narrator.tips import Tip, select_tips


@pytest.mark.parametrize(
    "expr,expected",
    [
        ("2+3*4", ["precedence", "add", "multiply"]),
        ("(1+2)*3", ["precedence", "brackets", "add", "multiply"]),
        ("10-4/2", ["precedence", "subtract", "divide"]),
        ("1.5-0.5", ["subtract", "decimal"]),
        ("8/4", ["divide"]),
        ("5/0", ["divide", "divide_by_zero"]),
        ("5 / 0 + 1", ["precedence", "add", "divide", "divide_by_zero"]),
        ("5/0.5", ["divide", "decimal"]),
        ("5/05", ["divide"]),
        ("7", []),
        ("", []),
    ],
)
def test_tip_selection_order(expr: str, expected: list) -> None:
    assert [t.key for t in select_tips(expr)] == expected


def test_tip_texts_come_from_the_catalog() -> None:
    tips = select_tips("1+1", messages_for("en"))
    assert tips == [Tip("add", "Adding puts two numbers together.")]
    assert tips[0].as_dict() == {"key": "add", "text": "Adding puts two numbers together."}


def test_default_language_tips() -> None:
    assert select_tips("(2)")[0].text == "括號裡面的要最先算！"
