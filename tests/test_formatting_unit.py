import pytest

from narrator.formatting import format_display, format_expression, format_number, format_result


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("(1+2)*3", "( 1 + 2 ) × 3"),
        ("2+3*4", "2 + 3 × 4"),
        ("10/2-1", "10 ÷ 2 − 1"),
        ("  1   +2 ", "1 + 2"),
        ("-5+3", "− 5 + 3"),
        ("((2))", "( ( 2 ) )"),
        ("", ""),
    ],
)
def test_format_expression(raw: str, expected: str) -> None:
    assert format_expression(raw) == expected


@pytest.mark.parametrize("raw", ["(1+2)*3", "12.5 - 3/4", "-(2*3)+1"])
def test_format_expression_is_idempotent(raw: str) -> None:
    once = format_expression(raw)
    assert format_expression(once) == once


@pytest.mark.parametrize(
    "value,expected",
    [
        (3.0, "3"),
        (12, "12"),
        (0.1 + 0.2, "0.3"),
        (2.5, "2.5"),
        (-0.5, "-0.5"),
        (1 / 3, "0.33333333"),
        (2 / 3, "0.66666667"),
        (2.0000000001, "2"),
        (1e-9, "0"),
        (1 / 512, "0.00195313"),
        (-1 / 512, "-0.00195313"),
        (-2.0, "-2"),
    ],
)
def test_format_result(value, expected: str) -> None:
    assert format_result(value) == expected


def test_format_result_passes_placeholder_through() -> None:
    assert format_result("?") == "?"


def test_format_display() -> None:
    assert format_display("3*4-1/2") == "3×4−1÷2"
    assert format_display("") == "0"


def test_format_number_keeps_full_precision() -> None:
    assert format_number(14.0) == "14"
    assert format_number(-2.0) == "-2"
    assert format_number(0.1 + 0.2) == "0.30000000000000004"


def test_format_number_never_uses_exponent() -> None:
    assert format_number(1 / 20000) == "0.00005"
    assert "e" not in format_number(1e-7)
