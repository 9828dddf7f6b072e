import pytest

from calculator import Calculator, storage
from narrator.evaluator import InvalidCharacter


@pytest.fixture
def recorded() -> list:
    return []


@pytest.fixture
def calc(recorded) -> Calculator:
    return Calculator(language="en", history=lambda expr, value: recorded.append((expr, value)))


def test_submit_success_replaces_buffer_and_records_history(calc, recorded) -> None:
    calc.append("2+3*4")
    result = calc.submit()

    assert result["final_answer"] == "14"
    assert calc.expression == "14"
    assert calc.display == "14"
    assert recorded == [("2+3*4", 14.0)]
    assert calc.steps == result["steps"]
    assert [t["key"] for t in calc.tips] == ["precedence", "add", "multiply"]


def test_result_keeps_full_precision_in_buffer(calc) -> None:
    calc.append("0.1+0.2")
    result = calc.submit()
    assert result["final_answer"] == "0.3"
    assert calc.expression == "0.30000000000000004"


def test_keep_calculating_from_result(calc) -> None:
    calc.append("2*3")
    calc.submit()
    calc.append("+1")
    assert calc.submit()["final_answer"] == "7"


def test_keep_calculating_from_tiny_result(calc) -> None:
    calc.append("1/20000")
    calc.submit()
    assert calc.expression == "0.00005"
    calc.append("+1")
    result = calc.submit()
    assert result["error"] is None
    assert result["final_answer"] == "1.00005"


def test_division_by_zero_leaves_buffer_untouched(calc, recorded) -> None:
    calc.append("5/0")
    result = calc.submit()

    assert len(result["steps"]) == 1
    assert result["steps"][0]["kind"] == "error"
    assert calc.expression == "5/0"
    assert recorded == []


def test_append_rejects_non_keypad_characters(calc) -> None:
    calc.append("1+")
    with pytest.raises(InvalidCharacter):
        calc.append("x")
    assert calc.expression == "1+"


def test_backspace_and_clear(calc) -> None:
    calc.append("12+")
    calc.backspace()
    assert calc.expression == "12"
    calc.backspace()
    calc.backspace()
    calc.backspace()
    assert calc.expression == ""

    calc.append("1+1")
    calc.submit()
    calc.clear()
    assert calc.expression == ""
    assert calc.steps == []
    assert calc.tips == []


def test_submit_empty_buffer_does_nothing(calc) -> None:
    assert calc.submit() is None


def test_display_uses_keypad_glyphs(calc) -> None:
    calc.append("3*4-1/2")
    assert calc.display == "3×4−1÷2"


def test_defaults_come_from_storage(tmp_db) -> None:
    storage.save_settings({"language": "en", "show_tips": True})
    calc = Calculator()
    assert calc.language == "en"

    calc.append("1+1")
    calc.submit()
    assert storage.get_history()[0]["expression"] == "1+1"
