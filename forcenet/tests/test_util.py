from decimal import Decimal

from forcenet.util import coerce_number, is_blank, unwrap_cell


def test_coerce_number_parses_numbers_and_numeric_strings() -> None:
    assert coerce_number(3) == 3.0
    assert coerce_number(2.5) == 2.5
    assert coerce_number(Decimal("1.25")) == 1.25
    assert coerce_number(" 7 ") == 7.0
    assert coerce_number("-1e2") == -100.0
    assert coerce_number(True) == 1.0


def test_coerce_number_falls_back_to_default() -> None:
    assert coerce_number(None) == 0.0
    assert coerce_number("") == 0.0
    assert coerce_number("abc") == 0.0
    assert coerce_number("nan") == 0.0
    assert coerce_number(float("inf")) == 0.0
    assert coerce_number({"a": 1}) == 0.0
    assert coerce_number("abc", default=4.0) == 4.0


def test_unwrap_cell() -> None:
    assert unwrap_cell(["A"]) == "A"
    assert unwrap_cell([["A"]]) == "A"
    assert unwrap_cell(["A", "B"]) == ("A", "B")
    assert unwrap_cell("A") == "A"
    assert unwrap_cell(None) is None


def test_is_blank() -> None:
    assert is_blank(None)
    assert is_blank("  ")
    assert not is_blank("x")
    assert not is_blank(0)
