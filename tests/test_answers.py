from fractions import Fraction

import pytest

from mathquest.problems.answers import check_answer, to_number


@pytest.mark.parametrize("expected,given", [
    ("1250", " 1250 "),
    ("1250", "1,250"),
    ("1250", "1250.0"),
    ("3/4", "6/8"),
    ("5/2", "2 1/2"),
    ("True", "true"),
    ("4.50", "$4.50"),
    ("4.50", "4.5"),
])
def test_equivalent_answers_match(expected, given):
    assert check_answer(expected, given)


@pytest.mark.parametrize("expected,given", [
    ("1250", "1251"),
    ("3/4", "3/5"),
    ("True", "False"),
    ("42", "forty-two"),
    ("42", ""),
    ("42", None),
])
def test_different_answers_do_not_match(expected, given):
    assert not check_answer(expected, given)


def test_to_number_parses_mixed_numbers_and_rejects_text():
    assert to_number("1 3/4") == Fraction(7, 4)
    assert to_number("7/0") is None
    assert to_number("abc") is None


@pytest.mark.parametrize("text", ["1e400000000", "1E5", "-2e-999999999", "NaN", "Infinity"])
def test_exponent_and_special_forms_are_not_numbers(text):
    assert to_number(text) is None
    assert not check_answer("42", text)


def test_overlong_answers_are_rejected_without_parsing():
    assert to_number("1" * 5000) is None
    assert not check_answer("42", "4" * 5000)
