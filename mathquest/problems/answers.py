"""
Answer comparison for typed student answers.

"1,250", " 1250 " and "1250.0" all match "1250"; "6/8" matches "3/4";
"2 1/2" matches "5/2"; "true" matches "True".
"""
import re
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import Optional

_MIXED = re.compile(r"^(-?\d+)\s+(\d+)/(\d+)$")
_FRACTION = re.compile(r"^(-?\d+)/(\d+)$")
# Plain decimals only: no exponents, so "1e400000000" is never expanded
_DECIMAL = re.compile(r"^-?\d[\d,]*(\.\d+)?$")

# Longer input is not an answer a student would type
MAX_ANSWER_LENGTH = 50


def _clean(text: str) -> str:
    cleaned = " ".join(str(text).strip().lower().split())
    return cleaned.lstrip("$")


def to_number(text: str) -> Optional[Fraction]:
    """Parse an integer, decimal, fraction or mixed number; None if it is none of those."""
    value = _clean(text)
    if len(value) > MAX_ANSWER_LENGTH:
        return None
    mixed = _MIXED.match(value)
    if mixed:
        whole, num, den = (int(g) for g in mixed.groups())
        if den == 0:
            return None
        sign = -1 if whole < 0 else 1
        return Fraction(whole) + sign * Fraction(num, den)
    fraction = _FRACTION.match(value.replace(" ", ""))
    if fraction:
        num, den = (int(g) for g in fraction.groups())
        return Fraction(num, den) if den else None
    value = value.replace(" ", "")
    if not _DECIMAL.match(value):
        return None
    try:
        return Fraction(Decimal(value.replace(",", "")))
    except (InvalidOperation, ValueError):
        return None


def check_answer(expected: str, given: Optional[str]) -> bool:
    if given is None:
        return False
    if _clean(expected) == _clean(given):
        return True
    expected_value = to_number(expected)
    given_value = to_number(given)
    return expected_value is not None and expected_value == given_value
