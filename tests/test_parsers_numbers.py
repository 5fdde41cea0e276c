import pytest

from unitscan.extraction.parsers.numbers import is_numeric


@pytest.mark.parametrize(
    "token",
    ["5", "5.0", "-3.2", "+7", "1e3", "0.001", ".5", "5.", "120", "1E-2", "007"],
)
def test_is_numeric_accepts_literals(token: str) -> None:
    assert is_numeric(token) is True


@pytest.mark.parametrize("token", ["NaN", "Infinity", "-Infinity", "+NaN"])
def test_is_numeric_accepts_special_float_spellings(token: str) -> None:
    assert is_numeric(token) is True


@pytest.mark.parametrize(
    "token",
    [None, "", " ", "mg", "5mg", ".", "1.2.3", "-", "nan", "inf", "infinity", "NAN", "Inf", "1_000", "5f", "(5)"],
)
def test_is_numeric_rejects_everything_else(token) -> None:
    assert is_numeric(token) is False
