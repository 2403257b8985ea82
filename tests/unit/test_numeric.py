from __future__ import annotations

import pytest

from csvxlsx.services.numeric import NumericNormalizationError, clean_numeric_text, normalize_numeric


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1.234,56", "1234.56"),
        ("1,234,56", "1234.56"),
        ("1.234.56", "1234.56"),
        ("12,5", "12.5"),
        ("  42 ", "42"),
        ("7", "7"),
        ("1,000", "1.000"),
    ],
)
def test_clean_numeric_text(raw, expected):
    assert clean_numeric_text(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1.234,56", 1234.56),
        ("1,234,56", 1234.56),
        ("1234,5", 1234.5),
        ("7,6", 7.6),
        ("-3,25", -3.25),
        ("+10", 10.0),
        ("0", 0.0),
        (",5", 0.5),
        ("5,", 5.0),
        ("1e3", 1000.0),
        ("2,5E-1", 0.25),
        ("  9.99  ", 9.99),
    ],
)
def test_normalize_numeric(raw, expected):
    assert normalize_numeric(raw) == pytest.approx(expected)


def test_comma_is_never_a_thousands_separator():
    # "1,000" reads as one point zero, not one thousand
    assert normalize_numeric("1,000") == 1.0


@pytest.mark.parametrize(
    "raw",
    ["$100", "12%", "abc", "1 234", ".", ",", "-", "inf", "nan", "Infinity", "1_000", "１２", "1e400", "0x10"],
)
def test_normalize_numeric_failures(raw):
    with pytest.raises(NumericNormalizationError):
        normalize_numeric(raw)


@pytest.mark.parametrize("raw", ["", "   "])
def test_normalize_numeric_rejects_empty(raw):
    with pytest.raises(NumericNormalizationError):
        normalize_numeric(raw)


def test_normalization_error_is_value_error():
    assert issubclass(NumericNormalizationError, ValueError)
