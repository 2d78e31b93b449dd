from decimal import Decimal

import pytest

from affiliate_calc.models import CalculationInputs
from affiliate_calc.parsing import inputs_from_form, parse_count, parse_decimal


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("12.5", 12.5),
        ("  7 ", 7.0),
        ("$1,299.99", 1299.99),
        ("15.5%", 15.5),
        (3, 3.0),
        (Decimal("0.10"), 0.1),
        ("-4", -4.0),
    ],
)
def test_parse_decimal_accepts_numbers(raw, expected):
    assert parse_decimal(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", [None, "", "   ", "abc", "12abc", "nan", "inf", True, [], "$", "%"])
def test_parse_decimal_rejects_non_numbers(raw):
    assert parse_decimal(raw) is None


@pytest.mark.parametrize("raw, expected", [("3", 3), (4, 4), (5.0, 5), ("0", 0), ("-2", -2)])
def test_parse_count(raw, expected):
    assert parse_count(raw) == expected


@pytest.mark.parametrize("raw", ["2.5", 1.5, "x", None, False])
def test_parse_count_rejects_fractions_and_text(raw):
    assert parse_count(raw) is None


def test_inputs_from_form_maps_missing_fields_to_none():
    inputs = inputs_from_form(item_price="100", commission_percentage="ten", quantity="")

    assert inputs == CalculationInputs(item_price=100.0)
