from datetime import date

import pytest

from affiliate_calc.services.earnings import EarningsEngine
from affiliate_calc.services.projection import (
    PROJECTION_COLUMNS,
    build_monthly_projection,
    build_results_table,
    commission_split,
)


@pytest.fixture()
def engine():
    return EarningsEngine()


def test_monthly_projection_accumulates_over_a_year(engine):
    result = engine.compute_forward_earnings(100, 10, 1, 5)

    df = build_monthly_projection(result, start=date(2026, 11, 15))

    assert list(df.columns) == PROJECTION_COLUMNS
    assert len(df) == 12
    assert df["Label"].iloc[0] == "Nov 2026"
    assert df["Label"].iloc[-1] == "Oct 2027"
    assert df["Month"].iloc[2].day == 1
    assert (df["Earnings (USD)"] == 50).all()
    assert df["Cumulative (USD)"].iloc[-1] == pytest.approx(result.yearly_earnings)


def test_projection_is_empty_without_monthly_sales(engine):
    forward = engine.compute_forward_earnings(100, 10, 3)
    inverse = engine.compute_items_needed(1000, 50, 20)

    assert build_monthly_projection(forward, start=date(2026, 1, 1)).empty
    assert build_monthly_projection(inverse, start=date(2026, 1, 1)).empty


def test_results_table_for_forward_result(engine):
    result = engine.compute_forward_earnings(100, 10, 5, 2)

    df = build_results_table(result)
    values = dict(zip(df["Metric"], df["Value"]))

    assert values["Per item earnings (USD)"] == 10
    assert values["Total earnings (USD)"] == 50
    assert values["Monthly projection (USD)"] == 20
    assert values["Yearly projection (USD)"] == 240
    assert values["Visitors per sale"] == 50
    assert "Items needed" not in values


def test_results_table_for_items_needed(engine):
    result = engine.compute_items_needed(1000, 50, 20)

    df = build_results_table(result)
    values = dict(zip(df["Metric"], df["Value"]))

    assert values["Items needed"] == 100
    assert "Monthly projection (USD)" not in values


def test_commission_split():
    split = commission_split(80, 25)

    assert split.affiliate_usd == 20
    assert split.merchant_usd == 60


def test_commission_split_caps_at_full_price():
    split = commission_split(80, 150)

    assert split.affiliate_usd == 80
    assert split.merchant_usd == 0
