"""Tabular views of a calculation for charts and CSV export."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date

import pandas as pd
from dateutil.relativedelta import relativedelta

from ..config import PROJECTION_MONTHS
from ..models import CalculationResult

PROJECTION_COLUMNS = ["Month", "Label", "Earnings (USD)", "Cumulative (USD)"]


@dataclass(frozen=True)
class CommissionSplit:
    """How the price of one sale divides between affiliate and merchant."""

    affiliate_usd: float
    merchant_usd: float


def commission_split(price: float, commission_percentage: float) -> CommissionSplit:
    affiliate = price * min(commission_percentage, 100.0) / 100
    return CommissionSplit(affiliate_usd=affiliate, merchant_usd=price - affiliate)


def build_monthly_projection(
    result: CalculationResult,
    start: date,
    months: int = PROJECTION_MONTHS,
) -> pd.DataFrame:
    """One row per month starting at ``start``'s month, with running totals."""
    if not result.has_projection or months <= 0:
        return pd.DataFrame(columns=PROJECTION_COLUMNS)

    first_month = start.replace(day=1)
    month_starts = [first_month + relativedelta(months=offset) for offset in range(months)]
    df = pd.DataFrame(
        {
            "Month": pd.to_datetime(month_starts),
            "Label": [month.strftime("%b %Y") for month in month_starts],
            "Earnings (USD)": [result.monthly_earnings] * months,
        }
    )
    df["Cumulative (USD)"] = df["Earnings (USD)"].cumsum()
    return df


def build_results_table(result: CalculationResult) -> pd.DataFrame:
    rows = [
        ("Per item earnings (USD)", result.single_item_earning),
        ("Total earnings (USD)", result.total_earnings),
    ]
    if result.has_projection:
        rows.append(("Monthly projection (USD)", result.monthly_earnings))
    if result.yearly_earnings > 0:
        rows.append(("Yearly projection (USD)", result.yearly_earnings))
    if result.has_items_needed:
        rows.append(("Items needed", float(result.items_needed)))
    rows.append(("Conversion rate (%)", result.conversion_rate_percentage))
    rows.append(("Visitors per sale", float(result.visitors_per_sale)))
    return pd.DataFrame(rows, columns=["Metric", "Value"])
