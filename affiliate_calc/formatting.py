"""Display helpers; rounding happens here only, never in stored results."""
from __future__ import annotations

from typing import List

from .models import CalculationResult


def format_currency(amount: float) -> str:
    sign = "-" if round(amount, 2) < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_percentage(value: float) -> str:
    text = f"{value:,.4f}".rstrip("0").rstrip(".")
    return f"{text}%"


def build_insights(result: CalculationResult) -> List[str]:
    """Plain-language insight lines shown under the results."""
    if result.single_item_earning <= 0:
        return []
    lines = [
        f"You earn {format_currency(result.single_item_earning)} per sale",
        (
            f"At {format_percentage(result.conversion_rate_percentage)} conversion rate, "
            f"you need {result.visitors_per_sale:,} visitors per sale"
        ),
    ]
    if result.monthly_earnings > 0:
        lines.append(f"Monthly potential: {format_currency(result.monthly_earnings)}")
    if result.yearly_earnings > 0:
        lines.append(f"Yearly potential: {format_currency(result.yearly_earnings)}")
    if result.items_needed > 0:
        lines.append(
            f"Reaching {format_currency(result.total_earnings)} takes "
            f"{result.items_needed:,} sales, about "
            f"{result.items_needed * result.visitors_per_sale:,} visitors"
        )
    return lines
