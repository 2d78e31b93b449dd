"""Earnings calculations: forward projections and items needed for a target."""
from __future__ import annotations

import math
from typing import Any, Optional

from ..config import (
    DEFAULT_CONVERSION_RATE,
    DEFAULT_MONTHLY_SALES,
    DEFAULT_QUANTITY,
    MONTHS_PER_YEAR,
)
from ..models import CalculationInputs, CalculationMode, CalculationResult
from ..parsing import parse_count, parse_decimal


def _positive(value: Any) -> Optional[float]:
    number = parse_decimal(value)
    if number is None or number <= 0:
        return None
    return number


def _usable(earning: float) -> bool:
    return math.isfinite(earning) and earning > 0


def normalize_conversion_rate(value: Any) -> float:
    """Conversion rate in percentage points; missing or non-positive becomes the default."""
    rate = _positive(value)
    if rate is None or not math.isfinite(100 / rate):
        return DEFAULT_CONVERSION_RATE
    return rate


def visitors_per_sale(conversion_rate_percentage: Any) -> int:
    return math.ceil(100 / normalize_conversion_rate(conversion_rate_percentage))


def single_item_earning(price: float, commission_percentage: float) -> float:
    return price * commission_percentage / 100


class EarningsEngine:
    """Maps calculator inputs to results; invalid input yields ``None``, never an error."""

    def compute_forward_earnings(
        self,
        price: Any,
        commission_percentage: Any,
        quantity: Any = None,
        monthly_sales_count: Any = None,
        conversion_rate_percentage: Any = None,
    ) -> Optional[CalculationResult]:
        price_value = _positive(price)
        commission_value = _positive(commission_percentage)
        if price_value is None or commission_value is None:
            return None

        qty = parse_count(quantity)
        if qty is None or qty <= 0:
            qty = DEFAULT_QUANTITY
        monthly = parse_count(monthly_sales_count)
        if monthly is None or monthly < 0:
            monthly = DEFAULT_MONTHLY_SALES

        earning = single_item_earning(price_value, commission_value)
        if not _usable(earning):
            return None
        try:
            total = earning * qty
            monthly_earnings = earning * monthly
        except OverflowError:
            return None
        yearly_earnings = monthly_earnings * MONTHS_PER_YEAR
        if not all(math.isfinite(v) for v in (total, monthly_earnings, yearly_earnings)):
            return None
        return CalculationResult(
            single_item_earning=earning,
            total_earnings=total,
            items_needed=0,
            monthly_earnings=monthly_earnings,
            yearly_earnings=yearly_earnings,
            conversion_rate_percentage=normalize_conversion_rate(conversion_rate_percentage),
        )

    def compute_items_needed(
        self,
        target_income: Any,
        price: Any,
        commission_percentage: Any,
        conversion_rate_percentage: Any = None,
    ) -> Optional[CalculationResult]:
        target = _positive(target_income)
        price_value = _positive(price)
        commission_value = _positive(commission_percentage)
        if target is None or price_value is None or commission_value is None:
            return None

        earning = single_item_earning(price_value, commission_value)
        if not _usable(earning) or not math.isfinite(target / earning):
            return None
        return CalculationResult(
            single_item_earning=earning,
            total_earnings=target,
            items_needed=math.ceil(target / earning),
            monthly_earnings=0.0,
            yearly_earnings=0.0,
            conversion_rate_percentage=normalize_conversion_rate(conversion_rate_percentage),
        )

    def calculate(
        self, inputs: CalculationInputs, mode: CalculationMode
    ) -> Optional[CalculationResult]:
        if mode == CalculationMode.INVERSE:
            return self.compute_items_needed(
                inputs.target_income,
                inputs.item_price,
                inputs.commission_percentage,
                inputs.conversion_rate_percentage,
            )
        return self.compute_forward_earnings(
            inputs.item_price,
            inputs.commission_percentage,
            inputs.quantity,
            inputs.monthly_sales_count,
            inputs.conversion_rate_percentage,
        )
