"""Conversion of user-edited form text into calculator inputs."""
from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, Optional

from .models import CalculationInputs


def parse_decimal(value: Any) -> Optional[float]:
    """Return ``value`` as a finite float, or ``None`` when it cannot be read as one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if text.startswith("$"):
            text = text[1:]
        if text.endswith("%"):
            text = text[:-1]
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_count(value: Any) -> Optional[int]:
    """Return ``value`` as an int; fractional or unreadable values give ``None``."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    number = parse_decimal(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def inputs_from_form(
    item_price: Any = None,
    commission_percentage: Any = None,
    quantity: Any = None,
    monthly_sales_count: Any = None,
    conversion_rate_percentage: Any = None,
    target_income: Any = None,
) -> CalculationInputs:
    return CalculationInputs(
        item_price=parse_decimal(item_price),
        commission_percentage=parse_decimal(commission_percentage),
        quantity=parse_count(quantity),
        monthly_sales_count=parse_count(monthly_sales_count),
        conversion_rate_percentage=parse_decimal(conversion_rate_percentage),
        target_income=parse_decimal(target_income),
    )
