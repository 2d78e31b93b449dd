"""Domain models for the affiliate earnings calculator."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .config import DEFAULT_CONVERSION_RATE
from .messages import ServiceMessage


class CalculationMode(str, Enum):
    """Which input set produced a result."""

    FORWARD = "forward"
    INVERSE = "inverse"


@dataclass(frozen=True)
class CalculationInputs:
    """Parsed form values; ``None`` means the field is missing or unparseable."""

    item_price: Optional[float] = None
    commission_percentage: Optional[float] = None
    quantity: Optional[int] = None
    monthly_sales_count: Optional[int] = None
    conversion_rate_percentage: Optional[float] = None
    target_income: Optional[float] = None


@dataclass(frozen=True)
class CalculationResult:
    """Outcome of a single forward or inverse calculation."""

    single_item_earning: float
    total_earnings: float
    items_needed: int
    monthly_earnings: float
    yearly_earnings: float
    conversion_rate_percentage: float = DEFAULT_CONVERSION_RATE

    @property
    def visitors_per_sale(self) -> int:
        rate = self.conversion_rate_percentage
        if not rate or rate <= 0 or not math.isfinite(rate):
            rate = DEFAULT_CONVERSION_RATE
        return math.ceil(100 / rate)

    @property
    def has_projection(self) -> bool:
        return self.monthly_earnings > 0

    @property
    def has_items_needed(self) -> bool:
        return self.items_needed > 0


@dataclass(frozen=True)
class WhopUser:
    """Subset of the Whop user profile shown in the page header."""

    id: str
    username: str = ""
    email: str = ""

    @property
    def display_name(self) -> str:
        return self.username or self.email or self.id


@dataclass(frozen=True)
class AccessDecision:
    granted: bool
    user_id: Optional[str] = None
    user: Optional[WhopUser] = None
    fail_open_applied: bool = False
    messages: List[ServiceMessage] = field(default_factory=list)

    @property
    def cacheable(self) -> bool:
        """Fail-open grants are re-checked on the next run instead of being kept."""
        return not self.fail_open_applied
