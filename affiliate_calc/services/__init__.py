"""Service layer abstractions for the calculator app."""
from .access import AccessGate
from .earnings import EarningsEngine, normalize_conversion_rate, visitors_per_sale
from .projection import (
    CommissionSplit,
    build_monthly_projection,
    build_results_table,
    commission_split,
)
from .tracking import UsageTracker

__all__ = [
    "AccessGate",
    "CommissionSplit",
    "EarningsEngine",
    "UsageTracker",
    "build_monthly_projection",
    "build_results_table",
    "commission_split",
    "normalize_conversion_rate",
    "visitors_per_sale",
]
