"""Affiliate earnings calculator package."""

from .config import APP_DESCRIPTION, APP_NAME, APP_VERSION
from .formatting import build_insights, format_currency, format_percentage
from .logging_config import setup_logging
from .messages import MessageLevel, ServiceMessage
from .models import (
    AccessDecision,
    CalculationInputs,
    CalculationMode,
    CalculationResult,
    WhopUser,
)
from .parsing import inputs_from_form, parse_count, parse_decimal
from .services import (
    AccessGate,
    CommissionSplit,
    EarningsEngine,
    UsageTracker,
    build_monthly_projection,
    build_results_table,
    commission_split,
    visitors_per_sale,
)
from .session import CalculatorSession
from .settings import AppSettings
from .whop import WhopClient, WhopServiceError

__all__ = [
    "APP_DESCRIPTION",
    "APP_NAME",
    "APP_VERSION",
    "AccessDecision",
    "AccessGate",
    "AppSettings",
    "CalculationInputs",
    "CalculationMode",
    "CalculationResult",
    "CalculatorSession",
    "CommissionSplit",
    "EarningsEngine",
    "MessageLevel",
    "ServiceMessage",
    "UsageTracker",
    "WhopClient",
    "WhopServiceError",
    "WhopUser",
    "build_insights",
    "build_monthly_projection",
    "build_results_table",
    "commission_split",
    "format_currency",
    "format_percentage",
    "inputs_from_form",
    "parse_count",
    "parse_decimal",
    "setup_logging",
    "visitors_per_sale",
]
