"""Static configuration for the calculator."""
from __future__ import annotations

APP_NAME = "Affiliate Marketing Calculator"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Calculate your potential earnings from affiliate marketing"

DEFAULT_QUANTITY = 1
DEFAULT_MONTHLY_SALES = 0
DEFAULT_CONVERSION_RATE = 2.0

MONTHS_PER_YEAR = 12
PROJECTION_MONTHS = 12

APP_OPENED_EVENT = "app_opened"
CALCULATION_EVENT = "calculation_completed"

USER_TOKEN_HEADER = "x-whop-user-token"
