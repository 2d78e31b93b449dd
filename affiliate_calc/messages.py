"""Common messaging primitives for user-facing feedback."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MessageLevel(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class ServiceMessage:
    level: MessageLevel
    text: str


MISSING_REQUIRED_FIELDS = ServiceMessage(
    MessageLevel.INFO,
    "Enter an item price and a commission percentage greater than zero to see your earnings.",
)

MISSING_TARGET_FIELDS = ServiceMessage(
    MessageLevel.INFO,
    "Fill in the target income, item price and commission percentage (all greater than zero).",
)
