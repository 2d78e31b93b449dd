"""Usage tracking; events are written to the application log."""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)


class UsageTracker:
    """Fire-and-forget event sink; ``record`` never raises."""

    def __init__(self, enabled: bool = True, tracking_id: str = "") -> None:
        self._enabled = enabled
        self._tracking_id = tracking_id

    def record(self, event_name: str, metadata: Optional[Mapping[str, Any]] = None) -> None:
        if not self._enabled:
            logger.debug("Usage tracking disabled; dropping %s", event_name)
            return
        try:
            payload = dict(metadata or {})
            payload.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
            if self._tracking_id:
                payload["tracking_id"] = self._tracking_id
            logger.info(
                "Tracking usage: %s %s",
                event_name,
                json.dumps(payload, default=str, sort_keys=True),
            )
        except Exception as exc:  # noqa: BLE001 - tracking must not affect the page
            logger.error("Error tracking usage %s: %s", event_name, exc)
