"""Access gate deciding whether the calculator is shown to the current viewer."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from ..config import APP_OPENED_EVENT
from ..messages import MessageLevel, ServiceMessage
from ..models import AccessDecision, WhopUser
from ..settings import AppSettings
from ..whop import WhopClient, WhopServiceError
from .tracking import UsageTracker

logger = logging.getLogger(__name__)


class AccessGate:
    """Verifies the viewer with Whop and checks the app's access pass.

    When Whop itself fails (network errors, 5xx responses, malformed payloads)
    the outcome follows ``settings.fail_open_on_entitlement_error``: with the
    flag on, access is granted and a warning is surfaced; with it off, access
    is denied. A definite "no" from Whop is always a denial.
    """

    def __init__(
        self,
        client: WhopClient,
        settings: AppSettings,
        tracker: Optional[UsageTracker] = None,
    ) -> None:
        self._client = client
        self._settings = settings
        self._tracker = tracker or UsageTracker(enabled=False)

    def evaluate(self, user_token: Optional[str]) -> AccessDecision:
        messages: List[ServiceMessage] = []
        try:
            user_id = self._resolve_user_id(user_token)
            if user_id is None:
                return AccessDecision(
                    granted=False,
                    messages=[
                        ServiceMessage(
                            MessageLevel.ERROR,
                            "We could not verify your Whop account. Open the app from Whop and try again.",
                        )
                    ],
                )

            if not self._client.check_access(user_id, self._settings.access_pass_id):
                logger.info("User %s has no access to pass %s", user_id, self._settings.access_pass_id)
                return AccessDecision(
                    granted=False,
                    user_id=user_id,
                    messages=[
                        ServiceMessage(
                            MessageLevel.ERROR,
                            "You need access to this app through Whop to use the calculator.",
                        )
                    ],
                )
        except WhopServiceError as exc:
            return self._on_service_failure(exc)

        user = self._lookup_user(user_id, messages)
        self._tracker.record(
            APP_OPENED_EVENT,
            {"userId": user_id, "timestamp": datetime.now(timezone.utc).isoformat()},
        )
        return AccessDecision(granted=True, user_id=user_id, user=user, messages=messages)

    def _resolve_user_id(self, user_token: Optional[str]) -> Optional[str]:
        if not user_token and self._settings.dev_user_id:
            logger.info("No Whop user token; using dev user %s", self._settings.dev_user_id)
            return self._settings.dev_user_id
        return self._client.verify_user(user_token)

    def _lookup_user(self, user_id: str, messages: List[ServiceMessage]) -> Optional[WhopUser]:
        try:
            return self._client.get_user(user_id)
        except WhopServiceError as exc:
            logger.warning("Error fetching Whop user %s: %s", user_id, exc)
            messages.append(
                ServiceMessage(MessageLevel.INFO, "Your Whop profile could not be loaded.")
            )
            return None

    def _on_service_failure(self, exc: WhopServiceError) -> AccessDecision:
        if self._settings.fail_open_on_entitlement_error:
            logger.error("Whop access check failed, granting access (fail-open): %s", exc)
            return AccessDecision(
                granted=True,
                fail_open_applied=True,
                messages=[
                    ServiceMessage(
                        MessageLevel.WARNING,
                        "Whop is unavailable right now; access was granted without verification.",
                    )
                ],
            )
        logger.error("Whop access check failed, denying access: %s", exc)
        return AccessDecision(
            granted=False,
            messages=[
                ServiceMessage(
                    MessageLevel.ERROR,
                    "Whop is unavailable right now, so your access could not be checked.",
                )
            ],
        )
