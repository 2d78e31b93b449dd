"""HTTP client for the Whop identity and entitlement API."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from .models import WhopUser
from .settings import AppSettings

logger = logging.getLogger(__name__)


class WhopServiceError(Exception):
    """Raised when Whop cannot be reached or answers with something unusable."""


class WhopClient:
    """Thin wrapper over the Whop REST endpoints used by the access gate."""

    CURRENT_USER_PATH = "/v5/me"
    ACCESS_CHECK_PATH = "/v5/app/access_passes/{access_pass_id}/users/{user_id}/access"
    USER_PATH = "/v5/app/users/{user_id}"

    def __init__(
        self,
        settings: AppSettings,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._settings = settings
        self._session = session or requests.Session()

    def verify_user(self, user_token: Optional[str]) -> Optional[str]:
        """Resolve the iframe user token to a Whop user id, ``None`` if Whop rejects it."""
        if not user_token:
            return None
        response = self._get(
            self.CURRENT_USER_PATH,
            headers={"Authorization": f"Bearer {user_token}"},
        )
        if response.status_code in (401, 403):
            logger.warning("Whop rejected the user token (HTTP %s)", response.status_code)
            return None
        payload = self._json(response)
        user_id = payload.get("id")
        if not user_id:
            raise WhopServiceError("Whop user payload has no id")
        return str(user_id)

    def check_access(self, user_id: str, access_pass_id: str) -> bool:
        response = self._get(
            self.ACCESS_CHECK_PATH.format(access_pass_id=access_pass_id, user_id=user_id),
            headers=self._app_headers(),
        )
        if response.status_code == 404:
            return False
        payload = self._json(response)
        has_access = payload.get("has_access")
        if not isinstance(has_access, bool):
            raise WhopServiceError("Whop access payload has no has_access flag")
        return has_access

    def get_user(self, user_id: str) -> Optional[WhopUser]:
        response = self._get(self.USER_PATH.format(user_id=user_id), headers=self._app_headers())
        if response.status_code == 404:
            return None
        payload = self._json(response)
        return WhopUser(
            id=str(payload.get("id") or user_id),
            username=payload.get("username") or "",
            email=payload.get("email") or "",
        )

    def _app_headers(self) -> Dict[str, str]:
        headers = {"Authorization": f"Bearer {self._settings.api_key}"}
        if self._settings.app_id:
            headers["x-whop-app-id"] = self._settings.app_id
        return headers

    def _get(self, path: str, headers: Dict[str, str]) -> requests.Response:
        url = f"{self._settings.api_base_url}{path}"
        try:
            response = self._session.get(
                url, headers=headers, timeout=self._settings.timeout_seconds
            )
        except requests.RequestException as exc:
            raise WhopServiceError(f"Whop request to {path} failed: {exc}") from exc
        if response.status_code >= 500:
            raise WhopServiceError(f"Whop returned HTTP {response.status_code} for {path}")
        return response

    @staticmethod
    def _json(response: requests.Response) -> Dict[str, Any]:
        if response.status_code != 200:
            raise WhopServiceError(f"Unexpected Whop response HTTP {response.status_code}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise WhopServiceError("Whop response is not valid JSON") from exc
        if not isinstance(payload, dict):
            raise WhopServiceError("Whop response is not a JSON object")
        return payload
