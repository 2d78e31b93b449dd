"""Environment-based application settings."""
from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_API_BASE_URL = "https://api.whop.com/api"
_ENVIRONMENTS = ("development", "production")
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: Optional[str], default: bool) -> bool:
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise RuntimeError(f"{name} must be a boolean flag, got {raw!r}")


@dataclass(frozen=True)
class AppSettings:
    """Whop credentials, access policy and feature switches."""

    api_key: str = ""
    app_id: str = ""
    access_pass_id: str = ""
    api_base_url: str = DEFAULT_API_BASE_URL
    timeout_seconds: float = 10.0
    fail_open_on_entitlement_error: bool = True
    dev_user_id: Optional[str] = None
    environment: str = "development"
    analytics_enabled: bool = False
    analytics_id: str = ""
    earnings_calculator_enabled: bool = True
    reverse_calculator_enabled: bool = True
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @staticmethod
    def load(
        env: Optional[Mapping[str, str]] = None,
        dotenv_path: Optional[Path] = None,
    ) -> "AppSettings":
        if env is None:
            load_dotenv(dotenv_path or Path.cwd() / ".env")
            env = os.environ

        environment = env.get("APP_ENV", "development").strip().lower() or "development"
        if environment not in _ENVIRONMENTS:
            raise RuntimeError(
                f"APP_ENV must be one of {', '.join(_ENVIRONMENTS)}, got {environment!r}"
            )

        raw_timeout = env.get("WHOP_TIMEOUT_SECONDS", "10")
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise RuntimeError(f"WHOP_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}")
        if not math.isfinite(timeout) or timeout <= 0:
            raise RuntimeError("WHOP_TIMEOUT_SECONDS must be a finite number greater than zero")

        settings = AppSettings(
            api_key=env.get("WHOP_API_KEY", ""),
            app_id=env.get("WHOP_APP_ID", ""),
            access_pass_id=env.get("WHOP_ACCESS_PASS_ID", ""),
            api_base_url=env.get("WHOP_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
            timeout_seconds=timeout,
            fail_open_on_entitlement_error=_parse_bool(
                "WHOP_FAIL_OPEN", env.get("WHOP_FAIL_OPEN"), True
            ),
            dev_user_id=env.get("WHOP_DEV_USER_ID") or None,
            environment=environment,
            analytics_enabled=_parse_bool(
                "ANALYTICS_ENABLED",
                env.get("ANALYTICS_ENABLED"),
                environment == "production",
            ),
            analytics_id=env.get("ANALYTICS_ID", ""),
            earnings_calculator_enabled=_parse_bool(
                "FEATURE_EARNINGS_CALCULATOR", env.get("FEATURE_EARNINGS_CALCULATOR"), True
            ),
            reverse_calculator_enabled=_parse_bool(
                "FEATURE_REVERSE_CALCULATOR", env.get("FEATURE_REVERSE_CALCULATOR"), True
            ),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )
        if settings.is_production:
            missing = [
                name
                for name, value in (
                    ("WHOP_API_KEY", settings.api_key),
                    ("WHOP_ACCESS_PASS_ID", settings.access_pass_id),
                )
                if not value
            ]
            if missing:
                raise RuntimeError(
                    f"{', '.join(missing)} must be set when APP_ENV is production"
                )
        return settings
