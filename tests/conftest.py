import pytest

from affiliate_calc.settings import AppSettings
from affiliate_calc.whop import WhopServiceError


@pytest.fixture()
def settings() -> AppSettings:
    return AppSettings(
        api_key="key_123",
        app_id="app_abc",
        access_pass_id="pass_xyz",
        api_base_url="https://whop.test/api",
        timeout_seconds=5.0,
    )


@pytest.fixture()
def service_error() -> WhopServiceError:
    return WhopServiceError("Whop returned HTTP 503 for /v5/me")
