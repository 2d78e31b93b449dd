import pytest

from affiliate_calc.settings import DEFAULT_API_BASE_URL, AppSettings


def test_defaults_from_empty_environment():
    settings = AppSettings.load(env={})

    assert settings.api_base_url == DEFAULT_API_BASE_URL
    assert settings.environment == "development"
    assert settings.fail_open_on_entitlement_error is True
    assert settings.analytics_enabled is False
    assert settings.dev_user_id is None
    assert settings.earnings_calculator_enabled
    assert settings.reverse_calculator_enabled
    assert settings.timeout_seconds == 10.0


def test_values_are_read_from_environment():
    settings = AppSettings.load(
        env={
            "WHOP_API_KEY": "key",
            "WHOP_APP_ID": "app",
            "WHOP_ACCESS_PASS_ID": "pass",
            "WHOP_API_BASE_URL": "https://example.test/api/",
            "WHOP_TIMEOUT_SECONDS": "2.5",
            "WHOP_FAIL_OPEN": "false",
            "WHOP_DEV_USER_ID": "user_dev",
            "APP_ENV": "Production",
            "FEATURE_REVERSE_CALCULATOR": "off",
            "LOG_LEVEL": "debug",
        }
    )

    assert settings.api_key == "key"
    assert settings.app_id == "app"
    assert settings.access_pass_id == "pass"
    assert settings.api_base_url == "https://example.test/api"
    assert settings.timeout_seconds == 2.5
    assert settings.fail_open_on_entitlement_error is False
    assert settings.dev_user_id == "user_dev"
    assert settings.is_production
    assert settings.analytics_enabled is True
    assert settings.reverse_calculator_enabled is False
    assert settings.log_level == "DEBUG"


def test_analytics_flag_overrides_environment_default():
    settings = AppSettings.load(
        env={
            "APP_ENV": "production",
            "ANALYTICS_ENABLED": "no",
            "WHOP_API_KEY": "key",
            "WHOP_ACCESS_PASS_ID": "pass",
        }
    )

    assert settings.analytics_enabled is False


@pytest.mark.parametrize(
    "env",
    [
        {"APP_ENV": "staging"},
        {"WHOP_TIMEOUT_SECONDS": "soon"},
        {"WHOP_TIMEOUT_SECONDS": "0"},
        {"WHOP_TIMEOUT_SECONDS": "nan"},
        {"WHOP_TIMEOUT_SECONDS": "inf"},
        {"WHOP_FAIL_OPEN": "maybe"},
    ],
)
def test_invalid_values_raise(env):
    with pytest.raises(RuntimeError):
        AppSettings.load(env=env)


def test_dotenv_file_is_loaded(tmp_path, monkeypatch):
    # registers the variable with monkeypatch so the value loaded below is undone
    monkeypatch.setenv("WHOP_ACCESS_PASS_ID", "placeholder")
    monkeypatch.delenv("WHOP_ACCESS_PASS_ID")
    dotenv_file = tmp_path / ".env"
    dotenv_file.write_text("WHOP_ACCESS_PASS_ID=pass_from_file\n")

    settings = AppSettings.load(dotenv_path=dotenv_file)

    assert settings.access_pass_id == "pass_from_file"


@pytest.mark.parametrize(
    "env, missing",
    [
        ({"APP_ENV": "production"}, "WHOP_API_KEY, WHOP_ACCESS_PASS_ID"),
        ({"APP_ENV": "production", "WHOP_API_KEY": "key"}, "WHOP_ACCESS_PASS_ID"),
        ({"APP_ENV": "production", "WHOP_ACCESS_PASS_ID": "pass"}, "WHOP_API_KEY"),
    ],
)
def test_production_requires_whop_credentials(env, missing):
    with pytest.raises(RuntimeError, match=missing):
        AppSettings.load(env=env)


def test_development_allows_missing_credentials():
    settings = AppSettings.load(env={"APP_ENV": "development"})

    assert not settings.is_production
    assert settings.api_key == ""
