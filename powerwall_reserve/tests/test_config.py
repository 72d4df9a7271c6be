"""Tests for configuration."""
import pytest

from powerwall_reserve.config import API_TIMEOUT, TeslaConfig
from powerwall_reserve.exceptions import ConfigurationError


def test_from_env(env):
    config = TeslaConfig.from_env()
    assert config.refresh_token.get_secret_value() == "refresh-456"
    assert config.client_id.get_secret_value() == "ownerapi"
    assert config.client_secret.get_secret_value() == "secret-789"
    assert config.timeout == API_TIMEOUT
    assert config.verify is True


def test_optional_settings_from_env(env, monkeypatch):
    monkeypatch.setenv("TESLA_API_TIMEOUT", "2.5")
    monkeypatch.setenv("TESLA_VERIFY_RESERVE", "no")
    config = TeslaConfig.from_env()
    assert config.timeout == 2.5
    assert config.verify is False


def test_overrides_win_over_env(env):
    config = TeslaConfig.from_env(timeout=1, verify=False)
    assert config.timeout == 1
    assert config.verify is False


def test_missing_all():
    with pytest.raises(ConfigurationError) as excinfo:
        TeslaConfig.from_env()
    for name in ("TESLA_REFRESH_TOKEN", "TESLA_CLIENT_ID", "TESLA_CLIENT_SECRET"):
        assert name in str(excinfo.value)


@pytest.mark.parametrize("missing", ["TESLA_REFRESH_TOKEN", "TESLA_CLIENT_ID", "TESLA_CLIENT_SECRET"])
def test_empty_value_counts_as_missing(env, monkeypatch, missing):
    monkeypatch.setenv(missing, "")
    config = TeslaConfig()
    assert config.missing() == [missing]
    with pytest.raises(ConfigurationError):
        config.validate_credentials()


def test_explicit_construction(config):
    assert config.missing() == []
    config.validate_credentials()


def test_secrets_hidden_in_repr(config):
    assert "secret-789" not in repr(config)
    assert "refresh-456" not in str(config)


@pytest.mark.parametrize("name, value", [("TESLA_API_TIMEOUT", "abc"), ("TESLA_VERIFY_RESERVE", "")])
def test_bad_optional_setting(env, monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigurationError, match=name):
        TeslaConfig.from_env()
