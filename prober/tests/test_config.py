"""
Unit tests for environment-based configuration.
"""

from __future__ import annotations

import pytest

from shared.config import DEFAULT_USER_AGENT, AppConfig

_VARS = (
    "APP_ENV",
    "LOG_LEVEL",
    "LOG_FILE",
    "LOG_STDOUT",
    "PROBE_HTTP_TIMEOUT_SECONDS",
    "PROBE_USER_AGENT",
    "PROBE_VERIFY_TLS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = AppConfig.from_env()
    assert config.environment == "local"
    assert config.log_level == "INFO"
    assert config.log_file is None
    assert config.log_stdout is True
    assert config.http_timeout_seconds == 20.0
    assert config.user_agent == DEFAULT_USER_AGENT
    assert config.verify_tls is False


def test_overrides(monkeypatch):
    monkeypatch.setenv("APP_ENV", "prod")
    monkeypatch.setenv("LOG_STDOUT", "false")
    monkeypatch.setenv("LOG_FILE", "/tmp/probe.log")
    monkeypatch.setenv("PROBE_HTTP_TIMEOUT_SECONDS", "5")
    monkeypatch.setenv("PROBE_USER_AGENT", "Custom/2.0")
    monkeypatch.setenv("PROBE_VERIFY_TLS", "yes")
    config = AppConfig.from_env()
    assert config.environment == "prod"
    assert config.log_stdout is False
    assert config.log_file == "/tmp/probe.log"
    assert config.http_timeout_seconds == 5.0
    assert config.user_agent == "Custom/2.0"
    assert config.verify_tls is True


@pytest.mark.parametrize("raw,expected", [("500", 120.0), ("0", 1.0), ("abc", 20.0)])
def test_http_timeout_is_clamped(monkeypatch, raw, expected):
    monkeypatch.setenv("PROBE_HTTP_TIMEOUT_SECONDS", raw)
    assert AppConfig.from_env().http_timeout_seconds == expected


def test_unknown_environment_rejected(monkeypatch):
    monkeypatch.setenv("APP_ENV", "qa")
    with pytest.raises(ValueError):
        AppConfig.from_env()
