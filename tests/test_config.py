"""Tests for jobwire.config."""

import os

import pytest

from jobwire.config import load_config

_CONFIG_VARS = (
    "SOURCES_CONFIG_PATH", "FETCH_TIMEOUT_SECONDS", "MAX_ITEMS_PER_SOURCE",
    "MAX_ITEMS_PER_RUN", "CONCURRENT_REQUESTS", "MIDDLEWARE_SECRET",
    "CRON_SCHEDULE", "SCHEDULE_TIMEZONE", "WEB_HOST", "WEB_PORT",
    "LOG_LEVEL", "LOG_FORMAT", "APP_ENV",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Remove all config-related env vars before each test."""
    for key in list(os.environ):
        if key.startswith("LLM_") or key in _CONFIG_VARS:
            monkeypatch.delenv(key, raising=False)
    # Prevent .env file from re-setting variables during tests
    monkeypatch.setattr("jobwire.config.load_dotenv", lambda *a, **kw: None)


def test_defaults_without_any_env():
    """Nothing is required; an empty environment yields the defaults."""
    config = load_config()

    assert config.llm_api_key == ""
    assert config.llm_model == "claude-sonnet-4-20250514"
    assert config.llm_temperature == 0.0
    assert config.llm_max_tokens == 2000
    assert config.llm_max_retries == 0
    assert config.sources_config_path == "./config/sources.json"
    assert config.fetch_timeout_seconds == 20
    assert config.max_items_per_source == 50
    assert config.max_items_per_run == 200
    assert config.concurrent_requests == 4
    assert config.middleware_secret == ""
    assert config.cron_schedule == ""
    assert config.web_port == 4000
    assert config.log_format == "json"


def test_reads_values_from_env(monkeypatch):
    monkeypatch.setenv("LLM_API_KEY", "sk-test-key")
    monkeypatch.setenv("MIDDLEWARE_SECRET", "s3cret")
    monkeypatch.setenv("CRON_SCHEDULE", "*/30 * * * *")
    monkeypatch.setenv("CONCURRENT_REQUESTS", "3")
    monkeypatch.setenv("WEB_PORT", "8080")
    monkeypatch.setenv("LLM_TEMPERATURE", "0.2")

    config = load_config()

    assert config.llm_api_key == "sk-test-key"
    assert config.middleware_secret == "s3cret"
    assert config.cron_schedule == "*/30 * * * *"
    assert config.concurrent_requests == 3
    assert config.web_port == 8080
    assert config.llm_temperature == 0.2


def test_invalid_integer_raises(monkeypatch):
    monkeypatch.setenv("CONCURRENT_REQUESTS", "four")
    with pytest.raises(ValueError, match="CONCURRENT_REQUESTS must be an integer"):
        load_config()


def test_zero_concurrency_rejected(monkeypatch):
    monkeypatch.setenv("CONCURRENT_REQUESTS", "0")
    with pytest.raises(ValueError, match="CONCURRENT_REQUESTS must be >= 1"):
        load_config()


def test_cron_must_have_five_fields(monkeypatch):
    monkeypatch.setenv("CRON_SCHEDULE", "every hour")
    with pytest.raises(ValueError, match="CRON_SCHEDULE must have five fields"):
        load_config()


def test_all_problems_listed(monkeypatch):
    monkeypatch.setenv("WEB_PORT", "abc")
    monkeypatch.setenv("LLM_TEMPERATURE", "hot")
    with pytest.raises(ValueError) as exc_info:
        load_config()
    msg = str(exc_info.value)
    assert "WEB_PORT" in msg
    assert "LLM_TEMPERATURE" in msg


def test_config_is_frozen():
    """Config is immutable after creation."""
    config = load_config()

    with pytest.raises(AttributeError):
        config.llm_api_key = "other"
