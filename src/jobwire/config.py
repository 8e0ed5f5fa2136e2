"""Configuration loading and validation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


@dataclass(frozen=True)
class Config:
    """Application configuration. All values sourced from environment variables."""

    # Optional — LLM. An empty key disables formatting (items are skipped).
    llm_api_key: str = ""
    llm_model: str = "claude-sonnet-4-20250514"
    llm_base_url: str = "https://api.anthropic.com"
    llm_max_tokens: int = 2000
    llm_temperature: float = 0.0
    llm_timeout_seconds: int = 60
    llm_max_retries: int = 0

    # Optional — Sources
    sources_config_path: str = "./config/sources.json"
    fetch_timeout_seconds: int = 20
    max_items_per_source: int = 50
    max_items_per_run: int = 200
    concurrent_requests: int = 4

    # Optional — Trigger
    middleware_secret: str = ""
    cron_schedule: str = ""
    schedule_timezone: str = "UTC"

    # Optional — Web
    web_host: str = "0.0.0.0"
    web_port: int = 4000

    # Optional — Application
    log_level: str = "INFO"
    log_format: str = "json"
    app_env: str = "production"


def _int_var(name: str, default: int, errors: list[str], minimum: int = 0) -> int:
    raw = os.environ.get(name, str(default))
    try:
        value = int(raw)
    except ValueError:
        errors.append(f"{name} must be an integer (got {raw!r})")
        return default
    if value < minimum:
        errors.append(f"{name} must be >= {minimum} (got {value})")
    return value


def load_config(env_path: str | Path | None = None) -> Config:
    """Load configuration from environment variables.

    Loads a .env file if present (for local development). No variable is
    required; malformed numeric values or a cron expression without five
    fields raise ValueError listing every problem.
    """
    load_dotenv(dotenv_path=env_path)

    errors: list[str] = []

    cron_schedule = os.environ.get("CRON_SCHEDULE", "").strip()
    if cron_schedule and len(cron_schedule.split()) != 5:
        errors.append(
            f"CRON_SCHEDULE must have five fields (got {cron_schedule!r})"
        )

    raw_temperature = os.environ.get("LLM_TEMPERATURE", "0.0")
    try:
        llm_temperature = float(raw_temperature)
    except ValueError:
        errors.append(f"LLM_TEMPERATURE must be a number (got {raw_temperature!r})")
        llm_temperature = 0.0

    config = Config(
        # Optional — LLM
        llm_api_key=os.environ.get("LLM_API_KEY", ""),
        llm_model=os.environ.get("LLM_MODEL", "claude-sonnet-4-20250514"),
        llm_base_url=os.environ.get("LLM_BASE_URL", "https://api.anthropic.com"),
        llm_max_tokens=_int_var("LLM_MAX_TOKENS", 2000, errors, minimum=1),
        llm_temperature=llm_temperature,
        llm_timeout_seconds=_int_var("LLM_TIMEOUT_SECONDS", 60, errors, minimum=1),
        llm_max_retries=_int_var("LLM_MAX_RETRIES", 0, errors),
        # Optional — Sources
        sources_config_path=os.environ.get("SOURCES_CONFIG_PATH", "./config/sources.json"),
        fetch_timeout_seconds=_int_var("FETCH_TIMEOUT_SECONDS", 20, errors, minimum=1),
        max_items_per_source=_int_var("MAX_ITEMS_PER_SOURCE", 50, errors, minimum=1),
        max_items_per_run=_int_var("MAX_ITEMS_PER_RUN", 200, errors, minimum=1),
        concurrent_requests=_int_var("CONCURRENT_REQUESTS", 4, errors, minimum=1),
        # Optional — Trigger
        middleware_secret=os.environ.get("MIDDLEWARE_SECRET", ""),
        cron_schedule=cron_schedule,
        schedule_timezone=os.environ.get("SCHEDULE_TIMEZONE", "UTC"),
        # Optional — Web
        web_host=os.environ.get("WEB_HOST", "0.0.0.0"),
        web_port=_int_var("WEB_PORT", 4000, errors, minimum=1),
        # Optional — Application
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
        log_format=os.environ.get("LOG_FORMAT", "json"),
        app_env=os.environ.get("APP_ENV", "production"),
    )

    if errors:
        raise ValueError(f"Invalid configuration: {'; '.join(errors)}")

    return config
