"""Application entry point — runs the optional cron trigger and the web server."""

from __future__ import annotations

import json
import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from jobwire.config import Config, load_config
from jobwire.jobs import run_scheduled
from jobwire.state import PipelineState
from jobwire.web.app import create_app

logger = logging.getLogger("jobwire")


def _setup_logging(log_level: str, log_format: str) -> None:
    """Configure root logger based on config."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format == "json":
        formatter = logging.Formatter(
            json.dumps(
                {
                    "time": "%(asctime)s",
                    "level": "%(levelname)s",
                    "logger": "%(name)s",
                    "message": "%(message)s",
                }
            )
        )
    else:
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def _build_scheduler(config: Config, state: PipelineState) -> AsyncIOScheduler | None:
    """Create an AsyncIOScheduler for CRON_SCHEDULE, or None when unset."""
    if not config.cron_schedule:
        return None

    scheduler = AsyncIOScheduler(timezone=config.schedule_timezone)
    cron_parts = config.cron_schedule.split()
    scheduler.add_job(
        run_scheduled,
        trigger=CronTrigger(
            minute=cron_parts[0],
            hour=cron_parts[1],
            day=cron_parts[2],
            month=cron_parts[3],
            day_of_week=cron_parts[4],
            timezone=config.schedule_timezone,
        ),
        args=[config, state],
        id="pipeline",
        name="Discover + format pipeline",
    )
    return scheduler


def build_app(config: Config):
    """Wire state, scheduler and web app together."""
    state = PipelineState(config.concurrent_requests)
    scheduler = _build_scheduler(config, state)

    @asynccontextmanager
    async def lifespan(app):
        if scheduler is not None:
            logger.info("Scheduler starting (cron=%s)", config.cron_schedule)
            scheduler.start()
        yield
        if scheduler is not None:
            logger.info("Scheduler shutting down")
            scheduler.shutdown(wait=False)

    return create_app(config, state, lifespan=lifespan)


def main() -> None:
    """Load config, set up logging, and start the web server."""
    config = load_config()

    _setup_logging(config.log_level, config.log_format)

    logger.info(
        "jobwire starting (env=%s, sources=%s, model=%s, concurrency=%d)",
        config.app_env,
        config.sources_config_path,
        config.llm_model,
        config.concurrent_requests,
    )
    if not config.llm_api_key:
        logger.error("LLM_API_KEY not set; discovered items will not be formatted")
    if not config.middleware_secret:
        logger.warning("MIDDLEWARE_SECRET not set; /check-jobs is unauthenticated")

    app = build_app(config)
    uvicorn.run(app, host=config.web_host, port=config.web_port)


if __name__ == "__main__":
    main()
