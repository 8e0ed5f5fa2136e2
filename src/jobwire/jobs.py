"""Pipeline run — discover, deduplicate, format."""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

import httpx

from jobwire.config import Config
from jobwire.formatting.formatter import FormatResult, format_item
from jobwire.formatting.schema import FormattedPost
import jobwire.ingestion  # noqa: F401  — triggers adapter registration
from jobwire.ingestion.adapter import SourceResult
from jobwire.ingestion.dedup import deduplicate, filter_unseen
from jobwire.ingestion.normalize import DiscoveredItem
from jobwire.ingestion.registry import get_adapter_class, registered_types
from jobwire.ingestion.sources import Source, load_sources
from jobwire.state import PipelineState

logger = logging.getLogger(__name__)

_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; jobwire/1.0)",
    "Accept-Language": "en-US,en;q=0.9",
}


@dataclass
class PipelineRun:
    """Everything one run produced, including what it dropped and why."""

    run_id: str
    run_seq: int
    started_at: str
    finished_at: str | None = None
    sources: list[SourceResult] = field(default_factory=list)
    items_discovered: int = 0
    items_unique: int = 0
    items_previously_seen: int = 0
    posts: list[FormattedPost] = field(default_factory=list)
    failures: list[FormatResult] = field(default_factory=list)

    def summary(self) -> dict:
        return {
            "run_id": self.run_id,
            "sources": len(self.sources),
            "sources_failed": sum(1 for s in self.sources if not s.ok),
            "items_discovered": self.items_discovered,
            "items_unique": self.items_unique,
            "items_previously_seen": self.items_previously_seen,
            "posts": len(self.posts),
            "format_failures": len(self.failures),
        }


async def _discover_source(
    source: Source,
    client: httpx.AsyncClient,
    state: PipelineState,
    max_items: int,
) -> SourceResult:
    adapter_cls = get_adapter_class(source.type)
    if adapter_cls is None:
        logger.debug(
            "Unsupported source type '%s' for %s, skipping (supported: %s)",
            source.type,
            source.name,
            ", ".join(registered_types()),
        )
        return SourceResult(source_id=source.id, source_name=source.name)

    adapter = adapter_cls(source, max_items)
    async with state.limiter:
        return await adapter.discover(client)


async def discover(
    sources: list[Source],
    client: httpx.AsyncClient,
    state: PipelineState,
    max_items_per_source: int = 50,
) -> list[SourceResult]:
    """Run every enabled source concurrently under the shared limiter.

    Results come back in source-list order regardless of completion order.
    """
    enabled = [s for s in sources if s.enabled]
    return list(
        await asyncio.gather(
            *(_discover_source(s, client, state, max_items_per_source) for s in enabled)
        )
    )


async def _format_claimed(
    item: DiscoveredItem,
    key: str,
    config: Config,
    state: PipelineState,
) -> FormatResult:
    try:
        async with state.limiter:
            result = await format_item(
                item,
                api_key=config.llm_api_key,
                model=config.llm_model,
                base_url=config.llm_base_url,
                temperature=config.llm_temperature,
                max_tokens=config.llm_max_tokens,
                max_retries=config.llm_max_retries,
                timeout=config.llm_timeout_seconds,
            )
    except BaseException:
        state.registry.release(key)
        raise

    if result.ok:
        state.registry.commit(key)
    else:
        state.registry.release(key)
    return result


async def format_items(
    items: list[DiscoveredItem],
    config: Config,
    state: PipelineState,
) -> list[FormatResult]:
    """Format items concurrently, skipping any key another run has claimed."""
    tasks = []
    for item in items:
        key = item.key
        if not state.registry.claim(key):
            logger.debug("Key %s already processed or in flight, skipping", key)
            continue
        tasks.append(_format_claimed(item, key, config, state))
    return list(await asyncio.gather(*tasks))


async def run_pipeline(
    config: Config,
    state: PipelineState,
    *,
    client: httpx.AsyncClient | None = None,
) -> PipelineRun:
    """Run one discover → deduplicate → format pass and publish its posts."""
    run = PipelineRun(
        run_id=str(uuid.uuid4()),
        run_seq=state.next_run_seq(),
        started_at=datetime.now(timezone.utc).isoformat(),
    )
    logger.info("Pipeline run %s started", run.run_id)

    sources = load_sources(config.sources_config_path)

    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(
            timeout=config.fetch_timeout_seconds,
            follow_redirects=True,
            headers=_HEADERS,
        )
    try:
        run.sources = await discover(sources, client, state, config.max_items_per_source)
    finally:
        if owns_client:
            await client.aclose()

    discovered = [item for result in run.sources for item in result.items]
    run.items_discovered = len(discovered)

    if discovered:
        unique = deduplicate(discovered, limit=config.max_items_per_run)
        run.items_unique = len(unique)
        fresh = filter_unseen(unique, state.registry)
        run.items_previously_seen = len(unique) - len(fresh)

        for result in await format_items(fresh, config, state):
            if result.ok:
                run.posts.append(result.post)
            else:
                run.failures.append(result)
    else:
        logger.info("Pipeline run %s discovered no items", run.run_id)

    run.finished_at = datetime.now(timezone.utc).isoformat()
    if not state.last_run.replace(run.posts, run.run_seq):
        logger.info(
            "Pipeline run %s finished after a later run; cache left unchanged", run.run_id
        )

    logger.info("Pipeline run complete: %s", run.summary())
    return run


async def run_scheduled(config: Config, state: PipelineState) -> None:
    """Scheduler entry point. Never raises."""
    try:
        await run_pipeline(config, state)
    except Exception:
        logger.exception("Scheduled pipeline run failed")
