"""Deduplication of discovered items within a run and across runs."""

from __future__ import annotations

from collections.abc import Container, Iterable

from jobwire.ingestion.normalize import DiscoveredItem, unique_key

DEFAULT_RUN_LIMIT = 200


def deduplicate(
    items: Iterable[DiscoveredItem],
    limit: int = DEFAULT_RUN_LIMIT,
) -> list[DiscoveredItem]:
    """Keep the first item per uniqueness key, in arrival order.

    Items whose key is empty (no URL and no title) are dropped. The result
    is truncated to ``limit`` items.
    """
    seen: set[str] = set()
    unique: list[DiscoveredItem] = []
    for item in items:
        key = unique_key(item)
        if not key or key in seen:
            continue
        seen.add(key)
        unique.append(item)
        if len(unique) >= limit:
            break
    return unique


def filter_unseen(
    items: Iterable[DiscoveredItem],
    processed: Container[str],
) -> list[DiscoveredItem]:
    """Drop items whose key was already processed in an earlier run."""
    return [item for item in items if unique_key(item) not in processed]
