"""Process-lifetime pipeline state shared by every run.

Nothing here is persisted. All mutations happen without an ``await`` between
check and write, so each method is atomic under the asyncio event loop.
"""

from __future__ import annotations

import asyncio
import itertools
from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jobwire.formatting.schema import FormattedPost


class ProcessedRegistry:
    """Uniqueness keys already formatted. Keys are never removed.

    A key is first *claimed* while its item is being formatted, then either
    *committed* (success) or *released* (failure). Claims keep two
    overlapping runs from formatting the same key.
    """

    def __init__(self) -> None:
        self._keys: set[str] = set()
        self._claimed: set[str] = set()

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def keys(self) -> frozenset[str]:
        return frozenset(self._keys)

    def claim(self, key: str) -> bool:
        """Reserve ``key`` for formatting. False if processed or already claimed."""
        if key in self._keys or key in self._claimed:
            return False
        self._claimed.add(key)
        return True

    def commit(self, key: str) -> None:
        self._claimed.discard(key)
        self._keys.add(key)

    def release(self, key: str) -> None:
        self._claimed.discard(key)


class LastRunCache:
    """Posts of the most recently started run that has completed."""

    def __init__(self) -> None:
        self._posts: list[FormattedPost] = []
        self._run_seq = 0
        self.updated_at: str | None = None

    @property
    def posts(self) -> list[FormattedPost]:
        return list(self._posts)

    def replace(self, posts: list[FormattedPost], run_seq: int) -> bool:
        """Replace the cache wholesale unless a later-started run already did.

        Returns False when ``run_seq`` is older than the published run.
        """
        if run_seq < self._run_seq:
            return False
        self._posts = list(posts)
        self._run_seq = run_seq
        self.updated_at = datetime.now(timezone.utc).isoformat()
        return True


class PipelineState:
    """Registry, cache and concurrency limiter owned by one process."""

    def __init__(self, concurrency: int = 4) -> None:
        if concurrency < 1:
            raise ValueError(f"concurrency must be >= 1 (got {concurrency})")
        self.concurrency = concurrency
        self.registry = ProcessedRegistry()
        self.last_run = LastRunCache()
        self.limiter = asyncio.Semaphore(concurrency)
        self._run_counter = itertools.count(1)

    def next_run_seq(self) -> int:
        return next(self._run_counter)
