"""Source adapter interface."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import httpx

from jobwire.ingestion.normalize import DiscoveredItem
from jobwire.ingestion.sources import Source

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceResult:
    """Outcome of discovering one source."""

    source_id: str
    source_name: str
    items: list[DiscoveredItem] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SourceAdapter(ABC):
    """Abstract base class for source adapters.

    Every adapter knows how to fetch and parse items from a specific source
    type. The rest of the system is source-agnostic.
    """

    def __init__(self, source: Source, max_items: int = 50) -> None:
        self.source = source
        self.max_items = max_items

    @property
    @abstractmethod
    def name(self) -> str:
        """Adapter type name."""

    @abstractmethod
    async def fetch(self, client: httpx.AsyncClient) -> list[DiscoveredItem]:
        """Fetch and extract items from the source. May raise."""

    async def discover(self, client: httpx.AsyncClient) -> SourceResult:
        """Run ``fetch`` and convert any failure into an empty, tagged result."""
        try:
            items = await self.fetch(client)
        except Exception as exc:
            logger.exception(
                "Source '%s' (%s) failed: %s", self.source.name, self.name, self.source.url
            )
            return SourceResult(
                source_id=self.source.id,
                source_name=self.source.name,
                error=f"{type(exc).__name__}: {exc}",
            )
        logger.info("Discovered %d items from %s", len(items), self.source.name)
        return SourceResult(
            source_id=self.source.id,
            source_name=self.source.name,
            items=items,
        )

    def make_item(
        self,
        title: str,
        url: str,
        snippet: str = "",
        pdf_text: str | None = None,
    ) -> DiscoveredItem:
        return DiscoveredItem(
            title=title,
            url=url,
            snippet=snippet,
            source_name=self.source.name,
            source_id=self.source.id,
            pdf_text=pdf_text,
            discovered_from=self.source.url,
        )


async def get_checked(client: httpx.AsyncClient, url: str) -> httpx.Response:
    """GET ``url`` and raise on a non-2xx status."""
    response = await client.get(url)
    response.raise_for_status()
    return response
