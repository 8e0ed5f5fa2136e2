"""RSS/Atom feed source adapter."""

from __future__ import annotations

import logging

import feedparser
import httpx

from jobwire.ingestion.adapter import SourceAdapter, get_checked
from jobwire.ingestion.normalize import (
    SNIPPET_LENGTH,
    DiscoveredItem,
    strip_html,
    truncate,
)

logger = logging.getLogger(__name__)


def _get_content(entry: dict) -> str:
    """Extract the best available content from a feed entry."""
    # feedparser puts content:encoded in entry.content[0].value
    if "content" in entry and entry["content"]:
        return strip_html(entry["content"][0].get("value", ""))
    return strip_html(entry.get("summary", "") or entry.get("description", ""))


def _get_link(entry: dict) -> str:
    """Entry link, falling back to the guid/id when the feed omits links."""
    return (entry.get("link") or entry.get("id") or "").strip()


class RSSAdapter(SourceAdapter):
    """Adapter for RSS and Atom feeds."""

    @property
    def name(self) -> str:
        return "rss"

    async def fetch(self, client: httpx.AsyncClient) -> list[DiscoveredItem]:
        response = await get_checked(client, self.source.url)
        feed = feedparser.parse(response.text)

        if feed.bozo and not feed.entries:
            logger.warning(
                "Malformed feed with no entries from %s: %s",
                self.source.url,
                feed.get("bozo_exception"),
            )
            return []

        items: list[DiscoveredItem] = []
        for entry in feed.entries[: self.max_items]:
            title = strip_html(entry.get("title", ""))
            url = _get_link(entry)
            if not title and not url:
                logger.debug("Skipping feed entry without title or link")
                continue
            items.append(
                self.make_item(
                    title=title,
                    url=url,
                    snippet=truncate(_get_content(entry), SNIPPET_LENGTH),
                )
            )
        return items
