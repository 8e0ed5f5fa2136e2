"""JSON API source adapter."""

from __future__ import annotations

import logging

import httpx

from jobwire.ingestion.adapter import SourceAdapter, get_checked
from jobwire.ingestion.normalize import SNIPPET_LENGTH, DiscoveredItem, strip_html, truncate

logger = logging.getLogger(__name__)


def _records(payload: object) -> list:
    """Accept a top-level array or an object with an ``items`` array."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("items"), list):
        return payload["items"]
    return []


def _first_text(record: dict, *keys: str) -> str:
    for key in keys:
        value = record.get(key)
        if value is not None and str(value).strip():
            return str(value).strip()
    return ""


class APIAdapter(SourceAdapter):
    """Adapter for JSON endpoints returning a list of postings."""

    @property
    def name(self) -> str:
        return "api"

    async def fetch(self, client: httpx.AsyncClient) -> list[DiscoveredItem]:
        response = await get_checked(client, self.source.url)
        records = _records(response.json())
        if not records:
            logger.warning("No records array in API response from %s", self.source.url)

        items: list[DiscoveredItem] = []
        for record in records[: self.max_items]:
            if not isinstance(record, dict):
                continue
            items.append(
                self.make_item(
                    title=_first_text(record, "title", "name"),
                    url=_first_text(record, "url", "link"),
                    snippet=truncate(
                        strip_html(_first_text(record, "description", "summary")),
                        SNIPPET_LENGTH,
                    ),
                )
            )
        return items
