"""PDF source adapter — one notice per document, text via pdfminer.six."""

from __future__ import annotations

import asyncio
import io
import logging

import httpx
from pdfminer.high_level import extract_text

from jobwire.ingestion.adapter import SourceAdapter, get_checked
from jobwire.ingestion.normalize import SNIPPET_LENGTH, DiscoveredItem, truncate

logger = logging.getLogger(__name__)


def _extract(content: bytes) -> str:
    return extract_text(io.BytesIO(content)).strip()


class PDFAdapter(SourceAdapter):
    """Adapter for a single PDF notification."""

    @property
    def name(self) -> str:
        return "pdf"

    async def fetch(self, client: httpx.AsyncClient) -> list[DiscoveredItem]:
        response = await get_checked(client, self.source.url)

        try:
            # pdfminer is synchronous and CPU-bound
            text = await asyncio.to_thread(_extract, response.content)
        except Exception:
            logger.warning("PDF text extraction failed for %s", self.source.url, exc_info=True)
            text = ""

        return [
            self.make_item(
                title=self.source.name,
                url=self.source.url,
                snippet=truncate(" ".join(text.split()), SNIPPET_LENGTH),
                pdf_text=text,
            )
        ]
