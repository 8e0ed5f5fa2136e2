"""Discovered items — the uniform shape every source adapter emits."""

from __future__ import annotations

import re
from dataclasses import dataclass
from html import unescape

_HTML_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")

TITLE_KEY_LENGTH = 80
SNIPPET_LENGTH = 500
PDF_TEXT_LENGTH = 8000


def strip_html(text: str) -> str:
    """Remove HTML tags, unescape entities and collapse whitespace."""
    text = unescape(_HTML_TAG_RE.sub(" ", text))
    return _WHITESPACE_RE.sub(" ", text).strip()


def truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit].rstrip()


@dataclass(frozen=True)
class DiscoveredItem:
    """Candidate posting extracted from a source, held only for one run."""

    title: str
    url: str
    snippet: str
    source_name: str
    source_id: str
    pdf_text: str | None = None
    discovered_from: str = ""

    @property
    def key(self) -> str:
        return unique_key(self)


def unique_key(item: DiscoveredItem) -> str:
    """Uniqueness key: trimmed URL, else the first 80 characters of the title.

    Returns an empty string when neither is present.
    """
    url = (item.url or "").strip()
    if url:
        return url
    return (item.title or "").strip()[:TITLE_KEY_LENGTH]


def to_raw_record(item: DiscoveredItem) -> dict:
    """Serialize an item into the record embedded in the formatting prompt."""
    return {
        "title": item.title,
        "snippet": item.snippet,
        "url": item.url,
        "pdf_text": truncate(item.pdf_text, PDF_TEXT_LENGTH) if item.pdf_text else "",
        "source_name": item.source_name,
        "discovered_from": item.discovered_from,
    }
