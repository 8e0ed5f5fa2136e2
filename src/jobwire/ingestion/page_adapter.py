"""HTML page adapters — extract candidate links with CSS selectors.

``PageAdapter`` keeps every link its selectors match. ``NewsAdapter`` is the
heuristic variant for notice boards and news listings: it narrows the default
selectors to likely article containers and keeps only links whose URL or
text looks job-related.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import urldefrag, urljoin

import httpx
from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

from jobwire.ingestion.adapter import SourceAdapter, get_checked
from jobwire.ingestion.normalize import DiscoveredItem, strip_html

logger = logging.getLogger(__name__)

_SKIPPED_SCHEMES = ("javascript:", "mailto:", "tel:", "#")

JOB_KEYWORDS = (
    "job",
    "vacancy",
    "vacancies",
    "recruit",
    "notification",
    "career",
    "bharti",
    "naukri",
    "admit card",
    "भर्ती",
    "नौकरी",
    "रिक्ति",
)
_JOB_KEYWORD_RE = re.compile("|".join(re.escape(k) for k in JOB_KEYWORDS), re.IGNORECASE)


def is_job_related(text: str, url: str) -> bool:
    """True when the link text or URL contains a job keyword."""
    return bool(_JOB_KEYWORD_RE.search(text) or _JOB_KEYWORD_RE.search(url))


def _anchor_for(element: Tag) -> Tag | None:
    """The element itself if it is a link, else its first descendant link."""
    if element.name == "a" and element.get("href"):
        return element
    return element.find("a", href=True)


def extract_links(
    html: str,
    base_url: str,
    selectors: tuple[str, ...],
) -> list[tuple[str, str]]:
    """Return (text, absolute_url) pairs in document order, deduplicated by URL."""
    soup = BeautifulSoup(html, "html.parser")
    links: list[tuple[str, str]] = []
    seen: set[str] = set()

    for selector in selectors:
        try:
            matches = soup.select(selector)
        except SelectorSyntaxError:
            logger.warning("Invalid selector %r for %s", selector, base_url)
            continue

        for element in matches:
            anchor = _anchor_for(element)
            if anchor is None:
                continue
            href = anchor["href"].strip()
            if not href or href.lower().startswith(_SKIPPED_SCHEMES):
                continue

            url, _ = urldefrag(urljoin(base_url, href))
            text = strip_html(anchor.get_text(" ", strip=True)) or anchor.get("title", "").strip()
            if not text or url in seen:
                continue
            seen.add(url)
            links.append((text, url))

    return links


class PageAdapter(SourceAdapter):
    """Adapter for plain HTML pages listing links to postings."""

    default_selectors: tuple[str, ...] = ("a[href]",)
    keywords_only = False

    @property
    def name(self) -> str:
        return "page"

    async def fetch(self, client: httpx.AsyncClient) -> list[DiscoveredItem]:
        response = await get_checked(client, self.source.url)
        selectors = self.source.selectors or self.default_selectors
        links = extract_links(response.text, str(response.url), selectors)

        items: list[DiscoveredItem] = []
        for text, url in links:
            if self.keywords_only and not is_job_related(text, url):
                continue
            items.append(self.make_item(title=text, url=url, snippet=text))
            if len(items) >= self.max_items:
                break
        return items


class NewsAdapter(PageAdapter):
    """Keyword-filtered variant for news and notification listings."""

    default_selectors = (
        "article a[href]",
        "main a[href]",
        "li a[href]",
        "td a[href]",
        ".news a[href]",
        ".latest a[href]",
    )
    keywords_only = True

    @property
    def name(self) -> str:
        return "news"
