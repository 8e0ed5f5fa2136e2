"""Tests for jobwire.ingestion.rss_adapter — RSS/Atom source adapter."""

from __future__ import annotations

import asyncio

import httpx

from jobwire.ingestion.rss_adapter import RSSAdapter, _get_content, _get_link
from jobwire.ingestion.sources import Source

# --- Sample feed XML ---

SAMPLE_RSS = """\
<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Recruitment Feed</title>
    <item>
      <title>SSC CGL 2025 Notification</title>
      <link>https://jobs.example.com/ssc-cgl-2025</link>
      <description>&lt;p&gt;Apply for &lt;b&gt;17727&lt;/b&gt; posts.&lt;/p&gt;</description>
    </item>
    <item>
      <title>Railway Group D Recruitment</title>
      <guid isPermaLink="false">https://jobs.example.com/rrb-group-d</guid>
      <description>Group D vacancies.</description>
    </item>
    <item>
      <title>Bank PO Vacancy</title>
      <link>https://jobs.example.com/bank-po</link>
      <description>Probationary officers.</description>
    </item>
  </channel>
</rss>
"""

SAMPLE_ATOM = """\
<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Atom Feed</title>
  <entry>
    <title>Atom Notice</title>
    <link href="https://jobs.example.com/atom-1"/>
    <summary>Atom content body.</summary>
    <updated>2025-06-15T10:00:00Z</updated>
  </entry>
</feed>
"""

FEED_URL = "https://jobs.example.com/feed.xml"


def _source(url: str = FEED_URL) -> Source:
    return Source(id="feed", name="Jobs Feed", type="rss", url=url)


def _discover(body: str, status: int = 200, max_items: int = 50):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, text=body)

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await RSSAdapter(_source(), max_items).discover(client)

    return asyncio.run(run())


class TestGetContent:
    def test_prefers_content_encoded(self):
        entry = {"content": [{"value": "<p>Full</p>"}], "summary": "Short"}
        assert _get_content(entry) == "Full"

    def test_falls_back_to_summary(self):
        assert _get_content({"summary": "<i>Short</i>"}) == "Short"

    def test_empty_when_missing(self):
        assert _get_content({}) == ""


class TestGetLink:
    def test_link(self):
        assert _get_link({"link": "https://a", "id": "b"}) == "https://a"

    def test_guid_fallback(self):
        assert _get_link({"id": "urn:guid:1"}) == "urn:guid:1"


class TestRSSAdapter:
    def test_name(self):
        assert RSSAdapter(_source()).name == "rss"

    def test_maps_entries(self):
        result = _discover(SAMPLE_RSS)
        assert result.ok
        assert [i.url for i in result.items] == [
            "https://jobs.example.com/ssc-cgl-2025",
            "https://jobs.example.com/rrb-group-d",
            "https://jobs.example.com/bank-po",
        ]
        first = result.items[0]
        assert first.title == "SSC CGL 2025 Notification"
        assert first.snippet == "Apply for 17727 posts."
        assert first.source_name == "Jobs Feed"
        assert first.source_id == "feed"
        assert first.discovered_from == FEED_URL
        assert first.pdf_text is None

    def test_atom_feed(self):
        result = _discover(SAMPLE_ATOM)
        assert len(result.items) == 1
        assert result.items[0].url == "https://jobs.example.com/atom-1"
        assert result.items[0].snippet == "Atom content body."

    def test_caps_items(self):
        result = _discover(SAMPLE_RSS, max_items=2)
        assert len(result.items) == 2

    def test_snippet_truncated(self):
        long_feed = SAMPLE_RSS.replace("Group D vacancies.", "word " * 300)
        result = _discover(long_feed)
        assert len(result.items[1].snippet) <= 500

    def test_malformed_feed_yields_nothing(self):
        result = _discover("this is not xml at all <<<")
        assert result.ok
        assert result.items == []

    def test_http_error_is_tagged_failure(self):
        result = _discover("", status=503)
        assert not result.ok
        assert result.items == []
        assert "503" in result.error
