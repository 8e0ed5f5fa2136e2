"""Tests for jobwire.ingestion.normalize — discovered item helpers."""

from __future__ import annotations

from jobwire.ingestion.normalize import (
    DiscoveredItem,
    strip_html,
    to_raw_record,
    truncate,
    unique_key,
)


def _item(**overrides) -> DiscoveredItem:
    defaults = {
        "title": "SSC CGL 2025 Notification",
        "url": "https://ssc.example/cgl-2025",
        "snippet": "Combined Graduate Level exam",
        "source_name": "SSC",
        "source_id": "ssc",
    }
    defaults.update(overrides)
    return DiscoveredItem(**defaults)


class TestUniqueKey:
    def test_uses_trimmed_url(self):
        assert unique_key(_item(url="  https://ssc.example/cgl  ")) == "https://ssc.example/cgl"

    def test_falls_back_to_title_prefix(self):
        title = "x" * 120
        assert unique_key(_item(url="", title=title)) == "x" * 80

    def test_whitespace_url_falls_back_to_title(self):
        assert unique_key(_item(url="   ", title=" Clerk Posts ")) == "Clerk Posts"

    def test_empty_when_no_url_or_title(self):
        assert unique_key(_item(url="", title="")) == ""

    def test_key_property(self):
        item = _item()
        assert item.key == unique_key(item)


class TestStripHtml:
    def test_removes_tags(self):
        assert strip_html("<p>Hello <b>world</b></p>") == "Hello world"

    def test_unescapes_entities(self):
        assert strip_html("&amp; &lt; &gt;") == "& < >"

    def test_collapses_whitespace(self):
        assert strip_html("  a\n\n  b\t c ") == "a b c"


class TestTruncate:
    def test_short_text_unchanged(self):
        assert truncate("abc", 5) == "abc"

    def test_long_text_cut(self):
        assert truncate("abcdef", 3) == "abc"


class TestToRawRecord:
    def test_fields(self):
        record = to_raw_record(_item(pdf_text="body", discovered_from="https://ssc.example/"))
        assert record == {
            "title": "SSC CGL 2025 Notification",
            "snippet": "Combined Graduate Level exam",
            "url": "https://ssc.example/cgl-2025",
            "pdf_text": "body",
            "source_name": "SSC",
            "discovered_from": "https://ssc.example/",
        }

    def test_missing_pdf_text_is_empty(self):
        assert to_raw_record(_item())["pdf_text"] == ""

    def test_pdf_text_truncated(self):
        record = to_raw_record(_item(pdf_text="a" * 10000))
        assert len(record["pdf_text"]) == 8000
