"""Discovery — source adapters, deduplication and source configuration."""

from jobwire.ingestion.api_adapter import APIAdapter
from jobwire.ingestion.page_adapter import NewsAdapter, PageAdapter
from jobwire.ingestion.pdf_adapter import PDFAdapter
from jobwire.ingestion.registry import register_adapter
from jobwire.ingestion.rss_adapter import RSSAdapter

register_adapter("rss", RSSAdapter)
register_adapter("page", PageAdapter)
register_adapter("news", NewsAdapter)
register_adapter("pdf", PDFAdapter)
register_adapter("api", APIAdapter)
