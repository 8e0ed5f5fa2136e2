"""Source configuration — the list of origins a pipeline run reads from."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Source:
    """One configured origin (feed, page, PDF or API)."""

    id: str
    name: str
    type: str
    url: str
    selectors: tuple[str, ...] = field(default_factory=tuple)
    enabled: bool = True


def _coerce_selectors(entry: dict) -> tuple[str, ...]:
    """Accept ``selectors`` as a list or string, or a single ``selector`` key."""
    raw = entry.get("selectors", entry.get("selector"))
    if raw is None:
        return ()
    if isinstance(raw, str):
        raw = [raw]
    return tuple(s.strip() for s in raw if isinstance(s, str) and s.strip())


def _validate_entry(entry: object) -> list[str]:
    """Validate one raw source entry. Returns a list of errors."""
    if not isinstance(entry, dict):
        return ["entry must be an object"]
    errors: list[str] = []
    for key in ("type", "url"):
        value = entry.get(key)
        if not isinstance(value, str) or not value.strip():
            errors.append(f"{key} is required and must be a non-empty string")
    for key in ("selectors", "selector"):
        value = entry.get(key)
        if value is not None and not isinstance(value, (str, list)):
            errors.append(f"{key} must be a string or an array of strings")
    enabled = entry.get("enabled", True)
    if not isinstance(enabled, bool):
        errors.append("enabled must be true or false")
    return errors


def parse_sources(document: object) -> list[Source]:
    """Build Source records from a parsed ``{"sources": [...]}`` document.

    Invalid entries are logged and skipped. A missing ``id`` falls back to
    the entry's position, a missing ``name`` to the id.
    """
    if not isinstance(document, dict):
        logger.warning("Sources document is not an object; using no sources")
        return []

    entries = document.get("sources", [])
    if not isinstance(entries, list):
        logger.warning("'sources' is not an array; using no sources")
        return []

    sources: list[Source] = []
    for position, entry in enumerate(entries):
        errors = _validate_entry(entry)
        if errors:
            logger.warning("Skipping source #%d: %s", position, "; ".join(errors))
            continue
        source_id = str(entry.get("id") or position)
        sources.append(
            Source(
                id=source_id,
                name=str(entry.get("name") or source_id),
                type=entry["type"].strip().lower(),
                url=entry["url"].strip(),
                selectors=_coerce_selectors(entry),
                enabled=entry.get("enabled", True),
            )
        )
    return sources


def load_sources(path: str | Path) -> list[Source]:
    """Load the sources file. A missing or unparseable file is an empty list."""
    path = Path(path)
    if not path.exists():
        logger.warning("Sources file %s not found; using no sources", path)
        return []
    try:
        with open(path, encoding="utf-8") as f:
            document = json.load(f)
    except (OSError, ValueError):
        logger.exception("Failed to read sources file %s", path)
        return []
    return parse_sources(document)
