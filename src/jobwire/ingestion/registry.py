"""Adapter registry — maps source type strings to adapter classes."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jobwire.ingestion.adapter import SourceAdapter

_REGISTRY: dict[str, type[SourceAdapter]] = {}


def register_adapter(type_name: str, cls: type[SourceAdapter]) -> None:
    """Register an adapter class for a source type (case-insensitive)."""
    _REGISTRY[type_name.strip().lower()] = cls


def get_adapter_class(type_name: str) -> type[SourceAdapter] | None:
    """Look up an adapter class by source type. Returns None if unsupported."""
    return _REGISTRY.get((type_name or "").strip().lower())


def registered_types() -> list[str]:
    """Return a sorted list of all registered source types."""
    return sorted(_REGISTRY)
