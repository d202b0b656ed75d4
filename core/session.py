"""Immutable session snapshots handed to the analytics layer."""

from __future__ import annotations

from typing import Iterable, Mapping

from core.errors import NoDataError
from core.models import SessionSnapshot, Transaction

__all__ = ["create_snapshot", "require_data", "freeze_mapping"]


def freeze_mapping(mapping: Mapping[str, Iterable[str]]) -> dict[str, tuple[str, ...]]:
    """Copy ``mapping`` into the canonical-name to variation-tuple form."""

    return {str(canonical): tuple(str(name) for name in variations) for canonical, variations in mapping.items()}


def create_snapshot(
    transactions: Iterable[Transaction],
    store_mappings: Mapping[str, Iterable[str]] | None = None,
) -> SessionSnapshot:
    return SessionSnapshot(
        transactions=tuple(transactions),
        store_mappings=freeze_mapping(store_mappings or {}),
    )


def require_data(snapshot: SessionSnapshot | None) -> SessionSnapshot:
    """Return ``snapshot`` or raise :class:`NoDataError` when nothing was uploaded."""

    if snapshot is None or not snapshot.has_data:
        raise NoDataError()
    return snapshot

