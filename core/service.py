"""Request-level entry points used by the SplitSpend front end.

Each function takes the session snapshot plus raw query or body parameters,
validates them, and delegates to the pure analytics layer. Validation failures
raise :class:`MalformedFilterError`; a missing upload raises
:class:`NoDataError`.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Mapping

from analytics import (
    DIMENSIONS,
    TIME_INTERVALS,
    analyze_similar_stores,
    apply_store_mappings,
    get_detailed_transactions,
    get_metadata,
    get_payment_patterns,
    get_spending_by,
    get_spending_heatmap,
    get_spending_over_time,
)
from analytics.stores import DEFAULT_SIMILARITY_THRESHOLD
from core.errors import MalformedFilterError, PersonNotFoundError
from core.logging_setup import get_logger
from core.models import (
    AnalysisFilters,
    DatasetMetadata,
    HeatmapDay,
    PaymentPattern,
    SessionSnapshot,
    SpendingPoint,
    StoreGrouping,
    TransactionPage,
)
from core.session import create_snapshot, freeze_mapping, require_data

__all__ = [
    "parse_filters",
    "encode_filters",
    "parse_mappings",
    "parse_heatmap_range",
    "dataset_metadata",
    "analyze",
    "store_suggestions",
    "apply_mappings",
    "payment_pattern_for",
    "spending_heatmap",
]

logger = get_logger(__name__)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _parse_date(value: str | None, field: str) -> str | None:
    if value is None or not str(value).strip():
        return None
    text = str(value).strip()
    if not _ISO_DATE.match(text):
        raise MalformedFilterError(f"Invalid {field}: {text!r}. Use YYYY-MM-DD format.")
    try:
        date.fromisoformat(text)
    except ValueError as exc:
        raise MalformedFilterError(f"Invalid {field}: {text!r}.") from exc
    return text


def _parse_list(value: str | None) -> frozenset[str] | None:
    if value is None:
        return None
    items = [item.strip() for item in str(value).split(",") if item.strip()]
    return frozenset(items) or None


def _parse_positive_int(value: Any, field: str, default: int) -> int:
    if value is None or str(value).strip() == "":
        return default
    try:
        number = int(str(value).strip())
    except ValueError as exc:
        raise MalformedFilterError(f"{field} must be an integer, got {value!r}") from exc
    if number < 1:
        raise MalformedFilterError(f"{field} must be at least 1, got {number}")
    return number


def parse_filters(params: Mapping[str, Any]) -> AnalysisFilters:
    """Decode ``startDate``/``endDate`` and comma-joined ``people``/``categories``/``stores``."""

    start = _parse_date(params.get("startDate"), "startDate")
    end = _parse_date(params.get("endDate"), "endDate")
    if start and end and start > end:
        raise MalformedFilterError("Start date cannot be after end date.")

    return AnalysisFilters(
        start_date=start,
        end_date=end,
        people=_parse_list(params.get("people")),
        categories=_parse_list(params.get("categories")),
        stores=_parse_list(params.get("stores")),
    )


def encode_filters(filters: AnalysisFilters) -> dict[str, str]:
    """Inverse of :func:`parse_filters`; unconstrained fields are omitted."""

    encoded: dict[str, str] = {}
    if filters.start_date:
        encoded["startDate"] = filters.start_date
    if filters.end_date:
        encoded["endDate"] = filters.end_date
    for key, values in (("people", filters.people), ("categories", filters.categories), ("stores", filters.stores)):
        if values:
            encoded[key] = ",".join(sorted(values))
    return encoded


def parse_mappings(body: Any) -> dict[str, tuple[str, ...]]:
    """Validate a ``{canonicalName: [variation, ...]}`` mappings body."""

    if not isinstance(body, Mapping):
        raise MalformedFilterError("Invalid mappings format. Expected object with canonical names as keys.")

    for canonical, variations in body.items():
        if not isinstance(canonical, str) or not canonical:
            raise MalformedFilterError("Canonical store names must be non-empty strings.")
        if isinstance(variations, str) or not isinstance(variations, (list, tuple, set, frozenset)):
            raise MalformedFilterError(f"Variations for {canonical!r} must be a list of strings.")
        if not all(isinstance(name, str) for name in variations):
            raise MalformedFilterError(f"Variations for {canonical!r} must be a list of strings.")
    return freeze_mapping(body)


def parse_heatmap_range(params: Mapping[str, Any]) -> tuple[str, str] | None:
    """Return the heatmap date range; only applied when both bounds are given."""

    start = _parse_date(params.get("startDate"), "startDate")
    end = _parse_date(params.get("endDate"), "endDate")
    if not (start and end):
        return None
    if start > end:
        raise MalformedFilterError("Start date cannot be after end date.")
    return start, end


def dataset_metadata(snapshot: SessionSnapshot | None) -> DatasetMetadata:
    snapshot = require_data(snapshot)
    return get_metadata(snapshot.transactions, snapshot.store_mappings)


def analyze(
    snapshot: SessionSnapshot | None,
    params: Mapping[str, Any],
    *,
    default_page_size: int = 20,
) -> list[SpendingPoint] | TransactionPage:
    """Dispatch on ``groupBy``: a time series, a dimension breakdown, or a page of transactions."""

    snapshot = require_data(snapshot)
    filters = parse_filters(params)
    group_by = params.get("groupBy")

    if group_by == "time":
        interval = params.get("interval") or "day"
        if interval not in TIME_INTERVALS:
            raise MalformedFilterError(f"Invalid interval: {interval}")
        return get_spending_over_time(snapshot.transactions, filters, snapshot.store_mappings, interval)

    if group_by in DIMENSIONS:
        return get_spending_by(snapshot.transactions, filters, snapshot.store_mappings, group_by)

    if group_by:
        raise MalformedFilterError(f"Invalid groupBy: {group_by}")

    page = _parse_positive_int(params.get("page"), "page", 1)
    page_size = _parse_positive_int(params.get("pageSize"), "pageSize", default_page_size)
    return get_detailed_transactions(snapshot.transactions, filters, snapshot.store_mappings, page, page_size)


def store_suggestions(
    snapshot: SessionSnapshot | None,
    *,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> list[StoreGrouping]:
    snapshot = require_data(snapshot)
    return analyze_similar_stores(snapshot.transactions, threshold=threshold)


def apply_mappings(snapshot: SessionSnapshot | None, body: Any) -> tuple[SessionSnapshot, dict[str, Any]]:
    """Rewrite the snapshot's transactions with ``body`` and make it the confirmed mapping."""

    snapshot = require_data(snapshot)
    mappings = parse_mappings(body)
    updated = create_snapshot(apply_store_mappings(snapshot.transactions, mappings), mappings)
    logger.info("Applied %d store mappings to %d transactions", len(mappings), len(updated.transactions))
    return updated, {
        "message": "Store mappings applied successfully",
        "transaction_count": len(updated.transactions),
    }


def payment_pattern_for(snapshot: SessionSnapshot | None, person: str) -> PaymentPattern:
    snapshot = require_data(snapshot)
    for pattern in get_payment_patterns(snapshot.transactions, snapshot.store_mappings):
        if pattern["person"] == person:
            return pattern
    raise PersonNotFoundError(f"No payment pattern found for person: {person}")


def spending_heatmap(snapshot: SessionSnapshot | None, params: Mapping[str, Any]) -> list[HeatmapDay]:
    snapshot = require_data(snapshot)
    return get_spending_heatmap(snapshot.transactions, parse_heatmap_range(params))
