"""Time-series and dimensional spending aggregation."""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from analytics.filters import filter_transactions
from analytics.frames import shares_frame, transactions_frame, week_start_labels
from analytics.stores import canonical_lookup, canonical_store
from core.errors import safe_entry_point
from core.models import (
    AnalysisFilters,
    DatasetMetadata,
    Dimension,
    SpendingPoint,
    StoreMapping,
    TimeInterval,
    Transaction,
    TransactionPage,
    empty_transaction_page,
)

__all__ = [
    "TIME_INTERVALS",
    "DIMENSIONS",
    "get_spending_over_time",
    "get_spending_by",
    "get_detailed_transactions",
    "get_metadata",
]

TIME_INTERVALS: tuple[TimeInterval, ...] = ("day", "week", "month")
DIMENSIONS: tuple[Dimension, ...] = ("category", "store", "person")


def _to_points(totals: pd.Series) -> list[SpendingPoint]:
    return [{"label": str(label), "amount": float(amount)} for label, amount in totals.items()]


@safe_entry_point(list)
def get_spending_over_time(
    transactions: Sequence[Transaction],
    filters: AnalysisFilters | None,
    mapping: StoreMapping,
    interval: TimeInterval = "day",
) -> list[SpendingPoint]:
    """Sum transaction costs per day, Sunday-start week or month, oldest first."""

    if interval not in TIME_INTERVALS:
        raise ValueError(f"Unsupported interval: {interval}")

    filtered = filter_transactions(transactions, filters, mapping)
    if not filtered:
        return []

    frame = transactions_frame(filtered)
    if interval == "week":
        buckets = week_start_labels(frame["timestamp"])
    elif interval == "month":
        buckets = frame["month"]
    else:
        buckets = frame["date"]

    totals = frame.groupby(buckets.rename("label"))["cost"].sum().sort_index()
    return _to_points(totals)


@safe_entry_point(list)
def get_spending_by(
    transactions: Sequence[Transaction],
    filters: AnalysisFilters | None,
    mapping: StoreMapping,
    dimension: Dimension,
) -> list[SpendingPoint]:
    """Group spending by category, canonical store or person.

    People are credited with their signed share amounts rather than the
    transaction cost. Stores without a confirmed canonical name are left out.
    Results are ordered by absolute amount, largest first.
    """

    if dimension not in DIMENSIONS:
        raise ValueError(f"Unsupported dimension: {dimension}")

    filtered = filter_transactions(transactions, filters, mapping)
    if not filtered:
        return []

    if dimension == "person":
        shares = shares_frame(filtered)
        if shares.empty:
            return []
        totals = shares.groupby("person", sort=False)["amount"].sum()
    elif dimension == "store":
        frame = transactions_frame(filtered, canonical_lookup(mapping), keep_unmapped=False)
        totals = frame.groupby("store", sort=False, dropna=True)["cost"].sum()
    else:
        frame = transactions_frame(filtered)
        totals = frame.groupby("category", sort=False)["cost"].sum()

    if totals.empty:
        return []

    order = totals.abs().sort_values(ascending=False, kind="stable").index
    return _to_points(totals.reindex(order))


@safe_entry_point(empty_transaction_page)
def get_detailed_transactions(
    transactions: Sequence[Transaction],
    filters: AnalysisFilters | None,
    mapping: StoreMapping,
    page: int = 1,
    page_size: int = 20,
) -> TransactionPage:
    """Return one page of filtered transactions labelled with canonical store names."""

    if page < 1 or page_size < 1:
        raise ValueError(f"Invalid page {page} / page size {page_size}")

    filtered = filter_transactions(transactions, filters, mapping)
    start = (page - 1) * page_size
    lookup = canonical_lookup(mapping)
    window = [
        transaction.with_description(canonical_store(transaction.description, lookup))
        for transaction in filtered[start : start + page_size]
    ]
    return {"transactions": window, "total": len(filtered)}


def get_metadata(transactions: Sequence[Transaction], mapping: StoreMapping) -> DatasetMetadata:
    """Describe the dataset for populating filter controls.

    Only confirmed canonical store names are offered, since the store filter
    matches on canonical names alone.
    """

    people = list(dict.fromkeys(share.name for transaction in transactions for share in transaction.shares))
    categories = list(dict.fromkeys(transaction.category for transaction in transactions))
    dates = sorted(transaction.date for transaction in transactions)
    return {
        "people": people,
        "categories": categories,
        "stores": list(mapping),
        "date_range": {
            "start": dates[0] if dates else "",
            "end": dates[-1] if dates else "",
        },
    }
