"""DataFrame builders shared by the analytics modules."""

from __future__ import annotations

from typing import Mapping, Sequence

import pandas as pd

from core.models import Transaction

__all__ = [
    "TRANSACTION_COLUMNS",
    "SHARE_COLUMNS",
    "transactions_frame",
    "shares_frame",
    "week_start_labels",
]

TRANSACTION_COLUMNS = ["position", "date", "description", "store", "category", "cost", "currency"]
SHARE_COLUMNS = ["position", "date", "description", "store", "category", "cost", "person", "amount"]


def _store_for(description: str, lookup: Mapping[str, str] | None, keep_unmapped: bool) -> str | None:
    if lookup is None:
        return description
    if keep_unmapped:
        return lookup.get(description, description)
    return lookup.get(description)


def _with_calendar_columns(frame: pd.DataFrame) -> pd.DataFrame:
    timestamps = pd.to_datetime(frame["date"], format="ISO8601")
    frame["month"] = frame["date"].astype(str).str.slice(0, 7)
    frame["weekday"] = timestamps.dt.day_name()
    frame["timestamp"] = timestamps
    return frame


def transactions_frame(
    transactions: Sequence[Transaction],
    lookup: Mapping[str, str] | None = None,
    *,
    keep_unmapped: bool = True,
) -> pd.DataFrame:
    """Return one row per transaction with calendar helper columns.

    ``store`` holds the canonical name from ``lookup``; unmapped descriptions
    keep their raw text unless ``keep_unmapped`` is ``False``, in which case
    they are left missing so that ``groupby`` drops them.
    """

    records = [
        {
            "position": index,
            "date": transaction.date,
            "description": transaction.description,
            "store": _store_for(transaction.description, lookup, keep_unmapped),
            "category": transaction.category,
            "cost": float(transaction.cost),
            "currency": transaction.currency,
        }
        for index, transaction in enumerate(transactions)
    ]
    frame = pd.DataFrame.from_records(records, columns=TRANSACTION_COLUMNS)
    frame["cost"] = frame["cost"].astype(float)
    return _with_calendar_columns(frame)


def shares_frame(
    transactions: Sequence[Transaction],
    lookup: Mapping[str, str] | None = None,
) -> pd.DataFrame:
    """Return one row per share, in transaction order then share order."""

    records = [
        {
            "position": index,
            "date": transaction.date,
            "description": transaction.description,
            "store": _store_for(transaction.description, lookup, True),
            "category": transaction.category,
            "cost": float(transaction.cost),
            "person": share.name,
            "amount": float(share.amount),
        }
        for index, transaction in enumerate(transactions)
        for share in transaction.shares
    ]
    frame = pd.DataFrame.from_records(records, columns=SHARE_COLUMNS)
    frame["amount"] = frame["amount"].astype(float)
    frame["abs_amount"] = frame["amount"].abs()
    return _with_calendar_columns(frame)


def week_start_labels(timestamps: pd.Series) -> pd.Series:
    """Label each timestamp with the ``YYYY-MM-DD`` of the Sunday starting its week."""

    days_since_sunday = (timestamps.dt.weekday + 1) % 7
    starts = timestamps - pd.to_timedelta(days_since_sunday, unit="D")
    return starts.dt.strftime("%Y-%m-%d")
