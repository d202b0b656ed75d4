"""Per-person, per-store and per-category spending patterns plus the calendar heatmap."""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from analytics.frames import shares_frame, transactions_frame
from analytics.stores import canonical_lookup
from core.errors import safe_entry_point
from core.models import (
    CategoryTrend,
    HeatmapDay,
    PaymentPattern,
    StoreAnalytics,
    StoreMapping,
    Transaction,
)

__all__ = [
    "MAX_PREFERRED_STORES",
    "MAX_COMMON_STORES",
    "GROWTH_WINDOW_MONTHS",
    "get_payment_patterns",
    "get_store_analytics",
    "get_category_trends",
    "get_spending_heatmap",
]

MAX_PREFERRED_STORES = 10
MAX_COMMON_STORES = 5
GROWTH_WINDOW_MONTHS = 3


def _counts(series: pd.Series) -> dict[str, int]:
    return {str(key): int(value) for key, value in series.items()}


def _sums(series: pd.Series) -> dict[str, float]:
    return {str(key): float(value) for key, value in series.items()}


@safe_entry_point(list)
def get_payment_patterns(transactions: Sequence[Transaction], mapping: StoreMapping) -> list[PaymentPattern]:
    """Summarise how each person spends: categories, weekdays, months and stores.

    Amounts are share magnitudes, so paying for something and owing for it both
    count as activity.
    """

    shares = shares_frame(transactions, canonical_lookup(mapping))
    if shares.empty:
        return []

    patterns: list[PaymentPattern] = []
    for person, person_shares in shares.groupby("person", sort=False):
        categories = person_shares.groupby("category", sort=False)["abs_amount"].agg(["sum", "size"])
        category_breakdown = {
            str(category): {"amount": float(row["sum"]), "count": int(row["size"])}
            for category, row in categories.iterrows()
        }

        weekdays = person_shares.groupby("weekday", sort=False).size()
        months = person_shares.groupby("month")["abs_amount"].sum().sort_index()

        # a person listed twice on one transaction only counts their first share
        visits = person_shares.drop_duplicates(subset="position", keep="first")
        stores = visits.groupby("store", sort=False)["abs_amount"].agg(["size", "sum"])
        stores = stores.sort_values("sum", ascending=False, kind="stable").head(MAX_PREFERRED_STORES)
        preferred_stores = [
            {"store": str(store), "frequency": int(row["size"]), "total_spent": float(row["sum"])}
            for store, row in stores.iterrows()
        ]

        transaction_count = int(visits["position"].nunique())
        total_spent = float(categories["sum"].sum())
        patterns.append(
            {
                "person": str(person),
                "category_breakdown": category_breakdown,
                "preferred_stores": preferred_stores,
                "average_transaction_size": total_spent / transaction_count if transaction_count else 0.0,
                "payment_frequency": _counts(weekdays),
                "monthly_spending": _sums(months),
            }
        )

    return patterns


@safe_entry_point(list)
def get_store_analytics(transactions: Sequence[Transaction], mapping: StoreMapping) -> list[StoreAnalytics]:
    """Visit and spend statistics per store, biggest total spend first.

    Descriptions without a canonical mapping are reported under their own name.
    """

    frame = transactions_frame(transactions, canonical_lookup(mapping))
    if frame.empty:
        return []

    analytics: list[StoreAnalytics] = []
    for store, store_df in frame.groupby("store", sort=False):
        visits = int(len(store_df))
        total = float(store_df["cost"].sum())

        popular = store_df.groupby("weekday", sort=False).size().sort_values(ascending=False, kind="stable")
        monthly = store_df.groupby("month")["cost"].agg(["sum", "size"]).sort_index()

        analytics.append(
            {
                "store_name": str(store),
                "visit_frequency": visits,
                "average_spend": total / visits if visits else 0.0,
                "total_spent": total,
                "popular_days": [{"day": str(day), "frequency": int(count)} for day, count in popular.items()],
                "categories": [str(category) for category in store_df["category"].unique()],
                "first_visited": str(store_df["date"].min()),
                "last_visited": str(store_df["date"].max()),
                "monthly_trend": [
                    {"month": str(month), "amount": float(row["sum"]), "visits": int(row["size"])}
                    for month, row in monthly.iterrows()
                ],
            }
        )

    analytics.sort(key=lambda row: row["total_spent"], reverse=True)
    return analytics


def _growth_rate(monthly_amounts: Sequence[float]) -> float:
    """Percent change of the last three monthly totals against the three before."""

    window = GROWTH_WINDOW_MONTHS
    if len(monthly_amounts) < window * 2:
        return 0.0
    recent = sum(monthly_amounts[-window:]) / window
    previous = sum(monthly_amounts[-window * 2 : -window]) / window
    if previous <= 0:
        return 0.0
    return (recent - previous) / previous * 100


@safe_entry_point(list)
def get_category_trends(transactions: Sequence[Transaction], mapping: StoreMapping) -> list[CategoryTrend]:
    """Monthly progression, growth and store preferences for each category."""

    frame = transactions_frame(transactions, canonical_lookup(mapping))
    if frame.empty:
        return []

    trends: list[tuple[float, CategoryTrend]] = []
    for category, category_df in frame.groupby("category", sort=False):
        monthly = category_df.groupby("month")["cost"].agg(["sum", "size"]).sort_index()
        monthly_amounts = [float(value) for value in monthly["sum"]]

        # ties: first of the largest, last of the smallest
        largest = transactions[int(category_df.loc[category_df["cost"].idxmax(), "position"])]
        smallest = transactions[int(category_df.loc[category_df["cost"][::-1].idxmin(), "position"])]

        stores = category_df.groupby("store", sort=False)["cost"].agg(["sum", "size"])
        stores = stores.sort_values("sum", ascending=False, kind="stable").head(MAX_COMMON_STORES)

        weekday_spend = category_df.groupby("weekday", sort=False)["cost"].sum()

        trend: CategoryTrend = {
            "category": str(category),
            "monthly_spend": [
                {"month": str(month), "amount": float(row["sum"]), "count": int(row["size"])}
                for month, row in monthly.iterrows()
            ],
            "growth_rate": _growth_rate(monthly_amounts),
            "largest_transaction": largest,
            "smallest_transaction": smallest,
            "average_transaction_size": float(category_df["cost"].mean()),
            "common_stores": [
                {"store": str(store), "amount": float(row["sum"]), "frequency": int(row["size"])}
                for store, row in stores.iterrows()
            ],
            "day_of_week_pattern": _sums(weekday_spend),
        }
        trends.append((sum(monthly_amounts), trend))

    trends.sort(key=lambda item: item[0], reverse=True)
    return [trend for _, trend in trends]


@safe_entry_point(list)
def get_spending_heatmap(
    transactions: Sequence[Transaction],
    date_range: tuple[str, str] | None = None,
) -> list[HeatmapDay]:
    """Daily spend totals with weekday and ISO week number, oldest first."""

    selected = transactions
    if date_range is not None:
        start, end = date_range
        selected = [transaction for transaction in transactions if start <= transaction.date <= end]

    frame = transactions_frame(selected)
    if frame.empty:
        return []

    days: list[HeatmapDay] = []
    for date, day_df in frame.groupby("date"):
        timestamp = day_df["timestamp"].iloc[0]
        days.append(
            {
                "date": str(date),
                "amount": float(day_df["cost"].sum()),
                "transaction_count": int(len(day_df)),
                "categories": [str(category) for category in day_df["category"].unique()],
                "day_of_week": str(timestamp.day_name()),
                "week_of_year": int(timestamp.isocalendar()[1]),
            }
        )
    return days
