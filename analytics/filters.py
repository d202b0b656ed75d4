"""Filter predicate shared by every aggregation entry point."""

from __future__ import annotations

from typing import Mapping, Sequence

from analytics.stores import canonical_lookup
from core.models import AnalysisFilters, StoreMapping, Transaction

__all__ = ["filter_transactions", "matches_filters"]


def matches_filters(
    transaction: Transaction,
    filters: AnalysisFilters,
    lookup: Mapping[str, str],
) -> bool:
    """Return ``True`` when ``transaction`` satisfies every active constraint.

    Dates compare as ``YYYY-MM-DD`` strings. With a store constraint active, a
    description that has no canonical name never matches.
    """

    if filters.start_date and transaction.date < filters.start_date:
        return False
    if filters.end_date and transaction.date > filters.end_date:
        return False

    if filters.categories and transaction.category not in filters.categories:
        return False

    if filters.stores:
        canonical = lookup.get(transaction.description)
        if canonical is None or canonical not in filters.stores:
            return False

    if filters.people:
        if not any(share.name in filters.people for share in transaction.shares):
            return False

    return True


def filter_transactions(
    transactions: Sequence[Transaction],
    filters: AnalysisFilters | None,
    mapping: StoreMapping,
) -> list[Transaction]:
    """Return the order-preserving subset of ``transactions`` passing ``filters``."""

    if filters is None:
        return list(transactions)
    lookup = canonical_lookup(mapping)
    return [transaction for transaction in transactions if matches_filters(transaction, filters, lookup)]
