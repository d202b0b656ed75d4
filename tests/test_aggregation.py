"""Filtering, time bucketing, dimension totals and pagination."""

from __future__ import annotations

import pytest

from analytics import (
    filter_transactions,
    get_detailed_transactions,
    get_metadata,
    get_spending_by,
    get_spending_over_time,
)
from core.models import AnalysisFilters
from tests.conftest import make_transaction

MAPPING = {"Trader Joe's": ("Trader Joes",)}


def test_day_week_and_month_buckets():
    transactions = [
        make_transaction("2025-03-02", "Shell", 5.0),
        make_transaction("2025-02-24", "Mayuri", 10.0),
        make_transaction("2025-03-01", "Mayuri", 20.0),
        make_transaction("2025-02-24", "Shell", 1.5),
    ]

    days = get_spending_over_time(transactions, None, {}, "day")
    weeks = get_spending_over_time(transactions, None, {}, "week")
    months = get_spending_over_time(transactions, None, {}, "month")

    assert days == [
        {"label": "2025-02-24", "amount": pytest.approx(11.5)},
        {"label": "2025-03-01", "amount": pytest.approx(20.0)},
        {"label": "2025-03-02", "amount": pytest.approx(5.0)},
    ]
    # Monday 24 Feb and Saturday 1 Mar share the week starting Sunday 23 Feb
    assert weeks == [
        {"label": "2025-02-23", "amount": pytest.approx(31.5)},
        {"label": "2025-03-02", "amount": pytest.approx(5.0)},
    ]
    assert months == [
        {"label": "2025-02", "amount": pytest.approx(11.5)},
        {"label": "2025-03", "amount": pytest.approx(25.0)},
    ]
    assert sum(point["amount"] for point in days) == pytest.approx(36.5)


def test_unsupported_interval_returns_empty_default(household_transactions):
    assert get_spending_over_time(household_transactions, None, {}, "year") == []


def test_spending_by_person_uses_signed_shares(household_transactions):
    totals = get_spending_by(household_transactions, None, MAPPING, "person")

    assert totals == [
        {"label": "Ana", "amount": pytest.approx(57.5)},
        {"label": "Ben", "amount": pytest.approx(22.5)},
    ]


def test_spending_by_store_excludes_unmapped_descriptions(household_transactions):
    totals = get_spending_by(household_transactions, None, MAPPING, "store")

    assert totals == [{"label": "Trader Joe's", "amount": pytest.approx(180.0)}]
    assert get_spending_by(household_transactions, None, {}, "store") == []


def test_spending_by_category_orders_by_magnitude(household_transactions):
    totals = get_spending_by(household_transactions, None, {}, "category")

    assert [point["label"] for point in totals] == ["Groceries", "Transport", "Entertainment"]


def test_filters_combine_dates_people_and_categories(household_transactions):
    filters = AnalysisFilters(
        start_date="2025-01-12",
        end_date="2025-02-14",
        people=frozenset({"Ana"}),
        categories=frozenset({"Groceries", "Entertainment"}),
    )

    result = filter_transactions(household_transactions, filters, MAPPING)

    assert [t.date for t in result] == ["2025-01-12", "2025-02-02", "2025-02-14"]


def test_unknown_store_filter_yields_nothing(household_transactions):
    filters = AnalysisFilters(stores=frozenset({"Costco"}))

    assert filter_transactions(household_transactions, filters, MAPPING) == []
    assert get_spending_over_time(household_transactions, filters, MAPPING, "month") == []


def test_store_filter_requires_a_canonical_mapping(household_transactions):
    filters = AnalysisFilters(stores=frozenset({"Trader Joe's"}))

    assert len(filter_transactions(household_transactions, filters, MAPPING)) == 3
    assert filter_transactions(household_transactions, filters, {}) == []


def test_pages_concatenate_to_the_filtered_list(household_transactions):
    pages = [get_detailed_transactions(household_transactions, None, MAPPING, page, 4) for page in (1, 2, 3)]

    assert [page["total"] for page in pages] == [6, 6, 6]
    assert [len(page["transactions"]) for page in pages] == [4, 2, 0]
    combined = pages[0]["transactions"] + pages[1]["transactions"]
    assert [t.date for t in combined] == [t.date for t in household_transactions]


def test_detailed_transactions_show_canonical_names_without_mutating(household_transactions):
    page = get_detailed_transactions(household_transactions, None, MAPPING, 1, 20)

    assert page["transactions"][1].description == "Trader Joe's"
    assert household_transactions[1].description == "Trader Joes"


def test_invalid_page_returns_empty_page(household_transactions):
    assert get_detailed_transactions(household_transactions, None, MAPPING, 0, 20) == {"transactions": [], "total": 0}


def test_metadata_lists_confirmed_stores_only(household_transactions):
    metadata = get_metadata(household_transactions, MAPPING)

    assert metadata["people"] == ["Ana", "Ben"]
    assert metadata["categories"] == ["Groceries", "Transport", "Entertainment"]
    assert metadata["stores"] == ["Trader Joe's"]
    assert metadata["date_range"] == {"start": "2025-01-05", "end": "2025-03-01"}
