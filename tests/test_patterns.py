"""Per-person patterns, store analytics, category trends and the heatmap."""

from __future__ import annotations

import pytest

from analytics import get_category_trends, get_payment_patterns, get_spending_heatmap, get_store_analytics
from tests.conftest import make_transaction

MAPPING = {"Trader Joe's": ("Trader Joes",)}


def test_payment_patterns_use_share_magnitudes(household_transactions):
    patterns = {pattern["person"]: pattern for pattern in get_payment_patterns(household_transactions, MAPPING)}

    ana = patterns["Ana"]
    assert ana["category_breakdown"] == {
        "Groceries": {"amount": pytest.approx(90.0), "count": 3},
        "Entertainment": {"amount": pytest.approx(7.5), "count": 1},
    }
    assert ana["average_transaction_size"] == pytest.approx(97.5 / 4)
    assert ana["monthly_spending"] == pytest.approx({"2025-01": 50.0, "2025-02": 47.5})
    assert ana["preferred_stores"][0] == {"store": "Trader Joe's", "frequency": 3, "total_spent": pytest.approx(90.0)}
    assert sum(ana["payment_frequency"].values()) == 4


def test_store_analytics_sorted_by_total(household_transactions):
    stores = get_store_analytics(household_transactions, MAPPING)

    assert [row["store_name"] for row in stores] == ["Trader Joe's", "Shell", "Netflix"]
    trader = stores[0]
    assert trader["visit_frequency"] == 3
    assert trader["average_spend"] == pytest.approx(60.0)
    assert trader["first_visited"] == "2025-01-05"
    assert trader["last_visited"] == "2025-02-02"
    assert [row["month"] for row in trader["monthly_trend"]] == ["2025-01", "2025-02"]


def test_category_trends_need_six_months_for_growth(household_transactions):
    trends = get_category_trends(household_transactions, MAPPING)

    assert [trend["category"] for trend in trends] == ["Groceries", "Transport", "Entertainment"]
    groceries = trends[0]
    assert groceries["growth_rate"] == 0.0
    assert groceries["largest_transaction"].cost == pytest.approx(80.0)
    assert groceries["smallest_transaction"].cost == pytest.approx(40.0)
    assert groceries["common_stores"][0]["store"] == "Trader Joe's"


def test_category_growth_compares_three_month_windows():
    amounts = [10.0, 10.0, 10.0, 20.0, 20.0, 20.0]
    transactions = [
        make_transaction(f"2025-0{month}-10", "Shell", amount, category="Transport")
        for month, amount in enumerate(amounts, start=1)
    ]

    trend = get_category_trends(transactions, {})[0]

    assert trend["growth_rate"] == pytest.approx(100.0)


def test_heatmap_days_carry_weekday_and_iso_week(mayuri_transactions):
    days = get_spending_heatmap(mayuri_transactions)

    assert [day["date"] for day in days] == ["2025-02-24", "2025-02-25"]
    assert days[0]["day_of_week"] == "Monday"
    assert days[0]["week_of_year"] == 9
    assert days[0]["transaction_count"] == 1
    assert days[0]["categories"] == ["Groceries"]


def test_heatmap_range_is_inclusive(household_transactions):
    days = get_spending_heatmap(household_transactions, ("2025-01-12", "2025-02-02"))

    assert [day["date"] for day in days] == ["2025-01-12", "2025-01-20", "2025-02-02"]


def test_category_extremes_break_ties_by_position():
    transactions = [
        make_transaction("2025-01-01", "First big", 50.0),
        make_transaction("2025-01-02", "First small", 5.0),
        make_transaction("2025-01-03", "Second big", 50.0),
        make_transaction("2025-01-04", "Second small", 5.0),
    ]

    trend = get_category_trends(transactions, {})[0]

    assert trend["largest_transaction"].description == "First big"
    assert trend["smallest_transaction"].description == "Second small"
