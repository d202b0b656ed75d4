"""Running balances between people sharing expenses."""

from __future__ import annotations

import pytest

from analytics import get_balance_analytics
from tests.conftest import make_transaction


def test_two_person_split_balances_out(mayuri_transactions):
    result = get_balance_analytics(mayuri_transactions)

    assert result["current_balance"] == pytest.approx({"A": 35.09, "B": -35.09})
    assert sum(result["current_balance"].values()) == pytest.approx(0.0)
    assert result["payment_frequency"] == {"A": 2, "B": 2}
    assert result["monthly_balance_change"] == [{"month": "2025-02", "change": pytest.approx(70.18)}]
    assert result["largest_imbalance_period"] == {
        "start": "2025-02-25",
        "end": "2025-02-25",
        "max_imbalance": pytest.approx(35.09),
    }


def test_history_follows_date_order_then_input_order():
    transactions = [
        make_transaction("2025-03-02", "Later", 10.0, shares={"A": 10.0}),
        make_transaction("2025-03-01", "First", 4.0, shares={"A": 4.0}),
        make_transaction("2025-03-01", "Second", 6.0, shares={"A": -6.0}),
    ]

    history = get_balance_analytics(transactions)["balance_history"]

    assert [(point["date"], point["balance"]) for point in history] == [
        ("2025-03-01", pytest.approx(4.0)),
        ("2025-03-01", pytest.approx(-2.0)),
        ("2025-03-02", pytest.approx(8.0)),
    ]


def test_household_monthly_activity_and_peak(household_transactions):
    result = get_balance_analytics(household_transactions)

    assert result["current_balance"] == pytest.approx({"Ana": 57.5, "Ben": 22.5})
    assert result["payment_frequency"] == {"Ana": 4, "Ben": 6}
    assert result["monthly_balance_change"] == [
        {"month": "2025-01", "change": pytest.approx(35.0)},
        {"month": "2025-02", "change": pytest.approx(95.0)},
        {"month": "2025-03", "change": pytest.approx(45.0)},
    ]
    assert result["largest_imbalance_period"]["start"] == "2025-02-14"
    assert result["largest_imbalance_period"]["max_imbalance"] == pytest.approx(57.5)


def test_empty_input_returns_zero_valued_result():
    result = get_balance_analytics([])

    assert result["current_balance"] == {}
    assert result["balance_history"] == []
    assert result["largest_imbalance_period"]["max_imbalance"] == 0.0


def test_transactions_without_shares_keep_default_period():
    result = get_balance_analytics([make_transaction("2025-01-01", "Solo", 5.0), make_transaction("2025-01-09", "Solo", 5.0)])

    assert result["current_balance"] == {}
    assert result["largest_imbalance_period"] == {"start": "2025-01-01", "end": "2025-01-09", "max_imbalance": 0.0}
