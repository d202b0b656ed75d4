"""Shared fixtures for the SplitSpend test-suite."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
import streamlit as st

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import get_settings  # noqa: E402
from core.models import Share, Transaction  # noqa: E402


@pytest.fixture(autouse=True)
def clear_streamlit_secrets(monkeypatch):
    """Provide an empty secrets mapping so tests don't rely on Streamlit runtime."""

    monkeypatch.setattr(st, "secrets", {}, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_transaction(
    date: str,
    description: str,
    cost: float,
    category: str = "Groceries",
    shares: dict[str, float] | None = None,
) -> Transaction:
    return Transaction(
        date=date,
        description=description,
        category=category,
        cost=cost,
        currency="USD",
        shares=tuple(Share(name, amount) for name, amount in (shares or {}).items()),
    )


@pytest.fixture()
def mayuri_transactions() -> list[Transaction]:
    return [
        make_transaction("2025-02-24", "Mayuri", 42.56, shares={"A": 21.28, "B": -21.28}),
        make_transaction("2025-02-25", "Mayuri Store", 27.62, shares={"A": 13.81, "B": -13.81}),
    ]


@pytest.fixture()
def household_transactions() -> list[Transaction]:
    return [
        make_transaction("2025-01-05", "Trader Joe's", 60.0, shares={"Ana": 30.0, "Ben": -30.0}),
        make_transaction("2025-01-12", "Trader Joes", 40.0, shares={"Ana": -20.0, "Ben": 20.0}),
        make_transaction("2025-01-20", "Shell", 35.0, category="Transport", shares={"Ben": 35.0}),
        make_transaction("2025-02-02", "Trader Joe's", 80.0, shares={"Ana": 40.0, "Ben": -40.0}),
        make_transaction("2025-02-14", "Netflix", 15.0, category="Entertainment", shares={"Ana": 7.5, "Ben": -7.5}),
        make_transaction("2025-03-01", "Shell", 45.0, category="Transport", shares={"Ben": 45.0}),
    ]
