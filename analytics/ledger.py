"""Running per-person balances between the people sharing expenses."""

from __future__ import annotations

from typing import Sequence

from analytics.frames import shares_frame
from core.errors import safe_entry_point
from core.models import BalanceAnalytics, BalancePoint, MonthlyChange, Transaction, empty_balance_analytics

__all__ = ["get_balance_analytics"]


@safe_entry_point(empty_balance_analytics)
def get_balance_analytics(transactions: Sequence[Transaction]) -> BalanceAnalytics:
    """Walk transactions chronologically and accumulate each person's balance.

    Transactions sharing a date keep their original relative order. A positive
    balance means the person owes money, a negative one that they are owed.
    The largest imbalance "period" is the single date on which any person's
    absolute running balance peaked.
    """

    if not transactions:
        return empty_balance_analytics()

    ordered = sorted(transactions, key=lambda transaction: transaction.date)
    result = empty_balance_analytics()
    result["largest_imbalance_period"] = {
        "start": ordered[0].date,
        "end": ordered[-1].date,
        "max_imbalance": 0.0,
    }

    shares = shares_frame(ordered)
    if shares.empty:
        return result

    shares["running"] = shares.groupby("person", sort=False)["amount"].cumsum()

    history: list[BalancePoint] = [
        {"date": str(date), "balance": float(running), "person": str(person)}
        for date, running, person in shares[["date", "running", "person"]].itertuples(index=False)
    ]

    by_person = shares.groupby("person", sort=False)
    current_balance = {str(person): float(value) for person, value in by_person["running"].last().items()}
    payment_frequency = {str(person): int(count) for person, count in by_person.size().items()}

    monthly_net = shares.groupby(["month", "person"], sort=False)["amount"].sum()
    monthly_activity = monthly_net.abs().groupby(level="month").sum().sort_index()
    monthly_change: list[MonthlyChange] = [
        {"month": str(month), "change": float(change)} for month, change in monthly_activity.items()
    ]

    daily_peak = shares.assign(imbalance=shares["running"].abs()).groupby("date")["imbalance"].max()
    peak_date = str(daily_peak.idxmax())
    result["largest_imbalance_period"] = {
        "start": peak_date,
        "end": peak_date,
        "max_imbalance": float(daily_peak.max()),
    }

    result["current_balance"] = current_balance
    result["balance_history"] = history
    result["monthly_balance_change"] = monthly_change
    result["payment_frequency"] = payment_frequency
    return result
