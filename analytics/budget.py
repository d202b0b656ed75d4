"""Budget recommendations, next-month predictions and anomaly detection."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from analytics.frames import transactions_frame
from core.errors import safe_entry_point
from core.models import (
    Anomaly,
    BudgetIntelligence,
    CategoryRecommendation,
    SpendingPrediction,
    Transaction,
    Trend,
    empty_budget_intelligence,
)

__all__ = [
    "BUDGET_BUFFER",
    "classify_trend",
    "budget_confidence",
    "detect_anomalies",
    "get_budget_intelligence",
]

BUDGET_BUFFER = 1.2
_TREND_UP = 1.1
_TREND_DOWN = 0.9
_TREND_MIN_MONTHS = 3


def classify_trend(monthly_amounts: Sequence[float]) -> Trend:
    """Compare the last two monthly totals with the two months before them."""

    if len(monthly_amounts) < _TREND_MIN_MONTHS:
        return "stable"

    recent = float(np.mean(monthly_amounts[-2:]))
    older = float(np.mean(monthly_amounts[-4:-2]))
    if recent > older * _TREND_UP:
        return "increasing"
    if recent < older * _TREND_DOWN:
        return "decreasing"
    return "stable"


def budget_confidence(monthly_amounts: Sequence[float]) -> float:
    """Return ``1 - std / mean`` clamped to ``[0, 1]``; zero when the mean is zero."""

    if len(monthly_amounts) == 0:
        return 0.0
    average = float(np.mean(monthly_amounts))
    if average == 0:
        return 0.0
    spread = float(np.std(monthly_amounts))
    return float(np.clip(1 - spread / average, 0.0, 1.0))


def detect_anomalies(
    transactions: Sequence[Transaction],
    *,
    z_threshold: float = 2.0,
    min_transactions: int = 5,
    limit: int = 10,
) -> list[Anomaly]:
    """Flag transactions whose cost sits more than ``z_threshold`` deviations from their category mean.

    Categories with fewer than ``min_transactions`` rows, or with no spread at
    all, are skipped. ``score`` is the absolute z-score, highest first.
    """

    frame = transactions_frame(transactions)
    if frame.empty:
        return []

    anomalies: list[Anomaly] = []
    for _, category_df in frame.groupby("category", sort=False):
        if len(category_df) < min_transactions:
            continue

        costs = category_df["cost"].to_numpy(dtype=float)
        spread = float(costs.std())
        if spread == 0 or np.isnan(spread):
            continue

        scores = np.abs((costs - costs.mean()) / spread)
        for position, score in zip(category_df["position"], scores):
            if score > z_threshold:
                anomalies.append(
                    {
                        "transaction": transactions[int(position)],
                        "anomaly_type": "unusually_high",
                        "score": float(score),
                    }
                )

    anomalies.sort(key=lambda row: row["score"], reverse=True)
    return anomalies[:limit]


@safe_entry_point(empty_budget_intelligence)
def get_budget_intelligence(
    transactions: Sequence[Transaction],
    *,
    z_threshold: float = 2.0,
    min_transactions: int = 5,
    max_anomalies: int = 10,
) -> BudgetIntelligence:
    """Suggest monthly budgets per category and flag outlying transactions."""

    frame = transactions_frame(transactions)
    if frame.empty:
        return empty_budget_intelligence()

    recommendations: list[CategoryRecommendation] = []
    predictions: list[SpendingPrediction] = []
    for category, category_df in frame.groupby("category", sort=False):
        monthly = category_df.groupby("month")["cost"].sum().sort_index()
        monthly_amounts = [float(value) for value in monthly]
        if not monthly_amounts:
            continue

        average = float(np.mean(monthly_amounts))
        trend = classify_trend(monthly_amounts)
        confidence = budget_confidence(monthly_amounts)

        recommendations.append(
            {
                "category": str(category),
                "suggested_budget": average * BUDGET_BUFFER,
                "current_monthly_average": average,
                "trend": trend,
                "confidence": confidence,
            }
        )

        predicted = average
        if trend == "increasing":
            predicted *= _TREND_UP
        elif trend == "decreasing":
            predicted *= _TREND_DOWN
        predictions.append({"category": str(category), "predicted_amount": predicted, "confidence": confidence})

    recommendations.sort(key=lambda row: row["current_monthly_average"], reverse=True)
    predictions.sort(key=lambda row: row["predicted_amount"], reverse=True)

    return {
        "category_recommendations": recommendations,
        "anomalies": detect_anomalies(
            transactions,
            z_threshold=z_threshold,
            min_transactions=min_transactions,
            limit=max_anomalies,
        ),
        "predicted_next_month_spending": predictions,
    }
