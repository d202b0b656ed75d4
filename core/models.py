"""Shared data model definitions for SplitSpend."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Literal, Mapping, TypedDict

TimeInterval = Literal["day", "week", "month"]
Dimension = Literal["category", "store", "person"]
Trend = Literal["increasing", "decreasing", "stable"]

StoreMapping = Mapping[str, tuple[str, ...]]


@dataclass(frozen=True, slots=True)
class Share:
    """One person's signed allocation of a transaction cost."""

    name: str
    amount: float


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single uploaded expense row.

    ``date`` keeps the zero-padded ``YYYY-MM-DD`` text so that plain string
    comparison orders transactions chronologically.
    """

    date: str
    description: str
    category: str
    cost: float
    currency: str
    shares: tuple[Share, ...] = ()

    def with_description(self, description: str) -> "Transaction":
        if description == self.description:
            return self
        return replace(self, description=description)

    @property
    def people(self) -> tuple[str, ...]:
        return tuple(share.name for share in self.shares)


@dataclass(frozen=True, slots=True)
class StoreGrouping:
    canonical_name: str
    variations: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        seen: list[str] = []
        for name in self.variations:
            if name != self.canonical_name and name not in seen:
                seen.append(name)
        object.__setattr__(self, "variations", tuple(seen))

    @property
    def names(self) -> tuple[str, ...]:
        return (self.canonical_name, *self.variations)


@dataclass(frozen=True, slots=True)
class AnalysisFilters:
    """Optional constraints applied before every aggregation.

    ``None`` for a field means the dimension is unconstrained.
    """

    start_date: str | None = None
    end_date: str | None = None
    people: frozenset[str] | None = None
    categories: frozenset[str] | None = None
    stores: frozenset[str] | None = None


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """Immutable view of one user's uploaded data and confirmed store mapping."""

    transactions: tuple[Transaction, ...] = ()
    store_mappings: StoreMapping = field(default_factory=dict)

    @property
    def has_data(self) -> bool:
        return bool(self.transactions)


class SpendingPoint(TypedDict):
    label: str
    amount: float


class TransactionPage(TypedDict):
    transactions: list[Transaction]
    total: int


class DateRange(TypedDict):
    start: str
    end: str


class DatasetMetadata(TypedDict):
    people: list[str]
    categories: list[str]
    stores: list[str]
    date_range: DateRange


class UploadSummary(TypedDict):
    total_transactions: int
    date_range: DateRange
    people: list[str]
    categories: list[str]


class CategoryAmount(TypedDict):
    amount: float
    count: int


class PreferredStore(TypedDict):
    store: str
    frequency: int
    total_spent: float


class PaymentPattern(TypedDict):
    person: str
    category_breakdown: dict[str, CategoryAmount]
    preferred_stores: list[PreferredStore]
    average_transaction_size: float
    payment_frequency: dict[str, int]
    monthly_spending: dict[str, float]


class DayFrequency(TypedDict):
    day: str
    frequency: int


class StoreMonth(TypedDict):
    month: str
    amount: float
    visits: int


class StoreAnalytics(TypedDict):
    store_name: str
    visit_frequency: int
    average_spend: float
    total_spent: float
    popular_days: list[DayFrequency]
    categories: list[str]
    first_visited: str
    last_visited: str
    monthly_trend: list[StoreMonth]


class CategoryMonth(TypedDict):
    month: str
    amount: float
    count: int


class CommonStore(TypedDict):
    store: str
    amount: float
    frequency: int


class CategoryTrend(TypedDict):
    category: str
    monthly_spend: list[CategoryMonth]
    growth_rate: float
    largest_transaction: Transaction
    smallest_transaction: Transaction
    average_transaction_size: float
    common_stores: list[CommonStore]
    day_of_week_pattern: dict[str, float]


class BalancePoint(TypedDict):
    date: str
    balance: float
    person: str


class MonthlyChange(TypedDict):
    month: str
    change: float


class ImbalancePeriod(TypedDict):
    start: str
    end: str
    max_imbalance: float


class BalanceAnalytics(TypedDict):
    current_balance: dict[str, float]
    balance_history: list[BalancePoint]
    monthly_balance_change: list[MonthlyChange]
    payment_frequency: dict[str, int]
    largest_imbalance_period: ImbalancePeriod


class HeatmapDay(TypedDict):
    date: str
    amount: float
    transaction_count: int
    categories: list[str]
    day_of_week: str
    week_of_year: int


class CategoryRecommendation(TypedDict):
    category: str
    suggested_budget: float
    current_monthly_average: float
    trend: Trend
    confidence: float


class Anomaly(TypedDict):
    transaction: Transaction
    anomaly_type: Literal["unusually_high"]
    score: float


class SpendingPrediction(TypedDict):
    category: str
    predicted_amount: float
    confidence: float


class BudgetIntelligence(TypedDict):
    category_recommendations: list[CategoryRecommendation]
    anomalies: list[Anomaly]
    predicted_next_month_spending: list[SpendingPrediction]


def empty_balance_analytics() -> BalanceAnalytics:
    return {
        "current_balance": {},
        "balance_history": [],
        "monthly_balance_change": [],
        "payment_frequency": {},
        "largest_imbalance_period": {"start": "", "end": "", "max_imbalance": 0.0},
    }


def empty_budget_intelligence() -> BudgetIntelligence:
    return {
        "category_recommendations": [],
        "anomalies": [],
        "predicted_next_month_spending": [],
    }


def empty_transaction_page() -> TransactionPage:
    return {"transactions": [], "total": 0}


__all__ = [
    "TimeInterval",
    "Dimension",
    "Trend",
    "StoreMapping",
    "Share",
    "Transaction",
    "StoreGrouping",
    "AnalysisFilters",
    "SessionSnapshot",
    "SpendingPoint",
    "TransactionPage",
    "DateRange",
    "DatasetMetadata",
    "UploadSummary",
    "CategoryAmount",
    "PreferredStore",
    "PaymentPattern",
    "DayFrequency",
    "StoreMonth",
    "StoreAnalytics",
    "CategoryMonth",
    "CommonStore",
    "CategoryTrend",
    "BalancePoint",
    "MonthlyChange",
    "ImbalancePeriod",
    "BalanceAnalytics",
    "HeatmapDay",
    "CategoryRecommendation",
    "Anomaly",
    "SpendingPrediction",
    "BudgetIntelligence",
    "empty_balance_analytics",
    "empty_budget_intelligence",
    "empty_transaction_page",
]
