"""Analytics helpers for SplitSpend: store resolution, aggregation and insights."""

from analytics.aggregation import (
    DIMENSIONS,
    TIME_INTERVALS,
    get_detailed_transactions,
    get_metadata,
    get_spending_by,
    get_spending_over_time,
)
from analytics.budget import classify_trend, detect_anomalies, get_budget_intelligence
from analytics.filters import filter_transactions, matches_filters
from analytics.ledger import get_balance_analytics
from analytics.patterns import (
    get_category_trends,
    get_payment_patterns,
    get_spending_heatmap,
    get_store_analytics,
)
from analytics.stores import (
    analyze_similar_stores,
    apply_store_mappings,
    canonical_lookup,
    groupings_to_mapping,
    mapping_to_groupings,
    merge_groups,
    normalize_store_name,
    split_group,
    store_similarity,
)

__all__ = [
    "DIMENSIONS",
    "TIME_INTERVALS",
    "analyze_similar_stores",
    "apply_store_mappings",
    "canonical_lookup",
    "classify_trend",
    "detect_anomalies",
    "filter_transactions",
    "get_balance_analytics",
    "get_budget_intelligence",
    "get_category_trends",
    "get_detailed_transactions",
    "get_metadata",
    "get_payment_patterns",
    "get_spending_by",
    "get_spending_heatmap",
    "get_spending_over_time",
    "get_store_analytics",
    "groupings_to_mapping",
    "mapping_to_groupings",
    "matches_filters",
    "merge_groups",
    "normalize_store_name",
    "split_group",
    "store_similarity",
]
