"""Visualization utilities for SplitSpend dashboards."""

from .charts import (
    build_balance_chart,
    build_budget_chart,
    build_category_chart,
    build_heatmap_chart,
    build_person_chart,
    build_store_chart,
    build_timeline_chart,
)
from .theme import theme_tokens

__all__ = [
    "build_balance_chart",
    "build_budget_chart",
    "build_category_chart",
    "build_heatmap_chart",
    "build_person_chart",
    "build_store_chart",
    "build_timeline_chart",
    "theme_tokens",
]
