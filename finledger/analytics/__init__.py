"""Aggregation and filtering package."""

from finledger.analytics.aggregator import (
    available_categories,
    available_periods,
    build_time_series,
    group_expenses_by_category,
    list_entries,
    summarize,
)

__all__ = [
    "available_categories",
    "available_periods",
    "build_time_series",
    "group_expenses_by_category",
    "list_entries",
    "summarize",
]
