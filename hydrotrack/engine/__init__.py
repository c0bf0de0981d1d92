"""Aggregation engine for hydrotrack."""

from hydrotrack.engine.aggregation import (
    classify_day,
    summarize_daily_totals,
    month_bounds,
    daily_total,
    monthly_calendar,
    stats_30_day,
)

__all__ = [
    "classify_day",
    "summarize_daily_totals",
    "month_bounds",
    "daily_total",
    "monthly_calendar",
    "stats_30_day",
]
