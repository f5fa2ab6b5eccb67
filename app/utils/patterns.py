from __future__ import annotations

import statistics
from typing import Iterable, List

from app.models.transaction import Transaction
from app.utils.aggregator import CategorySeries, partition_by_category
from app.utils.predictor import linear_regression
from app.utils.results import SpendingPattern

SEASONALITY_PEAK_RATIO = 1.5
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
NO_CLEAR_PATTERN = "No clear pattern"


def detect_seasonality(transactions: Iterable[Transaction]) -> str:
    """
    Label the single busiest month-of-year when its transaction count exceeds
    1.5x the mean of the twelve monthly buckets. Years are ignored.
    """
    month_counts = [0] * 12
    for txn in transactions:
        month_counts[txn.date.month - 1] += 1

    peak = max(month_counts)
    mean_count = sum(month_counts) / 12
    if peak > mean_count * SEASONALITY_PEAK_RATIO:
        return f"Peaks in {MONTH_ABBREVIATIONS[month_counts.index(peak)]}"
    return NO_CLEAR_PATTERN


def _pattern_for(series: CategorySeries) -> SpendingPattern:
    avg_amount = statistics.fmean(series.amounts)
    frequency = len(series.transactions) / max(1, series.active_months)

    trend = 0.0
    monthly = series.monthly_totals
    if len(monthly) >= 2 and avg_amount:
        slope, _ = linear_regression(range(len(monthly)), monthly)
        trend = slope / avg_amount * 100

    return SpendingPattern(
        category=series.category,
        avg_amount=avg_amount,
        frequency=frequency,
        trend=trend,
        seasonality=detect_seasonality(series.transactions),
    )


def analyze_patterns(transactions: Iterable[Transaction]) -> List[SpendingPattern]:
    """Per-category spending summary, highest average transaction first."""
    patterns = [_pattern_for(series) for series in partition_by_category(transactions).values()]
    return sorted(patterns, key=lambda p: p.avg_amount, reverse=True)
