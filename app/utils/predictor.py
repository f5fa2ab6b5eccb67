from __future__ import annotations

import logging
import statistics
from typing import Iterable, List, Optional, Sequence, Tuple

from app.models.transaction import Transaction
from app.utils.aggregator import CategorySeries, expense_transactions, partition_by_category
from app.utils.results import PredictionResult

logger = logging.getLogger(__name__)

# Fixed heuristics; candidates for configuration later.
MIN_TRANSACTIONS_FOR_TREND = 3
TREND_SLOPE_THRESHOLD = 5.0  # currency per month, absolute
MOVING_AVERAGE_WINDOW = 3
SPARSE_CONFIDENCE = 0.3
SINGLE_MONTH_CONFIDENCE = 0.5
MIN_CONFIDENCE = 0.4
MAX_CONFIDENCE = 0.95

INCREASING = "increasing"
DECREASING = "decreasing"
STABLE = "stable"


def linear_regression(x: Sequence[float], y: Sequence[float]) -> Tuple[float, float]:
    """
    Ordinary least squares fit of ``y`` against ``x``.
    Returns ``(slope, intercept)``; needs at least two distinct x values.
    """
    n = len(x)
    sum_x = sum(x)
    sum_y = sum(y)
    sum_xy = sum(xi * yi for xi, yi in zip(x, y))
    sum_xx = sum(xi * xi for xi in x)

    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)
    intercept = (sum_y - slope * sum_x) / n
    return slope, intercept


def moving_average(values: Sequence[float], window: int) -> List[float]:
    """Trailing moving average; early points average whatever history exists."""
    result = []
    for i in range(len(values)):
        subset = values[max(0, i - window + 1): i + 1]
        result.append(statistics.fmean(subset))
    return result


def classify_trend(slope: float) -> str:
    if slope > TREND_SLOPE_THRESHOLD:
        return INCREASING
    if slope < -TREND_SLOPE_THRESHOLD:
        return DECREASING
    return STABLE


def _predict_category(series: CategorySeries) -> PredictionResult:
    if len(series.transactions) < MIN_TRANSACTIONS_FOR_TREND:
        latest = max(series.transactions, key=lambda txn: txn.date, default=None)
        return PredictionResult(
            category=series.category,
            predicted_amount=latest.amount if latest else 0.0,
            confidence=SPARSE_CONFIDENCE,
            trend=STABLE,
        )

    amounts = list(series.monthly_totals)
    if len(amounts) < 2:
        return PredictionResult(
            category=series.category,
            predicted_amount=amounts[0] if amounts else 0.0,
            confidence=SINGLE_MONTH_CONFIDENCE,
            trend=STABLE,
        )

    n = len(amounts)
    slope, intercept = linear_regression(range(n), amounts)
    projected = slope * n + intercept

    smoothed = moving_average(amounts, min(MOVING_AVERAGE_WINDOW, n))
    deviation = abs(projected - smoothed[-1])
    mean = statistics.fmean(amounts)
    ratio = deviation / mean if mean else 0.0
    confidence = min(MAX_CONFIDENCE, max(MIN_CONFIDENCE, 1 - ratio))

    return PredictionResult(
        category=series.category,
        predicted_amount=max(0.0, projected),
        confidence=confidence,
        trend=classify_trend(slope),
    )


def predict_next_period(
    transactions: Iterable[Transaction],
    category: Optional[str] = None,
) -> List[PredictionResult]:
    """
    Project next month's spend per expense category from a linear trend over
    its monthly totals. Sparse categories fall back to low-confidence flat
    predictions. Results are ordered by predicted amount, largest first.
    """
    expenses = expense_transactions(transactions)
    if category:
        expenses = [txn for txn in expenses if txn.category == category]

    partitions = partition_by_category(expenses)
    logger.debug(f"Predicting {len(partitions)} categories from {len(expenses)} expenses")

    predictions = [_predict_category(series) for series in partitions.values()]
    return sorted(predictions, key=lambda p: p.predicted_amount, reverse=True)
