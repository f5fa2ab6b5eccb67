from __future__ import annotations

import logging
import statistics
from typing import Iterable, List, Optional

from app.models.transaction import Transaction
from app.utils.aggregator import expense_transactions
from app.utils.results import AnomalyDetection, ExpectedRange

logger = logging.getLogger(__name__)

MIN_SAMPLE_SIZE = 5
ANOMALY_Z_SCORE = 2.0
MEDIUM_Z_SCORE = 2.5
HIGH_Z_SCORE = 3.0
EXPECTED_RANGE_SIGMA = 2.0


def classify_severity(z_score: float) -> str:
    if z_score > HIGH_Z_SCORE:
        return "high"
    if z_score > MEDIUM_Z_SCORE:
        return "medium"
    return "low"


def detect_anomalies(transactions: Iterable[Transaction], category: str) -> List[AnomalyDetection]:
    """
    Flag expenses in ``category`` whose z-score against the category's
    population mean and standard deviation exceeds 2. Results keep
    chronological order.
    """
    history = sorted(
        (txn for txn in expense_transactions(transactions) if txn.category == category),
        key=lambda txn: txn.date,
    )
    if len(history) < MIN_SAMPLE_SIZE:
        return []

    amounts = [txn.amount for txn in history]
    mean = statistics.fmean(amounts)
    stdev = statistics.pstdev(amounts)
    if stdev == 0:
        return []

    expected = ExpectedRange(
        min=mean - EXPECTED_RANGE_SIGMA * stdev,
        max=mean + EXPECTED_RANGE_SIGMA * stdev,
    )

    anomalies: List[AnomalyDetection] = []
    for txn in history:
        z_score = abs(txn.amount - mean) / stdev
        if z_score <= ANOMALY_Z_SCORE:
            continue
        anomalies.append(
            AnomalyDetection(
                severity=classify_severity(z_score),
                description=f"Unusual {category} expense detected: ${txn.amount:.2f} ({txn.title})",
                expected_range=expected,
                actual_amount=txn.amount,
                category=category,
                z_score=z_score,
                transaction_id=txn.id,
                date=txn.date.isoformat(),
            )
        )
    logger.debug(f"{len(anomalies)} anomalies in {category} across {len(history)} expenses")
    return anomalies


def detect_all_anomalies(
    transactions: Iterable[Transaction],
    limit: Optional[int] = None,
) -> List[AnomalyDetection]:
    """Run the detector for every expense category, in order of first appearance."""
    transactions = list(transactions)
    categories = dict.fromkeys(txn.category for txn in expense_transactions(transactions))

    anomalies: List[AnomalyDetection] = []
    for category in categories:
        anomalies.extend(detect_anomalies(transactions, category))
    if limit is not None:
        anomalies = anomalies[:limit]
    return anomalies
