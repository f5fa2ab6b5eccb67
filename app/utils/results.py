from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class PredictionResult:
    """Projected next-period spend for a single expense category."""

    category: str
    predicted_amount: float
    confidence: float
    trend: str  # increasing | decreasing | stable

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ExpectedRange:
    min: float
    max: float


@dataclass(frozen=True)
class AnomalyDetection:
    """A transaction whose amount sits outside the category's usual band."""

    severity: str  # low | medium | high
    description: str
    expected_range: ExpectedRange
    actual_amount: float
    category: str
    z_score: float
    transaction_id: Optional[str] = None
    date: Optional[str] = None
    is_anomaly: bool = True

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        # Remove None values for cleaner JSON responses
        return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class SpendingPattern:
    category: str
    avg_amount: float
    frequency: float  # transactions per active month
    trend: float  # percent of avg_amount per month
    seasonality: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MonthlyCashFlow:
    month: str
    income: float
    expenses: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
