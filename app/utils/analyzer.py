from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from app.models.transaction import Budget, Transaction
from app.utils import aggregator, anomaly, categorizer, insights, patterns, predictor
from app.utils.results import AnomalyDetection, MonthlyCashFlow, PredictionResult, SpendingPattern

logger = logging.getLogger(__name__)


class FinanceAnalyzer:
    """
    Stateless analytics facade shared by the FastAPI routes. Every method is a
    pure function of its arguments, so one instance can serve concurrent
    requests.
    """

    def __init__(self, anomaly_feed_limit: Optional[int] = 5, cash_flow_months: int = 6) -> None:
        self._anomaly_feed_limit = anomaly_feed_limit
        self._cash_flow_months = cash_flow_months

    def predict_next_period(
        self,
        transactions: Iterable[Transaction],
        category: Optional[str] = None,
    ) -> List[PredictionResult]:
        return predictor.predict_next_period(transactions, category)

    def detect_anomalies(self, transactions: Iterable[Transaction], category: str) -> List[AnomalyDetection]:
        return anomaly.detect_anomalies(transactions, category)

    def detect_all_anomalies(self, transactions: Iterable[Transaction]) -> List[AnomalyDetection]:
        return anomaly.detect_all_anomalies(transactions, limit=self._anomaly_feed_limit)

    def analyze_patterns(self, transactions: Iterable[Transaction]) -> List[SpendingPattern]:
        return patterns.analyze_patterns(transactions)

    def generate_smart_insights(
        self,
        transactions: Iterable[Transaction],
        budgets: Optional[Iterable[Budget]] = None,
    ) -> List[str]:
        return insights.generate_smart_insights(transactions, budgets)

    def monthly_cash_flow(
        self,
        transactions: Iterable[Transaction],
        months: Optional[int] = None,
    ) -> List[MonthlyCashFlow]:
        return aggregator.monthly_cash_flow(transactions, months or self._cash_flow_months)

    @staticmethod
    def categorize(title: str, amount: Optional[float] = None) -> str:
        return categorizer.categorize(title, amount)

    def summarize(
        self,
        transactions: Iterable[Transaction],
        budgets: Optional[Iterable[Budget]] = None,
    ) -> Dict[str, Any]:
        transactions = list(transactions)
        expenses = aggregator.expense_transactions(transactions)
        logger.debug(f"Summarizing {len(transactions)} transactions ({len(expenses)} expenses)")

        total_income = sum(txn.amount for txn in transactions if not txn.is_expense)
        total_expenses = sum(txn.amount for txn in expenses)
        category_totals = {
            category: round(total, 2)
            for category, total in aggregator.aggregate(expenses, by="category").items()
        }
        return {
            "total_income": round(total_income, 2),
            "total_expenses": round(total_expenses, 2),
            "balance": round(total_income - total_expenses, 2),
            "category_totals": category_totals,
            "cash_flow": [item.to_dict() for item in self.monthly_cash_flow(transactions)],
            "predictions": [item.to_dict() for item in self.predict_next_period(transactions)],
            "anomalies": [item.to_dict() for item in self.detect_all_anomalies(transactions)],
            "patterns": [item.to_dict() for item in self.analyze_patterns(transactions)],
            "insights": self.generate_smart_insights(transactions, budgets),
        }
