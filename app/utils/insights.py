from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from app.models.transaction import Budget, Transaction
from app.utils.aggregator import MonthKey, aggregate, expense_transactions, month_key
from app.utils.patterns import analyze_patterns
from app.utils.predictor import predict_next_period

INSIGHT_TREND_PERCENT = 10.0
INSIGHT_PREDICTED_RATIO = 1.1
INSIGHT_CATEGORY_SHARE = 0.3

PERIOD_MONTHS = {"monthly": 1, "quarterly": 3, "yearly": 12}


def _covers_month(budget: Budget, key: MonthKey) -> bool:
    if month_key(budget.start_date) > key:
        return False
    return budget.end_date is None or month_key(budget.end_date) >= key


def _budget_insights(expenses: List[Transaction], budgets: Iterable[Budget]) -> List[str]:
    latest = max(month_key(txn.date) for txn in expenses)
    spent: Dict[str, float] = defaultdict(float)
    for txn in expenses:
        if month_key(txn.date) == latest:
            spent[txn.category] += txn.amount

    insights = []
    for budget in budgets:
        if not _covers_month(budget, latest):
            continue
        limit = budget.amount / PERIOD_MONTHS[budget.period]
        used = spent.get(budget.category, 0.0)
        if limit <= 0 or used <= 0:
            continue
        if used > limit:
            insights.append(
                f"You have exceeded your {budget.category} budget by ${used - limit:.2f} this month"
            )
        elif used >= limit * budget.alert_threshold / 100:
            insights.append(
                f"You have used {used / limit * 100:.0f}% of your {budget.category} budget this month"
            )
    return insights


def generate_smart_insights(
    transactions: Iterable[Transaction],
    budgets: Optional[Iterable[Budget]] = None,
) -> List[str]:
    """
    Short human-readable hints built from patterns, predictions and category
    shares, plus budget alerts for the latest active month.
    """
    transactions = list(transactions)
    expenses = expense_transactions(transactions)
    if not expenses:
        return []

    total_expenses = sum(txn.amount for txn in expenses)
    insights: List[str] = []

    for pattern in analyze_patterns(expenses):
        if pattern.trend > INSIGHT_TREND_PERCENT:
            insights.append(
                f"Your {pattern.category} spending is increasing by {pattern.trend:.1f}% per month"
            )

    total_predicted = sum(p.predicted_amount for p in predict_next_period(expenses))
    if total_expenses and total_predicted > total_expenses * INSIGHT_PREDICTED_RATIO:
        increase = (total_predicted / total_expenses - 1) * 100
        insights.append(f"Based on trends, next month's spending may increase by {increase:.0f}%")

    category_totals = aggregate(expenses, by="category")
    top_category = max(category_totals, key=category_totals.get)
    if category_totals[top_category] > total_expenses * INSIGHT_CATEGORY_SHARE:
        share = category_totals[top_category] / total_expenses * 100
        insights.append(f"{top_category} accounts for {share:.0f}% of your spending")

    if budgets:
        insights.extend(_budget_insights(expenses, budgets))
    return insights
