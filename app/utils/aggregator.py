"""
Group-by helpers shared by the predictor, anomaly detector and pattern analyzer.

Only expense transactions count towards category and monthly spend; income is
used solely by the cash-flow view.
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Tuple

from app.models.transaction import Transaction, TransactionType
from app.utils.results import MonthlyCashFlow

MonthKey = Tuple[int, int]


def month_key(day: date) -> MonthKey:
    return (day.year, day.month)


def format_month_key(key: MonthKey) -> str:
    year, month = key
    return f"{year:04d}-{month:02d}"


def expense_transactions(transactions: Iterable[Transaction]) -> List[Transaction]:
    return [txn for txn in transactions if txn.is_expense]


def aggregate(transactions: Iterable[Transaction], by: str = "category") -> Dict:
    """
    Sum expense amounts per category (``by="category"``) or per calendar month
    (``by="month"``, keyed by ``(year, month)``). Keys come back sorted.
    """
    if by == "category":
        key_of = lambda txn: txn.category
    elif by == "month":
        key_of = lambda txn: month_key(txn.date)
    else:
        raise ValueError(f"Unsupported aggregation key: {by!r}")

    totals: Dict = defaultdict(float)
    for txn in expense_transactions(transactions):
        totals[key_of(txn)] += txn.amount
    return {key: totals[key] for key in sorted(totals)}


def monthly_series(transactions: Iterable[Transaction]) -> List[float]:
    """Chronological monthly expense totals, one entry per active month."""
    return list(aggregate(transactions, by="month").values())


@dataclass(frozen=True)
class CategorySeries:
    category: str
    transactions: Tuple[Transaction, ...]
    monthly_totals: Tuple[float, ...]

    @property
    def amounts(self) -> List[float]:
        return [txn.amount for txn in self.transactions]

    @property
    def active_months(self) -> int:
        return len(self.monthly_totals)


def partition_by_category(transactions: Iterable[Transaction]) -> Dict[str, CategorySeries]:
    grouped: Dict[str, List[Transaction]] = defaultdict(list)
    for txn in expense_transactions(transactions):
        grouped[txn.category].append(txn)

    return {
        category: CategorySeries(
            category=category,
            transactions=tuple(items),
            monthly_totals=tuple(monthly_series(items)),
        )
        for category, items in grouped.items()
    }


def monthly_cash_flow(transactions: Iterable[Transaction], months: int = 6) -> List[MonthlyCashFlow]:
    """Income vs. expenses per month for the most recent ``months`` months."""
    income: Dict[MonthKey, float] = defaultdict(float)
    expenses: Dict[MonthKey, float] = defaultdict(float)
    for txn in transactions:
        key = month_key(txn.date)
        if txn.type == TransactionType.INCOME:
            income[key] += txn.amount
        else:
            expenses[key] += txn.amount

    keys = sorted(set(income) | set(expenses))
    if months > 0:
        keys = keys[-months:]
    return [
        MonthlyCashFlow(
            month=format_month_key(key),
            income=round(income.get(key, 0.0), 2),
            expenses=round(expenses.get(key, 0.0), 2),
        )
        for key in keys
    ]
