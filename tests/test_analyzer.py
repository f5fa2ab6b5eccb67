from datetime import date

from app.models.transaction import Budget, Transaction
from app.utils.analyzer import FinanceAnalyzer


def _txn(idx, category, amount, day, kind="expense", title=None):
    return Transaction(
        id=f"t{idx}",
        user_id="u1",
        title=title or f"{category} purchase",
        amount=amount,
        type=kind,
        category=category,
        date=day,
    )


sample_transactions = [
    _txn(1, "Food & Dining", 250.0, date(2025, 9, 1)),
    _txn(2, "Bills & Utilities", 1000.0, date(2025, 9, 2)),
    _txn(3, "Food & Dining", 150.0, date(2025, 10, 3)),
    _txn(4, "Shopping", 1200.0, date(2025, 10, 4)),
    _txn(5, "Food & Dining", 200.0, date(2025, 11, 3)),
    _txn(6, "Salary", 4000.0, date(2025, 11, 1), kind="income"),
]


def test_summarize_totals_exclude_income():
    analyzer = FinanceAnalyzer()
    summary = analyzer.summarize(sample_transactions)
    assert summary["total_income"] == 4000.0
    assert summary["total_expenses"] == 2800.0
    assert summary["balance"] == 1200.0
    assert summary["category_totals"] == {
        "Bills & Utilities": 1000.0,
        "Food & Dining": 600.0,
        "Shopping": 1200.0,
    }


def test_summarize_sections():
    analyzer = FinanceAnalyzer()
    summary = analyzer.summarize(sample_transactions, [Budget(category="Food & Dining", amount=100, start_date=date(2025, 1, 1))])
    assert set(summary) == {
        "total_income",
        "total_expenses",
        "balance",
        "category_totals",
        "cash_flow",
        "predictions",
        "anomalies",
        "patterns",
        "insights",
    }
    assert [row["month"] for row in summary["cash_flow"]] == ["2025-09", "2025-10", "2025-11"]
    assert summary["cash_flow"][-1] == {"month": "2025-11", "income": 4000.0, "expenses": 200.0}
    assert len(summary["predictions"]) == 3
    assert summary["anomalies"] == []
    assert "You have exceeded your Food & Dining budget by $100.00 this month" in summary["insights"]


def test_summarize_empty():
    summary = FinanceAnalyzer().summarize([])
    assert summary["total_expenses"] == 0
    assert summary["balance"] == 0
    assert summary["predictions"] == []
    assert summary["patterns"] == []
    assert summary["insights"] == []


def test_anomaly_feed_limit():
    transactions = [_txn(i, "Food", 10.0, date(2025, 1, i + 1)) for i in range(10)]
    transactions.append(_txn(20, "Food", 120.0, date(2025, 1, 20)))
    transactions += [_txn(30 + i, "Travel", 50.0, date(2025, 2, i + 1)) for i in range(10)]
    transactions.append(_txn(50, "Travel", 600.0, date(2025, 2, 20)))

    assert len(FinanceAnalyzer(anomaly_feed_limit=None).detect_all_anomalies(transactions)) == 2
    limited = FinanceAnalyzer(anomaly_feed_limit=1).detect_all_anomalies(transactions)
    assert [item.category for item in limited] == ["Food"]


def test_cash_flow_window():
    analyzer = FinanceAnalyzer(cash_flow_months=2)
    months = [row.month for row in analyzer.monthly_cash_flow(sample_transactions)]
    assert months == ["2025-10", "2025-11"]
    months = [row.month for row in analyzer.monthly_cash_flow(sample_transactions, months=1)]
    assert months == ["2025-11"]


def test_categorize_passthrough():
    assert FinanceAnalyzer.categorize("Uber Eats order", 25.0) == "Food & Dining"


def test_summarize_balance_can_go_negative():
    transactions = [
        _txn(1, "Travel", 1800.0, date(2025, 6, 2)),
        _txn(2, "Salary", 1500.0, date(2025, 6, 1), kind="income"),
    ]
    summary = FinanceAnalyzer().summarize(transactions)
    assert summary["total_income"] == 1500.0
    assert summary["total_expenses"] == 1800.0
    assert summary["balance"] == -300.0
