from datetime import date

from app.models.transaction import Budget, Transaction
from app.utils.insights import generate_smart_insights


def _txn(idx, category, amount, day, kind="expense"):
    return Transaction(
        id=f"t{idx}", user_id="u1", title=category, amount=amount, type=kind, category=category, date=day
    )


def test_no_expenses_no_insights():
    assert generate_smart_insights([]) == []
    income_only = [_txn(1, "Salary", 3000.0, date(2025, 1, 1), kind="income")]
    assert generate_smart_insights(income_only) == []


def test_growth_prediction_and_share():
    transactions = [
        _txn(1, "Shopping", 0.0, date(2025, 1, 5)),
        _txn(2, "Shopping", 0.0, date(2025, 2, 5)),
        _txn(3, "Shopping", 300.0, date(2025, 3, 5)),
    ]
    assert generate_smart_insights(transactions) == [
        "Your Shopping spending is increasing by 150.0% per month",
        "Based on trends, next month's spending may increase by 33%",
        "Shopping accounts for 100% of your spending",
    ]


def test_balanced_spending_has_no_insights():
    transactions = [
        _txn(i, category, 100.0, date(2025, 4, i + 1))
        for i, category in enumerate(["Food", "Rent", "Travel", "Shopping"])
    ]
    assert generate_smart_insights(transactions) == []


def test_trend_below_threshold_is_not_reported():
    transactions = [_txn(m, "Rent", 1000.0 + m, date(2025, m, 1)) for m in range(1, 5)]
    insights = generate_smart_insights(transactions)
    assert not any("increasing" in line for line in insights)


def test_budget_alerts():
    transactions = [
        _txn(1, "Food", 400.0, date(2025, 4, 3)),
        _txn(2, "Food", 250.0, date(2025, 5, 3)),
        _txn(3, "Travel", 250.0, date(2025, 5, 9)),
        _txn(4, "Rent", 250.0, date(2025, 5, 1)),
        _txn(5, "Gym", 250.0, date(2025, 5, 2)),
    ]
    budgets = [
        Budget(category="Food", amount=200.0, start_date=date(2025, 1, 1)),
        Budget(category="Travel", amount=3600.0, period="yearly", start_date=date(2025, 1, 1)),
        Budget(category="Rent", amount=1000.0, period="quarterly", start_date=date(2025, 1, 1)),
        Budget(category="Gym", amount=1000.0, start_date=date(2025, 1, 1)),
    ]
    insights = generate_smart_insights(transactions, budgets)
    assert "You have exceeded your Food budget by $50.00 this month" in insights
    assert "You have used 83% of your Travel budget this month" in insights
    # quarterly limit of 333.33/month at 75% usage stays under the 80% alert
    assert not any("Rent budget" in line for line in insights)
    assert not any("Gym budget" in line for line in insights)


def test_expired_budget_is_ignored():
    transactions = [_txn(1, "Food", 500.0, date(2025, 6, 3))]
    budgets = [
        Budget(category="Food", amount=100.0, start_date=date(2023, 1, 1), end_date=date(2023, 12, 31)),
    ]
    insights = generate_smart_insights(transactions, budgets)
    assert not any("budget" in line for line in insights)


def test_future_budget_is_ignored():
    transactions = [_txn(1, "Food", 500.0, date(2025, 6, 3))]
    budgets = [Budget(category="Food", amount=100.0, start_date=date(2025, 7, 1))]
    insights = generate_smart_insights(transactions, budgets)
    assert not any("budget" in line for line in insights)


def test_budget_window_covering_latest_month():
    transactions = [_txn(1, "Food", 500.0, date(2025, 6, 3))]
    budgets = [
        # starts mid-month and ends mid-month, still covers June
        Budget(category="Food", amount=100.0, start_date=date(2025, 6, 15), end_date=date(2025, 6, 20)),
    ]
    assert "You have exceeded your Food budget by $400.00 this month" in generate_smart_insights(transactions, budgets)
