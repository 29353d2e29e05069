from datetime import date
from decimal import Decimal

import pytest

from fintrack_analytics.insights import build_insights, savings_rate
from fintrack_analytics.models import EXPENSE, INCOME, MoneyMovement


def movement(day, amount, kind=EXPENSE, category=None, wallet="W1"):
    return MoneyMovement(
        id=f"{day.isoformat()}-{amount}",
        wallet_id=wallet,
        amount=Decimal(amount),
        date=day,
        kind=kind,
        category=category,
    )


def test_insights_for_single_period():
    movements = [
        movement(date(2025, 4, 1), "100", category="Food"),
        movement(date(2025, 4, 3), "150", category="Rent"),
        movement(date(2025, 4, 4), "60", category="Food"),
        movement(date(2025, 4, 2), "500", INCOME),
    ]

    insights = build_insights(movements, "2025-04")

    assert insights.savings_rate == 38  # (500 - 310) / 500 = 38%
    assert insights.top_category == "Food"
    assert insights.top_category_amount == Decimal("160")
    assert insights.period_average == Decimal("310")
    assert insights.period_count == 1


def test_savings_rate_without_income_is_zero():
    assert savings_rate(Decimal(0), Decimal("50")) == 0
    assert savings_rate(Decimal("100"), Decimal("150")) == -50


def test_negative_savings_rate_rounds_halves_up():
    # (8 - 9) / 8 = -12.5%
    assert savings_rate(Decimal("8"), Decimal("9")) == -12
    movements = [
        movement(date(2025, 4, 1), "8", INCOME),
        movement(date(2025, 4, 2), "9", category="Food"),
    ]
    assert build_insights(movements, "2025-04").savings_rate == -12


def test_no_expenses_reports_placeholder_category():
    insights = build_insights([movement(date(2025, 4, 2), "500", INCOME)], "2025-04")
    assert insights.top_category == "-"
    assert insights.top_category_amount == 0
    assert insights.savings_rate == 100


def test_period_average_uses_up_to_seven_periods():
    movements = []
    for month in range(1, 11):
        movements.append(movement(date(2024, month, 10), str(month * 10)))

    insights = build_insights(movements, "2024-10")

    # 2024-04 .. 2024-10 -> 40 + 50 + ... + 100 = 490 over 7 periods.
    assert insights.period_count == 7
    assert insights.period_average == Decimal("70")


def test_period_average_rounds_half_up():
    movements = [
        movement(date(2025, 3, 10), "1"),
        movement(date(2025, 4, 10), "2"),
    ]
    insights = build_insights(movements, "2025-04")
    assert insights.period_count == 2
    assert insights.period_average == Decimal("2")  # 1.5


def test_period_average_near_start_of_history_and_wallet_filter():
    movements = [
        movement(date(2025, 3, 10), "90", wallet="W2"),
        movement(date(2025, 4, 10), "30"),
    ]
    insights = build_insights(movements, "2025-04", wallet="W1")
    # 2025-03 has data (for W2) and counts, but contributes 0 for W1.
    assert insights.period_count == 2
    assert insights.period_average == Decimal("15")


def test_empty_period_is_not_an_error():
    insights = build_insights([], "2025-04")
    assert insights.savings_rate == 0
    assert insights.top_category == "-"
    assert insights.period_average == 0
    assert insights.period_count == 1


def test_window_must_be_positive():
    with pytest.raises(ValueError):
        build_insights([], "2025-04", window=0)
