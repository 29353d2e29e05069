from datetime import date
from decimal import Decimal

from fintrack_analytics.filters import by_date_range_and_wallet, by_period_and_wallet
from fintrack_analytics.models import EXPENSE, INCOME, MoneyMovement
from fintrack_analytics.summary import (
    Summary,
    build_category_breakdown,
    build_summary,
    percentage,
    round_half_up,
)


def make_movement(**kwargs):
    base = dict(
        id="1",
        wallet_id="W1",
        amount=Decimal("0"),
        date=date(2025, 4, 1),
        kind=EXPENSE,
        category=None,
        subcategory=None,
        description="",
    )
    base.update(kwargs)
    return MoneyMovement(**base)


def example_movements():
    return [
        make_movement(id="e1", amount=Decimal("100"), category="Food"),
        make_movement(id="i1", amount=Decimal("500"), kind=INCOME, date=date(2025, 4, 2)),
    ]


def test_summary_for_period_and_wallet():
    movements = example_movements() + [
        make_movement(id="e2", wallet_id="W2", amount=Decimal("40"), category="Food"),
        make_movement(id="e3", amount=Decimal("70"), date=date(2025, 4, 26)),
    ]

    summary = build_summary(by_period_and_wallet(movements, "2025-04", "W1"))

    assert summary.expense_total == 100
    assert summary.income_total == 500
    assert summary.balance == 400
    assert summary.expense_count == 1
    assert summary.income_count == 1


def test_summary_of_empty_set_is_all_zero():
    summary = build_summary([])
    assert summary == Summary()
    assert summary.balance == 0
    assert summary.expense_count == summary.income_count == 0


def test_summary_balance_is_income_minus_expense():
    movements = [
        make_movement(amount=Decimal("0.10")),
        make_movement(amount=Decimal("0.20")),
        make_movement(amount=Decimal("0.05"), kind=INCOME),
    ]
    summary = build_summary(movements)
    assert summary.expense_total == Decimal("0.30")
    assert summary.balance == summary.income_total - summary.expense_total
    assert summary.balance == Decimal("-0.25")


def test_category_breakdown_example():
    breakdown = build_category_breakdown(example_movements())

    assert breakdown.total_expenses == 100
    assert list(breakdown.categories) == ["Food"]
    food = breakdown.categories["Food"]
    assert food.total == 100
    assert food.percentage == 100
    general = food.subcategories["General"]
    assert general.total == 100
    assert general.percentage == 100
    assert [m.id for m in general.items] == ["e1"]


def test_category_breakdown_groups_and_orders():
    movements = [
        make_movement(amount=Decimal("30"), category="Food", subcategory="Groceries"),
        make_movement(amount=Decimal("10"), category="Food", subcategory="Dining"),
        make_movement(amount=Decimal("50"), category="Transport"),
        make_movement(amount=Decimal("10")),
    ]

    breakdown = build_category_breakdown(movements)

    assert list(breakdown.categories) == ["Transport", "Food", "Uncategorized"]
    assert breakdown.categories["Transport"].percentage == 50
    assert breakdown.categories["Food"].percentage == 40
    assert breakdown.categories["Uncategorized"].percentage == 10
    food = breakdown.categories["Food"]
    assert list(food.subcategories) == ["Groceries", "Dining"]
    assert food.subcategories["Groceries"].percentage == 75
    assert food.subcategories["Dining"].percentage == 25


def test_breakdown_totals_are_conserved():
    movements = [
        make_movement(amount=Decimal("33.33"), category="A"),
        make_movement(amount=Decimal("33.33"), category="B"),
        make_movement(amount=Decimal("33.34"), category="C", subcategory="x"),
        make_movement(amount=Decimal("0.01"), category="C", subcategory="y"),
    ]
    breakdown = build_category_breakdown(movements)
    assert sum(c.total for c in breakdown.categories.values()) == breakdown.total_expenses
    for category in breakdown.categories.values():
        assert sum(s.total for s in category.subcategories.values()) == category.total


def test_breakdown_ignores_income_and_handles_empty():
    income_only = [make_movement(kind=INCOME, amount=Decimal("10"))]
    breakdown = build_category_breakdown(income_only)
    assert breakdown.categories == {}
    assert breakdown.total_expenses == 0


def test_zero_amount_expenses_do_not_divide_by_zero():
    breakdown = build_category_breakdown([make_movement(category="Free")])
    assert breakdown.categories["Free"].percentage == 0
    assert breakdown.categories["Free"].subcategories["General"].percentage == 0


def test_percentage_rounds_half_up():
    assert percentage(Decimal("1"), Decimal("8")) == 13  # 12.5
    assert percentage(Decimal("1"), Decimal("3")) == 33
    assert percentage(Decimal("2"), Decimal("3")) == 67
    assert percentage(Decimal("5"), Decimal("0")) == 0


def test_negative_halves_round_towards_positive_infinity():
    assert round_half_up(Decimal("-12.5")) == -12
    assert round_half_up(Decimal("-12.51")) == -13
    assert round_half_up(Decimal("12.5")) == 13
    assert percentage(Decimal("-1"), Decimal("8")) == -12


def test_category_breakdown_is_repeatable():
    movements = [
        make_movement(id="a", amount=Decimal("30"), category="Food", subcategory="Dining"),
        make_movement(id="b", amount=Decimal("70"), category="Rent"),
        make_movement(id="c", amount=Decimal("10"), category="Food"),
    ]
    first = build_category_breakdown(movements, label="Mar 26 - Apr 25")
    second = build_category_breakdown(list(movements), label="Mar 26 - Apr 25")
    assert first == second
    assert list(first.categories) == list(second.categories) == ["Rent", "Food"]


def test_date_range_filter_is_inclusive_and_keeps_order():
    movements = [
        make_movement(id="a", date=date(2025, 4, 3)),
        make_movement(id="b", date=date(2025, 4, 1)),
        make_movement(id="c", date=date(2025, 4, 5)),
        make_movement(id="d", date=date(2025, 4, 2), wallet_id="W2"),
    ]
    selected = by_date_range_and_wallet(movements, date(2025, 4, 1), date(2025, 4, 3))
    assert [m.id for m in selected] == ["a", "b", "d"]
    selected = by_date_range_and_wallet(
        movements, date(2025, 4, 1), date(2025, 4, 3), "W1"
    )
    assert [m.id for m in selected] == ["a", "b"]
