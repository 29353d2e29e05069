"""Scalar insights derived from the summary, breakdown and period history."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from .filters import by_period_and_wallet
from .models import ALL_WALLETS, MoneyMovement
from .periods import available_periods
from .summary import build_category_breakdown, build_summary, percentage, round_half_up


NO_CATEGORY = "-"


@dataclass(frozen=True)
class Insights:
    savings_rate: int
    top_category: str
    top_category_amount: Decimal
    period_average: Decimal
    period_count: int


def savings_rate(income: Decimal, expense: Decimal) -> int:
    if income <= 0:
        return 0
    return percentage(income - expense, income)


def build_insights(
    movements: Sequence[MoneyMovement],
    key: str,
    wallet: str = ALL_WALLETS,
    window: int = 7,
) -> Insights:
    """Compute the savings rate, top category and rolling expense average.

    The average covers ``key`` itself plus up to ``window - 1`` earlier
    periods that hold data.
    """

    if window < 1:
        raise ValueError(f"insight window must be positive, got {window}")

    period_movements = by_period_and_wallet(movements, key, wallet)
    summary = build_summary(period_movements)
    breakdown = build_category_breakdown(period_movements)

    top_category = NO_CATEGORY
    top_amount = Decimal(0)
    for name, category in breakdown.categories.items():
        if category.total > top_amount:
            top_category = name
            top_amount = category.total

    earlier = [k for k in available_periods(movements) if k < key]
    keys = earlier[max(0, len(earlier) - (window - 1)) :] + [key]
    totals = [
        build_summary(by_period_and_wallet(movements, k, wallet)).expense_total
        for k in keys
    ]
    average = sum(totals, Decimal(0)) / len(totals)

    return Insights(
        savings_rate=savings_rate(summary.income_total, summary.expense_total),
        top_category=top_category,
        top_category_amount=top_amount,
        period_average=round_half_up(average),
        period_count=len(keys),
    )
