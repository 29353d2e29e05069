"""Per-period income and expense series across a rolling window."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Sequence

from .filters import by_period_and_wallet
from .models import ALL_WALLETS, MoneyMovement
from .periods import available_periods, short_month_label
from .summary import build_summary


@dataclass(frozen=True)
class TrendSeries:
    periods: Sequence[str] = ()
    labels: Sequence[str] = ()
    income: Sequence[Decimal] = ()
    expense: Sequence[Decimal] = ()


def select_window(periods: Sequence[str], end_key: Optional[str], count: int) -> list[str]:
    """Return up to ``count`` periods of ``periods`` ending at ``end_key``.

    ``periods`` must be sorted ascending. An ``end_key`` that is not present
    falls back to the latest period.
    """

    if count < 1:
        raise ValueError(f"period count must be positive, got {count}")
    if not periods:
        return []
    try:
        end_index = list(periods).index(end_key)
    except ValueError:
        end_index = len(periods) - 1
    start_index = max(0, end_index - count + 1)
    return list(periods[start_index : end_index + 1])


def build_trend(
    movements: Sequence[MoneyMovement],
    end_key: Optional[str],
    period_count: int = 12,
    wallet: str = ALL_WALLETS,
) -> TrendSeries:
    """Build independent (non-cumulative) totals for each period in the window."""

    window = select_window(available_periods(movements), end_key, period_count)
    income = []
    expense = []
    for key in window:
        summary = build_summary(by_period_and_wallet(movements, key, wallet))
        income.append(summary.income_total)
        expense.append(summary.expense_total)
    return TrendSeries(
        periods=tuple(window),
        labels=tuple(short_month_label(key) for key in window),
        income=tuple(income),
        expense=tuple(expense),
    )
