"""Day-aligned cumulative spending compared against a historical average.

Periods are 28 to 31 days long, so every series here is indexed by the day
offset within its own period (offset 0 is the 26th) rather than by calendar
date. The historical average is laid out on the current period's axis; a
historical period that is shorter than the current one reuses its last day's
value for the offsets it does not have.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from decimal import Decimal
from itertools import accumulate
from typing import List, Sequence

from .filters import by_period_and_wallet
from .models import ALL_WALLETS, MoneyMovement
from .periods import available_periods, days_in_period, interval_for_period_key


ZERO = Decimal(0)


class FillPolicy(enum.Enum):
    """How a short historical period fills offsets past its last day."""

    REUSE_LAST_DAY = "reuse-last-day"
    ZERO = "zero"


@dataclass(frozen=True)
class DailyComparison:
    days: Sequence[int]
    current_daily: Sequence[Decimal]
    current_cumulative: Sequence[Decimal]
    historical_average_daily: Sequence[Decimal]
    historical_average_cumulative: Sequence[Decimal]
    historical_periods: Sequence[str] = ()


def daily_expense_series(
    movements: Sequence[MoneyMovement], key: str, wallet: str = ALL_WALLETS
) -> List[Decimal]:
    """Sum expenses per day offset of period ``key``."""

    interval = interval_for_period_key(key)
    series = [ZERO] * len(days_in_period(key))
    for movement in by_period_and_wallet(movements, key, wallet):
        if movement.is_expense:
            series[(movement.date - interval.start).days] += movement.amount
    return series


def historical_average(
    histories: Sequence[Sequence[Decimal]],
    length: int,
    policy: FillPolicy = FillPolicy.REUSE_LAST_DAY,
) -> List[Decimal]:
    """Average ``histories`` offset by offset onto an axis of ``length`` days."""

    if not histories:
        return [ZERO] * length
    totals = [ZERO] * length
    for series in histories:
        for offset in range(length):
            if offset < len(series):
                totals[offset] += series[offset]
            elif policy is FillPolicy.REUSE_LAST_DAY and series:
                totals[offset] += series[-1]
    count = len(histories)
    return [total / count for total in totals]


def build_daily_comparison(
    movements: Sequence[MoneyMovement],
    current_key: str,
    period_count: int = 6,
    wallet: str = ALL_WALLETS,
    *,
    policy: FillPolicy = FillPolicy.REUSE_LAST_DAY,
) -> DailyComparison:
    if period_count < 0:
        raise ValueError(f"period count must not be negative, got {period_count}")

    current_daily = daily_expense_series(movements, current_key, wallet)
    length = len(current_daily)

    earlier = [key for key in available_periods(movements) if key < current_key]
    history_keys = earlier[max(0, len(earlier) - period_count) :]
    histories = [daily_expense_series(movements, key, wallet) for key in history_keys]
    average_daily = historical_average(histories, length, policy)

    return DailyComparison(
        days=tuple(range(1, length + 1)),
        current_daily=tuple(current_daily),
        current_cumulative=tuple(accumulate(current_daily)),
        historical_average_daily=tuple(average_daily),
        historical_average_cumulative=tuple(accumulate(average_daily)),
        historical_periods=tuple(history_keys),
    )
