"""Select the movements that belong to a wallet and a period or date range."""

from __future__ import annotations

from datetime import date
from typing import Iterable, List

from .models import ALL_WALLETS, MoneyMovement
from .periods import interval_for_period_key


def matches_wallet(movement: MoneyMovement, wallet: str = ALL_WALLETS) -> bool:
    return wallet == ALL_WALLETS or movement.wallet_id == wallet


def by_date_range_and_wallet(
    movements: Iterable[MoneyMovement],
    start: date,
    end: date,
    wallet: str = ALL_WALLETS,
) -> List[MoneyMovement]:
    """Return movements of ``wallet`` that occurred between ``start`` and ``end``.

    Both bounds are inclusive and the input order is preserved.
    """

    if start > end:
        raise ValueError(f"Range start {start} is after range end {end}")
    return [
        m for m in movements if matches_wallet(m, wallet) and start <= m.date <= end
    ]


def by_period_and_wallet(
    movements: Iterable[MoneyMovement],
    key: str,
    wallet: str = ALL_WALLETS,
) -> List[MoneyMovement]:
    interval = interval_for_period_key(key)
    return by_date_range_and_wallet(movements, interval.start, interval.end, wallet)
