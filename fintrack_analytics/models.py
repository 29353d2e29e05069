"""Data models used by the period analytics engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional, Tuple


EXPENSE = "expense"
INCOME = "income"
MOVEMENT_KINDS = (EXPENSE, INCOME)

# Wallet filter sentinel meaning "every wallet".
ALL_WALLETS = "all"


@dataclass(frozen=True)
class MoneyMovement:
    """A single expense or income entry supplied by the data store."""

    id: str
    wallet_id: str
    amount: Decimal
    date: date
    kind: str
    category: Optional[str] = None
    subcategory: Optional[str] = None
    description: str = ""

    @property
    def is_expense(self) -> bool:
        """Return ``True`` when the movement represents money paid out."""

        return self.kind == EXPENSE

    @property
    def is_income(self) -> bool:
        """Return ``True`` when the movement represents money received."""

        return self.kind == INCOME


@dataclass(frozen=True)
class SkippedRecord:
    """A raw record that was excluded because it failed validation."""

    raw: Mapping[str, Any]
    reason: str


@dataclass(frozen=True)
class Snapshot:
    """Read-only copy of the movements handed to the engine for one request."""

    movements: Tuple[MoneyMovement, ...] = ()
    skipped: Tuple[SkippedRecord, ...] = field(default=(), compare=False)

    @property
    def expenses(self) -> Tuple[MoneyMovement, ...]:
        return tuple(m for m in self.movements if m.is_expense)

    @property
    def incomes(self) -> Tuple[MoneyMovement, ...]:
        return tuple(m for m in self.movements if m.is_income)

    def __len__(self) -> int:
        return len(self.movements)
