"""Helpers for validating raw records and loading them from a CSV export."""

from __future__ import annotations

import csv
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Mapping, Optional

from .logging_setup import get_logger
from .models import (
    EXPENSE,
    INCOME,
    MOVEMENT_KINDS,
    MoneyMovement,
    SkippedRecord,
    Snapshot,
)


CSV_HEADER = [
    "Date",
    "Type",
    "Amount",
    "Wallet",
    "Category",
    "Subcategory",
    "Description",
    "Id",
]

_logger = get_logger(__name__)


class InvalidRecordError(ValueError):
    """Raised when a raw record cannot become a :class:`MoneyMovement`."""


def _first(raw: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        value = raw.get(name)
        if value not in (None, ""):
            return value
    return None


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        # Plain ISO dates, or ISO timestamps whose time part must also parse.
        day, separator, clock = value.strip().replace(" ", "T", 1).partition("T")
        if len(day) == 10:
            try:
                parsed = date.fromisoformat(day)
                if separator:
                    time.fromisoformat(clock)
                return parsed
            except ValueError:
                pass
    raise InvalidRecordError(f"unparsable date: {value!r}")


def _parse_amount(value: Any) -> Decimal:
    if value is None or isinstance(value, bool):
        raise InvalidRecordError(f"missing or invalid amount: {value!r}")
    try:
        amount = Decimal(str(value).strip().replace(",", ""))
    except InvalidOperation:
        raise InvalidRecordError(f"non-numeric amount: {value!r}") from None
    if not amount.is_finite():
        raise InvalidRecordError(f"non-finite amount: {value!r}")
    if amount < 0:
        raise InvalidRecordError(f"negative amount: {value!r}")
    return amount


def parse_movement(raw: Mapping[str, Any], kind: Optional[str] = None) -> MoneyMovement:
    """Validate ``raw`` and return a typed movement.

    ``kind`` overrides any ``type``/``kind`` field carried by the record.
    Both ``walletId`` and ``wallet_id`` spellings are accepted.
    """

    kind = (kind or str(_first(raw, "kind", "type", "Type") or "")).strip().lower()
    if kind not in MOVEMENT_KINDS:
        raise InvalidRecordError(f"unknown movement kind: {kind!r}")

    wallet_id = _optional_text(_first(raw, "wallet_id", "walletId", "Wallet"))
    if wallet_id is None:
        raise InvalidRecordError("missing wallet identifier")

    category = subcategory = None
    if kind == EXPENSE:
        category = _optional_text(_first(raw, "category", "Category"))
        subcategory = _optional_text(_first(raw, "subcategory", "Subcategory"))

    return MoneyMovement(
        id=str(_first(raw, "id", "Id") or ""),
        wallet_id=wallet_id,
        amount=_parse_amount(_first(raw, "amount", "Amount")),
        date=_parse_date(_first(raw, "date", "Date")),
        kind=kind,
        category=category,
        subcategory=subcategory,
        description=str(_first(raw, "description", "Description") or ""),
    )


def build_snapshot(
    expenses: Iterable[Mapping[str, Any]] = (),
    incomes: Iterable[Mapping[str, Any]] = (),
) -> Snapshot:
    """Validate raw expense and income records into a :class:`Snapshot`.

    Invalid records are excluded and reported through ``Snapshot.skipped``.
    """

    movements: List[MoneyMovement] = []
    skipped: List[SkippedRecord] = []
    for kind, records in ((EXPENSE, expenses), (INCOME, incomes)):
        for raw in records:
            try:
                movements.append(parse_movement(raw, kind))
            except InvalidRecordError as exc:
                skipped.append(SkippedRecord(raw=dict(raw), reason=str(exc)))
    return _finish_snapshot(movements, skipped)


def _finish_snapshot(
    movements: List[MoneyMovement], skipped: List[SkippedRecord]
) -> Snapshot:
    if skipped:
        _logger.warning(
            "Skipped %d of %d records that failed validation (first: %s)",
            len(skipped),
            len(skipped) + len(movements),
            skipped[0].reason,
        )
    return Snapshot(movements=tuple(movements), skipped=tuple(skipped))


def _iter_clean_rows(path: Path) -> Iterator[List[str]]:
    with path.open(newline="", encoding="utf-8-sig") as csvfile:
        reader = csv.reader(csvfile)
        for row in reader:
            if not any(field.strip() for field in row):
                continue
            yield row


def load_movements(path: str | Path) -> Snapshot:
    """Load expenses and incomes from a CSV export into a :class:`Snapshot`."""

    path = Path(path)
    rows = list(_iter_clean_rows(path))
    if not rows:
        return Snapshot()

    header, *data_rows = rows
    if [cell.strip() for cell in header] != CSV_HEADER:
        raise ValueError(
            f"Unexpected CSV header in {path}: expected {','.join(CSV_HEADER)}"
        )

    movements: List[MoneyMovement] = []
    skipped: List[SkippedRecord] = []
    for row_number, raw in enumerate(data_rows, start=2):
        record = dict(zip(CSV_HEADER, raw))
        if not record.get("Id"):
            record["Id"] = str(row_number)
        try:
            movements.append(parse_movement(record))
        except InvalidRecordError as exc:
            skipped.append(SkippedRecord(raw=record, reason=f"row {row_number}: {exc}"))
    _logger.debug("Loaded %d movements from %s", len(movements), path)
    return _finish_snapshot(movements, skipped)
