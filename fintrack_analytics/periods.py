"""Utilities for working with reporting periods.

Reporting periods are fiscal months that run from the 26th of one calendar
month through the 25th of the next. A period is identified by a ``YYYY-MM``
key naming the month of its final day, so ``2025-04`` covers
2025-03-26 through 2025-04-25.
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Tuple

from .models import MoneyMovement


PERIOD_START_DAY = 26
PERIOD_END_DAY = 25

_PERIOD_KEY_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")

DATE_RANGE_PRESETS = (
    "last-7",
    "last-30",
    "this-month",
    "last-month",
    "last-3-months",
    "last-6-months",
    "year-to-date",
)


@dataclass(frozen=True)
class PeriodInterval:
    """Inclusive calendar-date bounds of a period."""

    start: date
    end: date

    @property
    def start_at(self) -> datetime:
        return datetime.combine(self.start, time.min)

    @property
    def end_at(self) -> datetime:
        return datetime.combine(self.end, time(23, 59, 59))

    def __contains__(self, value: date) -> bool:
        return self.start <= value <= self.end


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date


def _shift_month(year: int, month: int, count: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + count
    return index // 12, index % 12 + 1


def _format_key(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def parse_period_key(key: str) -> Tuple[int, int]:
    """Split ``key`` into ``(year, month)``, rejecting malformed keys."""

    match = _PERIOD_KEY_PATTERN.match(key or "")
    if not match:
        raise ValueError(f"Invalid period key: {key!r} (expected YYYY-MM)")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12 or year < 1:
        raise ValueError(f"Invalid period key: {key!r}")
    return year, month


def period_key_for_date(value: date) -> str:
    """Return the key of the period containing ``value``."""

    if value.day >= PERIOD_START_DAY:
        return _format_key(*_shift_month(value.year, value.month, 1))
    return _format_key(value.year, value.month)


def interval_for_period_key(key: str) -> PeriodInterval:
    year, month = parse_period_key(key)
    start_year, start_month = _shift_month(year, month, -1)
    return PeriodInterval(
        start=date(start_year, start_month, PERIOD_START_DAY),
        end=date(year, month, PERIOD_END_DAY),
    )


def is_date_in_period(value: date, key: str) -> bool:
    return value in interval_for_period_key(key)


def next_period_key(key: str) -> str:
    return _format_key(*_shift_month(*parse_period_key(key), 1))


def previous_period_key(key: str) -> str:
    return _format_key(*_shift_month(*parse_period_key(key), -1))


def period_label(key: str) -> str:
    """Return a label such as ``"Mar 26 - Apr 25"`` for ``key``."""

    year, month = parse_period_key(key)
    _, previous_month = _shift_month(year, month, -1)
    return (
        f"{calendar.month_abbr[previous_month]} {PERIOD_START_DAY} - "
        f"{calendar.month_abbr[month]} {PERIOD_END_DAY}"
    )


def short_month_label(key: str) -> str:
    """Return a compact axis label such as ``"Jan 25"``."""

    year, month = parse_period_key(key)
    return f"{calendar.month_abbr[month]} {year % 100:02d}"


def days_in_period(key: str) -> List[date]:
    """Every calendar date of the period, in order."""

    interval = interval_for_period_key(key)
    length = (interval.end - interval.start).days + 1
    return [interval.start + timedelta(days=offset) for offset in range(length)]


def available_periods(movements: Iterable[MoneyMovement]) -> List[str]:
    """Sorted keys of every period that holds at least one movement."""

    return sorted({period_key_for_date(m.date) for m in movements})


def format_range_label(start: date, end: date) -> str:
    return (
        f"{calendar.month_abbr[start.month]} {start.day} - "
        f"{calendar.month_abbr[end.month]} {end.day}"
    )


def last_month_range(today: date | None = None) -> Tuple[date, date]:
    """Return the first and last day of the calendar month before ``today``."""

    today = today or date.today()
    first_of_this_month = today.replace(day=1)
    last_day_previous_month = first_of_this_month - timedelta(days=1)
    first_day_previous_month = last_day_previous_month.replace(day=1)
    return first_day_previous_month, last_day_previous_month


def resolve_date_range(preset: str, today: date | None = None) -> DateRange:
    """Turn a preset name such as ``"last-30"`` into a concrete range."""

    today = today or date.today()
    if preset == "last-7":
        return DateRange(today - timedelta(days=6), today)
    if preset == "last-30":
        return DateRange(today - timedelta(days=29), today)
    if preset == "this-month":
        return DateRange(today.replace(day=1), today)
    if preset == "last-month":
        return DateRange(*last_month_range(today))
    if preset in ("last-3-months", "last-6-months"):
        months = 3 if preset == "last-3-months" else 6
        year, month = _shift_month(today.year, today.month, -months)
        return DateRange(date(year, month, 1), today)
    if preset == "year-to-date":
        return DateRange(date(today.year, 1, 1), today)
    raise ValueError(
        f"Unknown date range preset: {preset!r} "
        f"(expected one of {', '.join(DATE_RANGE_PRESETS)})"
    )
