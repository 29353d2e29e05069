"""Reduce a filtered set of movements into totals and category breakdowns."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal
from typing import Dict, Iterable, List, Mapping, Sequence

from .models import MoneyMovement


UNCATEGORIZED = "Uncategorized"
GENERAL = "General"

ZERO = Decimal(0)
HALF = Decimal("0.5")


@dataclass(frozen=True)
class Summary:
    expense_total: Decimal = ZERO
    income_total: Decimal = ZERO
    expense_count: int = 0
    income_count: int = 0

    @property
    def balance(self) -> Decimal:
        return self.income_total - self.expense_total


@dataclass(frozen=True)
class SubcategoryTotal:
    total: Decimal
    percentage: int
    items: Sequence[MoneyMovement]


@dataclass(frozen=True)
class CategoryTotal:
    total: Decimal
    percentage: int
    subcategories: Mapping[str, SubcategoryTotal]


@dataclass(frozen=True)
class CategoryBreakdown:
    categories: Mapping[str, CategoryTotal]
    total_expenses: Decimal
    label: str = ""


def round_half_up(value: Decimal) -> Decimal:
    """Round to a whole number with halves going towards +infinity.

    ``-12.5`` becomes ``-12`` and ``12.5`` becomes ``13``.
    """

    return (Decimal(value) + HALF).to_integral_value(rounding=ROUND_FLOOR)


def percentage(part: Decimal, whole: Decimal) -> int:
    """Return ``part`` as a whole percentage of ``whole``, rounding half up.

    A zero ``whole`` yields ``0``.
    """

    if not whole:
        return 0
    return int(round_half_up(Decimal(part) / Decimal(whole) * 100))


def build_summary(movements: Iterable[MoneyMovement]) -> Summary:
    expense_total = income_total = ZERO
    expense_count = income_count = 0
    for movement in movements:
        if movement.is_expense:
            expense_total += movement.amount
            expense_count += 1
        elif movement.is_income:
            income_total += movement.amount
            income_count += 1
    return Summary(
        expense_total=expense_total,
        income_total=income_total,
        expense_count=expense_count,
        income_count=income_count,
    )


def build_category_breakdown(
    movements: Iterable[MoneyMovement], label: str = ""
) -> CategoryBreakdown:
    """Group expenses by category and subcategory.

    Income movements are ignored, so callers may pass a mixed set. Categories
    come back ordered by descending total, then by name.
    """

    category_totals: Dict[str, Decimal] = defaultdict(Decimal)
    subcategory_items: Dict[str, Dict[str, List[MoneyMovement]]] = defaultdict(
        lambda: defaultdict(list)
    )
    total_expenses = ZERO
    for movement in movements:
        if not movement.is_expense:
            continue
        category = movement.category or UNCATEGORIZED
        subcategory = movement.subcategory or GENERAL
        category_totals[category] += movement.amount
        subcategory_items[category][subcategory].append(movement)
        total_expenses += movement.amount

    categories: Dict[str, CategoryTotal] = {}
    ordered = sorted(category_totals.items(), key=lambda item: (-item[1], item[0]))
    for category, category_total in ordered:
        subcategories: Dict[str, SubcategoryTotal] = {}
        sub_rows = [
            (name, sum((m.amount for m in items), ZERO), items)
            for name, items in subcategory_items[category].items()
        ]
        for name, sub_total, items in sorted(sub_rows, key=lambda row: (-row[1], row[0])):
            subcategories[name] = SubcategoryTotal(
                total=sub_total,
                percentage=percentage(sub_total, category_total),
                items=tuple(items),
            )
        categories[category] = CategoryTotal(
            total=category_total,
            percentage=percentage(category_total, total_expenses),
            subcategories=subcategories,
        )

    return CategoryBreakdown(
        categories=categories, total_expenses=total_expenses, label=label
    )
