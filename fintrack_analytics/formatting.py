"""Utility helpers for turning analytics results into text tables."""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from .daily import DailyComparison
from .insights import Insights
from .summary import CategoryBreakdown, Summary
from .trends import TrendSeries


def _money(value: Decimal) -> str:
    return f"{value:,.2f}"


def _column_widths(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> Sequence[int]:
    widths = [len(h) for h in headers]
    for row in rows:
        for idx, cell in enumerate(row):
            widths[idx] = max(widths[idx], len(cell))
    return widths


def _format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    widths = _column_widths(headers, rows)

    def format_row(row: Sequence[str]) -> str:
        return " | ".join(cell.ljust(widths[idx]) for idx, cell in enumerate(row))

    header_line = format_row(headers)
    separator = "-+-".join("-" * w for w in widths)
    body = "\n".join(format_row(row) for row in rows)
    return "\n".join([header_line, separator, body]) if body else "\n".join(
        [header_line, separator]
    )


def format_summary(summary: Summary, label: str = "") -> str:
    lines = ["Summary"]
    if label:
        lines.append(f"Period: {label}")
    lines.extend(
        [
            f"Income: {_money(summary.income_total)} ({summary.income_count} entries)",
            f"Expenses: {_money(summary.expense_total)} ({summary.expense_count} entries)",
            f"Balance: {_money(summary.balance)}",
        ]
    )
    return "\n".join(lines)


def format_category_breakdown(breakdown: CategoryBreakdown) -> str:
    rows = []
    for name, category in breakdown.categories.items():
        rows.append([name, "", _money(category.total), f"{category.percentage}%"])
        for sub_name, sub in category.subcategories.items():
            rows.append(["", sub_name, _money(sub.total), f"{sub.percentage}%"])
    table = _format_table(["Category", "Subcategory", "Total", "Share"], rows)
    return "\n".join(
        [
            "Expenses by Category",
            table,
            f"Total Expenses: {_money(breakdown.total_expenses)}",
        ]
    )


def format_trend(trend: TrendSeries) -> str:
    rows = [
        [label, _money(income), _money(expense), _money(income - expense)]
        for label, income, expense in zip(trend.labels, trend.income, trend.expense)
    ]
    return "Trend\n" + _format_table(["Period", "Income", "Expenses", "Net"], rows)


def format_insights(insights: Insights) -> str:
    return "\n".join(
        [
            "Insights",
            f"Savings Rate: {insights.savings_rate}%",
            f"Top Category: {insights.top_category} ({_money(insights.top_category_amount)})",
            f"Average Spending: {_money(insights.period_average)} "
            f"over {insights.period_count} period(s)",
        ]
    )


def format_daily_comparison(comparison: DailyComparison) -> str:
    rows = [
        [
            str(day),
            _money(daily),
            _money(cumulative),
            _money(average),
            _money(average_cumulative),
        ]
        for day, daily, cumulative, average, average_cumulative in zip(
            comparison.days,
            comparison.current_daily,
            comparison.current_cumulative,
            comparison.historical_average_daily,
            comparison.historical_average_cumulative,
        )
    ]
    headers = ["Day", "Spent", "Cumulative", "Avg Spent", "Avg Cumulative"]
    history = ", ".join(comparison.historical_periods) or "none"
    return "\n".join(
        [
            "Daily Spending vs Historical Average",
            f"History: {history}",
            _format_table(headers, rows),
        ]
    )
