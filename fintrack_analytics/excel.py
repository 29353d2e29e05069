"""Write analytics results to an Excel workbook."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Iterable, Optional, Sequence

from .daily import DailyComparison
from .insights import Insights
from .summary import CategoryBreakdown, Summary
from .trends import TrendSeries


SUMMARY_SHEET = "Summary"
CATEGORIES_SHEET = "Categories"
TREND_SHEET = "Trend"
DAILY_SHEET = "Daily"

MONEY_FORMAT = "#,##0.00"


def _number(value: Decimal) -> float:
    return float(round(value, 2))


def _append_rows(ws, header: Sequence[str], rows: Iterable[Sequence[object]]) -> None:
    from openpyxl.styles import Font

    ws.append(list(header))
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for row in rows:
        ws.append(list(row))


def _apply_money_format(ws, columns: Sequence[int]) -> None:
    for row in ws.iter_rows(min_row=2):
        for idx in columns:
            row[idx - 1].number_format = MONEY_FORMAT


def _write_summary(ws, summary: Summary, label: str, insights: Optional[Insights]) -> None:
    rows: list[Sequence[object]] = [
        ("Period", label),
        ("Total Income", _number(summary.income_total)),
        ("Total Expenses", _number(summary.expense_total)),
        ("Net Balance", _number(summary.balance)),
        ("Number of Incomes", summary.income_count),
        ("Number of Expenses", summary.expense_count),
    ]
    if insights is not None:
        rows.extend(
            [
                ("Savings Rate (%)", insights.savings_rate),
                ("Top Category", insights.top_category),
                ("Top Category Amount", _number(insights.top_category_amount)),
                ("Average Spending", _number(insights.period_average)),
                ("Periods Averaged", insights.period_count),
            ]
        )
    _append_rows(ws, ["Metric", "Value"], rows)


def _write_categories(ws, breakdown: CategoryBreakdown) -> None:
    rows = []
    for name, category in breakdown.categories.items():
        for sub_name, sub in category.subcategories.items():
            rows.append(
                (
                    name,
                    sub_name,
                    _number(sub.total),
                    sub.percentage,
                    _number(category.total),
                    category.percentage,
                )
            )
    _append_rows(
        ws,
        ["Category", "Subcategory", "Subtotal", "Share of Category (%)", "Category Total", "Share (%)"],
        rows,
    )
    _apply_money_format(ws, (3, 5))


def _write_trend(ws, trend: TrendSeries) -> None:
    rows = [
        (period, label, _number(income), _number(expense))
        for period, label, income, expense in zip(
            trend.periods, trend.labels, trend.income, trend.expense
        )
    ]
    _append_rows(ws, ["Period", "Label", "Income", "Expenses"], rows)
    _apply_money_format(ws, (3, 4))


def _write_daily(ws, comparison: DailyComparison) -> None:
    rows = [
        (day, _number(a), _number(b), _number(c), _number(d))
        for day, a, b, c, d in zip(
            comparison.days,
            comparison.current_daily,
            comparison.current_cumulative,
            comparison.historical_average_daily,
            comparison.historical_average_cumulative,
        )
    ]
    _append_rows(
        ws,
        ["Day", "Spent", "Cumulative", "Historical Avg", "Historical Avg Cumulative"],
        rows,
    )
    _apply_money_format(ws, (2, 3, 4, 5))


def export_workbook(
    output_path: Path,
    summary: Summary,
    breakdown: CategoryBreakdown,
    *,
    label: str = "",
    trend: Optional[TrendSeries] = None,
    comparison: Optional[DailyComparison] = None,
    insights: Optional[Insights] = None,
) -> None:
    """Write the supplied results into a new workbook at ``output_path``.

    The ``Trend`` and ``Daily`` sheets are only created when their results
    are supplied.
    """

    try:
        from openpyxl import Workbook
    except ImportError as exc:  # pragma: no cover - dependency guidance
        raise SystemExit(
            "openpyxl is required for Excel output. Install with: pip install openpyxl"
        ) from exc

    wb = Workbook()
    ws = wb.active
    ws.title = SUMMARY_SHEET
    _write_summary(ws, summary, label or breakdown.label, insights)
    _write_categories(wb.create_sheet(CATEGORIES_SHEET), breakdown)
    if trend is not None:
        _write_trend(wb.create_sheet(TREND_SHEET), trend)
    if comparison is not None:
        _write_daily(wb.create_sheet(DAILY_SHEET), comparison)

    wb.save(str(output_path))
