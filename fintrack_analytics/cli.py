"""Command line entry point for period analytics reports."""

from __future__ import annotations

import argparse
from datetime import date
from pathlib import Path
from typing import Iterable

from .engine import AnalyticsEngine
from .excel import export_workbook
from .formatting import (
    format_category_breakdown,
    format_daily_comparison,
    format_insights,
    format_summary,
    format_trend,
)
from .loader import load_movements
from .logging_setup import configure_logging, get_logger
from .models import ALL_WALLETS
from .periods import (
    DATE_RANGE_PRESETS,
    format_range_label,
    parse_period_key,
    period_key_for_date,
    period_label,
    resolve_date_range,
)


_logger = get_logger(__name__)


def _period_key(value: str) -> str:
    try:
        parse_period_key(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None
    return value


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return number


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Summarise income and expenses per 26th-to-25th period from a "
            "CSV export of wallet movements."
        )
    )
    parser.add_argument(
        "csv_path",
        nargs="?",
        default="movements.csv",
        help="Path to the CSV export (Date,Type,Amount,Wallet,Category,...).",
    )
    selector = parser.add_mutually_exclusive_group()
    selector.add_argument(
        "--period",
        type=_period_key,
        help="Period key (YYYY-MM) to report on.",
    )
    selector.add_argument(
        "--range",
        choices=DATE_RANGE_PRESETS,
        help="Report on a preset date range instead of a period.",
    )
    parser.add_argument(
        "--as-of",
        type=date.fromisoformat,
        help=(
            "Reference date (default: today). Picks the period to report on "
            "unless --period is given, and anchors the end of --range presets."
        ),
    )
    parser.add_argument(
        "--wallet",
        default=ALL_WALLETS,
        help="Restrict the report to one wallet id (default: all wallets).",
    )
    parser.add_argument(
        "--trend-periods",
        type=_positive_int,
        help="Number of periods in the trend table (default: 12).",
    )
    parser.add_argument(
        "--comparison-periods",
        type=_non_negative_int,
        help="Number of historical periods averaged in the daily comparison (default: 6).",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Write the report to the specified file instead of printing to stdout.",
    )
    parser.add_argument(
        "--excel-output",
        type=Path,
        help="Also write the results to an Excel workbook at this path.",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (default: FINTRACK_LOG_LEVEL or INFO).",
    )
    return parser.parse_args(argv)


def _range_report(engine: AnalyticsEngine, args: argparse.Namespace) -> tuple[str, dict]:
    date_range = resolve_date_range(args.range, args.as_of)
    label = format_range_label(date_range.start, date_range.end)
    summary = engine.summary_for_range(date_range.start, date_range.end, args.wallet)
    breakdown = engine.category_breakdown_for_range(
        date_range.start, date_range.end, args.wallet
    )
    text = "\n\n".join(
        [format_summary(summary, label), format_category_breakdown(breakdown)]
    )
    return text, dict(summary=summary, breakdown=breakdown, label=label)


def _period_report(engine: AnalyticsEngine, args: argparse.Namespace) -> tuple[str, dict]:
    key = args.period or period_key_for_date(args.as_of or date.today())
    summary = engine.summary(key, args.wallet)
    breakdown = engine.category_breakdown(key, args.wallet)
    trend = engine.trend(key, args.trend_periods, args.wallet)
    comparison = engine.daily_comparison(key, args.comparison_periods, args.wallet)
    insights = engine.insights(key, args.wallet)
    label = f"{key} ({period_label(key)})"
    text = "\n\n".join(
        [
            format_summary(summary, label),
            format_category_breakdown(breakdown),
            format_insights(insights),
            format_trend(trend),
            format_daily_comparison(comparison),
        ]
    )
    return text, dict(
        summary=summary,
        breakdown=breakdown,
        label=label,
        trend=trend,
        comparison=comparison,
        insights=insights,
    )


def run(argv: Iterable[str] | None = None) -> str:
    args = parse_args(argv)
    configure_logging(args.log_level)

    csv_path = Path(args.csv_path)
    if not csv_path.exists():
        raise SystemExit(f"CSV file not found: {csv_path}")

    try:
        snapshot = load_movements(csv_path)
    except ValueError as exc:
        raise SystemExit(str(exc))
    if not snapshot.movements:
        raise SystemExit("No valid movements found in the CSV export.")

    engine = AnalyticsEngine(snapshot)
    if args.range:
        output_text, results = _range_report(engine, args)
    else:
        output_text, results = _period_report(engine, args)

    if snapshot.skipped:
        output_text += f"\n\nSkipped {len(snapshot.skipped)} invalid record(s)."
    output_text += "\n"

    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)

    if args.excel_output:
        export_workbook(args.excel_output, **results)
        _logger.info("Wrote Excel workbook to %s", args.excel_output)
    return output_text


def main() -> None:
    run()


if __name__ == "__main__":
    main()
