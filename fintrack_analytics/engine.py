"""Cached facade over the period analytics functions.

An :class:`AnalyticsEngine` works on one :class:`~fintrack_analytics.models.Snapshot`
at a time. Callers hand it a fresh snapshot before each request with
:meth:`AnalyticsEngine.use_snapshot`; results stay cached for as long as the
snapshot's movements are unchanged and the cache TTL has not expired.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Callable, Hashable, List, Optional, Sequence, Tuple

from .cache import ResultCache, cache_key
from .config import Settings, get_settings
from .daily import DailyComparison, build_daily_comparison
from .filters import by_date_range_and_wallet, by_period_and_wallet
from .insights import Insights, build_insights
from .logging_setup import get_logger
from .models import ALL_WALLETS, MoneyMovement, SkippedRecord, Snapshot
from .periods import available_periods, format_range_label, period_label
from .summary import CategoryBreakdown, Summary, build_category_breakdown, build_summary
from .trends import TrendSeries, build_trend


_logger = get_logger(__name__)


class AnalyticsEngine:
    def __init__(
        self,
        snapshot: Optional[Snapshot] = None,
        cache: Optional[ResultCache] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or get_settings()
        if cache is None:
            cache = ResultCache(ttl_seconds=self.settings.cache_ttl_secs)
        self.cache = cache
        self._snapshot = Snapshot()
        if snapshot is not None:
            self.use_snapshot(snapshot)

    @property
    def movements(self) -> Tuple[MoneyMovement, ...]:
        return self._snapshot.movements

    @property
    def skipped_records(self) -> Tuple[SkippedRecord, ...]:
        return self._snapshot.skipped

    def use_snapshot(self, snapshot: Snapshot) -> None:
        """Adopt ``snapshot``, dropping cached results if its movements changed."""

        snapshot = Snapshot(
            movements=tuple(snapshot.movements), skipped=tuple(snapshot.skipped)
        )
        if snapshot.movements != self._snapshot.movements:
            _logger.debug(
                "Snapshot changed (%d -> %d movements); clearing cache",
                len(self._snapshot),
                len(snapshot),
            )
            self.cache.clear()
        self._snapshot = snapshot

    def invalidate(self) -> None:
        self.cache.clear()

    def _cached(self, key: Tuple[Hashable, ...], compute: Callable[[], Any]) -> Any:
        value = self.cache.get(key)
        if value is not None:
            _logger.debug("cache hit: %s", key)
            return value
        _logger.debug("cache miss: %s", key)
        return self.cache.set(key, compute())

    def _period_movements(self, key: str, wallet: str) -> List[MoneyMovement]:
        return by_period_and_wallet(self.movements, key, wallet)

    def available_periods(self) -> List[str]:
        return list(
            self._cached(
                cache_key("periods", None, ALL_WALLETS),
                lambda: tuple(available_periods(self.movements)),
            )
        )

    def summary(self, key: str, wallet: str = ALL_WALLETS) -> Summary:
        return self._cached(
            cache_key("summary", key, wallet),
            lambda: build_summary(self._period_movements(key, wallet)),
        )

    def summary_for_range(
        self, start: date, end: date, wallet: str = ALL_WALLETS
    ) -> Summary:
        return self._cached(
            cache_key("summary", (start, end), wallet),
            lambda: build_summary(
                by_date_range_and_wallet(self.movements, start, end, wallet)
            ),
        )

    def category_breakdown(self, key: str, wallet: str = ALL_WALLETS) -> CategoryBreakdown:
        return self._cached(
            cache_key("breakdown", key, wallet),
            lambda: build_category_breakdown(
                self._period_movements(key, wallet), label=period_label(key)
            ),
        )

    def category_breakdown_for_range(
        self, start: date, end: date, wallet: str = ALL_WALLETS
    ) -> CategoryBreakdown:
        return self._cached(
            cache_key("breakdown", (start, end), wallet),
            lambda: build_category_breakdown(
                by_date_range_and_wallet(self.movements, start, end, wallet),
                label=format_range_label(start, end),
            ),
        )

    def trend(
        self,
        end_key: Optional[str],
        period_count: Optional[int] = None,
        wallet: str = ALL_WALLETS,
    ) -> TrendSeries:
        count = self.settings.trend_periods if period_count is None else period_count
        return self._cached(
            cache_key("trend", end_key, wallet, count),
            lambda: build_trend(self.movements, end_key, count, wallet),
        )

    def daily_comparison(
        self,
        key: str,
        period_count: Optional[int] = None,
        wallet: str = ALL_WALLETS,
    ) -> DailyComparison:
        count = self.settings.comparison_periods if period_count is None else period_count
        return self._cached(
            cache_key("daily", key, wallet, count),
            lambda: build_daily_comparison(self.movements, key, count, wallet),
        )

    def insights(self, key: str, wallet: str = ALL_WALLETS) -> Insights:
        window = self.settings.insight_window
        return self._cached(
            cache_key("insights", key, wallet, window),
            lambda: build_insights(self.movements, key, wallet, window),
        )


def engine_for(movements: Sequence[MoneyMovement], **kwargs: Any) -> AnalyticsEngine:
    """Build an engine over a plain sequence of already validated movements."""

    return AnalyticsEngine(Snapshot(movements=tuple(movements)), **kwargs)
