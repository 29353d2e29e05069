import os
from functools import lru_cache


class Settings:
    def __init__(
        self,
        cache_ttl_secs: float,
        trend_periods: int,
        comparison_periods: int,
        insight_window: int,
        log_level: str,
    ) -> None:
        self.cache_ttl_secs = cache_ttl_secs
        self.trend_periods = trend_periods
        self.comparison_periods = comparison_periods
        self.insight_window = insight_window
        self.log_level = log_level


def _int_env(name: str, default: int, minimum: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = int(raw)
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")
    return value


def load_settings() -> Settings:
    cache_ttl_secs = float(os.getenv("FINTRACK_CACHE_TTL_SECS", "300"))
    if cache_ttl_secs < 0:
        raise ValueError("FINTRACK_CACHE_TTL_SECS must not be negative")
    return Settings(
        cache_ttl_secs=cache_ttl_secs,
        trend_periods=_int_env("FINTRACK_TREND_PERIODS", 12, 1),
        comparison_periods=_int_env("FINTRACK_COMPARISON_PERIODS", 6, 0),
        insight_window=_int_env("FINTRACK_INSIGHT_WINDOW", 7, 1),
        log_level=os.getenv("FINTRACK_LOG_LEVEL", "INFO"),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
