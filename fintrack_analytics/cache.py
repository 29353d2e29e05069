"""Short-lived memoization of aggregate results.

Entries are keyed by ``(kind, scope, wallet, *extra)`` where ``scope`` is a
period key or a ``(start, end)`` date pair. Stale entries are only evicted
when they are read; the key space (kinds x periods x wallets) stays small.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

from .logging_setup import get_logger


DEFAULT_TTL_SECONDS = 300.0

_logger = get_logger(__name__)


def cache_key(kind: str, scope: Hashable, wallet: str, *extra: Hashable) -> Tuple[Hashable, ...]:
    return (kind, scope, wallet, *extra)


class ResultCache:
    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds < 0:
            raise ValueError(f"ttl_seconds must not be negative, got {ttl_seconds}")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[Hashable, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> Optional[Any]:
        """Return the cached value, or ``None`` on a miss or stale hit."""

        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, value = entry
            if self._clock() - stored_at >= self.ttl_seconds:
                del self._entries[key]
                _logger.debug("cache entry expired: %s", key)
                return None
            return value

    def set(self, key: Hashable, value: Any) -> Any:
        with self._lock:
            self._entries[key] = (self._clock(), value)
        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
