from concurrent.futures import ThreadPoolExecutor

import pytest

from fintrack_analytics.cache import ResultCache, cache_key


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


def test_get_returns_none_on_miss():
    cache = ResultCache(clock=FakeClock())
    assert cache.get(cache_key("summary", "2025-04", "all")) is None


def test_entries_expire_after_ttl():
    clock = FakeClock()
    cache = ResultCache(ttl_seconds=300, clock=clock)
    key = cache_key("summary", "2025-04", "W1")
    cache.set(key, {"expense": 1})

    clock.now += 299
    assert cache.get(key) == {"expense": 1}

    clock.now += 1
    assert cache.get(key) is None
    assert len(cache) == 0


def test_keys_distinguish_kind_scope_and_wallet():
    cache = ResultCache(clock=FakeClock())
    cache.set(cache_key("summary", "2025-04", "W1"), "a")
    cache.set(cache_key("summary", "2025-04", "W2"), "b")
    cache.set(cache_key("trend", "2025-04", "W1", 12), "c")

    assert cache.get(cache_key("summary", "2025-04", "W1")) == "a"
    assert cache.get(cache_key("summary", "2025-04", "W2")) == "b"
    assert cache.get(cache_key("trend", "2025-04", "W1", 12)) == "c"
    assert cache.get(cache_key("trend", "2025-04", "W1", 6)) is None


def test_clear_drops_everything():
    cache = ResultCache(clock=FakeClock())
    cache.set("k", 1)
    cache.clear()
    assert cache.get("k") is None


def test_negative_ttl_is_rejected():
    with pytest.raises(ValueError):
        ResultCache(ttl_seconds=-1)


def test_concurrent_writers_and_readers():
    cache = ResultCache(clock=FakeClock())

    def work(index):
        key = cache_key("summary", f"2025-{index % 12 + 1:02d}", f"W{index}")
        cache.set(key, index)
        cache.get(cache_key("summary", "2025-01", "W0"))
        return cache.get(key)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(work, range(200)))

    assert results == list(range(200))
    assert len(cache) == 200
    cache.clear()
    assert len(cache) == 0
