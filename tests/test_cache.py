"""Tests for the rendered-HTML response cache."""

import pytest

from holidayseo.services.cache import InMemoryResponseCache, cache_key


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestCacheKey:
    def test_namespaced(self):
        assert cache_key("package", "rome-break") == "package:rome-break"
        assert cache_key("holiday-deals", "india") == "holiday-deals:india"

    def test_unknown_namespace_rejected(self):
        with pytest.raises(ValueError):
            cache_key("widgets", "x")


class TestInMemoryResponseCache:
    def test_round_trip_is_exact(self):
        cache = InMemoryResponseCache()
        html = "<html><body>£1,200 &amp; “quotes”</body></html>"
        cache.set("tour:1", html)
        assert cache.get("tour:1") == html

    def test_miss_returns_none(self):
        assert InMemoryResponseCache().get("tour:404") is None

    def test_last_write_wins(self):
        cache = InMemoryResponseCache()
        cache.set("tour:1", "first")
        cache.set("tour:1", "second")
        assert cache.get("tour:1") == "second"

    def test_entry_expires_after_ttl(self):
        clock = FakeClock()
        cache = InMemoryResponseCache(ttl_seconds=300, clock=clock)
        cache.set("tour:1", "html")

        clock.now += 299
        assert cache.get("tour:1") == "html"

        clock.now += 2
        assert cache.get("tour:1") is None
        assert cache.stats()["size"] == 0

    def test_zero_ttl_never_expires(self):
        clock = FakeClock()
        cache = InMemoryResponseCache(ttl_seconds=0, clock=clock)
        cache.set("tour:1", "html")
        clock.now += 10 ** 6
        assert cache.get("tour:1") == "html"

    def test_invalidate_single_key(self):
        cache = InMemoryResponseCache()
        cache.set("tour:1", "a")
        assert cache.invalidate("tour:1") is True
        assert cache.invalidate("tour:1") is False
        assert cache.get("tour:1") is None

    def test_invalidate_prefix(self):
        cache = InMemoryResponseCache()
        cache.set("destination:italy", "a")
        cache.set("destination:spain", "b")
        cache.set("package:rome", "c")

        assert cache.invalidate_prefix("destination:") == 2
        assert cache.stats() == {"size": 1, "keys": ["package:rome"]}

    def test_clear(self):
        cache = InMemoryResponseCache()
        cache.set("tour:1", "a")
        cache.set("blog:b", "b")
        cache.clear()
        assert cache.stats()["size"] == 0
