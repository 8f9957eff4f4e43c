"""Tests for the TTL cache."""

from swagger_search.utils.cache import TTLCache


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_get_returns_stored_value():
    cache = TTLCache(ttl=60)
    cache.set("petstore", {"openapi": "3.0.0"})

    assert cache.get("petstore") == {"openapi": "3.0.0"}
    assert "petstore" in cache
    assert cache.get("missing") is None


def test_entries_expire_after_ttl():
    clock = FakeClock()
    cache = TTLCache(ttl=60, clock=clock)
    cache.set("petstore", {"openapi": "3.0.0"})

    clock.now = 59.9
    assert cache.get("petstore") is not None

    clock.now = 60.0
    assert cache.get("petstore") is None
    assert cache.get_stats()["total_entries"] == 0


def test_per_entry_ttl_overrides_default():
    clock = FakeClock()
    cache = TTLCache(ttl=60, clock=clock)
    cache.set("short", 1, ttl=5)
    cache.set("long", 2)

    clock.now = 10
    assert cache.get("short") is None
    assert cache.get("long") == 2


def test_changing_default_ttl_applies_to_existing_entries():
    clock = FakeClock()
    cache = TTLCache(ttl=60, clock=clock)
    cache.set("petstore", 1)

    clock.now = 20
    cache.ttl = 10
    assert cache.get("petstore") is None


def test_delete_and_clear():
    cache = TTLCache()
    cache.set("a", 1)
    cache.set("b", 2)

    cache.delete("a")
    cache.delete("unknown")
    assert cache.get("a") is None
    assert cache.get("b") == 2

    cache.clear()
    assert cache.get("b") is None


def test_stats_count_expired_entries():
    clock = FakeClock()
    cache = TTLCache(ttl=10, clock=clock)
    cache.set("a", 1)
    clock.now = 5
    cache.set("b", 2)
    clock.now = 12

    assert cache.get_stats() == {"total_entries": 2, "expired_entries": 1, "ttl": 10}
