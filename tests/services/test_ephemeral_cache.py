"""Tests for the TTL cache."""

from __future__ import annotations

from linear_cli.services.cache import CacheEntry, EphemeralCache, make_cache_key
from linear_cli.shared.constants import Cache


class TestExpiry:
    def test_value_is_returned_before_expiry(self, fake_clock):
        cache = EphemeralCache(clock=fake_clock)
        cache.set("k", "v", ttl_ms=1000)

        fake_clock.advance(999)

        assert cache.get("k") == "v"

    def test_entry_is_valid_at_expiry_instant(self, fake_clock):
        cache = EphemeralCache(clock=fake_clock)
        cache.set("k", "v", ttl_ms=1000)

        fake_clock.advance(1000)

        assert cache.get("k") == "v"

    def test_entry_expires_one_ms_later_and_is_evicted(self, fake_clock):
        cache = EphemeralCache(clock=fake_clock)
        cache.set("k", "v", ttl_ms=1000)

        fake_clock.advance(1001)

        assert len(cache) == 1
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_expired_entries_stay_until_read(self, fake_clock):
        cache = EphemeralCache(clock=fake_clock)
        cache.set("a", 1, ttl_ms=10)
        cache.set("b", 2, ttl_ms=10)

        fake_clock.advance(50)
        cache.get("a")

        assert len(cache) == 1

    def test_default_ttl_is_five_minutes(self, fake_clock):
        cache = EphemeralCache(clock=fake_clock)
        cache.set("k", "v")

        fake_clock.advance(Cache.DEFAULT_TTL_MS)
        assert cache.get("k") == "v"

        fake_clock.advance(1)
        assert cache.get("k") is None

    def test_zero_ttl_uses_default(self, fake_clock):
        cache = EphemeralCache(default_ttl_ms=100, clock=fake_clock)
        cache.set("k", "v", ttl_ms=0)

        fake_clock.advance(100)

        assert cache.get("k") == "v"

    def test_set_replaces_entry_and_expiry(self, fake_clock):
        cache = EphemeralCache(clock=fake_clock)
        cache.set("k", "old", ttl_ms=10)
        fake_clock.advance(5)
        cache.set("k", "new", ttl_ms=10)

        fake_clock.advance(10)

        assert cache.get("k") == "new"

    def test_entry_expiry_boundary(self):
        entry = CacheEntry(value=None, expires_at=100.0)

        assert entry.is_expired(100.0) is False
        assert entry.is_expired(100.5) is True


class TestCacheOperations:
    def test_missing_key_returns_default(self):
        cache = EphemeralCache()

        assert cache.get("missing") is None
        assert cache.get("missing", []) == []

    def test_stored_object_is_not_copied(self):
        cache = EphemeralCache()
        value = {"issues": []}
        cache.set("k", value)

        assert cache.get("k") is value

    def test_cached_falsy_value_is_contained(self):
        cache = EphemeralCache()
        cache.set("k", [])

        assert "k" in cache
        assert "other" not in cache
        assert 42 not in cache

    def test_contains_respects_expiry(self, fake_clock):
        cache = EphemeralCache(clock=fake_clock)
        cache.set("k", "v", ttl_ms=1)

        fake_clock.advance(2)

        assert "k" not in cache

    def test_delete_and_clear(self):
        cache = EphemeralCache()
        cache.set("a", 1)
        cache.set("b", 2)

        cache.delete("a")
        cache.delete("never-set")
        assert "a" not in cache
        assert cache.get("b") == 2

        cache.clear()
        assert len(cache) == 0


class TestMakeCacheKey:
    def test_resource_only(self):
        assert make_cache_key("teams") == "teams"

    def test_options_are_sorted_by_name(self):
        key = make_cache_key("my_issues", include_completed=False, in_current_cycle=True)

        assert key == "my_issues:in_current_cycle=True,include_completed=False"

    def test_same_options_same_key(self):
        assert make_cache_key("issues", a=1, b=None) == make_cache_key("issues", b=None, a=1)
