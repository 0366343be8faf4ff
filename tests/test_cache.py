"""Unit tests for the cache stores."""

import pytest

from flightboard.tracker.cache import CacheStore, FileCache, MemoryCache
from flightboard.tracker.errors import CacheUnavailableError


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestMemoryCache:
    """Tests for MemoryCache."""

    def test_put_then_get(self) -> None:
        cache = MemoryCache()
        cache.put("k", "value", ttl=60)
        assert cache.get("k") == "value"

    def test_missing_key(self) -> None:
        assert MemoryCache().get("nope") is None

    def test_expires_after_ttl(self) -> None:
        clock = FakeClock()
        cache = MemoryCache(clock=clock)
        cache.put("k", "value", ttl=60)
        clock.now += 59
        assert cache.get("k") == "value"
        clock.now += 1
        assert cache.get("k") is None

    def test_overwrite_last_write_wins(self) -> None:
        cache = MemoryCache()
        cache.put("k", "first", ttl=60)
        cache.put("k", "second", ttl=60)
        assert cache.get("k") == "second"

    def test_put_evicts_expired_entries(self) -> None:
        clock = FakeClock()
        cache = MemoryCache(clock=clock)
        cache.put("old", "a", ttl=10)
        cache.put("new", "b", ttl=100)
        clock.now += 50
        cache.put("latest", "c", ttl=100)
        assert set(cache._entries) == {"new", "latest"}
        assert cache.get("new") == "b"

    def test_satisfies_protocol(self) -> None:
        assert isinstance(MemoryCache(), CacheStore)


class TestFileCache:
    """Tests for FileCache."""

    def test_round_trip_across_instances(self, tmp_path) -> None:
        clock = FakeClock()
        FileCache(tmp_path / "cache", clock=clock).put("k", '[{"a": 1}]', ttl=60)
        assert FileCache(tmp_path / "cache", clock=clock).get("k") == '[{"a": 1}]'

    def test_missing_file_is_miss(self, tmp_path) -> None:
        assert FileCache(tmp_path).get("k") is None

    def test_expired_is_miss(self, tmp_path) -> None:
        clock = FakeClock()
        cache = FileCache(tmp_path, clock=clock)
        cache.put("k", "v", ttl=60)
        clock.now += 60
        assert cache.get("k") is None

    def test_corrupt_file_is_miss(self, tmp_path) -> None:
        cache = FileCache(tmp_path)
        cache.put("k", "v", ttl=60)
        for path in tmp_path.glob("*.json"):
            path.write_text("{not json")
        assert cache.get("k") is None

    @pytest.mark.parametrize("content", ["[1, 2]", '"str"', "null"])
    def test_unexpected_layout_is_miss(self, tmp_path, content) -> None:
        cache = FileCache(tmp_path)
        cache.put("k", "v", ttl=60)
        for path in tmp_path.glob("*.json"):
            path.write_text(content)
        assert cache.get("k") is None

    def test_unwritable_directory_raises(self, tmp_path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        cache = FileCache(blocker / "sub")
        with pytest.raises(CacheUnavailableError):
            cache.put("k", "v", ttl=60)

    def test_unreadable_directory_raises(self, tmp_path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        with pytest.raises(CacheUnavailableError):
            FileCache(blocker).get("k")

    def test_satisfies_protocol(self, tmp_path) -> None:
        assert isinstance(FileCache(tmp_path), CacheStore)
