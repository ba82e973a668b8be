"""Tests for the in-memory cache and its readers-writer lock."""

from concurrent.futures import ThreadPoolExecutor
import threading
import time

import pytest

from slot_rewards.helpers.cache import MemoryCache, ReadWriteLock


class TestMemoryCache:
    """Tests for MemoryCache."""

    def test_miss_returns_not_found(self) -> None:
        cache: MemoryCache[int, str] = MemoryCache("test")

        value, found = cache.get(1)

        assert value is None
        assert found is False
        assert cache.stats.misses == 1

    def test_set_then_get(self) -> None:
        cache: MemoryCache[int, str] = MemoryCache("test")

        cache.set(1, "one")
        value, found = cache.get(1)

        assert (value, found) == ("one", True)
        assert cache.stats.hits == 1
        assert 1 in cache
        assert len(cache) == 1

    def test_empty_value_is_a_hit(self) -> None:
        """An empty set is a cached answer, distinct from a miss."""
        cache: MemoryCache[int, frozenset[str]] = MemoryCache("test")

        cache.set(5, frozenset())
        value, found = cache.get(5)

        assert found is True
        assert value == frozenset()

    def test_set_overwrites(self) -> None:
        cache: MemoryCache[str, int] = MemoryCache("test")

        cache.set("k", 1)
        cache.set("k", 2)

        assert cache.get("k") == (2, True)
        assert len(cache) == 1

    def test_unbounded_by_default(self) -> None:
        cache: MemoryCache[int, int] = MemoryCache("test")

        for i in range(5_000):
            cache.set(i, i)

        assert len(cache) == 5_000
        assert cache.get(0) == (0, True)

    def test_lru_eviction(self) -> None:
        cache: MemoryCache[int, int] = MemoryCache("test", max_size=2)

        cache.set(1, 1)
        cache.set(2, 2)
        cache.get(1)  # 2 is now least recently used
        cache.set(3, 3)

        assert cache.get(2) == (None, False)
        assert cache.get(1) == (1, True)
        assert cache.get(3) == (3, True)
        assert len(cache) == 2

    def test_invalid_max_size(self) -> None:
        with pytest.raises(ValueError, match="max_size must be positive"):
            MemoryCache("test", max_size=0)

    def test_concurrent_writers_and_readers(self) -> None:
        cache: MemoryCache[int, int] = MemoryCache("test")

        def work(i: int) -> None:
            cache.set(i % 50, i % 50)
            value, found = cache.get(i % 50)
            assert found
            assert value == i % 50

        with ThreadPoolExecutor(max_workers=16) as pool:
            list(pool.map(work, range(2_000)))

        assert len(cache) == 50

    def test_stats_exact_under_concurrent_reads(self) -> None:
        cache: MemoryCache[int, int] = MemoryCache("test")
        cache.set(0, 0)

        def work(i: int) -> None:
            cache.get(i % 2)

        with ThreadPoolExecutor(max_workers=16) as pool:
            list(pool.map(work, range(20_000)))

        assert cache.stats.hits == 10_000
        assert cache.stats.misses == 10_000


class TestReadWriteLock:
    """Tests for ReadWriteLock."""

    def test_readers_share(self) -> None:
        lock = ReadWriteLock()
        inside = threading.Barrier(3, timeout=2)

        def reader() -> None:
            with lock.read():
                inside.wait()

        threads = [threading.Thread(target=reader) for _ in range(3)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        assert not inside.broken

    def test_writer_excludes_readers(self) -> None:
        lock = ReadWriteLock()
        events: list[str] = []
        writer_in = threading.Event()

        def writer() -> None:
            with lock.write():
                writer_in.set()
                time.sleep(0.05)
                events.append("write-done")

        def reader() -> None:
            writer_in.wait(timeout=2)
            with lock.read():
                events.append("read")

        w = threading.Thread(target=writer)
        r = threading.Thread(target=reader)
        w.start()
        r.start()
        w.join(timeout=5)
        r.join(timeout=5)

        assert events == ["write-done", "read"]
