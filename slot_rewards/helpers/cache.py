"""In-memory key/value caches for immutable chain data.

Entries are keyed by slot number or transaction hash. The data behind those
keys is finalized chain history, so a stored value stays valid for the life of
the process and nothing is ever invalidated. Passing ``max_size`` turns on
least-recently-used eviction; without it the cache grows with every distinct
key it has seen.
"""

from collections import OrderedDict
from collections.abc import Hashable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
import threading

from slot_rewards.helpers.logging import get_logger


logger = get_logger(__name__)


class ReadWriteLock:
    """Many concurrent readers or a single exclusive writer.

    Writers are preferred: once a writer is waiting, new readers queue behind
    it so a steady stream of reads cannot starve a write.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            while self._writer or self._readers:
                self._cond.wait()
            self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


@dataclass
class CacheStats:
    """Hit and miss counters for a cache.

    Lookups on an unbounded cache run concurrently under a shared read lock,
    so the counters carry their own mutex.
    """

    hits: int = 0
    misses: int = 0
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def record(self, *, hit: bool) -> None:
        with self._lock:
            if hit:
                self.hits += 1
            else:
                self.misses += 1


class MemoryCache[K: Hashable, V]:
    """Thread-safe key/value store with optional LRU bound.

    The lock is held only for the dictionary operation itself, never across
    network I/O; callers fetch on a miss and then ``set`` the result.

    Example:
        ```python
        receipts: MemoryCache[str, Receipt] = MemoryCache("receipts")

        receipt, found = receipts.get(tx_hash)
        if not found:
            receipt = await fetch_receipt(tx_hash)
            receipts.set(tx_hash, receipt)
        ```
    """

    def __init__(self, name: str, max_size: int | None = None) -> None:
        """Initialize the cache.

        Args:
            name: Label used in log messages
            max_size: Maximum number of entries, or None for no bound

        Raises:
            ValueError: If max_size is not positive
        """
        if max_size is not None and max_size <= 0:
            msg = f"max_size must be positive, got {max_size}"
            raise ValueError(msg)

        self.name = name
        self.max_size = max_size
        self.stats = CacheStats()
        self._data: OrderedDict[K, V] = OrderedDict()
        self._lock = ReadWriteLock()

    def get(self, key: K) -> tuple[V | None, bool]:
        """Look up ``key``.

        Returns:
            ``(value, True)`` on a hit, ``(None, False)`` on a miss
        """
        if self.max_size is None:
            with self._lock.read():
                found = key in self._data
                value = self._data.get(key)
        else:
            # Recency bookkeeping mutates the ordering
            with self._lock.write():
                found = key in self._data
                value = self._data.get(key)
                if found:
                    self._data.move_to_end(key)

        self.stats.record(hit=found)
        if not found:
            logger.debug("%s cache miss for %s", self.name, key)
        return value, found

    def set(self, key: K, value: V) -> None:
        """Store ``value`` under ``key``, overwriting any previous value."""
        with self._lock.write():
            self._data[key] = value
            if self.max_size is not None:
                self._data.move_to_end(key)
                while len(self._data) > self.max_size:
                    evicted, _ = self._data.popitem(last=False)
                    logger.debug("%s cache evicted %s", self.name, evicted)

    def __contains__(self, key: object) -> bool:
        with self._lock.read():
            return key in self._data

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._data)


__all__ = ["CacheStats", "MemoryCache", "ReadWriteLock"]
