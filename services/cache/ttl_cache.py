from __future__ import annotations
from typing import Callable, Dict, Generic, Optional, Tuple, TypeVar
import threading
import time

from utils.logger import setup_logger

logger = setup_logger(__name__)

V = TypeVar("V")


class _KeyLock:
    __slots__ = ("lock", "waiters")

    def __init__(self):
        self.lock = threading.Lock()
        self.waiters = 0


class TTLCache(Generic[V]):
    """Memoizing wrapper around a slow lookup.

    Values older than ``ttl_seconds`` are refetched. ``cacheable`` decides whether a
    fetched value is stored at all; degraded provider results are returned but never
    kept. Fetches for the same key are serialized so concurrent misses issue a single
    provider call, while different keys fetch in parallel.
    """

    def __init__(
        self,
        name: str,
        ttl_seconds: float,
        cacheable: Optional[Callable[[V], bool]] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.name = name
        self.ttl_seconds = ttl_seconds
        self._cacheable = cacheable or (lambda value: True)
        self._clock = clock
        self._entries: Dict[str, Tuple[V, float]] = {}
        self._lock = threading.RLock()
        self._key_locks: Dict[str, _KeyLock] = {}
        self.dirty = False
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.peek(key) is not None

    def _is_fresh(self, stored_at: float) -> bool:
        return self._clock() - stored_at < self.ttl_seconds

    def peek(self, key: str) -> Optional[V]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, stored_at = entry
            if not self._is_fresh(stored_at):
                del self._entries[key]
                return None
            return value

    def put(self, key: str, value: V, stored_at: Optional[float] = None) -> None:
        with self._lock:
            self._entries[key] = (value, self._clock() if stored_at is None else stored_at)
            self.dirty = True

    def _acquire_key(self, key: str) -> _KeyLock:
        with self._lock:
            key_lock = self._key_locks.get(key)
            if key_lock is None:
                key_lock = _KeyLock()
                self._key_locks[key] = key_lock
            key_lock.waiters += 1
        key_lock.lock.acquire()
        return key_lock

    def _release_key(self, key: str, key_lock: _KeyLock) -> None:
        key_lock.lock.release()
        with self._lock:
            key_lock.waiters -= 1
            if key_lock.waiters == 0 and self._key_locks.get(key) is key_lock:
                del self._key_locks[key]

    def _count(self, hit: bool) -> None:
        with self._lock:
            if hit:
                self.hits += 1
            else:
                self.misses += 1

    def get_or_fetch(self, key: str, fetch: Callable[[str], V]) -> V:
        cached = self.peek(key)
        if cached is not None:
            self._count(hit=True)
            logger.debug("Cache hit", extra={"cache": self.name, "key": key})
            return cached

        key_lock = self._acquire_key(key)
        try:
            # another thread may have fetched while we waited
            cached = self.peek(key)
            if cached is not None:
                self._count(hit=True)
                return cached

            self._count(hit=False)
            value = fetch(key)

            if self._cacheable(value):
                self.put(key, value)
                logger.debug("Cache miss stored", extra={"cache": self.name, "key": key})
            else:
                logger.info(
                    "Cache miss not stored",
                    extra={"cache": self.name, "key": key}
                )
            return value
        finally:
            self._release_key(key, key_lock)

    def snapshot(self) -> Dict[str, Tuple[V, float]]:
        with self._lock:
            return dict(self._entries)

    def purge_expired(self) -> int:
        with self._lock:
            stale = [k for k, (_, stored_at) in self._entries.items() if not self._is_fresh(stored_at)]
            for k in stale:
                del self._entries[k]
        if stale:
            logger.debug("Expired entries purged", extra={"cache": self.name, "purged": len(stale)})
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.dirty = True

    def stats(self) -> dict:
        return {
            "name": self.name,
            "entries": len(self),
            "hits": self.hits,
            "misses": self.misses,
            "pending_keys": len(self._key_locks),
            "ttl_seconds": self.ttl_seconds,
            "dirty": self.dirty,
        }
