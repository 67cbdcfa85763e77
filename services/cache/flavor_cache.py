from __future__ import annotations
from typing import Callable, Optional
import threading
import time

from models.flavor import FlavorRecord
from services.cache.flavor_store import FlavorCacheStore
from services.cache.ttl_cache import TTLCache
from utils.logger import setup_logger

logger = setup_logger(__name__)


class FlavorCache(TTLCache[FlavorRecord]):
    """Long-lived flavor lookups, persisted to a durable store.

    Writes only set the dirty flag; ``flush`` writes the full cache and is meant to
    be driven by a periodic task rather than by individual lookups.
    """

    def __init__(
        self,
        ttl_seconds: float,
        store: Optional[FlavorCacheStore] = None,
        clock: Callable[[], float] = time.time,
    ):
        super().__init__(
            name="flavor",
            ttl_seconds=ttl_seconds,
            cacheable=lambda record: not record.error,
            clock=clock,
        )
        self.store = store
        self._flush_lock = threading.Lock()

    def load(self) -> int:
        if self.store is None:
            return 0

        try:
            entries = self.store.load_all()
        except Exception as e:
            # a broken store means a cold cache, not a failed startup
            logger.error(
                "Failed to load flavor cache",
                extra={"error": str(e)},
                exc_info=True
            )
            return 0

        loaded = 0
        for name, (record, fetched_at) in entries.items():
            if self._is_fresh(fetched_at):
                self.put(name, record, stored_at=fetched_at)
                loaded += 1

        self.dirty = False
        logger.info(
            "Flavor cache loaded from store",
            extra={"loaded": loaded, "expired_skipped": len(entries) - loaded}
        )
        return loaded

    def flush(self, force: bool = False) -> int:
        if self.store is None:
            return 0

        with self._flush_lock:
            if not self.dirty and not force:
                return 0

            # cleared before the snapshot so writes racing the save mark it dirty again
            self.dirty = False
            entries = self.snapshot()
            try:
                return self.store.save_all(entries)
            except Exception as e:
                self.dirty = True
                logger.error(
                    "Flavor cache save failed",
                    extra={"error": str(e), "entries": len(entries)},
                    exc_info=True
                )
                return 0
