import asyncio
from contextlib import asynccontextmanager
from typing import Iterable, Optional

from services.cache.flavor_cache import FlavorCache
from services.cache.ttl_cache import TTLCache
from utils.logger import setup_logger

logger = setup_logger(__name__)


class ScheduledCacheFlush:
    """Periodic flavor cache flush; every tick also drops expired entries from the flavor cache and ``purge`` caches."""

    def __init__(self, cache: FlavorCache, interval_seconds: float = 300, purge: Iterable[TTLCache] = ()):
        self.cache = cache
        self.purge_caches = [cache] + [c for c in purge if c is not cache]
        self.interval_seconds = interval_seconds
        self.running = False
        self.task: Optional[asyncio.Task] = None

    async def run_scheduled_flush(self):
        self.running = True

        logger.info(
            "Scheduled flavor cache flush started",
            extra={"interval_seconds": self.interval_seconds}
        )

        while self.running:
            try:
                await asyncio.sleep(self.interval_seconds)

                if not self.running:
                    break

                # the save runs on a worker thread so request handling is never blocked
                await asyncio.to_thread(self.purge_expired)
                saved = await asyncio.to_thread(self.cache.flush)
                if saved:
                    logger.info(
                        "Scheduled flavor cache flush completed",
                        extra={"entries": saved}
                    )

            except asyncio.CancelledError:
                logger.info("Scheduled flavor cache flush cancelled")
                break
            except Exception as e:
                logger.error(
                    "Unexpected error in scheduled flavor cache flush",
                    extra={"error": str(e)},
                    exc_info=True
                )

    def purge_expired(self) -> int:
        purged = sum(c.purge_expired() for c in self.purge_caches)
        if purged:
            logger.info("Expired cache entries purged", extra={"purged": purged})
        return purged

    def start(self):
        if self.task is None or self.task.done():
            self.task = asyncio.create_task(self.run_scheduled_flush())
            logger.info("Scheduled flavor cache flush task created")

    async def stop(self, final_flush: bool = True):
        self.running = False

        if self.task and not self.task.done():
            self.task.cancel()
            try:
                await self.task
            except asyncio.CancelledError:
                pass

        if final_flush:
            await asyncio.to_thread(self.cache.flush)

        logger.info("Scheduled flavor cache flush stopped")


@asynccontextmanager
async def scheduled_flush(cache: FlavorCache, interval_seconds: float, purge: Iterable[TTLCache] = ()):
    flusher = ScheduledCacheFlush(cache, interval_seconds=interval_seconds, purge=purge)
    flusher.start()
    try:
        yield flusher
    finally:
        await flusher.stop()
