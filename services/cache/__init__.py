from services.cache.ttl_cache import TTLCache
from services.cache.flavor_cache import FlavorCache
from services.cache.flavor_store import FlavorCacheStore
from services.cache.scheduled_flush import ScheduledCacheFlush, scheduled_flush

__all__ = [
    "TTLCache",
    "FlavorCache",
    "FlavorCacheStore",
    "ScheduledCacheFlush",
    "scheduled_flush",
]
