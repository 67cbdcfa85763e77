from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError, wait
from typing import Callable, Dict, Iterable, List, Optional
import threading
import time

from config import settings
from models.dish import IngredientReference
from models.flavor import FlavorRecord, RecipeDetails, RecipeSummary, SearchPage, SearchResultSet
from services.cache.flavor_cache import FlavorCache
from services.cache.ttl_cache import TTLCache
from services.canonicalization import canonicalize, clean_term
from services.providers.exceptions import ProviderError
from services.providers.protocol import FlavorProvider, RecipeDetailProvider, SearchProvider
from utils.circuit_breaker import CircuitBreaker, CircuitBreakerOpenError
from utils.fallback import with_fallback
from utils.logger import setup_logger

logger = setup_logger(__name__)

PROVIDER_FAILURES = (ProviderError, CircuitBreakerOpenError)


class ExternalDataService:
    """Cached, failure-tolerant access to the recipe and flavor providers.

    Lookups never raise on provider trouble: failed searches come back as an empty
    result set flagged ``error`` and failed flavor lookups as ``FlavorRecord.degraded``.
    Neither is cached, so the next request retries the provider.
    """

    def __init__(
        self,
        search_provider: SearchProvider,
        flavor_provider: FlavorProvider,
        detail_provider: Optional[RecipeDetailProvider] = None,
        flavor_cache: Optional[FlavorCache] = None,
        search_cache: Optional[TTLCache[SearchResultSet]] = None,
        breaker: Optional[CircuitBreaker] = None,
        max_fanout: Optional[int] = None,
        max_workers: Optional[int] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.search_provider = search_provider
        self.flavor_provider = flavor_provider
        self.detail_provider = detail_provider
        self.flavor_cache = flavor_cache if flavor_cache is not None else FlavorCache(
            ttl_seconds=settings.FLAVOR_CACHE_TTL_SECONDS, clock=clock
        )
        self.search_cache = search_cache if search_cache is not None else TTLCache(
            name="search",
            ttl_seconds=settings.SEARCH_CACHE_TTL_SECONDS,
            cacheable=lambda result: not result.error,
            clock=clock,
        )
        self.breaker = breaker if breaker is not None else CircuitBreaker(
            name="foodoscope",
            failure_threshold=5,
            recovery_timeout_seconds=60,
            expected_exception=ProviderError,
        )
        self.max_fanout = max_fanout if max_fanout is not None else settings.MAX_INGREDIENT_FANOUT
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers or settings.PROVIDER_WORKERS,
            thread_name_prefix="provider",
        )
        self.degraded_calls = 0
        self._degraded_lock = threading.Lock()

    def _record_degraded(self, error: Exception):
        with self._degraded_lock:
            self.degraded_calls += 1

    # search

    def _degraded_search(self, query: str) -> SearchResultSet:
        return SearchResultSet(query=query, error=True)

    def _fetch_search(self, query: str) -> SearchResultSet:
        @with_fallback(self._degraded_search, exception_types=PROVIDER_FAILURES, on_fallback=self._record_degraded)
        def fetch(q: str) -> SearchResultSet:
            results = self.breaker.call(self.search_provider.search, q)
            return SearchResultSet(query=q, results=list(results or []))

        return fetch(query)

    def search_recipes(self, query: str) -> SearchResultSet:
        key = clean_term(query)
        if not key:
            return SearchResultSet(query="")
        return self.search_cache.get_or_fetch(key, self._fetch_search)

    def search_recipes_page(self, query: str, page: int = 1, limit: int = 20) -> SearchPage:
        if page < 1 or limit < 1:
            raise ValueError("page and limit must be positive")

        result = self.search_recipes(query)
        start = (page - 1) * limit
        sliced = result.results[start:start + limit]
        return SearchPage(
            results=sliced,
            page=page,
            limit=limit,
            total=len(result.results),
            has_more=start + limit < len(result.results),
            error=result.error,
        )

    # recipe details

    def _no_details(self, recipe_id: str) -> Optional[RecipeDetails]:
        return None

    def get_recipe_details(self, recipe_id: str) -> Optional[RecipeDetails]:
        if self.detail_provider is None or not recipe_id:
            return None

        @with_fallback(self._no_details, exception_types=PROVIDER_FAILURES, on_fallback=self._record_degraded)
        def fetch(rid: str) -> Optional[RecipeDetails]:
            return self.breaker.call(self.detail_provider.get_details, rid)

        return fetch(str(recipe_id))

    # flavor

    def _fetch_flavor(self, canonical_name: str) -> FlavorRecord:
        @with_fallback(FlavorRecord.degraded, exception_types=PROVIDER_FAILURES, on_fallback=self._record_degraded)
        def fetch(name: str) -> FlavorRecord:
            record = self.breaker.call(self.flavor_provider.lookup, name)
            if record is None:
                logger.info("No flavor data found", extra={"canonical_name": name})
                return FlavorRecord.missing(name)
            if record.canonical_name != name:
                record = record.model_copy(update={"canonical_name": name})
            return record

        return fetch(canonical_name)

    def get_ingredient_flavor(self, ingredient: str) -> Optional[FlavorRecord]:
        ref = IngredientReference.from_raw(ingredient)
        name = canonicalize(ref.text)
        if not name:
            return None
        return self.flavor_cache.get_or_fetch(name, self._fetch_flavor)

    def get_flavor_records(
        self,
        ingredients: Iterable[str],
        timeout: Optional[float] = None,
    ) -> Dict[str, FlavorRecord]:
        """Fetch flavor records for up to ``max_fanout`` distinct ingredients concurrently.

        Keyed by canonical name. Lookups still pending when ``timeout`` runs out come
        back degraded so scoring can proceed.
        """
        names: List[str] = []
        for ingredient in ingredients:
            name = canonicalize(IngredientReference.from_raw(ingredient).text)
            if name and name not in names:
                names.append(name)
        names = names[:self.max_fanout]
        if not names:
            return {}

        futures = {
            name: self._executor.submit(self.flavor_cache.get_or_fetch, name, self._fetch_flavor)
            for name in names
        }
        wait(list(futures.values()), timeout=timeout)

        records: Dict[str, FlavorRecord] = {}
        timed_out = 0
        for name, future in futures.items():
            try:
                records[name] = future.result(timeout=0)
            except FutureTimeoutError as e:
                future.cancel()
                timed_out += 1
                self._record_degraded(e)
                records[name] = FlavorRecord.degraded(name)

        degraded = sum(1 for r in records.values() if r.error)
        logger.info(
            "Flavor records resolved",
            extra={
                "requested": len(names),
                "degraded": degraded,
                "timed_out": timed_out,
            }
        )
        return records

    def stats(self) -> dict:
        return {
            "search_cache": self.search_cache.stats(),
            "flavor_cache": self.flavor_cache.stats(),
            "circuit_breaker": self.breaker.get_state(),
            "degraded_calls": self.degraded_calls,
        }

    def close(self):
        self._executor.shutdown(wait=False, cancel_futures=True)
        close = getattr(self.search_provider, "close", None)
        if callable(close):
            close()
