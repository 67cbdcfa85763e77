import threading

import pytest

from services.cache.flavor_cache import FlavorCache
from services.cache.ttl_cache import TTLCache
from services.external_data_service import ExternalDataService
from utils.circuit_breaker import CircuitState


class TestConstruction:
    def test_injected_empty_caches_are_kept(self, provider, clock):
        flavor_cache = FlavorCache(ttl_seconds=60, clock=clock)
        search_cache = TTLCache(name="search", ttl_seconds=30, clock=clock)

        service = ExternalDataService(
            search_provider=provider,
            flavor_provider=provider,
            flavor_cache=flavor_cache,
            search_cache=search_cache,
            max_workers=1,
        )
        try:
            assert service.flavor_cache is flavor_cache
            assert service.search_cache is search_cache
        finally:
            service.close()


class TestFlavorLookups:
    def test_repeat_lookup_within_ttl_calls_provider_once(self, data_service, provider, clock):
        first = data_service.get_ingredient_flavor("Sugar")
        second = data_service.get_ingredient_flavor("white sugar")

        assert first.flavor_profile == {"sweet"}
        assert second == first
        assert provider.lookup_calls == ["sugar"]

    def test_lookup_after_ttl_calls_provider_again(self, data_service, provider, clock):
        data_service.get_ingredient_flavor("sugar")
        clock.advance(7 * 24 * 3600 + 1)
        data_service.get_ingredient_flavor("sugar")

        assert provider.lookup_calls == ["sugar", "sugar"]

    def test_prep_hint_is_stripped_before_lookup(self, data_service, provider):
        record = data_service.get_ingredient_flavor("Chili, finely chopped")
        assert record.canonical_name == "chili"
        assert provider.lookup_calls == ["chili"]

    def test_not_found_is_cached(self, data_service, provider):
        first = data_service.get_ingredient_flavor("dragon fruit")
        second = data_service.get_ingredient_flavor("dragon fruit")

        assert first.not_found and not first.error
        assert second.not_found
        assert provider.lookup_calls == ["dragon fruit"]

    def test_provider_failure_degrades_and_is_not_cached(self, data_service, provider):
        provider.fail = True
        degraded = data_service.get_ingredient_flavor("sugar")
        assert degraded.error
        assert not degraded.is_usable

        provider.fail = False
        recovered = data_service.get_ingredient_flavor("sugar")
        assert not recovered.error
        assert provider.lookup_calls == ["sugar", "sugar"]

    def test_empty_ingredient_returns_none(self, data_service, provider):
        assert data_service.get_ingredient_flavor("  ") is None
        assert provider.lookup_calls == []


class TestFlavorFanOut:
    def test_records_keyed_by_canonical_name_and_deduplicated(self, data_service, provider):
        records = data_service.get_flavor_records(["sugar", "white sugar", "Chili, sliced", "red wine"])

        assert set(records) == {"sugar", "chili", "wine"}
        assert sorted(provider.lookup_calls) == ["chili", "sugar", "wine"]

    def test_fanout_is_capped(self, data_service, provider):
        data_service.max_fanout = 2
        records = data_service.get_flavor_records(["sugar", "chili", "wine", "mushroom"])

        assert set(records) == {"sugar", "chili"}
        assert len(provider.lookup_calls) == 2

    def test_failures_come_back_degraded(self, data_service, provider):
        provider.fail = True
        records = data_service.get_flavor_records(["sugar", "chili"])

        assert all(r.error for r in records.values())

    def test_no_ingredients(self, data_service):
        assert data_service.get_flavor_records([]) == {}


class TestCircuitBreaker:
    def test_open_circuit_short_circuits_provider(self, data_service, provider):
        provider.fail = True
        names = ["sugar", "chili", "wine", "mushroom", "salt", "pepper"]
        records = [data_service.get_ingredient_flavor(n) for n in names]

        assert all(r.error for r in records)
        assert data_service.breaker.state == CircuitState.OPEN
        assert len(provider.lookup_calls) == data_service.breaker.failure_threshold
        assert data_service.stats()["degraded_calls"] == 6

    def test_slow_lookup_times_out_as_degraded(self, data_service, provider, monkeypatch):
        release = threading.Event()
        lookup = provider.lookup

        def slow_lookup(name):
            if name == "chili":
                release.wait(5)
            return lookup(name)

        monkeypatch.setattr(provider, "lookup", slow_lookup)
        try:
            records = data_service.get_flavor_records(["sugar", "chili"], timeout=0.2)
        finally:
            release.set()

        assert not records["sugar"].error
        assert records["chili"].error
        assert data_service.stats()["degraded_calls"] == 1


class TestSearch:
    def test_search_is_cached_by_normalized_query(self, data_service, provider):
        first = data_service.search_recipes("Thai Noodles")
        second = data_service.search_recipes("  thai   noodles ")

        assert len(first.results) == 4
        assert second.results == first.results
        assert len(provider.search_calls) == 1

    def test_search_cache_expires(self, data_service, provider, clock):
        data_service.search_recipes("thai noodles")
        clock.advance(601)
        data_service.search_recipes("thai noodles")

        assert len(provider.search_calls) == 2

    def test_search_failure_is_flagged_and_not_cached(self, data_service, provider):
        provider.fail = True
        failed = data_service.search_recipes("thai noodles")
        assert failed.error
        assert failed.results == []

        provider.fail = False
        assert not data_service.search_recipes("thai noodles").error
        assert len(provider.search_calls) == 2

    def test_pagination_slices_cached_results(self, data_service, provider):
        page_one = data_service.search_recipes_page("thai noodles", page=1, limit=3)
        page_two = data_service.search_recipes_page("thai noodles", page=2, limit=3)

        assert page_one.total == 4
        assert len(page_one.results) == 3
        assert page_one.has_more
        assert len(page_two.results) == 1
        assert not page_two.has_more
        assert len(provider.search_calls) == 1

    def test_pagination_rejects_non_positive_values(self, data_service):
        with pytest.raises(ValueError):
            data_service.search_recipes_page("thai", page=0, limit=10)

    def test_recipe_details(self, data_service, provider):
        details = data_service.get_recipe_details("2")
        assert details.title == "Thai Basil Noodles"
        assert data_service.get_recipe_details("missing") is None

        provider.fail = True
        assert data_service.get_recipe_details("2") is None
