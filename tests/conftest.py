from typing import Dict, List, Optional

import pytest

from models.flavor import FlavorRecord, RecipeDetails, RecipeSummary
from models.profile import SpiceTolerance, UserSensitivityProfile
from services.analysis_service import BioMatchEngine
from services.cache.flavor_cache import FlavorCache
from services.cache.ttl_cache import TTLCache
from services.external_data_service import ExternalDataService
from services.providers.exceptions import ProviderError
from services.suggestion_index import SuggestionIndex


class FakeClock:
    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class FakeProvider:
    """In-memory search, flavor and recipe detail provider with call counters."""

    def __init__(
        self,
        flavors: Optional[Dict[str, FlavorRecord]] = None,
        recipes: Optional[Dict[str, RecipeDetails]] = None,
    ):
        self.flavors = flavors or {}
        self.recipes = recipes or {}
        self.fail = False
        self.search_calls: List[str] = []
        self.lookup_calls: List[str] = []
        self.detail_calls: List[str] = []

    def search(self, query: str) -> List[RecipeSummary]:
        self.search_calls.append(query)
        if self.fail:
            raise ProviderError("fake", "search unavailable")
        words = query.lower().split()
        return [
            RecipeSummary(id=rid, title=r.title)
            for rid, r in self.recipes.items()
            if all(w in r.title.lower() for w in words)
        ]

    def lookup(self, canonical_name: str) -> Optional[FlavorRecord]:
        self.lookup_calls.append(canonical_name)
        if self.fail:
            raise ProviderError("fake", "flavor lookup unavailable")
        return self.flavors.get(canonical_name)

    def get_details(self, recipe_id: str) -> Optional[RecipeDetails]:
        self.detail_calls.append(recipe_id)
        if self.fail:
            raise ProviderError("fake", "details unavailable")
        return self.recipes.get(recipe_id)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def provider():
    return FakeProvider(
        flavors={
            "sugar": FlavorRecord(canonical_name="sugar", found_name="Sugar", flavor_profile={"sweet"}, super_sweet=True),
            "chili": FlavorRecord(canonical_name="chili", found_name="Chili", flavor_profile={"spicy", "pungent"}),
            "wine": FlavorRecord(canonical_name="wine", found_name="Wine", functional_groups={"alcohol", "ester"}),
            "mushroom": FlavorRecord(canonical_name="mushroom", found_name="Mushroom", flavor_profile={"savory", "earthy"}),
        },
        recipes={
            "1": RecipeDetails(id="1", title="Thai Peanut Noodles", ingredients=["rice noodles", "lime", "cilantro"]),
            "2": RecipeDetails(id="2", title="Thai Basil Noodles", ingredients=["rice noodles", "basil", "soy sauce"]),
            "3": RecipeDetails(id="3", title="Thai Curry Noodles", ingredients=["rice noodles", "peanuts", "curry paste"]),
            "4": RecipeDetails(id="4", title="Thai Glass Noodles", ingredients=["glass noodles", "lime"]),
        },
    )


@pytest.fixture
def data_service(provider, clock):
    service = ExternalDataService(
        search_provider=provider,
        flavor_provider=provider,
        detail_provider=provider,
        flavor_cache=FlavorCache(ttl_seconds=7 * 24 * 3600, clock=clock),
        search_cache=TTLCache(
            name="search",
            ttl_seconds=600,
            cacheable=lambda result: not result.error,
            clock=clock,
        ),
        max_workers=4,
    )
    yield service
    service.close()


@pytest.fixture
def suggestion_index(clock):
    return SuggestionIndex(max_entries=100, clock=clock)


@pytest.fixture
def neutral_profile():
    return UserSensitivityProfile()


@pytest.fixture
def low_spice_profile():
    return UserSensitivityProfile(spice_tolerance=SpiceTolerance.LOW)


@pytest.fixture
def engine(data_service, suggestion_index):
    return BioMatchEngine(data_service=data_service, suggestion_index=suggestion_index)
