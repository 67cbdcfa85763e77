from __future__ import annotations
from typing import List, Optional, Protocol

from models.flavor import FlavorRecord, RecipeDetails, RecipeSummary


class SearchProvider(Protocol):
    def search(self, query: str) -> List[RecipeSummary]:
        ...


class FlavorProvider(Protocol):
    def lookup(self, canonical_name: str) -> Optional[FlavorRecord]:
        """Return the record, or None when the provider knows nothing about the name."""
        ...


class RecipeDetailProvider(Protocol):
    def get_details(self, recipe_id: str) -> Optional[RecipeDetails]:
        ...
