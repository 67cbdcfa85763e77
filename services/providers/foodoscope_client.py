from __future__ import annotations
from typing import Any, Dict, List, Optional, Set
import time

import requests

from config import settings
from models.flavor import FlavorRecord, RecipeDetails, RecipeSummary
from services.providers.exceptions import ProviderError
from utils.logger import setup_logger

logger = setup_logger(__name__)

PROVIDER_NAME = "foodoscope"

RECIPE_SEARCH_PATH = "/recipe2-api/recipe-bytitle/recipeByTitle"
RECIPE_DETAILS_PATH = "/recipe2-api/search-recipe/{recipe_id}"
FLAVOR_LOOKUP_PATH = "/flavordb/molecules_data/by-commonName"


def parse_tag_list(value: Any) -> Set[str]:
    """Flavor data comes back as "sweet@sour@fruity" strings, or occasionally as lists."""
    if not value:
        return set()
    if isinstance(value, str):
        parts = value.split("@")
    elif isinstance(value, (list, tuple, set)):
        parts = [str(v) for v in value]
    else:
        return set()
    return {p.strip().lower() for p in parts if p and p.strip()}


def _truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1")
    return bool(value)


class FoodoscopeClient:
    """Recipe search, recipe details and flavor lookups against one HTTP API.

    Implements the search, flavor and recipe detail provider protocols. Every
    failure surfaces as ProviderError; turning that into degraded data is the
    caller's job.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.FOODOSCOPE_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.PROVIDER_TIMEOUT_SECONDS
        self.session = session or requests.Session()
        key = api_key if api_key is not None else settings.FOODOSCOPE_API_KEY
        self.session.headers.update({"Content-Type": "application/json"})
        if key:
            self.session.headers.update({"Authorization": f"Bearer {key}"})
        else:
            logger.warning("FOODOSCOPE_API_KEY not set, provider calls will likely be rejected")

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        start_time = time.time()
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise ProviderError(PROVIDER_NAME, f"request to {path} failed: {e}") from e

        duration_ms = round((time.time() - start_time) * 1000, 2)
        if response.status_code == 404:
            logger.debug("Provider returned 404", extra={"path": path, "duration_ms": duration_ms})
            return {}
        if response.status_code >= 400:
            raise ProviderError(
                PROVIDER_NAME,
                f"{path} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ProviderError(PROVIDER_NAME, f"{path} returned invalid JSON") from e

        logger.debug(
            "Provider call completed",
            extra={"path": path, "status_code": response.status_code, "duration_ms": duration_ms}
        )
        return payload if isinstance(payload, dict) else {}

    def search(self, query: str) -> List[RecipeSummary]:
        payload = self._get(RECIPE_SEARCH_PATH, params={"title": query})
        if not payload.get("success"):
            return []

        results: List[RecipeSummary] = []
        for row in payload.get("data") or []:
            recipe_id = row.get("Recipe_id") or row.get("_id")
            title = row.get("Recipe_title")
            if recipe_id is None or not title:
                continue
            results.append(RecipeSummary(id=str(recipe_id), title=title))
        return results

    def get_details(self, recipe_id: str) -> Optional[RecipeDetails]:
        payload = self._get(RECIPE_DETAILS_PATH.format(recipe_id=recipe_id))
        if not payload:
            return None

        recipe = payload.get("recipe") or {}
        ingredients: List[str] = []
        for row in payload.get("ingredients") or []:
            if isinstance(row, str):
                text = row
            else:
                text = row.get("ingredient") or row.get("ingredient_Phrase") or ""
            if text.strip():
                ingredients.append(text.strip())

        return RecipeDetails(
            id=str(recipe.get("Recipe_id", recipe_id)),
            title=recipe.get("Recipe_title", ""),
            ingredients=ingredients,
        )

    def lookup(self, canonical_name: str) -> Optional[FlavorRecord]:
        payload = self._get(FLAVOR_LOOKUP_PATH, params={"common_name": canonical_name})
        content = payload.get("content") or []
        if not content:
            return None

        first = content[0]
        return FlavorRecord(
            canonical_name=canonical_name,
            found_name=first.get("common_name"),
            flavor_profile=parse_tag_list(first.get("flavor_profile")),
            functional_groups=parse_tag_list(first.get("functional_groups")),
            bitter=_truthy(first.get("bitter")),
            super_sweet=_truthy(first.get("super_sweet")),
        )

    def close(self):
        self.session.close()
