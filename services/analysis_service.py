from __future__ import annotations
from typing import Dict, List, Optional
import re

from config import settings
from config.database import engine as default_db_engine
from config.rules import DEFAULT_WEIGHTS, ScoringWeights, load_scoring_weights
from data.seed import seed
from models.analysis import AnalysisRequest, DishAnalysis, ScoredMenuDish
from models.dish import BCSResult, Dish, DishCandidate, IngredientReference, Severity, TasteResult
from models.flavor import FlavorRecord, RecipeSummary, SearchPage, SearchResultSet
from models.profile import UserSensitivityProfile
from models.suggestion import SuggestionEntry
from services.bcs_service import BioCompatibilityService
from services.cache.flavor_cache import FlavorCache
from services.cache.flavor_store import FlavorCacheStore
from services.canonicalization import canonical_user_terms, canonicalize
from services.external_data_service import ExternalDataService
from services.menu_extraction_service import DishCandidateExtractor
from services.providers.foodoscope_client import FoodoscopeClient
from services.suggestion_index import SuggestionIndex
from services.swap_service import SwapService
from services.taste_vector_service import TasteVectorService
from utils.logger import setup_logger
from utils.timing import StageTimer

logger = setup_logger(__name__)

UNKNOWN_DISH = "Unknown Dish"
ALTERNATIVE_BIO_THRESHOLD = 60
ALTERNATIVE_TASTE_THRESHOLD = 50
MIN_ALTERNATIVE_QUERY_LENGTH = 4

EXCELLENT_THRESHOLD = 80
MODERATE_THRESHOLD = 50


def menu_tags(score: int, blocked: bool, is_analyzed: bool) -> List[str]:
    if blocked:
        return ["Blocked"]
    if not is_analyzed:
        return []
    if score >= EXCELLENT_THRESHOLD:
        return ["Excellent Choice"]
    if score >= MODERATE_THRESHOLD:
        return ["Moderate"]
    return ["Avoid"]


def strip_terms(text: str, terms: List[str]) -> str:
    for term in terms:
        if term:
            text = re.sub(rf"\b{re.escape(term)}\b", "", text, flags=re.IGNORECASE)
    return re.sub(r"\s+", " ", text).strip()


def _require_profile(profile: Optional[UserSensitivityProfile]) -> UserSensitivityProfile:
    if profile is None:
        raise ValueError("a user sensitivity profile is required")
    return profile


class BioMatchEngine:
    """Entry point for dish analysis, menu scans, search and autocomplete.

    Owns the shared external data caches and the suggestion index; everything else
    is per-call.
    """

    def __init__(
        self,
        data_service: ExternalDataService,
        suggestion_index: Optional[SuggestionIndex] = None,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
        extractor: Optional[DishCandidateExtractor] = None,
        swap_service: Optional[SwapService] = None,
        max_alternatives: Optional[int] = None,
        lookup_timeout: Optional[float] = None,
    ):
        self.data_service = data_service
        self.suggestion_index = suggestion_index if suggestion_index is not None else SuggestionIndex()
        self.weights = weights
        self.extractor = extractor if extractor is not None else DishCandidateExtractor()
        self.bcs_service = BioCompatibilityService(weights)
        self.taste_service = TasteVectorService(weights)
        self.swap_service = swap_service if swap_service is not None else SwapService()
        self.max_alternatives = max_alternatives if max_alternatives is not None else settings.MAX_ALTERNATIVES
        self.lookup_timeout = lookup_timeout

    # exposed operations

    def extract_dish_candidates(self, raw_text: Optional[str]) -> List[DishCandidate]:
        return self.extractor.extract(raw_text)

    def flavor_records_for(self, dish: Dish) -> Dict[str, FlavorRecord]:
        if not dish.is_analyzed:
            return {}
        return self.data_service.get_flavor_records(dish.ingredients, timeout=self.lookup_timeout)

    def evaluate_bio_compatibility(
        self,
        dish: Dish,
        profile: UserSensitivityProfile,
        flavor_records: Optional[Dict[str, FlavorRecord]] = None,
    ) -> BCSResult:
        profile = _require_profile(profile)
        if flavor_records is None:
            flavor_records = self.flavor_records_for(dish)
        return self.bcs_service.evaluate(dish, profile, flavor_records)

    def score_taste_match(
        self,
        dish: Dish,
        profile: UserSensitivityProfile,
        flavor_records: Optional[Dict[str, FlavorRecord]] = None,
    ) -> TasteResult:
        profile = _require_profile(profile)
        if flavor_records is None:
            flavor_records = self.flavor_records_for(dish)
        return self.taste_service.score(dish, profile, flavor_records)

    def rank_suggestions(self, query_prefix: str, limit: Optional[int] = None) -> List[SuggestionEntry]:
        limit = min(limit or settings.SUGGESTION_LIMIT, settings.SUGGESTION_MAX_LIMIT)
        return self.suggestion_index.rank(query_prefix, limit)

    def bootstrap_suggestions(self, limit: int = 400) -> List[SuggestionEntry]:
        return self.suggestion_index.bootstrap(limit)

    # search

    def search(self, query: str) -> SearchResultSet:
        result = self.data_service.search_recipes(query)
        self.suggestion_index.observe(result.results, source="search")
        return result

    def search_page(self, query: str, page: int = 1, limit: int = 20) -> SearchPage:
        result = self.data_service.search_recipes_page(query, page=page, limit=limit)
        self.suggestion_index.observe(result.results, source="search")
        return result

    # full analysis

    def _resolve_dish(self, request: AnalysisRequest) -> Dish:
        dish = Dish(
            title=request.dish_name or UNKNOWN_DISH,
            ingredients=list(request.ingredients or []),
            recipe_id=request.recipe_id,
        )
        if not request.recipe_id:
            return dish

        details = self.data_service.get_recipe_details(request.recipe_id)
        if details is None:
            logger.warning(
                "Recipe details unavailable, analyzing with request data",
                extra={"recipe_id": request.recipe_id}
            )
            return dish

        return Dish(
            title=details.title or dish.title,
            ingredients=details.ingredients or dish.ingredients,
            recipe_id=request.recipe_id,
        )

    def analyze_dish(self, request: AnalysisRequest) -> DishAnalysis:
        profile = _require_profile(request.profile)
        timer = StageTimer("analyze_dish")

        with timer.stage("resolve_dish"):
            dish = self._resolve_dish(request)
        timer.dish = dish.title

        with timer.stage("flavor_lookup"):
            records = self.flavor_records_for(dish)

        with timer.stage("scoring"):
            bcs = self.bcs_service.evaluate(dish, profile, records)
            taste = self.taste_service.score(dish, profile, records)

        modifications = self.swap_service.suggest(bcs)

        if dish.title != UNKNOWN_DISH:
            self.suggestion_index.observe([{"title": dish.title}], source="analysis")

        alternatives: List[RecipeSummary] = []
        if bcs.block or bcs.bio_score < ALTERNATIVE_BIO_THRESHOLD or taste.taste_score < ALTERNATIVE_TASTE_THRESHOLD:
            with timer.stage("alternatives"):
                alternatives = self.find_alternatives(dish, bcs, profile)

        timer.log_summary()
        return DishAnalysis(
            dish=dish,
            bcs=bcs,
            taste=taste,
            modifications=modifications,
            alternatives=alternatives,
            degraded_lookups=sum(1 for r in records.values() if r.error),
        )

    def _is_safe_alternative(self, candidate: RecipeSummary, allergies: List[str]) -> bool:
        title = candidate.title.lower()
        if any(a in title for a in allergies):
            return False

        details = self.data_service.get_recipe_details(candidate.id)
        if details is None or not details.ingredients:
            return False

        for raw in details.ingredients:
            name = IngredientReference.from_raw(raw).text
            canonical = canonicalize(name)
            if any(a in name or canonical == a for a in allergies):
                return False
        return True

    def find_alternatives(
        self,
        dish: Dish,
        bcs: BCSResult,
        profile: UserSensitivityProfile,
    ) -> List[RecipeSummary]:
        query = dish.title if dish.title != UNKNOWN_DISH else ""
        if bcs.block:
            allergens = [e.matched_trigger for e in bcs.evidence if e.severity == Severity.CRITICAL]
            query = strip_terms(query, allergens)

        if len(query) < MIN_ALTERNATIVE_QUERY_LENGTH:
            return []

        result = self.search(query)
        allergies = canonical_user_terms(profile.allergies)

        alternatives: List[RecipeSummary] = []
        for candidate in result.results:
            if len(alternatives) >= self.max_alternatives:
                break
            if dish.recipe_id and str(candidate.id) == str(dish.recipe_id):
                continue
            if self._is_safe_alternative(candidate, allergies):
                alternatives.append(candidate)

        logger.info(
            "Alternatives searched",
            extra={"dish": dish.title, "query": query, "found": len(alternatives)}
        )
        return alternatives

    # menu scan

    def _score_candidate(self, candidate: DishCandidate, profile: UserSensitivityProfile) -> ScoredMenuDish:
        dish = Dish.from_candidate(candidate)
        records = self.flavor_records_for(dish)
        bcs = self.bcs_service.evaluate(dish, profile, records)
        taste = self.taste_service.score(dish, profile, records)

        if candidate.is_analyzed:
            score = int(round((bcs.bio_score + taste.taste_score) / 2))
            reasons = bcs.warnings or taste.notes
        else:
            score = int(self.weights.missing_data_score)
            reasons = ["Insufficient data"]

        return ScoredMenuDish(
            name=candidate.name,
            original_text=candidate.original_text,
            is_analyzed=candidate.is_analyzed,
            matched_ingredients=list(candidate.matched_ingredients),
            score=score,
            bio_score=bcs.bio_score,
            taste_score=taste.taste_score,
            reasons=list(reasons),
            tags=menu_tags(score, bcs.block, candidate.is_analyzed),
        )

    def scan_menu(self, raw_text: str, profile: UserSensitivityProfile) -> List[ScoredMenuDish]:
        profile = _require_profile(profile)
        timer = StageTimer("scan_menu")

        with timer.stage("extract"):
            candidates = self.extract_dish_candidates(raw_text)

        with timer.stage("scoring"):
            scored = [self._score_candidate(c, profile) for c in candidates]

        scored.sort(key=lambda d: d.score, reverse=True)
        self.suggestion_index.observe(
            [{"title": c.name} for c in candidates if c.is_analyzed],
            source="menu-scan",
        )

        timer.log_summary()
        return scored

    def close(self):
        self.data_service.close()


def build_biomatch_engine(db_engine=None, provider=None, seed_suggestions: bool = True) -> BioMatchEngine:
    """Wire the engine from settings: provider client, persistent flavor cache, rule weights."""
    provider = provider or FoodoscopeClient()
    store = FlavorCacheStore(db_engine or default_db_engine)
    flavor_cache = FlavorCache(ttl_seconds=settings.FLAVOR_CACHE_TTL_SECONDS, store=store)
    flavor_cache.load()

    data_service = ExternalDataService(
        search_provider=provider,
        flavor_provider=provider,
        detail_provider=provider,
        flavor_cache=flavor_cache,
    )

    index = SuggestionIndex()
    if seed_suggestions:
        seed(index)

    weights = load_scoring_weights(settings.RULES_CONFIG_PATH)
    logger.info(
        "BioMatch engine initialized",
        extra={
            "flavor_cache_entries": len(flavor_cache),
            "suggestion_entries": len(index),
        }
    )
    return BioMatchEngine(
        data_service=data_service,
        suggestion_index=index,
        weights=weights,
        lookup_timeout=settings.FLAVOR_LOOKUP_TIMEOUT_SECONDS,
    )
