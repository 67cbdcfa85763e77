from .profile import UserSensitivityProfile, SpiceTolerance, TASTE_AXES
from .dish import (
    Dish, DishCandidate, KnowledgeEntry, IngredientReference,
    EvidenceItem, Severity, BCSResult, TasteResult,
)
from .flavor import FlavorRecord, FlavorCacheEntry, RecipeSummary, RecipeDetails, SearchResultSet, SearchPage
from .suggestion import SuggestionEntry, SuggestionKind
from .analysis import IngredientSwap, AnalysisRequest, DishAnalysis, MenuScanRequest, ScoredMenuDish
