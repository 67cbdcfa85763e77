from __future__ import annotations
from typing import List, Optional
from sqlmodel import SQLModel, Field

from .dish import Dish, BCSResult, TasteResult
from .flavor import RecipeSummary
from .profile import UserSensitivityProfile


class IngredientSwap(SQLModel):
    original: str
    swap: str
    reason: str


class AnalysisRequest(SQLModel):
    profile: UserSensitivityProfile
    recipe_id: Optional[str] = None
    dish_name: Optional[str] = None
    ingredients: List[str] = Field(default_factory=list)


class DishAnalysis(SQLModel):
    dish: Dish
    bcs: BCSResult
    taste: TasteResult
    modifications: List[IngredientSwap] = Field(default_factory=list)
    alternatives: List[RecipeSummary] = Field(default_factory=list)
    degraded_lookups: int = 0


class MenuScanRequest(SQLModel):
    profile: UserSensitivityProfile
    text: str


class ScoredMenuDish(SQLModel):
    name: str
    original_text: str
    is_analyzed: bool
    matched_ingredients: List[str] = Field(default_factory=list)
    score: int
    bio_score: int
    taste_score: int
    reasons: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
