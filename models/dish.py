from __future__ import annotations
from typing import Dict, List, Optional
from enum import Enum
from sqlmodel import SQLModel, Field


class Severity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    CAUTION = "caution"


class IngredientReference(SQLModel):
    text: str
    hint: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: str) -> "IngredientReference":
        # "Chicken breast, skinless, diced" -> text "chicken breast", hint "skinless, diced"
        head, _, tail = (raw or "").partition(",")
        return cls(text=head.strip().lower(), hint=tail.strip() or None)


class KnowledgeEntry(SQLModel):
    name: str
    type: str
    tags: List[str] = Field(default_factory=list)
    chemicals: Dict[str, str] = Field(default_factory=dict)
    triggers: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)


class DishCandidate(SQLModel):
    name: str
    original_text: str
    matched_ingredients: List[str] = Field(default_factory=list)
    ingredient_profiles: List[KnowledgeEntry] = Field(default_factory=list)
    confidence: int = 0
    is_analyzed: bool = False


class Dish(SQLModel):
    title: str
    ingredients: List[str] = Field(default_factory=list)
    recipe_id: Optional[str] = None
    is_analyzed: bool = True
    # ingredient -> lower-cased knowledge-base triggers and chemical names
    sensitivity_terms: Dict[str, List[str]] = Field(default_factory=dict)

    @classmethod
    def from_candidate(cls, candidate: DishCandidate) -> "Dish":
        return cls(
            title=candidate.name,
            ingredients=list(candidate.matched_ingredients),
            is_analyzed=candidate.is_analyzed,
            sensitivity_terms={
                entry.name.lower(): [t.lower() for t in entry.triggers] + [c.lower() for c in entry.chemicals]
                for entry in candidate.ingredient_profiles
            },
        )

    def ingredient_references(self) -> List[IngredientReference]:
        refs = [IngredientReference.from_raw(i) for i in self.ingredients if isinstance(i, str)]
        return [r for r in refs if r.text]


class EvidenceItem(SQLModel):
    ingredient: str
    matched_trigger: Optional[str] = None
    reason: str
    weight: float
    severity: Severity


class BCSResult(SQLModel):
    bio_score: int
    block: bool = False
    evidence: List[EvidenceItem] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    @property
    def has_critical(self) -> bool:
        return any(e.severity == Severity.CRITICAL for e in self.evidence)


class TasteResult(SQLModel):
    taste_score: int
    notes: List[str] = Field(default_factory=list)
    dish_vector: Dict[str, float] = Field(default_factory=dict)
