from __future__ import annotations
from typing import Dict, List, Optional, Set, Any
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, JSON


class FlavorRecord(SQLModel):
    canonical_name: str
    found_name: Optional[str] = None
    flavor_profile: Set[str] = Field(default_factory=set)
    functional_groups: Set[str] = Field(default_factory=set)
    bitter: bool = False
    super_sweet: bool = False
    not_found: bool = False
    error: bool = False

    @classmethod
    def missing(cls, canonical_name: str) -> "FlavorRecord":
        return cls(canonical_name=canonical_name, not_found=True)

    @classmethod
    def degraded(cls, canonical_name: str) -> "FlavorRecord":
        return cls(canonical_name=canonical_name, error=True)

    @property
    def is_usable(self) -> bool:
        return not self.not_found and not self.error


class FlavorCacheEntry(SQLModel, table=True):
    canonical_name: str = Field(primary_key=True)
    payload: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    fetched_at: float = 0.0


class RecipeSummary(SQLModel):
    id: str
    title: str


class RecipeDetails(SQLModel):
    id: Optional[str] = None
    title: str = ""
    ingredients: List[str] = Field(default_factory=list)


class SearchResultSet(SQLModel):
    query: str
    results: List[RecipeSummary] = Field(default_factory=list)
    error: bool = False


class SearchPage(SQLModel):
    results: List[RecipeSummary] = Field(default_factory=list)
    page: int = 1
    limit: int = 20
    total: int = 0
    has_more: bool = False
    error: bool = False
