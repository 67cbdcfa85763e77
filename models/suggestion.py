from __future__ import annotations
from enum import Enum
from sqlmodel import SQLModel


class SuggestionKind(str, Enum):
    RECIPE = "recipe"
    INGREDIENT = "ingredient"


class SuggestionEntry(SQLModel):
    title: str
    key: str
    source_tag: str
    hit_count: int = 1
    last_seen: float
    kind: SuggestionKind = SuggestionKind.RECIPE
