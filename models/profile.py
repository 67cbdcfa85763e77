from __future__ import annotations
from typing import Dict, Set
from enum import Enum
from sqlmodel import SQLModel, Field


TASTE_AXES = [
    "sweet", "spicy", "bitter", "sour", "umami", "creamy"
]

DEFAULT_PREFERENCE = 5
MIN_PREFERENCE = 1
MAX_PREFERENCE = 10


class SpiceTolerance(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class UserSensitivityProfile(SQLModel):
    allergies: Set[str] = Field(default_factory=set)
    intolerances: Set[str] = Field(default_factory=set)
    spice_tolerance: SpiceTolerance = SpiceTolerance.MEDIUM
    fermented_sensitive: bool = False
    taste_preferences: Dict[str, int] = Field(
        default_factory=lambda: {k: DEFAULT_PREFERENCE for k in TASTE_AXES}
    )

    def taste_vector(self) -> Dict[str, float]:
        vector: Dict[str, float] = {}
        for axis in TASTE_AXES:
            value = self.taste_preferences.get(axis) or DEFAULT_PREFERENCE
            vector[axis] = float(max(MIN_PREFERENCE, min(MAX_PREFERENCE, value)))
        return vector
