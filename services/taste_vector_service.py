from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from config.rules import DEFAULT_WEIGHTS, ScoringWeights
from data.flavor_rules import FLAVOR_TAG_AXES, NAME_KEYWORD_AXES, NEUTRAL_DISH_VECTOR
from models.dish import Dish, IngredientReference, TasteResult
from models.flavor import FlavorRecord
from models.profile import TASTE_AXES, UserSensitivityProfile
from services.canonicalization import canonicalize
from utils.logger import setup_logger

logger = setup_logger(__name__)


def _to_array(vector: Dict[str, float]) -> np.ndarray:
    return np.array([float(vector.get(axis, 0.0)) for axis in TASTE_AXES], dtype=np.float64)


def ingredient_contribution(name: str, record: Optional[FlavorRecord]) -> np.ndarray:
    """Per-axis signal of one ingredient.

    Flavor-provider tags give the base signal; name keywords override the axis they
    name, which also covers ingredients with no usable flavor record.
    """
    contribution = np.zeros(len(TASTE_AXES), dtype=np.float64)

    if record is not None and record.is_usable:
        tags = record.flavor_profile
        for tag, (axis, intensity) in FLAVOR_TAG_AXES.items():
            if any(tag in t for t in tags):
                contribution[TASTE_AXES.index(axis)] += intensity
        if record.super_sweet and not any("sweet" in t for t in tags):
            contribution[TASTE_AXES.index("sweet")] += FLAVOR_TAG_AXES["sweet"][1]
        if record.bitter and not any("bitter" in t for t in tags):
            contribution[TASTE_AXES.index("bitter")] += FLAVOR_TAG_AXES["bitter"][1]

    lowered = (name or "").lower()
    for keywords, axis, intensity in NAME_KEYWORD_AXES:
        if any(k in lowered for k in keywords):
            contribution[TASTE_AXES.index(axis)] = intensity

    return contribution


class TasteVectorService:
    def __init__(self, weights: ScoringWeights = DEFAULT_WEIGHTS):
        self.weights = weights

    def dish_vector(
        self,
        ingredients: Sequence[str],
        flavor_records: Dict[str, FlavorRecord],
    ) -> Dict[str, float]:
        total = np.zeros(len(TASTE_AXES), dtype=np.float64)
        contributing = 0

        for raw in ingredients:
            ref = IngredientReference.from_raw(raw)
            if not ref.text:
                continue
            record = flavor_records.get(canonicalize(ref.text))
            contribution = ingredient_contribution(ref.text, record)
            if contribution.any():
                total += contribution
                contributing += 1

        if contributing == 0:
            return dict(NEUTRAL_DISH_VECTOR)

        scaled = np.minimum(10.0, total / (contributing * self.weights.taste_signal_scale))
        return {axis: round(float(v), 2) for axis, v in zip(TASTE_AXES, scaled)}

    def compare(
        self,
        user_vector: Dict[str, float],
        dish_vector: Dict[str, float],
    ) -> Tuple[int, List[str]]:
        user = _to_array(user_vector)
        dish = _to_array(dish_vector)

        distance = float(np.linalg.norm(user - dish))
        score = 100.0 - (distance / self.weights.taste_max_distance) * 100.0
        score = int(round(max(0.0, min(100.0, score))))

        notes: List[str] = []
        for axis, u, d in zip(TASTE_AXES, user, dish):
            diff = abs(u - d)
            if diff < self.weights.taste_match_threshold:
                if d > self.weights.taste_strong_axis_threshold:
                    note = f"Matches your love for {axis} flavors."
                else:
                    continue
            elif diff > self.weights.taste_mismatch_threshold:
                note = f"Might be too much {axis} for you." if d > u else f"Not enough {axis} for your taste."
            else:
                continue
            if note not in notes:
                notes.append(note)

        return score, notes

    def score(
        self,
        dish: Dish,
        profile: UserSensitivityProfile,
        flavor_records: Optional[Dict[str, FlavorRecord]] = None,
    ) -> TasteResult:
        if not dish.is_analyzed or not dish.ingredient_references():
            return TasteResult(
                taste_score=int(self.weights.missing_data_score),
                notes=["No ingredient data available."],
            )

        dish_vector = self.dish_vector(dish.ingredients, flavor_records or {})
        taste_score, notes = self.compare(profile.taste_vector(), dish_vector)

        logger.debug(
            "Taste match scored",
            extra={
                "dish": dish.title,
                "taste_score": taste_score,
                "dish_vector": dish_vector,
            }
        )
        return TasteResult(taste_score=taste_score, notes=notes, dish_vector=dish_vector)
