from __future__ import annotations
from typing import Dict, List, Optional, Set

from config.rules import DEFAULT_WEIGHTS, ScoringWeights
from data.flavor_rules import (
    FERMENTED_MARKERS,
    SPICE_EXCEPTIONS,
    SPICY_NAME_KEYWORDS,
    VERY_HOT_NAME_KEYWORDS,
)
from models.dish import BCSResult, Dish, EvidenceItem, IngredientReference, Severity
from models.flavor import FlavorRecord
from models.profile import SpiceTolerance, UserSensitivityProfile
from services.canonicalization import (
    canonical_user_terms,
    canonicalize,
    expand_hidden_triggers,
    matching_term,
    title_terms,
)
from utils.logger import setup_logger

logger = setup_logger(__name__)

TITLE_INGREDIENT = "Dish Title"
CRITICAL_WEIGHT = 100.0
MAX_SCORE = 100


def is_spicy(name: str, record: Optional[FlavorRecord]) -> bool:
    if record is not None and any("spicy" in tag for tag in record.flavor_profile):
        return True
    lowered = name.lower()
    if any(exc in lowered for exc in SPICE_EXCEPTIONS):
        return False
    return any(k in lowered for k in SPICY_NAME_KEYWORDS)


def is_very_hot(name: str) -> bool:
    lowered = name.lower()
    return any(k in lowered for k in VERY_HOT_NAME_KEYWORDS)


def is_fermented(expanded: Set[str], record: Optional[FlavorRecord]) -> bool:
    groups = record.functional_groups if record is not None else set()
    return any(
        marker in member
        for marker in FERMENTED_MARKERS
        for member in set(groups) | expanded
    )


class BioCompatibilityService:
    """Rule cascade producing the bio-compatibility score of a dish for one user.

    Every deduction appends exactly one EvidenceItem. A critical item blocks the dish
    and pins the score to 0 whatever else was deducted.
    """

    def __init__(self, weights: ScoringWeights = DEFAULT_WEIGHTS):
        self.weights = weights

    def _insufficient_data(self, warning: str) -> BCSResult:
        return BCSResult(
            bio_score=int(self.weights.missing_data_score),
            block=False,
            warnings=[warning],
        )

    def _title_matches(self, title: str, allergies: List[str]) -> List[str]:
        lowered = (title or "").lower()
        if not lowered:
            return []
        expanded_title = title_terms(title)
        return [
            allergy for allergy in allergies
            if allergy in lowered or matching_term([allergy], expanded_title)
        ]

    def evaluate(
        self,
        dish: Dish,
        profile: UserSensitivityProfile,
        flavor_records: Optional[Dict[str, FlavorRecord]] = None,
    ) -> BCSResult:
        if profile is None:
            raise ValueError("profile is required for bio-compatibility evaluation")

        if not dish.is_analyzed:
            return self._insufficient_data("Insufficient data: dish was not recognized.")

        refs = dish.ingredient_references()
        if not refs:
            return self._insufficient_data("Could not analyze ingredients: no ingredient data available.")

        records = flavor_records or {}
        allergies = canonical_user_terms(profile.allergies)
        intolerances = canonical_user_terms(profile.intolerances)

        score = float(MAX_SCORE)
        block = False
        evidence: List[EvidenceItem] = []
        warnings: List[str] = []

        def warn(message: str):
            if message not in warnings:
                warnings.append(message)

        for allergy in self._title_matches(dish.title, allergies):
            block = True
            warn(f"{allergy} detected in dish name.")
            evidence.append(EvidenceItem(
                ingredient=TITLE_INGREDIENT,
                matched_trigger=allergy,
                reason="Allergy (Title Match)",
                weight=CRITICAL_WEIGHT,
                severity=Severity.CRITICAL,
            ))

        for ref in refs:
            canonical = canonicalize(ref.text)
            expanded = expand_hidden_triggers(canonical, ref.text)
            record = records.get(canonical)
            sensitivity = expanded | set(dish.sensitivity_terms.get(ref.text, ()))

            allergy = matching_term(allergies, sensitivity)
            if allergy:
                block = True
                warn(f"Contains {allergy} (in {ref.text})")
                evidence.append(EvidenceItem(
                    ingredient=ref.text,
                    matched_trigger=allergy,
                    reason="Allergy",
                    weight=CRITICAL_WEIGHT,
                    severity=Severity.CRITICAL,
                ))

            intolerance = matching_term(intolerances, sensitivity)
            if intolerance:
                score -= self.weights.intolerance_penalty
                warn(f"Contains {intolerance} (in {ref.text})")
                evidence.append(EvidenceItem(
                    ingredient=ref.text,
                    matched_trigger=intolerance,
                    reason="Intolerance",
                    weight=self.weights.intolerance_penalty,
                    severity=Severity.WARNING,
                ))

            if profile.fermented_sensitive and is_fermented(expanded, record):
                score -= self.weights.fermented_penalty
                evidence.append(EvidenceItem(
                    ingredient=ref.text,
                    matched_trigger="fermented",
                    reason="Fermented/Alcohol Sensitivity",
                    weight=self.weights.fermented_penalty,
                    severity=Severity.CAUTION,
                ))

            if is_spicy(ref.text, record):
                if profile.spice_tolerance == SpiceTolerance.LOW:
                    score -= self.weights.low_spice_penalty
                    evidence.append(EvidenceItem(
                        ingredient=ref.text,
                        matched_trigger="spicy",
                        reason="Spice Sensitivity (Low Tolerance)",
                        weight=self.weights.low_spice_penalty,
                        severity=Severity.CAUTION,
                    ))
                elif profile.spice_tolerance == SpiceTolerance.MEDIUM and is_very_hot(ref.text):
                    score -= self.weights.very_hot_penalty
                    evidence.append(EvidenceItem(
                        ingredient=ref.text,
                        matched_trigger="very hot",
                        reason="Very Spicy Ingredient",
                        weight=self.weights.very_hot_penalty,
                        severity=Severity.CAUTION,
                    ))

        bio_score = 0 if block else int(round(max(0.0, min(float(MAX_SCORE), score))))

        logger.info(
            "Bio-compatibility evaluated",
            extra={
                "dish": dish.title,
                "bio_score": bio_score,
                "block": block,
                "evidence_count": len(evidence),
            }
        )
        return BCSResult(bio_score=bio_score, block=block, evidence=evidence, warnings=warnings)
