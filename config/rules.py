from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config_loader import ConfigLoader, init_config_loader


@dataclass(frozen=True)
class ScoringWeights:
    intolerance_penalty: float = 30
    fermented_penalty: float = 15
    low_spice_penalty: float = 20
    very_hot_penalty: float = 10
    missing_data_score: float = 50

    taste_max_distance: float = 20
    taste_signal_scale: float = 0.3
    taste_match_threshold: float = 3
    taste_mismatch_threshold: float = 6
    taste_strong_axis_threshold: float = 6

    @classmethod
    def from_loader(cls, loader: ConfigLoader) -> "ScoringWeights":
        defaults = cls()
        return cls(
            intolerance_penalty=loader.get("scoring.intolerance_penalty", defaults.intolerance_penalty),
            fermented_penalty=loader.get("scoring.fermented_penalty", defaults.fermented_penalty),
            low_spice_penalty=loader.get("scoring.low_spice_penalty", defaults.low_spice_penalty),
            very_hot_penalty=loader.get("scoring.very_hot_penalty", defaults.very_hot_penalty),
            missing_data_score=loader.get("scoring.missing_data_score", defaults.missing_data_score),
            taste_max_distance=loader.get("taste.max_distance", defaults.taste_max_distance),
            taste_signal_scale=loader.get("taste.signal_scale", defaults.taste_signal_scale),
            taste_match_threshold=loader.get("taste.match_threshold", defaults.taste_match_threshold),
            taste_mismatch_threshold=loader.get("taste.mismatch_threshold", defaults.taste_mismatch_threshold),
            taste_strong_axis_threshold=loader.get("taste.strong_axis_threshold", defaults.taste_strong_axis_threshold),
        )


def load_scoring_weights(config_path: Optional[Path] = None) -> ScoringWeights:
    loader = init_config_loader(config_path=config_path)
    return ScoringWeights.from_loader(loader)


DEFAULT_WEIGHTS = ScoringWeights()
