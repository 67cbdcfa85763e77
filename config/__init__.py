from .settings import settings
from .database import engine, build_engine, create_db_and_tables
from .rules import ScoringWeights, DEFAULT_WEIGHTS, load_scoring_weights

__all__ = [
    "settings",
    "engine",
    "build_engine",
    "create_db_and_tables",
    "ScoringWeights",
    "DEFAULT_WEIGHTS",
    "load_scoring_weights",
]
