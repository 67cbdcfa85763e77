import os
from typing import Optional, List
from dotenv import load_dotenv
from pathlib import Path

# Load .env from project folder explicitly (works even if CWD differs)
_BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=_BASE_DIR / ".env")


class Settings:
    # Flavor cache durable store
    DATABASE_URL: str = os.getenv("BIOMATCH_DATABASE_URL", "sqlite:///./biomatch_cache.db")

    # Recipe / flavor provider
    FOODOSCOPE_BASE_URL: str = os.getenv("FOODOSCOPE_BASE_URL", "https://api.foodoscope.com")
    FOODOSCOPE_API_KEY: Optional[str] = os.getenv("FOODOSCOPE_API_KEY")
    PROVIDER_TIMEOUT_SECONDS: float = float(os.getenv("PROVIDER_TIMEOUT_SECONDS", "8"))

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8010"))
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"

    # CORS
    ALLOWED_ORIGINS: List[str] = os.getenv("ALLOWED_ORIGINS", "*").split(",")

    # Caches
    SEARCH_CACHE_TTL_SECONDS: int = int(os.getenv("SEARCH_CACHE_TTL_SECONDS", str(10 * 60)))
    FLAVOR_CACHE_TTL_SECONDS: int = int(os.getenv("FLAVOR_CACHE_TTL_SECONDS", str(7 * 24 * 3600)))
    FLAVOR_CACHE_FLUSH_INTERVAL_SECONDS: int = int(os.getenv("FLAVOR_CACHE_FLUSH_INTERVAL_SECONDS", str(5 * 60)))

    # Analysis
    MAX_INGREDIENT_FANOUT: int = int(os.getenv("MAX_INGREDIENT_FANOUT", "25"))
    PROVIDER_WORKERS: int = int(os.getenv("PROVIDER_WORKERS", "8"))
    # overall budget for one dish's flavor lookups; 0 disables it
    FLAVOR_LOOKUP_TIMEOUT_SECONDS: Optional[float] = float(os.getenv("FLAVOR_LOOKUP_TIMEOUT_SECONDS", "15")) or None
    MAX_ALTERNATIVES: int = int(os.getenv("MAX_ALTERNATIVES", "3"))

    # Suggestions
    SUGGESTION_LIMIT: int = int(os.getenv("SUGGESTION_LIMIT", "8"))
    SUGGESTION_MAX_LIMIT: int = int(os.getenv("SUGGESTION_MAX_LIMIT", "20"))
    SUGGESTION_INDEX_MAX_ENTRIES: int = int(os.getenv("SUGGESTION_INDEX_MAX_ENTRIES", "5000"))

    # Rule weights file
    RULES_CONFIG_PATH: str = os.getenv("RULES_CONFIG_PATH", str(_BASE_DIR / "config" / "config.yaml"))


settings = Settings()
