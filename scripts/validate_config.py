#!/usr/bin/env python
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from config import settings
from config.config_loader import ConfigLoader, ConfigValidator
from config.rules import ScoringWeights
from utils.logger import setup_logger

logger = setup_logger(__name__)


def validate_configuration(config_path: str = settings.RULES_CONFIG_PATH) -> bool:
    print("\n" + "=" * 80)
    print(" BioMatch Rule Configuration Validator")
    print("=" * 80 + "\n")

    try:
        print(f"[INFO] Loading rule weights from {config_path}...")
        loader = ConfigLoader(config_path=Path(config_path))
        config = loader.load()

        print("[INFO] Running validation checks...")
        errors = ConfigValidator.validate(config)

        if errors:
            print(f"\n[ERROR] Configuration validation failed with {len(errors)} error(s):\n")
            for error in errors:
                print(f"  - {error}")
            print()
            return False

        weights = ScoringWeights.from_loader(loader)
        print("[INFO] All validation checks passed\n")

        print("Rule Weights:")
        print("-" * 80)
        print(f"  Intolerance penalty:  {weights.intolerance_penalty}")
        print(f"  Fermented penalty:    {weights.fermented_penalty}")
        print(f"  Low spice penalty:    {weights.low_spice_penalty}")
        print(f"  Very hot penalty:     {weights.very_hot_penalty}")
        print(f"  Missing data score:   {weights.missing_data_score}")
        print(f"  Taste max distance:   {weights.taste_max_distance}")
        print(f"  Taste signal scale:   {weights.taste_signal_scale}")
        print("-" * 80)
        print(f"  Search cache TTL:     {settings.SEARCH_CACHE_TTL_SECONDS}s")
        print(f"  Flavor cache TTL:     {settings.FLAVOR_CACHE_TTL_SECONDS}s")
        print(f"  Flush interval:       {settings.FLAVOR_CACHE_FLUSH_INTERVAL_SECONDS}s")
        print("-" * 80 + "\n")

        return True

    except Exception as e:
        print(f"\n[ERROR] Failed to validate configuration: {str(e)}\n")
        logger.error("Configuration validation failed", exc_info=True)
        return False


if __name__ == "__main__":
    success = validate_configuration(*sys.argv[1:2])
    sys.exit(0 if success else 1)
