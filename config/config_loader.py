import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, List
import yaml

from utils.logger import setup_logger

logger = setup_logger(__name__)


class ConfigurationError(Exception):
    pass


class ConfigLoader:
    def __init__(self, config_path: Optional[Path] = None):
        if config_path is None:
            base_dir = Path(__file__).resolve().parent
            config_path = base_dir / "config.yaml"

        self.config_path = Path(config_path)
        self._config: Optional[Dict[str, Any]] = None
        self._last_loaded: Optional[float] = None

    def load(self, force_reload: bool = False) -> Dict[str, Any]:
        if not self.config_path.exists():
            raise ConfigurationError(f"config file not found: {self.config_path}")

        current_mtime = self.config_path.stat().st_mtime

        if not force_reload and self._config is not None and self._last_loaded == current_mtime:
            return self._config

        logger.info(
            "Loading rule configuration from file",
            extra={"config_path": str(self.config_path)}
        )

        with open(self.config_path, "r") as f:
            raw_config = yaml.safe_load(f)

        if raw_config is None:
            raise ConfigurationError("config file is empty")

        self._config = self._interpolate_env_vars(raw_config)
        self._last_loaded = current_mtime

        return self._config

    def _interpolate_env_vars(self, config: Any) -> Any:
        if isinstance(config, dict):
            return {
                key: self._interpolate_env_vars(value)
                for key, value in config.items()
            }
        elif isinstance(config, list):
            return [self._interpolate_env_vars(item) for item in config]
        elif isinstance(config, str):
            return self._replace_env_vars_in_string(config)
        else:
            return config

    def _replace_env_vars_in_string(self, value: str) -> Any:
        pattern = re.compile(r'\$\{([^}]+)\}')

        def replacer(match):
            env_var = match.group(1)
            env_value = os.getenv(env_var)

            if env_value is None:
                logger.warning(
                    f"Environment variable not found: {env_var}",
                    extra={"env_var": env_var}
                )
                return match.group(0)

            return env_value

        replaced = pattern.sub(replacer, value)
        if replaced != value:
            # numeric weights coming from the environment stay numeric
            try:
                return yaml.safe_load(replaced)
            except yaml.YAMLError:
                return replaced
        return replaced

    def get(self, path: str, default: Any = None) -> Any:
        if self._config is None:
            self.load()

        keys = path.split('.')
        current = self._config

        for key in keys:
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default

        return current


def _is_non_negative_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value >= 0


class ConfigValidator:
    @staticmethod
    def validate_scoring_config(config: Dict[str, Any]) -> List[str]:
        errors = []

        scoring = config.get('scoring', {})

        for key in ['intolerance_penalty', 'fermented_penalty', 'low_spice_penalty', 'very_hot_penalty']:
            value = scoring.get(key)
            if value is not None and (not _is_non_negative_number(value) or value > 100):
                errors.append(f"invalid {key}: {value} (must be between 0 and 100)")

        missing = scoring.get('missing_data_score')
        if missing is not None and (not _is_non_negative_number(missing) or missing > 100):
            errors.append(f"invalid missing_data_score: {missing}")

        return errors

    @staticmethod
    def validate_taste_config(config: Dict[str, Any]) -> List[str]:
        errors = []

        taste = config.get('taste', {})

        max_distance = taste.get('max_distance')
        if max_distance is not None and (not _is_non_negative_number(max_distance) or max_distance == 0):
            errors.append(f"invalid max_distance: {max_distance} (must be positive)")

        signal_scale = taste.get('signal_scale')
        if signal_scale is not None and (not _is_non_negative_number(signal_scale) or signal_scale == 0):
            errors.append(f"invalid signal_scale: {signal_scale} (must be positive)")

        return errors

    @staticmethod
    def validate(config: Dict[str, Any]) -> List[str]:
        all_errors = []

        all_errors.extend(ConfigValidator.validate_scoring_config(config))
        all_errors.extend(ConfigValidator.validate_taste_config(config))

        return all_errors


config_loader: Optional[ConfigLoader] = None


def init_config_loader(config_path: Optional[Path] = None) -> ConfigLoader:
    global config_loader
    config_loader = ConfigLoader(config_path=config_path)

    config = config_loader.load()

    validation_errors = ConfigValidator.validate(config)
    if validation_errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {err}" for err in validation_errors)
        logger.error(error_msg)
        raise ConfigurationError(error_msg)

    logger.info("Rule configuration validated successfully")

    return config_loader


def get_config_loader() -> ConfigLoader:
    if config_loader is None:
        raise ConfigurationError("config loader not initialized. Call init_config_loader() first")
    return config_loader
