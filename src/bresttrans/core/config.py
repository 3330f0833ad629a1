"""
Configuration loader with environment variable support.

Loads configuration from YAML files with hierarchical overrides:
1. config/default.yaml (base configuration)
2. config/{BRESTTRANS_ENV}.yaml (environment-specific)
3. Environment variables (BRESTTRANS_*)
"""

import os
from pathlib import Path
from typing import Any

import yaml

ENV_PREFIX = "BRESTTRANS_"

# Source checkout / editable install layout: <root>/src/bresttrans/core/config.py
PROJECT_CONFIG_DIR = Path(__file__).parent.parent.parent.parent / "config"
USER_CONFIG_DIR = Path.home() / ".bresttrans" / "config"


def default_config_dir() -> Path:
    """Project config/ when present, otherwise the per-user directory."""
    if (PROJECT_CONFIG_DIR / "default.yaml").exists():
        return PROJECT_CONFIG_DIR
    return USER_CONFIG_DIR


class Config:
    """
    Hierarchical configuration loader.

    Load order (later overrides earlier):
    1. default.yaml
    2. {BRESTTRANS_ENV}.yaml (development, production, etc.)
    3. Environment variables (BRESTTRANS_*)

    Usage:
        config = Config()
        timeout = config.get('weather.timeout', 10)
        # or
        timeout = config['weather']['timeout']
    """

    def __init__(self, config_dir: Path | None = None):
        """
        Initialize configuration loader.

        Args:
            config_dir: Path to configuration directory. Defaults to the
                project config/, or ~/.bresttrans/config for installed builds.
        """
        if config_dir is None:
            config_dir = default_config_dir()
        self.config_dir = Path(config_dir)
        self.env = os.getenv("BRESTTRANS_ENV", "development")
        self._config = self._load_config()

    def _load_config(self) -> dict[str, Any]:
        """Load and merge configuration files."""
        config: dict[str, Any] = {}

        default_path = self.config_dir / "default.yaml"
        if default_path.exists():
            with open(default_path, encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}

        env_path = self.config_dir / f"{self.env}.yaml"
        if env_path.exists():
            with open(env_path, encoding="utf-8") as f:
                env_config = yaml.safe_load(f) or {}
                config = self._deep_merge(config, env_config)

        return self._apply_env_overrides(config)

    def _deep_merge(self, base: dict, override: dict) -> dict:
        """Deep merge two dictionaries."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def _apply_env_overrides(self, config: dict) -> dict:
        """
        Apply BRESTTRANS_* environment variables.

        The first underscore separates the section from the key, so
        BRESTTRANS_WEATHER_API_KEY_ENV=X -> config['weather']['api_key_env'] = 'X'.
        BRESTTRANS_ENV itself selects the environment file and is skipped.
        """
        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX) or key == "BRESTTRANS_ENV":
                continue
            path = key[len(ENV_PREFIX) :].lower().split("_", 1)
            self._set_nested(config, path, self._parse_value(value))
        return config

    def _set_nested(self, d: dict, keys: list, value: Any) -> None:
        """Set a nested dictionary value."""
        for key in keys[:-1]:
            existing = d.get(key)
            if not isinstance(existing, dict):
                existing = {}
                d[key] = existing
            d = existing
        d[keys[-1]] = value

    def _parse_value(self, value: str) -> Any:
        """Parse string value to appropriate type."""
        if value.lower() in ("true", "false"):
            return value.lower() == "true"
        try:
            return int(value)
        except ValueError:
            pass
        try:
            return float(value)
        except ValueError:
            pass
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Dot-separated path like 'weather.timeout' or 'drive.token_file'
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key.split(".")
        value: Any = self._config
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
            if value is None:
                return default
        return value

    def __getitem__(self, key: str) -> Any:
        """Get top-level configuration section."""
        return self._config.get(key, {})

    @property
    def as_dict(self) -> dict[str, Any]:
        """Return configuration as dictionary."""
        return self._config.copy()

    def reload(self) -> None:
        """Reload configuration from files."""
        self._config = self._load_config()
