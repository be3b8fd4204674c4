"""Configuration service for the motion CLI.

Single source of truth for settings: loads and saves ``config.json`` in the
platform config directory, resolves the API key (``MOTION_API_KEY`` wins over
the stored value), and supports dotted get/set for the ``config`` commands.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir
from pydantic import BaseModel, ValidationError

from motion_cli.models.config_models import AppConfig
from motion_cli.utils.errors import ConfigError

API_KEY_ENV = "MOTION_API_KEY"


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self):
        """Initialize the config service."""
        self.config_dir = Path(user_config_dir("motion_cli"))
        self.config_path = self.config_dir / "config.json"

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from storage, falling back to defaults."""
        try:
            with open(self.config_path, encoding="utf-8") as f:
                return AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run - nothing saved yet
            return AppConfig()
        except (OSError, ValidationError) as e:
            raise ConfigError(f"Failed to load config from {self.config_path}: {e}") from e

    def save_config(self) -> None:
        """Save the current configuration to storage."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            f.write(self.config.model_dump_json(indent=4))
        # The file holds the API key
        self.config_path.chmod(0o600)

    def get_api_key(self) -> str:
        """Return the API key, or raise ConfigError when none is configured."""
        api_key = os.environ.get(API_KEY_ENV) or self.config.api.api_key
        if not api_key:
            raise ConfigError(
                "Motion API key is not configured. "
                f"Run 'motion config set api.api_key <key>' or set {API_KEY_ENV}."
            )
        return api_key

    def has_api_key(self) -> bool:
        return bool(os.environ.get(API_KEY_ENV) or self.config.api.api_key)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        value: Any = self.config
        for k in key.split("."):
            if isinstance(value, BaseModel) and k in type(value).model_fields:
                value = getattr(value, k)
            else:
                raise ConfigError(f"Unknown config key: {key}")
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key and save."""
        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                raise ConfigError(f"Unknown config key: {key}")
            current = current[k]
        if keys[-1] not in current or isinstance(current[keys[-1]], dict):
            raise ConfigError(f"Unknown config key: {key}")
        current[keys[-1]] = value

        try:
            self._config = AppConfig.model_validate(config_dict)
        except ValidationError as e:
            raise ConfigError(f"Invalid value for {key}: {e.errors()[0]['msg']}") from e
        self.save_config()

    def unset(self, key: str) -> None:
        """Reset a key to its default value."""
        default_value = AppConfig().model_dump()
        for k in key.split("."):
            if not isinstance(default_value, dict) or k not in default_value:
                raise ConfigError(f"Unknown config key: {key}")
            default_value = default_value[k]
        self.set(key, default_value)


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get the process-wide config service."""
    return ConfigService()
