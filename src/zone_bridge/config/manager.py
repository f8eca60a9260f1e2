"""Loads zone-bridge settings from YAML defaults and user overrides."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from zone_bridge.aliases import AliasTable
from zone_bridge.config.schema import AppConfig, TimeZoneConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """Reads ``config.defaults.yaml`` merged with ``config.yaml``.

    Extra aliases are checked against the built-in alias table at load
    time, so a conflicting pair fails here rather than on first lookup.
    """

    def __init__(
        self,
        defaults_path: Path | None = None,
        user_path: Path | None = None,
    ) -> None:
        self._defaults_path = defaults_path or Path("config.defaults.yaml")
        self._user_path = user_path or Path("config.yaml")
        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        if self._config is None:
            raise RuntimeError("Config not loaded. Call load() first.")
        return self._config

    def load(self) -> AppConfig:
        merged = self._deep_merge(
            self._load_yaml(self._defaults_path), self._load_yaml(self._user_path)
        )
        config = AppConfig.model_validate(merged)
        aliases = AliasTable.default(config.timezone.alias_pairs())
        self._config = config
        logger.info(
            "Configuration loaded: platform=%s, %d alias pairs",
            config.timezone.platform,
            len(aliases.pairs()),
        )
        return config

    def timezone_config(self, platform: str | None = None) -> TimeZoneConfig:
        """Zone settings, with the platform convention optionally overridden."""
        tz_config = self.config.timezone
        if platform is None or platform == tz_config.platform:
            return tz_config
        logger.debug("Platform convention overridden: %s -> %s", tz_config.platform, platform)
        return TimeZoneConfig.model_validate({**tz_config.model_dump(), "platform": platform})

    @staticmethod
    def _load_yaml(path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}
        with open(path) as f:
            data = yaml.safe_load(f)
        return data if isinstance(data, dict) else {}

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        result = dict(base)
        for key, value in override.items():
            if isinstance(result.get(key), dict) and isinstance(value, dict):
                result[key] = ConfigManager._deep_merge(result[key], value)
            else:
                result[key] = value
        return result
