"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from zone_bridge.config.manager import ConfigManager
from zone_bridge.config.schema import AppConfig, TimeZoneConfig


class TestAppConfig:
    def test_default_config_is_valid(self) -> None:
        config = AppConfig()
        assert config.timezone.platform == "system"
        assert config.timezone.utc_conversion_fallback is False
        assert config.timezone.extra_aliases == {}
        assert config.logging.level == "INFO"
        assert config.logging.format == "json"

    def test_custom_values(self) -> None:
        config = AppConfig(
            timezone={"platform": "windows", "extra_aliases": {"Kolkata": "Asia/Kolkata"}},
            logging={"format": "console"},
        )
        assert config.timezone.platform == "windows"
        assert config.timezone.alias_pairs() == [("Kolkata", "Asia/Kolkata")]
        assert config.logging.format == "console"

    def test_unknown_platform_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TimeZoneConfig(platform="solaris")

    def test_self_alias_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TimeZoneConfig(extra_aliases={"UTC": "UTC"})

    def test_empty_alias_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TimeZoneConfig(extra_aliases={"": "UTC"})


class TestConfigManager:
    def test_load_defaults_only(self, tmp_path: Path) -> None:
        defaults_file = tmp_path / "defaults.yaml"
        defaults_file.write_text("timezone:\n  platform: windows\n")
        mgr = ConfigManager(defaults_path=defaults_file, user_path=tmp_path / "user.yaml")
        config = mgr.load()
        assert config.timezone.platform == "windows"

    def test_user_overrides(self, tmp_path: Path) -> None:
        defaults_file = tmp_path / "defaults.yaml"
        defaults_file.write_text(
            "timezone:\n  platform: windows\n  utc_conversion_fallback: true\n"
        )
        user_file = tmp_path / "user.yaml"
        user_file.write_text("timezone:\n  platform: system\n")
        mgr = ConfigManager(defaults_path=defaults_file, user_path=user_file)
        config = mgr.load()
        assert config.timezone.platform == "system"
        assert config.timezone.utc_conversion_fallback is True

    def test_missing_files_give_defaults(self, tmp_path: Path) -> None:
        mgr = ConfigManager(tmp_path / "none.yaml", tmp_path / "also-none.yaml")
        assert mgr.load() == AppConfig()

    def test_config_before_load_raises(self, tmp_path: Path) -> None:
        mgr = ConfigManager(tmp_path / "a.yaml", tmp_path / "b.yaml")
        with pytest.raises(RuntimeError):
            _ = mgr.config

    def test_conflicting_extra_alias_rejected_at_load(self, tmp_path: Path) -> None:
        defaults_file = tmp_path / "defaults.yaml"
        defaults_file.write_text("timezone:\n  extra_aliases:\n    CET: Europe/Paris\n")
        mgr = ConfigManager(defaults_path=defaults_file, user_path=tmp_path / "user.yaml")
        with pytest.raises(ValueError, match="already maps"):
            mgr.load()

    def test_timezone_config_as_loaded(self, config_manager: ConfigManager) -> None:
        assert config_manager.timezone_config() is config_manager.config.timezone
        assert config_manager.timezone_config(platform="system") is config_manager.config.timezone

    def test_timezone_config_platform_override(self, config_manager: ConfigManager) -> None:
        tz_config = config_manager.timezone_config(platform="windows")
        assert tz_config.platform == "windows"
        assert config_manager.config.timezone.platform == "system"

    def test_timezone_config_rejects_unknown_platform(self, config_manager: ConfigManager) -> None:
        with pytest.raises(ValidationError):
            config_manager.timezone_config(platform="solaris")

    def test_invalid_yaml_value_rejected(self, tmp_path: Path) -> None:
        defaults_file = tmp_path / "defaults.yaml"
        defaults_file.write_text("logging:\n  format: xml\n")
        mgr = ConfigManager(defaults_path=defaults_file, user_path=tmp_path / "user.yaml")
        with pytest.raises(ValidationError):
            mgr.load()

    def test_repository_defaults_file(self) -> None:
        defaults = Path(__file__).resolve().parent.parent / "config.defaults.yaml"
        mgr = ConfigManager(defaults_path=defaults, user_path=defaults.parent / "missing.yaml")
        assert mgr.load() == AppConfig()
