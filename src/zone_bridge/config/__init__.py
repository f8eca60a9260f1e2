"""Configuration management for zone-bridge."""

from zone_bridge.config.schema import AppConfig, LoggingConfig, TimeZoneConfig
from zone_bridge.config.manager import ConfigManager

__all__ = ["AppConfig", "ConfigManager", "LoggingConfig", "TimeZoneConfig"]
