"""Logging setup for zone-bridge."""

from zone_bridge.logging.structured import setup_logging

__all__ = ["setup_logging"]
