"""Shared test fixtures for zone-bridge."""

from __future__ import annotations

from pathlib import Path

import pytest

from zone_bridge import timezone_util
from zone_bridge.aliases import AliasTable
from zone_bridge.canonical import CanonicalMapper, NativeZoneMapping, StaticCanonicalIndex
from zone_bridge.config.manager import ConfigManager
from zone_bridge.platform import SystemZoneDatabase, WindowsZoneDatabase
from zone_bridge.resolver import Resolver

WINDOWS_IDS = {
    "UTC": "Etc/UTC",
    "Eastern Standard Time": "America/New_York",
    "Pacific Standard Time": "America/Los_Angeles",
    "India Standard Time": "Asia/Calcutta",
    "Central European Standard Time": "Europe/Warsaw",
}


@pytest.fixture
def config_manager(tmp_path: Path) -> ConfigManager:
    """Provide a config manager with test paths."""
    defaults = tmp_path / "config.defaults.yaml"
    defaults.write_text("timezone:\n  platform: system\n")
    user = tmp_path / "config.yaml"
    mgr = ConfigManager(defaults_path=defaults, user_path=user)
    mgr.load()
    return mgr


@pytest.fixture
def index() -> StaticCanonicalIndex:
    """A small, fixed canonical index."""
    return StaticCanonicalIndex(
        links={
            "US/Eastern": "America/New_York",
            "US/Pacific": "America/Los_Angeles",
            "Asia/Calcutta": "Asia/Kolkata",
            "Etc/UCT": "Etc/UTC",
        },
        native_zones=[
            NativeZoneMapping("UTC", ("Etc/UTC",)),
            NativeZoneMapping("Eastern Standard Time", ("America/New_York", "America/Detroit")),
            NativeZoneMapping("Pacific Standard Time", ("America/Los_Angeles",)),
            NativeZoneMapping("India Standard Time", ("Asia/Calcutta",)),
            NativeZoneMapping("Central European Standard Time", ("Europe/Warsaw",)),
        ],
        canonical_ids=frozenset({"Europe/Warsaw", "America/Detroit"}),
    )


@pytest.fixture
def windows_platform() -> WindowsZoneDatabase:
    return WindowsZoneDatabase(WINDOWS_IDS)


@pytest.fixture
def system_platform() -> SystemZoneDatabase:
    return SystemZoneDatabase()


@pytest.fixture
def windows_resolver(index: StaticCanonicalIndex, windows_platform: WindowsZoneDatabase) -> Resolver:
    return Resolver(
        platform=windows_platform,
        mapper=CanonicalMapper(index, windows_platform),
        aliases=AliasTable.default(),
    )


@pytest.fixture
def system_resolver(index: StaticCanonicalIndex, system_platform: SystemZoneDatabase) -> Resolver:
    return Resolver(
        platform=system_platform,
        mapper=CanonicalMapper(index, system_platform),
        aliases=AliasTable.default(),
    )


@pytest.fixture
def restore_timezone_util(monkeypatch: pytest.MonkeyPatch) -> None:
    """Undo changes to the process-wide resolver after the test."""
    monkeypatch.setattr(timezone_util, "_resolver", timezone_util.get_resolver())
    monkeypatch.setattr(timezone_util, "_calculator", timezone_util.get_offset_calculator())
