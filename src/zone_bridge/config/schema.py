"""Pydantic configuration models for zone resolution settings."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class TimeZoneConfig(BaseModel):
    # "system": host ids are IANA keys; "windows": host ids are Windows names
    platform: Literal["system", "windows"] = "system"
    utc_conversion_fallback: bool = False
    extra_aliases: dict[str, str] = Field(
        default_factory=dict,
        description="Additional alias pairs, each registered in both directions.",
    )

    @field_validator("extra_aliases")
    @classmethod
    def _no_self_aliases(cls, value: dict[str, str]) -> dict[str, str]:
        for key, target in value.items():
            if not key or not target:
                raise ValueError("alias identifiers must be non-empty")
            if key == target:
                raise ValueError(f"alias {key!r} maps to itself")
        return value

    def alias_pairs(self) -> list[tuple[str, str]]:
        return list(self.extra_aliases.items())


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: Literal["json", "console"] = "json"
    file: str = ""


class AppConfig(BaseModel):
    """Root configuration model."""

    timezone: TimeZoneConfig = TimeZoneConfig()
    logging: LoggingConfig = LoggingConfig()
