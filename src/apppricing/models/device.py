"""Device and location models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from apppricing._constants import DEFAULT_CITY, DEFAULT_COUNTRY, DEFAULT_LANGUAGE, DEFAULT_REGION, DEFAULT_TIMEZONE
from apppricing.models._base import ApiModel


class DeviceInfo(BaseModel):
    """Raw device attributes reported by a device info provider."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    unique_id: str
    """Install-specific unique id."""
    fingerprint: str
    """Stable device fingerprint, distinct from ``unique_id``."""
    brand: str
    model: str
    os: str
    os_version: str
    screen_width: float = 0
    screen_height: float = 0
    first_install_time: datetime | float
    """Install time as a datetime or epoch milliseconds."""

    @field_validator("unique_id")
    @classmethod
    def _unique_id_non_empty(cls, value: str) -> str:
        unique_id = value.strip()
        if not unique_id:
            raise ValueError("unique_id must be non-empty")
        return unique_id


class LocationData(ApiModel):
    """Geolocation lookup result.

    Every field is optional; consumers fall back to defaults.
    """

    ip: Any = None
    country_code: str | None = None
    country: str | None = None
    city: str | None = None
    region: str | None = None
    region_code: Any = None
    timezone: str | None = None
    longitude: Any = None
    latitude: Any = None
    language: str | None = None
    """Language tag declared by the server, when it sends one."""


class DeviceData(BaseModel):
    """Registration payload for ``POST /device-data``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    device_id: str
    hash: str
    country: str = DEFAULT_COUNTRY
    region: str = DEFAULT_REGION
    city: str = DEFAULT_CITY
    timezone: str = DEFAULT_TIMEZONE
    first_seen: str
    last_seen: str
    engagement_time: int = 0
    session_count: int = 1
    language: str = DEFAULT_LANGUAGE
    brand: str
    model: str
    os: str
    os_version: str
    screen_height: int = Field(ge=0)
    screen_width: int = Field(ge=0)
