"""Best-effort geolocation enrichment.

The geolocation lookup feeds country, region, city, timezone and a
language tag into the device registration. Nothing here may fail
initialization: every failure degrades to the documented defaults.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pydantic import ValidationError

from apppricing._constants import (
    COUNTRY_LANGUAGES,
    DEFAULT_CITY,
    DEFAULT_COUNTRY,
    DEFAULT_LANGUAGE,
    DEFAULT_PRIMARY_LANGUAGE,
    DEFAULT_REGION,
    DEFAULT_TIMEZONE,
    LOCATION_URL,
)
from apppricing._logging import log_message
from apppricing._transport import Err, Transport
from apppricing.models.device import LocationData
from apppricing.state import SdkState

_logger = logging.getLogger(__name__)


def language_for_country(country_code: str) -> str:
    """Language tag ``"<lang>-<COUNTRY>"`` for a two-letter country code.

    Countries without a mapping fall back to English (``"en-ZZ"``).
    """
    code = country_code.strip().upper()
    return f"{COUNTRY_LANGUAGES.get(code, DEFAULT_PRIMARY_LANGUAGE)}-{code}"


@dataclass(frozen=True, slots=True)
class ResolvedLocation:
    """Location fields that end up in :class:`~apppricing.models.DeviceData`."""

    country: str = DEFAULT_COUNTRY
    region: str = DEFAULT_REGION
    city: str = DEFAULT_CITY
    timezone: str = DEFAULT_TIMEZONE
    language: str = DEFAULT_LANGUAGE


def resolve_location(location: LocationData | None, *, prefer_server_language: bool = False) -> ResolvedLocation:
    """Fill defaults and derive the language tag.

    With *prefer_server_language* a non-empty ``language`` reported by the
    geolocation service is used as-is; otherwise the tag is derived from
    ``country_code``, and ``en-US`` is used when there is none.
    """
    if location is None:
        return ResolvedLocation()

    if prefer_server_language and location.language:
        language = location.language
    elif location.country_code:
        language = language_for_country(location.country_code)
    else:
        language = DEFAULT_LANGUAGE

    return ResolvedLocation(
        country=location.country or DEFAULT_COUNTRY,
        region=location.region or DEFAULT_REGION,
        city=location.city or DEFAULT_CITY,
        timezone=location.timezone or DEFAULT_TIMEZONE,
        language=language,
    )


class LocationEnricher:
    """Looks up the device's location from its public IP."""

    def __init__(
        self,
        state: SdkState,
        transport: Transport,
        *,
        url: str = LOCATION_URL,
        prefer_server_language: bool = False,
    ) -> None:
        self._state = state
        self._transport = transport
        self._url = url
        self._prefer_server_language = prefer_server_language

    async def fetch_location(self) -> LocationData | None:
        """Query the geolocation endpoint; ``None`` on any failure.

        Fields with unexpected types are dropped one by one so the rest of
        the lookup still applies.
        """
        outcome = await self._transport.request(
            self._url,
            headers={"Content-Type": "application/json"},
        )
        if isinstance(outcome, Err):
            return None
        if not isinstance(outcome.data, dict):
            log_message(self._state, "Unexpected location response", f"expected an object, got {type(outcome.data).__name__}")
            return None
        try:
            return LocationData.model_validate(outcome.data)
        except ValidationError as exc:
            invalid = {str(err["loc"][0]) for err in exc.errors() if err["loc"]}
            log_message(self._state, "Ignoring invalid location fields", ", ".join(sorted(invalid)))
        usable = {key: value for key, value in outcome.data.items() if str(key) not in invalid}
        usable["raw"] = dict(outcome.data)
        try:
            return LocationData.model_validate(usable)
        except ValidationError as exc:
            log_message(self._state, "Invalid location response", exc)
            return None

    async def resolve(self) -> ResolvedLocation:
        """Fetch and resolve the location, falling back to defaults."""
        try:
            location = await self.fetch_location()
        except Exception as exc:
            _logger.debug("Location lookup failed", exc_info=True)
            log_message(self._state, "Failed to fetch location data", exc)
            location = None
        return resolve_location(location, prefer_server_language=self._prefer_server_language)
