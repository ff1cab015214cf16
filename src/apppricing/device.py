"""Device identity collection.

Mobile hosts supply device attributes through a :class:`DeviceInfoProvider`.
:class:`HostDeviceInfoProvider` is the default: it derives what it can from
the running interpreter and lets a :class:`~apppricing.config.DeviceProfile`
override any field.
"""

from __future__ import annotations

import hashlib
import platform
import time
import uuid
from typing import Protocol

from pydantic import ValidationError

from apppricing.config import DeviceProfile
from apppricing.exceptions import AppPricingDeviceError
from apppricing.location import LocationEnricher
from apppricing.models._base import to_iso8601, utc_now_iso
from apppricing.models.device import DeviceData, DeviceInfo


class DeviceInfoProvider(Protocol):
    """Source of raw device attributes."""

    async def get_device_info(self) -> DeviceInfo:
        ...


def _host_unique_id() -> str:
    return str(uuid.uuid5(uuid.NAMESPACE_OID, f"{uuid.getnode():012x}"))


def _host_fingerprint() -> str:
    parts = (
        platform.system(),
        platform.release(),
        platform.machine(),
        platform.node(),
        f"{uuid.getnode():012x}",
    )
    return hashlib.sha256("|".join(parts).encode("utf-8")).hexdigest()


class HostDeviceInfoProvider:
    """Device attributes of the host running the interpreter.

    Screen dimensions are unknown on a plain host and default to ``0``
    unless the profile sets them.
    """

    def __init__(self, profile: DeviceProfile | None = None) -> None:
        self._profile = profile or DeviceProfile()
        self._created_ms = time.time() * 1000

    async def get_device_info(self) -> DeviceInfo:
        profile = self._profile
        system = platform.system() or "unknown"
        return DeviceInfo(
            unique_id=profile.unique_id or _host_unique_id(),
            fingerprint=profile.fingerprint or _host_fingerprint(),
            brand=profile.brand or system,
            model=profile.model or platform.machine() or "unknown",
            os=profile.os or system,
            os_version=profile.os_version or platform.release() or "unknown",
            screen_width=profile.screen_width or 0,
            screen_height=profile.screen_height or 0,
            first_install_time=(
                profile.first_install_time if profile.first_install_time is not None else self._created_ms
            ),
        )


async def collect_device_data(provider: DeviceInfoProvider, enricher: LocationEnricher) -> DeviceData:
    """Assemble the registration payload for this device.

    Raises
    ------
    AppPricingDeviceError
        If the provider fails or reports unusable attributes. Location
        enrichment never raises; it falls back to defaults.
    """
    try:
        info = await provider.get_device_info()
        first_seen = to_iso8601(info.first_install_time)
    except (ValidationError, ValueError) as exc:
        raise AppPricingDeviceError(f"Invalid device info: {exc}") from exc
    except Exception as exc:
        raise AppPricingDeviceError(f"Device info provider failed: {exc}") from exc

    location = await enricher.resolve()

    return DeviceData(
        device_id=info.unique_id,
        hash=info.fingerprint,
        country=location.country,
        region=location.region,
        city=location.city,
        timezone=location.timezone,
        first_seen=first_seen,
        last_seen=utc_now_iso(),
        engagement_time=0,
        session_count=1,
        language=location.language,
        brand=info.brand,
        model=info.model,
        os=info.os,
        os_version=info.os_version,
        screen_height=round(info.screen_height),
        screen_width=round(info.screen_width),
    )
