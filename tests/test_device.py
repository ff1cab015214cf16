from __future__ import annotations

import pytest

from apppricing.config import DeviceProfile
from apppricing.device import HostDeviceInfoProvider, collect_device_data
from apppricing.exceptions import AppPricingDeviceError
from apppricing.location import LocationEnricher
from apppricing.models.device import DeviceInfo
from apppricing.state import SdkState

from conftest import FailingDeviceProvider, FakeBackend, FakeDeviceProvider


@pytest.mark.asyncio
async def test_host_provider_is_stable_and_honours_profile() -> None:
    provider = HostDeviceInfoProvider(DeviceProfile(model="Pixel 8", screen_height=800, first_install_time=0))

    first = await provider.get_device_info()
    second = await provider.get_device_info()

    assert first.unique_id == second.unique_id
    assert first.fingerprint == second.fingerprint
    assert first.fingerprint != first.unique_id
    assert first.model == "Pixel 8"
    assert first.screen_height == 800
    assert first.screen_width == 0
    assert first.first_install_time == 0


@pytest.mark.asyncio
async def test_collect_device_data_with_unreachable_location() -> None:
    backend = FakeBackend(location_error=True)
    enricher = LocationEnricher(SdkState(), backend, url=backend.location_url)

    data = await collect_device_data(FakeDeviceProvider(), enricher)

    assert data.device_id == "device-123"
    assert (data.country, data.region, data.city, data.timezone, data.language) == (
        "unknown",
        "unknown",
        "unknown",
        "UTC",
        "en-US",
    )
    assert data.engagement_time == 0
    assert data.session_count == 1


@pytest.mark.asyncio
async def test_collect_device_data_wraps_provider_errors() -> None:
    backend = FakeBackend()
    enricher = LocationEnricher(SdkState(), backend, url=backend.location_url)

    with pytest.raises(AppPricingDeviceError, match="device info unavailable"):
        await collect_device_data(FailingDeviceProvider(), enricher)
    assert backend.requests == []


@pytest.mark.asyncio
async def test_collect_device_data_rejects_bad_install_time() -> None:
    class BadInstallTime:
        async def get_device_info(self) -> DeviceInfo:
            return DeviceInfo(
                unique_id="x",
                fingerprint="y",
                brand="b",
                model="m",
                os="o",
                os_version="1",
                first_install_time=1e20,
            )

    backend = FakeBackend()
    enricher = LocationEnricher(SdkState(), backend, url=backend.location_url)

    with pytest.raises(AppPricingDeviceError):
        await collect_device_data(BadInstallTime(), enricher)
