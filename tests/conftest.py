from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

import pytest

from apppricing._constants import BASE_URL, LOCATION_URL
from apppricing._transport import Err, ErrorKind, Ok, Outcome
from apppricing.client import AppPricingClient
from apppricing.config import AppPricingConfig
from apppricing.models.device import DeviceInfo

DEVICE_ID = "device-123"
API_KEY = "test-api-key"


@dataclass
class RecordedRequest:
    method: str
    url: str
    headers: dict[str, str]
    body: Any


@dataclass
class FakeBackend:
    """In-memory stand-in for the AppPricing API and the geolocation service."""

    base_url: str = BASE_URL
    location_url: str = LOCATION_URL
    location: Any = field(
        default_factory=lambda: {
            "ip": "203.0.113.7",
            "country_code": "FR",
            "country": "France",
            "region": "Ile-de-France",
            "city": "Paris",
            "timezone": "Europe/Paris",
        }
    )
    location_error: bool = False
    failing_paths: set[str] = field(default_factory=set)
    plans: list[dict[str, Any]] = field(
        default_factory=lambda: [
            {"id": 1, "name": "Monthly", "created_at": "2024-01-01T00:00:00Z", "updated_at": "2024-02-01T00:00:00Z"},
        ]
    )
    requests: list[RecordedRequest] = field(default_factory=list)

    async def request(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: str | bytes | None = None,
    ) -> Outcome[Any]:
        self.requests.append(
            RecordedRequest(
                method=method,
                url=url,
                headers=dict(headers or {}),
                body=None if body is None else json.loads(body),
            )
        )

        if url == self.location_url:
            if self.location_error:
                return Err("Cannot connect to host", ErrorKind.TRANSPORT)
            return Ok(self.location)

        path = url.removeprefix(self.base_url)
        if path in self.failing_paths:
            return Err("API error: 500 - boom", ErrorKind.HTTP_STATUS, 500)
        if path.endswith("/plans"):
            return Ok({"plans": self.plans})
        return Ok({"success": True})

    @property
    def api_requests(self) -> list[RecordedRequest]:
        return [r for r in self.requests if r.url != self.location_url]

    def calls_to(self, path: str) -> list[RecordedRequest]:
        return [r for r in self.requests if r.url == f"{self.base_url}{path}"]


class FakeDeviceProvider:
    def __init__(self, device_id: str = DEVICE_ID) -> None:
        self.device_id = device_id
        self.calls = 0

    async def get_device_info(self) -> DeviceInfo:
        self.calls += 1
        return DeviceInfo(
            unique_id=self.device_id,
            fingerprint="fp-abc",
            brand="Google",
            model="Pixel 8",
            os="Android",
            os_version="14",
            screen_width=411.43,
            screen_height=914.29,
            first_install_time=datetime(2024, 3, 1, 8, 0, tzinfo=UTC),
        )


class FailingDeviceProvider:
    async def get_device_info(self) -> DeviceInfo:
        raise RuntimeError("device info unavailable")


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def device_provider() -> FakeDeviceProvider:
    return FakeDeviceProvider()


@pytest.fixture
def client(backend: FakeBackend, device_provider: FakeDeviceProvider) -> AppPricingClient:
    return AppPricingClient(AppPricingConfig(), transport=backend, device_provider=device_provider)
