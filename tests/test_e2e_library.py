from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

import apppricing
from apppricing.client import AppPricingClient
from apppricing.config import AppPricingConfig

from conftest import API_KEY, DEVICE_ID, FakeDeviceProvider


@dataclass
class FakeAppPricingServer:
    """aiohttp app playing both the AppPricing API and the geolocation service."""

    calls: list[tuple[str, str, dict[str, Any] | None, str | None]] = field(default_factory=list)
    location_status: int = 200
    register_status: int = 201

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/json", self._location)
        app.router.add_post("/api/device-data", self._register)
        app.router.add_post("/api/device-data/{device_id}/increment-session", self._increment)
        app.router.add_get("/api/device-data/{device_id}/plans", self._plans)
        app.router.add_post("/api/pages", self._ok)
        app.router.add_post("/api/payments", self._ok)
        return app

    async def _record(self, request: web.Request) -> None:
        raw = await request.read()
        self.calls.append(
            (
                request.method,
                request.path,
                json.loads(raw) if raw else None,
                request.headers.get("X-API-KEY"),
            )
        )

    async def _location(self, request: web.Request) -> web.Response:
        await self._record(request)
        if self.location_status != 200:
            return web.Response(status=self.location_status, text="geo down")
        return web.json_response({"ip": "198.51.100.4", "country_code": "DE", "country": "Germany", "city": "Berlin"})

    async def _register(self, request: web.Request) -> web.Response:
        await self._record(request)
        if self.register_status >= 400:
            return web.Response(status=self.register_status, text="registration rejected")
        return web.json_response({"id": 1}, status=self.register_status)

    async def _increment(self, request: web.Request) -> web.Response:
        await self._record(request)
        return web.json_response({"session_count": 2})

    async def _plans(self, request: web.Request) -> web.Response:
        await self._record(request)
        return web.json_response({"plans": [{"id": 10, "name": "Annual", "created_at": "2024-01-01", "updated_at": None}]})

    async def _ok(self, request: web.Request) -> web.Response:
        await self._record(request)
        return web.json_response({"success": True})


def _config(server: TestServer) -> AppPricingConfig:
    root = str(server.make_url("/")).rstrip("/")
    return AppPricingConfig(base_url=f"{root}/api", location_url=f"{root}/json")


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_client_happy_path_exercises_full_library() -> None:
    backend = FakeAppPricingServer()

    async with TestServer(backend.app()) as server:
        async with AppPricingClient(_config(server), device_provider=FakeDeviceProvider()) as client:
            assert await client.initialize(API_KEY) is True

            plans = await client.get_available_plans()
            assert [(p.id, p.name) for p in plans] == [(10, "Annual")]

            assert await client.track_page_view("paywall") is True
            assert await client.track_payment([{"type": "trial", "amount": 0, "currency": "EUR"}]) is True

    paths = [(method, path) for method, path, _body, _key in backend.calls]
    assert paths == [
        ("GET", "/json"),
        ("POST", "/api/device-data"),
        ("POST", f"/api/device-data/{DEVICE_ID}/increment-session"),
        ("GET", f"/api/device-data/{DEVICE_ID}/plans"),
        ("POST", "/api/pages"),
        ("POST", "/api/payments"),
    ]
    assert backend.calls[0][3] is None
    assert all(key == API_KEY for _m, _p, _b, key in backend.calls[1:])

    registration = backend.calls[1][2]
    assert registration is not None
    assert registration["language"] == "de-DE"
    assert registration["city"] == "Berlin"
    assert registration["region"] == "unknown"

    payment_body = backend.calls[-1][2]
    assert payment_body == {
        "device_id": DEVICE_ID,
        "payments": [{"type": "trial", "amount": 0, "currency": "EUR", "paid_at": None}],
    }


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_initialize_survives_geo_and_registration_failures() -> None:
    backend = FakeAppPricingServer(location_status=503, register_status=500)

    async with TestServer(backend.app()) as server:
        async with AppPricingClient(_config(server), device_provider=FakeDeviceProvider()) as client:
            assert await client.initialize(API_KEY) is True
            assert client.is_initialized is True

    registration = backend.calls[1][2]
    assert registration is not None
    assert registration["timezone"] == "UTC"
    assert registration["language"] == "en-US"
    assert backend.calls[2][1] == f"/api/device-data/{DEVICE_ID}/increment-session"


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_module_level_default_client(monkeypatch: pytest.MonkeyPatch) -> None:
    backend = FakeAppPricingServer()

    async with TestServer(backend.app()) as server:
        client = AppPricingClient(_config(server), device_provider=FakeDeviceProvider())
        monkeypatch.setattr("apppricing.client._default_client", client)
        try:
            assert apppricing.get_client() is client
            assert await apppricing.track_page_view("home") is False
            assert await apppricing.initialize(API_KEY) is True
            assert await apppricing.track_page_view("home") is True
            assert len(await apppricing.get_available_plans()) == 1
            apppricing.reset()
            assert client.is_initialized is False
        finally:
            await apppricing.close()

    assert apppricing.client._default_client is None
