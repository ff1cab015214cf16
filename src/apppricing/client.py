"""High-level async client for the AppPricing API."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import Any

import aiohttp

from apppricing._api.devices import fetch_plans, increment_session, send_device_data
from apppricing._api.events import send_page_view, send_payments
from apppricing._logging import log_message
from apppricing._transport import HttpTransport, Transport
from apppricing.config import AppPricingConfig
from apppricing.device import DeviceInfoProvider, HostDeviceInfoProvider, collect_device_data
from apppricing.exceptions import AppPricingConfigError, AppPricingValidationError
from apppricing.location import LocationEnricher
from apppricing.models.payment import PaymentInfo
from apppricing.models.plan import Plan
from apppricing.state import SdkState
from apppricing.validation import validate_page_view, validate_payments

_logger = logging.getLogger(__name__)

_NOT_INITIALIZED = "SDK not initialized. Call initialize() first"


class AppPricingClient:
    """Async client for the AppPricing API.

    Usage::

        async with AppPricingClient() as client:
            if await client.initialize("api-key"):
                plans = await client.get_available_plans()

    No public method raises: failures are logged and reported as ``False``
    or an empty list.
    """

    def __init__(
        self,
        config: AppPricingConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        device_provider: DeviceInfoProvider | None = None,
    ) -> None:
        self._initial_config = config or AppPricingConfig()
        self._config = self._initial_config
        self._state = SdkState()
        self._seed_state()
        self._http_transport: HttpTransport | None = None
        if transport is None:
            self._http_transport = HttpTransport(self._state, session)
            transport = self._http_transport
        self._transport: Transport = transport
        self._device_provider = device_provider
        self._initializing: asyncio.Task[bool] | None = None
        self._generation = 0

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> AppPricingClient:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Release the HTTP session if this client created it."""
        if self._http_transport is not None:
            await self._http_transport.close()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> SdkState:
        return self._state

    @property
    def config(self) -> AppPricingConfig:
        return self._config

    @property
    def is_initialized(self) -> bool:
        return self._state.initialized

    def reset(self) -> None:
        """Drop all SDK state, including the initialization latch.

        An initialization still in flight is abandoned: it will not flip
        the latch once it completes.
        """
        self._generation += 1
        self._initializing = None
        self._config = self._initial_config
        self._state.reset()
        self._seed_state()

    def _seed_state(self) -> None:
        self._state.base_url = self._config.base_url
        self._state.device_id = self._config.device_id
        self._state.enable_logging = self._config.enable_logging

    def _merge_config(self, config: AppPricingConfig | Mapping[str, Any] | None) -> AppPricingConfig:
        if config is None:
            return self._config
        if isinstance(config, AppPricingConfig):
            return config
        if isinstance(config, Mapping):
            return AppPricingConfig.from_mapping(config, base=self._config)
        raise AppPricingConfigError(f"config must be an AppPricingConfig or a mapping, got {type(config).__name__}")

    def _require_ready(self) -> bool:
        if not self._state.initialized:
            log_message(self._state, _NOT_INITIALIZED)
            return False
        if not self._state.device_id:
            log_message(self._state, "SDK not initialized or deviceId missing")
            return False
        return True

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    async def initialize(
        self,
        api_key: str,
        config: AppPricingConfig | Mapping[str, Any] | None = None,
    ) -> bool:
        """Register this device and start a session.

        Returns ``True`` immediately when already initialized. Concurrent
        calls share a single in-flight initialization and its result.
        Device registration and session counting are best-effort: their
        failures are logged and initialization still succeeds. Only a
        failure to collect device data returns ``False``.
        """
        try:
            if self._state.initialized:
                return True

            if not isinstance(api_key, str) or not api_key.strip():
                log_message(self._state, "API key is required")
                return False

            task = self._initializing
            if task is None:
                task = asyncio.create_task(self._initialize(api_key.strip(), config, self._generation))
                task.add_done_callback(self._clear_initializing)
                self._initializing = task
            return await asyncio.shield(task)
        except Exception as exc:
            log_message(self._state, "Initialization failed", exc)
            return False

    def _clear_initializing(self, task: asyncio.Task[bool]) -> None:
        if self._initializing is task:
            self._initializing = None

    async def _initialize(
        self,
        api_key: str,
        config: AppPricingConfig | Mapping[str, Any] | None,
        generation: int,
    ) -> bool:
        try:
            if generation != self._generation:
                return False
            try:
                merged = self._merge_config(config)
            except AppPricingConfigError as exc:
                log_message(self._state, "Invalid configuration", exc)
                return False
            self._config = merged
            self._state.apply_config(merged, api_key)

            provider = self._device_provider or HostDeviceInfoProvider(merged.device)
            enricher = LocationEnricher(
                self._state,
                self._transport,
                url=merged.location_url,
                prefer_server_language=merged.prefer_server_language,
            )
            try:
                device_data = await collect_device_data(provider, enricher)
            except Exception as exc:
                log_message(self._state, "Error during initialization", exc)
                return False
            if generation != self._generation:
                return False
            self._state.device_id = device_data.device_id

            if not await send_device_data(self._state, self._transport, device_data):
                log_message(self._state, "Failed to send device data, but continuing initialization")

            if not await increment_session(self._state, self._transport, device_data.device_id):
                log_message(self._state, "Failed to increment session, but continuing initialization")

            if generation != self._generation:
                return False
            self._state.initialized = True
            log_message(self._state, "Successfully initialized")
            return True
        except Exception as exc:
            _logger.debug("initialize failed", exc_info=True)
            log_message(self._state, "Initialization failed", exc)
            return False

    # ------------------------------------------------------------------
    # Plans & tracking
    # ------------------------------------------------------------------

    async def get_available_plans(self) -> list[Plan]:
        """Plans offered to this device; empty when uninitialized or on failure."""
        if not self._state.initialized:
            log_message(self._state, _NOT_INITIALIZED)
            return []
        try:
            return await fetch_plans(self._state, self._transport)
        except Exception as exc:
            log_message(self._state, "Failed to fetch plans", exc)
            return []

    async def track_page_view(
        self,
        page_name: str,
        visited_at: datetime | date | str | float | None = None,
    ) -> bool:
        """Record a page view.

        Parameters
        ----------
        page_name : str
            Name or identifier of the page viewed.
        visited_at : datetime, date, str or float, optional
            When the page was visited (epoch milliseconds for numbers).
            Defaults to now.
        """
        if not self._require_ready():
            return False
        try:
            request = validate_page_view(page_name, visited_at)
        except AppPricingValidationError as exc:
            log_message(self._state, str(exc))
            return False
        try:
            return await send_page_view(self._state, self._transport, request)
        except Exception as exc:
            log_message(self._state, "Failed to track page view", exc)
            return False

    async def track_payment(self, payments: Sequence[PaymentInfo | Mapping[str, Any]]) -> bool:
        """Record one or more payment events.

        Every item is validated before anything is sent; a single invalid
        item rejects the whole batch.
        """
        if not self._require_ready():
            return False
        try:
            validated = validate_payments(payments, self._config)
        except AppPricingValidationError as exc:
            log_message(self._state, str(exc))
            return False
        try:
            return await send_payments(self._state, self._transport, validated)
        except Exception as exc:
            log_message(self._state, "Failed to track payment", exc)
            return False


# ----------------------------------------------------------------------
# Process-wide default client
# ----------------------------------------------------------------------

_default_client: AppPricingClient | None = None


def get_client() -> AppPricingClient:
    """Return the process-wide default client, creating it on first use."""
    global _default_client
    if _default_client is None:
        _default_client = AppPricingClient()
    return _default_client


async def initialize(api_key: str, config: AppPricingConfig | Mapping[str, Any] | None = None) -> bool:
    return await get_client().initialize(api_key, config)


async def get_available_plans() -> list[Plan]:
    return await get_client().get_available_plans()


async def track_page_view(page_name: str, visited_at: datetime | date | str | float | None = None) -> bool:
    return await get_client().track_page_view(page_name, visited_at)


async def track_payment(payments: Sequence[PaymentInfo | Mapping[str, Any]]) -> bool:
    return await get_client().track_payment(payments)


def reset() -> None:
    """Reset the default client's state."""
    get_client().reset()


async def close() -> None:
    """Close and discard the default client."""
    global _default_client
    client, _default_client = _default_client, None
    if client is not None:
        await client.close()
