"""Device registration and plan endpoints.

Endpoints:
  - POST /device-data
  - POST /device-data/{device_id}/increment-session
  - GET  /device-data/{device_id}/plans
"""

from __future__ import annotations

from pydantic import ValidationError

from apppricing._api._common import call_api, device_path
from apppricing._logging import log_message
from apppricing._transport import Err, Transport
from apppricing.models.device import DeviceData
from apppricing.models.plan import Plan
from apppricing.state import SdkState


async def send_device_data(state: SdkState, transport: Transport, device_data: DeviceData) -> bool:
    outcome = await call_api(state, transport, "/device-data", method="POST", payload=device_data.model_dump(mode="json"))
    return outcome.ok


async def increment_session(state: SdkState, transport: Transport, device_id: str) -> bool:
    outcome = await call_api(state, transport, device_path(device_id, "/increment-session"), method="POST")
    return outcome.ok


async def fetch_plans(state: SdkState, transport: Transport) -> list[Plan]:
    """Plans offered to the current device; empty on any failure."""
    outcome = await call_api(state, transport, device_path(state.device_id, "/plans"))
    if isinstance(outcome, Err):
        return []

    body = outcome.data
    items = body.get("plans") if isinstance(body, dict) else None
    if not items:
        return []
    if not isinstance(items, list):
        log_message(state, "Unexpected plans response", f"expected a list, got {type(items).__name__}")
        return []
    plans: list[Plan] = []
    for index, item in enumerate(items):
        try:
            plans.append(Plan.model_validate(item))
        except ValidationError as exc:
            log_message(state, f"Skipping invalid plan at index {index}", exc)
    return plans
