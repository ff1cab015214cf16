"""Event tracking endpoints.

Endpoints:
  - POST /pages
  - POST /payments
"""

from __future__ import annotations

from collections.abc import Sequence

from apppricing._api._common import call_api
from apppricing._transport import Transport
from apppricing.models.payment import PaymentInfo
from apppricing.models.requests import PageViewRequest
from apppricing.state import SdkState


async def send_page_view(state: SdkState, transport: Transport, request: PageViewRequest) -> bool:
    payload = {
        "device_id": state.device_id,
        "page_name": request.page_name,
        "visited_at": request.visited_at,
    }
    outcome = await call_api(state, transport, "/pages", method="POST", payload=payload)
    return outcome.ok


async def send_payments(state: SdkState, transport: Transport, payments: Sequence[PaymentInfo]) -> bool:
    payload = {
        "device_id": state.device_id,
        "payments": [payment.to_wire() for payment in payments],
    }
    outcome = await call_api(state, transport, "/payments", method="POST", payload=payload)
    return outcome.ok
