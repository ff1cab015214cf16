"""Shared helpers for AppPricing endpoint modules.

This module centralizes the most repeated patterns:
- building the authenticated request headers
- joining endpoint paths onto the configured base URL
- JSON-encoding request bodies

It is internal to apppricing and may change at any time.
"""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import quote

from apppricing._transport import Outcome, Transport
from apppricing.state import SdkState


def auth_headers(state: SdkState) -> dict[str, str]:
    """Headers for every backend call; the API key is read at call time."""
    return {
        "Content-Type": "application/json",
        "X-API-KEY": state.api_key,
    }


def device_path(device_id: str, suffix: str = "") -> str:
    return f"/device-data/{quote(device_id, safe='')}{suffix}"


async def call_api(
    state: SdkState,
    transport: Transport,
    path: str,
    *,
    method: str = "GET",
    payload: Any = None,
) -> Outcome[Any]:
    """Call ``{base_url}{path}`` with auth headers and an optional JSON body."""
    body = None if payload is None else json.dumps(payload, separators=(",", ":"))
    return await transport.request(
        f"{state.base_url}{path}",
        method=method,
        headers=auth_headers(state),
        body=body,
    )
