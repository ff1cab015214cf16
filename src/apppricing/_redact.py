"""Masking of credential-like fields in logged payloads.

Request payloads and response bodies are logged in full on failures, so
only values under sensitive keys are replaced; nothing is shortened.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

REDACTED = "<redacted>"

_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "apikey",
        "api_key",
        "x-api-key",
        "authorization",
        "cookie",
        "password",
        "token",
        "receipt",
        "purchase_token",
    }
)


def _is_sensitive(key: object) -> bool:
    return str(key).lower() in _SENSITIVE_KEYS


def redact_for_log(value: Any) -> Any:
    """Copy of *value* with sensitive mapping entries masked at any depth."""
    if isinstance(value, Mapping):
        return {str(key): REDACTED if _is_sensitive(key) else redact_for_log(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [redact_for_log(item) for item in value]
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"
    return value
