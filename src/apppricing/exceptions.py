"""Custom exception hierarchy for apppricing.

None of these cross the public :class:`apppricing.client.AppPricingClient`
methods: the client converts them into ``False`` / empty results.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from apppricing._transport import ErrorKind


class AppPricingError(Exception):
    """Base exception for all apppricing errors."""


class AppPricingConfigError(AppPricingError):
    """Invalid or missing configuration."""


class AppPricingDeviceError(AppPricingError):
    """The device info provider failed to report device attributes."""


class AppPricingValidationError(AppPricingError):
    """Caller input rejected before any network call was made."""


class AppPricingTransportError(AppPricingError):
    """HTTP-level failure (network, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        kind: ErrorKind,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.kind = kind
        self.status_code = status_code
        self.url = url
        super().__init__(message)
