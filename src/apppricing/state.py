"""Mutable SDK state shared by the client and its collaborators."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from apppricing._constants import BASE_URL
from apppricing.config import AppPricingConfig


class SdkState(BaseModel):
    """Per-client SDK state.

    Parameters
    ----------
    api_key : str
        Key sent as ``X-API-KEY``. Set by ``initialize``.
    device_id : str
        Device id reported by the device info provider.
    base_url : str
        API base URL.
    initialized : bool
        One-way latch flipped by a completed ``initialize``. Only
        :meth:`reset` clears it.
    enable_logging : bool
        Whether :func:`apppricing._logging.log_message` emits anything.
        Read on every call, so toggling takes effect immediately.
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
    )

    api_key: str = ""
    device_id: str = ""
    base_url: str = BASE_URL
    initialized: bool = False
    enable_logging: bool = True

    def apply_config(self, config: AppPricingConfig, api_key: str) -> None:
        """Copy configuration into the state; *api_key* always wins.

        ``config.initialized`` is ignored: the latch belongs to ``initialize``.
        """
        self.base_url = config.base_url
        self.device_id = config.device_id
        self.enable_logging = config.enable_logging
        self.api_key = api_key

    def reset(self) -> None:
        """Restore every field to its default value."""
        for name, field in type(self).model_fields.items():
            setattr(self, name, field.get_default(call_default_factory=True))
