"""Pydantic request models for client entrypoints.

These models provide a consistent "validate → normalize → execute" flow.
They are used internally by :class:`apppricing.client.AppPricingClient`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from apppricing.models._base import IsoTimestamp, utc_now_iso
from apppricing.models.payment import PaymentInfo


class PageViewRequest(BaseModel):
    """Page view with a normalized visit timestamp."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
    )

    page_name: str
    visited_at: IsoTimestamp = None

    @field_validator("page_name")
    @classmethod
    def _page_name_non_empty(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("page_name must be non-empty")
        return name

    @field_validator("visited_at")
    @classmethod
    def _default_to_now(cls, value: str | None) -> str:
        return value if value is not None else utc_now_iso()


class PaymentBatchRequest(BaseModel):
    """A non-empty batch of payment events."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    payments: list[PaymentInfo] = Field(min_length=1)

    @field_validator("payments", mode="before")
    @classmethod
    def _require_sequence(cls, value: Any) -> Any:
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
            raise ValueError("payments must be a list of payment objects")
        return list(value)
