"""Pricing plan model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class Plan(BaseModel):
    """A pricing plan available to the current device.

    Passed through from the server as-is: the documented fields are not
    type-checked and keys beyond them are kept.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    id: Any = None
    name: str | None = None
    created_at: Any = None
    updated_at: Any = None
