"""Base model and timestamp helpers shared by the AppPricing models.

Response models inherit from :class:`ApiModel` which provides:

* A ``model_validator(mode="before")`` that strips empty values
  (``None``, ``""``, whitespace) so the field default is used.
* A ``raw`` dict that captures the original payload.

:func:`to_iso8601` renders the timestamps the backend expects:
UTC with millisecond precision and a ``Z`` suffix.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def to_iso8601(value: datetime | date | str | int | float) -> str:
    """Normalize *value* to ``YYYY-MM-DDTHH:MM:SS.mmmZ``.

    Accepts datetimes (naive values are taken as UTC), dates (midnight
    UTC), ISO-8601 strings and epoch timestamps in milliseconds.

    Raises :class:`ValueError` for anything else.
    """
    if isinstance(value, bool):
        raise ValueError(f"not a timestamp: {value!r}")
    if isinstance(value, datetime):
        moment = _as_utc(value)
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day, tzinfo=UTC)
    elif isinstance(value, (int, float)):
        try:
            moment = datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError) as exc:
            raise ValueError(f"timestamp out of range: {value!r}") from exc
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = f"{text[:-1]}+00:00"
        moment = _as_utc(datetime.fromisoformat(text))
    else:
        raise ValueError(f"not a timestamp: {value!r}")
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now_iso() -> str:
    """Current time as an ISO-8601 UTC string."""
    return to_iso8601(datetime.now(UTC))


def _optional_iso8601(value: Any) -> str | None:
    if value is None:
        return None
    return to_iso8601(value)


IsoTimestamp = Annotated[str | None, BeforeValidator(_optional_iso8601)]
"""Annotated type that normalizes datetimes, dates, ISO strings and epoch ms to ISO-8601."""


class ApiModel(BaseModel):
    """Base for AppPricing API response models.

    Handles:
    * empty values (``None``, ``""``) → dropped so the field default is used
    * stashes the original API dict in ``raw``
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _drop_empty_values(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            cleaned[key] = value
        # Only auto-stash raw when not explicitly provided.
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned
