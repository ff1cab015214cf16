"""Payment event models."""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, StrictStr

from apppricing.models._base import IsoTimestamp


class PaymentType(enum.StrEnum):
    """Payment event kinds understood by the ``/payments`` endpoint."""

    TRIAL = "trial"
    NEW_SUB = "new_sub"
    RENEWAL = "renewal"
    UPGRADE = "upgrade"
    DOWNGRADE = "downgrade"
    RESUBSCRIBE = "resubscribe"
    REFUND = "refund"
    OFFER = "offer"
    PROMO = "promo"


class PaymentInfo(BaseModel):
    """A single payment event.

    ``amount`` must be a real number (strings and booleans are rejected),
    ``product_id`` must be a string when present and ``type`` one of
    :class:`PaymentType`. ``paid_at`` accepts datetimes, dates, ISO strings
    or epoch milliseconds and is stored as an ISO-8601 string.

    Unknown keys are kept and sent to the backend as-is.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    type: PaymentType | None = None
    amount: StrictInt | StrictFloat
    product_id: StrictStr | None = None
    paid_at: IsoTimestamp = None
    currency: str | None = None
    details: str | None = None

    def to_wire(self) -> dict[str, Any]:
        """JSON body for this payment; ``paid_at`` is always present (``None`` when unset)."""
        data = self.model_dump(mode="json", exclude_unset=True)
        data["paid_at"] = self.paid_at
        return data
