"""Input validation for the tracking entrypoints.

Every check runs before any network call; failures raise
:class:`~apppricing.exceptions.AppPricingValidationError`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import Any

from pydantic import ValidationError

from apppricing.config import AppPricingConfig, PaymentValidation
from apppricing.exceptions import AppPricingValidationError
from apppricing.models.payment import PaymentInfo
from apppricing.models.requests import PageViewRequest, PaymentBatchRequest


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error.get('msg', 'invalid value')}" if location else str(error.get("msg"))


def validate_page_view(page_name: str, visited_at: datetime | date | str | float | None = None) -> PageViewRequest:
    try:
        return PageViewRequest(page_name=page_name, visited_at=visited_at)
    except ValidationError as exc:
        raise AppPricingValidationError(f"Invalid page view: {_first_error(exc)}") from exc


def validate_payments(
    payments: Sequence[PaymentInfo | Mapping[str, Any]],
    config: AppPricingConfig,
) -> list[PaymentInfo]:
    """Validate a payment batch under the configured policy.

    Raises
    ------
    AppPricingValidationError
        On an empty batch or the first invalid item.
    """
    if not payments:
        raise AppPricingValidationError("Payments array must be provided and cannot be empty")
    try:
        batch = PaymentBatchRequest(payments=payments)
    except ValidationError as exc:
        raise AppPricingValidationError(f"Invalid payment: {_first_error(exc)}") from exc

    if config.payment_validation is PaymentValidation.STRICT_TYPE:
        for payment in batch.payments:
            if payment.type is None or payment.type.value not in config.strict_payment_types:
                raise AppPricingValidationError(
                    f"Invalid payment type provided: {payment.type!s}; "
                    f"expected one of {list(config.strict_payment_types)}"
                )

    return batch.payments
