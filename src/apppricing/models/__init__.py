"""Data models for the AppPricing API."""

from apppricing.models._base import ApiModel, IsoTimestamp, to_iso8601, utc_now_iso
from apppricing.models.device import DeviceData, DeviceInfo, LocationData
from apppricing.models.payment import PaymentInfo, PaymentType
from apppricing.models.plan import Plan
from apppricing.models.requests import PageViewRequest, PaymentBatchRequest

__all__ = [
    "ApiModel",
    "DeviceData",
    "DeviceInfo",
    "IsoTimestamp",
    "LocationData",
    "PageViewRequest",
    "PaymentBatchRequest",
    "PaymentInfo",
    "PaymentType",
    "Plan",
    "to_iso8601",
    "utc_now_iso",
]
