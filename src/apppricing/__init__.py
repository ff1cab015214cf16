"""apppricing - Async Python client for the AppPricing pricing and analytics API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("apppricing")
except PackageNotFoundError:
    __version__ = "0+local"
from apppricing._transport import Err, ErrorKind, Ok, Outcome
from apppricing.client import (
    AppPricingClient,
    close,
    get_available_plans,
    get_client,
    initialize,
    reset,
    track_page_view,
    track_payment,
)
from apppricing.config import AppPricingConfig, DeviceProfile, PaymentValidation
from apppricing.device import DeviceInfoProvider, HostDeviceInfoProvider
from apppricing.exceptions import (
    AppPricingConfigError,
    AppPricingDeviceError,
    AppPricingError,
    AppPricingTransportError,
    AppPricingValidationError,
)
from apppricing.models import DeviceData, DeviceInfo, LocationData, PaymentInfo, PaymentType, Plan
from apppricing.state import SdkState

__all__ = [
    "__version__",
    "AppPricingClient",
    "AppPricingConfig",
    "AppPricingConfigError",
    "AppPricingDeviceError",
    "AppPricingError",
    "AppPricingTransportError",
    "AppPricingValidationError",
    "DeviceData",
    "DeviceInfo",
    "DeviceInfoProvider",
    "DeviceProfile",
    "Err",
    "ErrorKind",
    "HostDeviceInfoProvider",
    "LocationData",
    "Ok",
    "Outcome",
    "PaymentInfo",
    "PaymentType",
    "PaymentValidation",
    "Plan",
    "SdkState",
    "close",
    "get_available_plans",
    "get_client",
    "initialize",
    "reset",
    "track_page_view",
    "track_payment",
]
