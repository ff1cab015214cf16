"""Client configuration for apppricing."""

from __future__ import annotations

import dataclasses
import enum
import os
import warnings
from collections.abc import Mapping
from typing import Any

from apppricing._constants import BASE_URL, LOCATION_URL
from apppricing.exceptions import AppPricingConfigError
from apppricing.models.payment import PaymentType


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _require_http_url(name: str, value: str) -> None:
    if not isinstance(value, str) or not value.startswith(("http://", "https://")):
        raise AppPricingConfigError(f"{name} must be an http(s) URL, got {value!r}")


class PaymentValidation(enum.StrEnum):
    """How :meth:`AppPricingClient.track_payment` validates payment items.

    ``STANDARD``
        ``amount`` required and numeric, ``product_id`` a string when given,
        ``type`` one of :class:`PaymentType` when given.
    ``STRICT_TYPE``
        Deprecated. As ``STANDARD`` but ``type`` is mandatory and limited to
        :attr:`AppPricingConfig.strict_payment_types`.
    """

    STANDARD = "standard"
    STRICT_TYPE = "strict_type"


@dataclasses.dataclass(frozen=True)
class DeviceProfile:
    """Device identity overrides for :class:`~apppricing.device.HostDeviceInfoProvider`.

    Every field left as ``None`` is derived from the host interpreter.
    Embedding applications on real devices set these from the platform
    APIs they have access to.
    """

    unique_id: str | None = None
    fingerprint: str | None = None
    brand: str | None = None
    model: str | None = None
    os: str | None = None
    os_version: str | None = None
    screen_width: float | None = None
    screen_height: float | None = None
    first_install_time: float | None = None
    """Install timestamp in milliseconds since the epoch."""


@dataclasses.dataclass(frozen=True)
class AppPricingConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        API base URL. Defaults to the hosted AppPricing dashboard.
    device_id : str
        Preset device id. Replaced by the collected device id during
        :meth:`AppPricingClient.initialize`.
    initialized : bool
        Accepted for parity with the JavaScript SDK options. The
        initialization latch is owned by the client and never set from config.
    enable_logging : bool
        Emit SDK diagnostics through the ``apppricing`` logger.
    location_url : str
        Geolocation endpoint used to infer country, timezone and language.
    prefer_server_language : bool
        Use a ``language`` reported by the geolocation endpoint verbatim
        instead of deriving it from the country code.
    payment_validation : PaymentValidation
        Payment validation policy.
    strict_payment_types : tuple of str
        Allowed payment types under ``PaymentValidation.STRICT_TYPE``.
    device : DeviceProfile
        Device identity overrides.
    """

    base_url: str = BASE_URL
    device_id: str = ""
    initialized: bool = False
    enable_logging: bool = True
    location_url: str = LOCATION_URL
    prefer_server_language: bool = False
    payment_validation: PaymentValidation = PaymentValidation.STANDARD
    strict_payment_types: tuple[str, ...] = (PaymentType.NEW_SUB.value, PaymentType.RENEWAL.value)
    device: DeviceProfile = dataclasses.field(default_factory=DeviceProfile)

    def __post_init__(self) -> None:
        _require_http_url("base_url", self.base_url)
        _require_http_url("location_url", self.location_url)
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

        try:
            policy = PaymentValidation(self.payment_validation)
        except ValueError as exc:
            raise AppPricingConfigError(f"Unknown payment_validation: {self.payment_validation!r}") from exc
        object.__setattr__(self, "payment_validation", policy)
        if policy is PaymentValidation.STRICT_TYPE:
            warnings.warn(
                "PaymentValidation.STRICT_TYPE is deprecated; use PaymentValidation.STANDARD",
                DeprecationWarning,
                stacklevel=3,
            )

        strict_types = tuple(str(value) for value in self.strict_payment_types)
        known = {member.value for member in PaymentType}
        unknown = [value for value in strict_types if value not in known]
        if unknown:
            raise AppPricingConfigError(f"strict_payment_types contains unknown types: {unknown}")
        object.__setattr__(self, "strict_payment_types", strict_types)

        if isinstance(self.device, Mapping):
            object.__setattr__(self, "device", DeviceProfile(**self.device))
        elif not isinstance(self.device, DeviceProfile):
            raise AppPricingConfigError(f"device must be a DeviceProfile, got {type(self.device).__name__}")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any], *, base: AppPricingConfig | None = None) -> AppPricingConfig:
        """Build a configuration from a plain mapping.

        Accepts both the JavaScript SDK's camelCase option names
        (``baseUrl``, ``deviceId``, ``enableLogging``, ``initialized``) and
        the snake_case field names. ``apiKey`` is accepted and dropped:
        the key passed to ``initialize`` always wins. Fields not present
        keep the value from *base* (or the defaults).

        Raises
        ------
        AppPricingConfigError
            On unknown option names or invalid values.
        """
        field_names = {f.name for f in dataclasses.fields(cls)}
        kwargs: dict[str, Any] = {}
        unknown: list[str] = []
        for key, value in values.items():
            if key in _IGNORED_OPTIONS:
                continue
            name = _CAMEL_OPTIONS.get(key, key)
            if name not in field_names:
                unknown.append(key)
                continue
            kwargs[name] = value
        if unknown:
            raise AppPricingConfigError(f"Unknown configuration options: {sorted(unknown)}")

        try:
            if base is None:
                return cls(**kwargs)
            return dataclasses.replace(base, **kwargs)
        except TypeError as exc:
            raise AppPricingConfigError(f"Invalid configuration: {exc}") from exc

    @classmethod
    def from_env(cls, **overrides: Any) -> AppPricingConfig:
        """Create configuration from ``APPPRICING_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        device_kwargs: dict[str, Any] = {}
        _ENV_DEVICE_MAP = {
            "APPPRICING_DEVICE_UNIQUE_ID": "unique_id",
            "APPPRICING_DEVICE_FINGERPRINT": "fingerprint",
            "APPPRICING_DEVICE_BRAND": "brand",
            "APPPRICING_DEVICE_MODEL": "model",
            "APPPRICING_DEVICE_OS": "os",
            "APPPRICING_DEVICE_OS_VERSION": "os_version",
        }
        for env_key, field_name in _ENV_DEVICE_MAP.items():
            val = env.get(env_key)
            if val is not None:
                device_kwargs[field_name] = val

        _ENV_DEVICE_NUMERIC_MAP = {
            "APPPRICING_DEVICE_SCREEN_WIDTH": "screen_width",
            "APPPRICING_DEVICE_SCREEN_HEIGHT": "screen_height",
            "APPPRICING_DEVICE_FIRST_INSTALL_TIME": "first_install_time",
        }
        for env_key, field_name in _ENV_DEVICE_NUMERIC_MAP.items():
            val = env.get(env_key)
            if val is None:
                continue
            try:
                device_kwargs[field_name] = float(val)
            except ValueError as exc:
                raise AppPricingConfigError(f"{env_key} must be numeric, got {val!r}") from exc

        device_overrides = overrides.pop("device", None)
        if isinstance(device_overrides, Mapping):
            device_kwargs.update(device_overrides)
        elif isinstance(device_overrides, DeviceProfile):
            device_kwargs = dataclasses.asdict(device_overrides)

        config_kwargs: dict[str, Any] = {"device": DeviceProfile(**device_kwargs)}

        _ENV_CONFIG_MAP = {
            "APPPRICING_BASE_URL": "base_url",
            "APPPRICING_DEVICE_ID": "device_id",
            "APPPRICING_LOCATION_URL": "location_url",
            "APPPRICING_PAYMENT_VALIDATION": "payment_validation",
        }
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        if "enable_logging" not in overrides:
            config_kwargs["enable_logging"] = _env_bool(env.get("APPPRICING_ENABLE_LOGGING"), True)

        if "prefer_server_language" not in overrides:
            config_kwargs["prefer_server_language"] = _env_bool(
                env.get("APPPRICING_PREFER_SERVER_LANGUAGE"),
                False,
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)


_CAMEL_OPTIONS: dict[str, str] = {
    "baseUrl": "base_url",
    "deviceId": "device_id",
    "enableLogging": "enable_logging",
    "locationUrl": "location_url",
    "preferServerLanguage": "prefer_server_language",
    "paymentValidation": "payment_validation",
    "strictPaymentTypes": "strict_payment_types",
}

_IGNORED_OPTIONS = frozenset({"apiKey", "api_key"})
