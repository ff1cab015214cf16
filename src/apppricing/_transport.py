"""HTTP transport that turns every request into an :data:`Outcome` value."""

from __future__ import annotations

import enum
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, Literal, Protocol, TypeVar

import aiohttp

from apppricing._logging import RequestDetails, log_message
from apppricing.exceptions import AppPricingTransportError

if TYPE_CHECKING:
    from apppricing.state import SdkState

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class ErrorKind(enum.StrEnum):
    """Why a request failed."""

    HTTP_STATUS = "http_status"
    """The server answered with a non-2xx status."""
    DECODE = "decode"
    """A 2xx response body was not valid JSON."""
    TRANSPORT = "transport"
    """The request never completed (DNS, connection, timeout...)."""


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful request carrying the decoded JSON body."""

    data: T

    @property
    def ok(self) -> Literal[True]:
        return True


@dataclass(frozen=True, slots=True)
class Err:
    """Failed request."""

    error: str
    kind: ErrorKind
    status_code: int | None = None

    @property
    def ok(self) -> Literal[False]:
        return False


Outcome = Ok[T] | Err


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def request(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: str | bytes | None = None,
    ) -> Outcome[Any]:
        ...


def _payload_for_log(body: str | bytes | None) -> Any:
    """Best-effort JSON view of *body* for diagnostics; the raw body when it is not JSON."""
    if body is None:
        return None
    try:
        return json.loads(body)
    except ValueError:
        return body


class HttpTransport:
    """aiohttp-backed transport.

    ``request`` never raises: non-2xx statuses, invalid JSON and network
    failures all come back as :class:`Err`.
    """

    def __init__(
        self,
        state: SdkState,
        http_session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._state = state
        self._http = http_session
        self._owns_session = http_session is None

    def _session(self) -> aiohttp.ClientSession:
        if self._http is None or (self._owns_session and self._http.closed):
            self._http = aiohttp.ClientSession()
            self._owns_session = True
        return self._http

    async def close(self) -> None:
        """Close the HTTP session if this transport created it."""
        if self._owns_session and self._http is not None:
            await self._http.close()
            self._http = None

    async def request(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: str | bytes | None = None,
    ) -> Outcome[Any]:
        """Send one request and classify the result.

        *body* is sent unchanged; it is only decoded to build log records.
        """
        method = (method or "GET").upper()
        payload = _payload_for_log(body)

        try:
            data = await self._send(url, method=method, headers=headers, body=body, payload=payload)
        except AppPricingTransportError as exc:
            return Err(str(exc), exc.kind, exc.status_code)
        except Exception as exc:
            _logger.debug("%s %s failed", method, url, exc_info=True)
            log_message(self._state, "Fetch error", exc, RequestDetails(method=method, url=url, payload=payload))
            return Err(str(exc) or type(exc).__name__, ErrorKind.TRANSPORT)
        return Ok(data)

    async def _send(
        self,
        url: str,
        *,
        method: str,
        headers: Mapping[str, str] | None,
        body: str | bytes | None,
        payload: Any,
    ) -> Any:
        _logger.debug("%s %s", method, url)

        async with self._session().request(method, url, data=body, headers=dict(headers or {})) as resp:
            status = resp.status
            if not 200 <= status < 300:
                try:
                    text = await resp.text()
                except (aiohttp.ClientError, ValueError):
                    text = ""
                reason = resp.reason or ""
                message = f"API error: {status} - {text or reason}"
                log_message(
                    self._state,
                    f"API error: {status} {reason}".rstrip(),
                    message,
                    RequestDetails(
                        method=method,
                        url=url,
                        status_code=status,
                        payload=payload,
                        response_text=text or None,
                    ),
                )
                raise AppPricingTransportError(
                    message,
                    kind=ErrorKind.HTTP_STATUS,
                    status_code=status,
                    url=url,
                )

            # Success records never carry the request payload.
            log_message(
                self._state,
                "API request successful",
                request=RequestDetails(method=method, url=url, status_code=status),
            )
            raw = await resp.read()

        try:
            return json.loads(raw)
        except ValueError as exc:
            log_message(
                self._state,
                "Invalid JSON response",
                exc,
                RequestDetails(method=method, url=url, status_code=status),
            )
            raise AppPricingTransportError(
                f"Invalid JSON from {url}: {raw[:200]!r}",
                kind=ErrorKind.DECODE,
                status_code=status,
                url=url,
            ) from exc
