"""SDK diagnostics.

All user-facing SDK messages go through :func:`log_message`, which honours
:attr:`SdkState.enable_logging` at call time and annotates messages with
the HTTP request they relate to.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

from apppricing._redact import redact_for_log

if TYPE_CHECKING:
    from apppricing.state import SdkState

_logger = logging.getLogger("apppricing")

_PREFIX = "AppPricing:"


class RequestDetails(BaseModel):
    """HTTP context attached to a diagnostic message."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    method: str = "GET"
    url: str = ""
    status_code: int | None = None
    payload: Any = None
    response_text: str | None = None

    def annotation(self) -> str:
        status = "" if self.status_code is None else str(self.status_code)
        parts = (self.method or "GET", self.url, status)
        return "[" + " ".join(part for part in parts if part) + "]"


def log_message(
    state: SdkState,
    message: str,
    error: BaseException | str | None = None,
    request: RequestDetails | None = None,
) -> None:
    """Emit an SDK diagnostic.

    Routed to ``ERROR`` when *error* is given, ``INFO`` otherwise. The
    request payload and response text are logged as separate records and
    never interpolated into the message format string.
    """
    if not state.enable_logging:
        return

    level = logging.ERROR if error else logging.INFO
    annotation = f" {request.annotation()}" if request is not None else ""

    if error:
        _logger.log(level, "%s %s%s: %s", _PREFIX, message, annotation, error)
    else:
        _logger.log(level, "%s %s%s", _PREFIX, message, annotation)

    if request is None:
        return
    if request.payload is not None:
        _logger.log(level, "Request payload: %s", redact_for_log(request.payload))
    if request.response_text:
        _logger.log(level, "Response body: %s", redact_for_log(request.response_text))
