"""Map raw failure signals to issue codes."""

import asyncio
import socket
from typing import Optional

from offline_resilience.connectivity.models import IssueCode


def classify_status_code(status: int) -> Optional[IssueCode]:
    """Classify an HTTP status code.

    Args:
        status: HTTP response status

    Returns:
        The matching IssueCode, or None for non-error statuses
    """
    if status < 400:
        return None
    if status in (401, 403):
        return IssueCode.API_AUTHENTICATION_FAILED
    if status == 429:
        return IssueCode.API_RATE_LIMITED
    if status == 503:
        return IssueCode.API_SERVICE_UNAVAILABLE
    if status >= 500:
        return IssueCode.API_SERVER_DOWN
    return IssueCode.UNKNOWN_ERROR


def _status_of(exc: BaseException) -> Optional[int]:
    for attr in ("status_code", "status"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    response = getattr(exc, "response", None)
    value = getattr(response, "status_code", None)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def classify_exception(exc: BaseException) -> IssueCode:
    """Classify an exception raised by a network operation.

    HTTP client errors that carry a status (``status_code``, ``status`` or
    ``response.status_code``) are classified by that status. Order matters:
    timeouts and DNS failures are OSError subclasses, so they are checked
    before the generic connection case.

    Args:
        exc: The exception to classify

    Returns:
        The matching IssueCode, UNKNOWN_ERROR when nothing matches
    """
    status = _status_of(exc)
    if status is not None:
        return classify_status_code(status) or IssueCode.UNKNOWN_ERROR

    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, socket.timeout)):
        return IssueCode.NETWORK_TIMEOUT
    if isinstance(exc, socket.gaierror):
        return IssueCode.DNS_RESOLUTION_FAILED
    if isinstance(exc, (ConnectionError, OSError)):
        return IssueCode.NETWORK_OFFLINE
    return IssueCode.UNKNOWN_ERROR
