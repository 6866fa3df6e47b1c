"""Error classification for retry and circuit-breaker decisions.

Normalizes raw transport outcomes (HTTP status codes and transport
exceptions) into the closed StandardError taxonomy. Nothing past this
module ever sees an httpx exception type.

Classification table:
    no status (connection reset / timeout) -> NETWORK_ERROR          retryable
    400 -> BAD_REQUEST             401 -> UNAUTHORIZED
    403 -> FORBIDDEN               404 -> NOT_FOUND
    429 -> RATE_LIMITED            (retryable)
    500 -> INTERNAL_SERVER_ERROR
    502 -> BAD_GATEWAY             (retryable)
    503 -> SERVICE_UNAVAILABLE     (retryable)
    504 -> GATEWAY_TIMEOUT         (retryable)
    anything else -> UNKNOWN_ERROR
"""

import asyncio
import socket
from typing import Any, Optional

import httpx

from wordgate.core.resilience.models import (
    ErrorKind,
    StandardError,
    TransportRequest,
    TransportResponse,
)

STATUS_KINDS: dict[int, ErrorKind] = {
    400: ErrorKind.BAD_REQUEST,
    401: ErrorKind.UNAUTHORIZED,
    403: ErrorKind.FORBIDDEN,
    404: ErrorKind.NOT_FOUND,
    429: ErrorKind.RATE_LIMITED,
    500: ErrorKind.INTERNAL_SERVER_ERROR,
    502: ErrorKind.BAD_GATEWAY,
    503: ErrorKind.SERVICE_UNAVAILABLE,
    504: ErrorKind.GATEWAY_TIMEOUT,
}

RETRYABLE_KINDS: frozenset[ErrorKind] = frozenset(
    {
        ErrorKind.NETWORK_ERROR,
        ErrorKind.RATE_LIMITED,
        ErrorKind.BAD_GATEWAY,
        ErrorKind.SERVICE_UNAVAILABLE,
        ErrorKind.GATEWAY_TIMEOUT,
    }
)

_NETWORK_EXCEPTIONS: tuple[type[BaseException], ...] = (
    httpx.TimeoutException,
    httpx.TransportError,
    asyncio.TimeoutError,
    TimeoutError,
    ConnectionError,
    socket.gaierror,
)


def is_retryable(kind: ErrorKind) -> bool:
    """Return True if failures of this kind are safe to retry."""
    return kind in RETRYABLE_KINDS


def classify_status(status: Optional[int]) -> tuple[ErrorKind, bool]:
    """Map an HTTP status (or its absence) to (kind, retryable).

    Args:
        status: HTTP status code, or None when no response was received

    Returns:
        Tuple of error kind and retryability verdict
    """
    if status is None:
        return ErrorKind.NETWORK_ERROR, True
    kind = STATUS_KINDS.get(status, ErrorKind.UNKNOWN_ERROR)
    return kind, is_retryable(kind)


def extract_error_message(body: Any) -> Optional[str]:
    """Pull a provider error message out of a JSON error body.

    Understands ``{"error": {"message": ...}}``, ``{"message": ...}`` and
    ``{"error": "..."}``.
    """
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if body.get("message"):
        return str(body["message"])
    if isinstance(error, str) and error:
        return error
    return None


def classify_response(
    response: TransportResponse,
    request: Optional[TransportRequest] = None,
) -> StandardError:
    """Classify an error response (status >= 400) into a StandardError."""
    kind, retryable = classify_status(response.status)
    message = extract_error_message(response.body) or f"HTTP Error {response.status}"
    details: dict[str, Any] = {"status": response.status}
    if request is not None:
        details.update(request.describe())
    retry_after = _parse_retry_after(response.headers)
    if retry_after is not None:
        details["retry_after"] = retry_after
    return StandardError(
        kind=kind,
        message=message,
        retryable=retryable,
        http_status=response.status,
        details=details,
    )


def classify_exception(
    error: BaseException,
    request: Optional[TransportRequest] = None,
) -> StandardError:
    """Classify a raised exception into a StandardError.

    Timeouts and connection-level failures become retryable NETWORK_ERRORs.
    ``httpx.HTTPStatusError`` is classified by its response status. Any
    other exception is a non-retryable UNKNOWN_ERROR.
    """
    details: dict[str, Any] = {"exception": type(error).__name__}
    if request is not None:
        details.update(request.describe())

    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
        kind, retryable = classify_status(status)
        body: Any
        try:
            body = error.response.json()
        except ValueError:
            body = None
        details["status"] = status
        return StandardError(
            kind=kind,
            message=extract_error_message(body) or str(error) or f"HTTP Error {status}",
            retryable=retryable,
            http_status=status,
            details=details,
        )

    if isinstance(error, _NETWORK_EXCEPTIONS):
        message = str(error) or "Request timed out or connection was lost"
        return StandardError(
            kind=ErrorKind.NETWORK_ERROR,
            message=message,
            retryable=True,
            details=details,
        )

    return StandardError(
        kind=ErrorKind.UNKNOWN_ERROR,
        message=str(error) or "An unexpected error occurred",
        retryable=False,
        details=details,
    )


def _parse_retry_after(headers: dict[str, str]) -> Optional[float]:
    """Parse a Retry-After header given in seconds."""
    for key, value in headers.items():
        if key.lower() == "retry-after":
            try:
                return float(value)
            except ValueError:
                return None
    return None
