"""Error-to-response mapping.

Provides a single place that turns a StandardError (or a ServiceCallError
wrapping one) into the response envelope used by the CLI and any other
outer surface.

Usage:
    from wordgate.core.errors.base import error_to_response

    try:
        data = outcome.unwrap()
    except ServiceCallError as e:
        return error_to_response(e)
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

from wordgate.core.errors.service import ServiceCallError
from wordgate.core.resilience.models import ErrorKind, StandardError

REMEDIATIONS: Dict[ErrorKind, str] = {
    ErrorKind.CIRCUIT_OPEN: "The service is failing repeatedly; wait for the circuit to admit a probe or reset it.",
    ErrorKind.NETWORK_ERROR: "Check connectivity to the service and its timeout settings.",
    ErrorKind.UNAUTHORIZED: "Check that the service API key is set and valid.",
    ErrorKind.FORBIDDEN: "The API key lacks permission for this operation.",
    ErrorKind.RATE_LIMITED: "Slow down; the provider is throttling requests.",
    ErrorKind.BAD_REQUEST: "The request payload was rejected; check its parameters.",
}


def error_to_response(
    exc: Union[ServiceCallError, StandardError],
) -> Optional[Dict[str, Any]]:
    """Convert a StandardError or ServiceCallError to an error envelope.

    Args:
        exc: The error to convert

    Returns:
        Dict with ``success``, ``data`` and ``error`` keys, or None if
        ``exc`` is neither type. ``data`` carries ``error_code``,
        ``retryable`` and, when known, ``http_status``, ``details`` and
        ``remediation``.
    """
    if isinstance(exc, ServiceCallError):
        error = exc.error
    elif isinstance(exc, StandardError):
        error = exc
    else:
        return None

    data: Dict[str, Any] = {
        "error_code": error.kind.value,
        "retryable": error.retryable,
    }
    if error.http_status is not None:
        data["http_status"] = error.http_status
    if error.details:
        data["details"] = error.details
    remediation = REMEDIATIONS.get(error.kind)
    if remediation:
        data["remediation"] = remediation

    return {
        "success": False,
        "data": data,
        "error": error.message,
    }
