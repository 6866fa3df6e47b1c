"""Error hierarchy for wordgate.

Re-exports the service call exceptions and the response helper.

Usage:
    from wordgate.core.errors import CircuitOpenError, error_to_response
"""

from wordgate.core.errors.base import REMEDIATIONS, error_to_response
from wordgate.core.errors.service import (
    CircuitOpenError,
    RetryableServiceError,
    ServiceCallError,
    ServiceConfigurationError,
    error_for_outcome,
)

__all__ = [
    "REMEDIATIONS",
    "error_to_response",
    "ServiceCallError",
    "CircuitOpenError",
    "RetryableServiceError",
    "ServiceConfigurationError",
    "error_for_outcome",
]
