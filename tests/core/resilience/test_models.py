"""Tests for StandardError and CallOutcome."""

import pytest

from wordgate.core.errors import (
    CircuitOpenError,
    RetryableServiceError,
    ServiceCallError,
    ServiceConfigurationError,
)
from wordgate.core.resilience import CallOutcome, ErrorKind, StandardError


class TestStandardError:
    def test_to_dict_omits_empty_fields(self):
        error = StandardError(kind=ErrorKind.NOT_FOUND, message="missing")
        assert error.to_dict() == {
            "kind": "NOT_FOUND",
            "message": "missing",
            "retryable": False,
        }

    def test_to_dict_includes_status_and_details(self):
        error = StandardError(
            kind=ErrorKind.RATE_LIMITED,
            message="slow down",
            retryable=True,
            http_status=429,
            details={"retry_after": 3.0},
        )
        assert error.to_dict()["http_status"] == 429
        assert error.to_dict()["details"] == {"retry_after": 3.0}

    def test_taxonomy_is_closed(self):
        assert {kind.value for kind in ErrorKind} == {
            "CIRCUIT_OPEN",
            "NETWORK_ERROR",
            "BAD_REQUEST",
            "UNAUTHORIZED",
            "FORBIDDEN",
            "NOT_FOUND",
            "RATE_LIMITED",
            "INTERNAL_SERVER_ERROR",
            "BAD_GATEWAY",
            "SERVICE_UNAVAILABLE",
            "GATEWAY_TIMEOUT",
            "UNKNOWN_ERROR",
        }


class TestCallOutcome:
    """Tests for outcome constructors and unwrap()."""

    def test_ok(self):
        outcome = CallOutcome.ok({"text": "hi"}, 201)
        assert outcome.success
        assert outcome.kind is None
        assert outcome.unwrap() == {"text": "hi"}
        assert outcome.to_dict() == {
            "success": True,
            "status": 201,
            "fallback": False,
            "data": {"text": "hi"},
        }

    def test_fail_takes_status_from_error(self):
        outcome = CallOutcome.fail(
            StandardError(kind=ErrorKind.FORBIDDEN, message="no", http_status=403)
        )
        assert not outcome.success
        assert outcome.status == 403
        assert outcome.kind == ErrorKind.FORBIDDEN
        assert outcome.to_dict()["error"]["kind"] == "FORBIDDEN"

    def test_degraded_keeps_cause_and_unwraps_to_payload(self):
        cause = StandardError(kind=ErrorKind.CIRCUIT_OPEN, message="open")
        outcome = CallOutcome.degraded("fallback-data", cause)

        assert outcome.success
        assert outcome.fallback
        assert outcome.error is cause
        assert outcome.unwrap() == "fallback-data"

    @pytest.mark.parametrize(
        "error, exc_type",
        [
            (
                StandardError(
                    kind=ErrorKind.CIRCUIT_OPEN,
                    message="open",
                    details={"retry_after_ms": 1500},
                ),
                CircuitOpenError,
            ),
            (
                StandardError(
                    kind=ErrorKind.UNAUTHORIZED,
                    message="No API key provided for Grok AI",
                    http_status=401,
                    details={"missing": ["GROK_API_KEY"]},
                ),
                ServiceConfigurationError,
            ),
            (
                StandardError(kind=ErrorKind.SERVICE_UNAVAILABLE, message="503", retryable=True),
                RetryableServiceError,
            ),
            (StandardError(kind=ErrorKind.NOT_FOUND, message="404"), ServiceCallError),
        ],
    )
    def test_unwrap_raises_matching_error(self, error, exc_type):
        with pytest.raises(exc_type) as exc_info:
            CallOutcome.fail(error).unwrap()

        assert type(exc_info.value) is exc_type
        assert exc_info.value.error is error
        assert exc_info.value.kind == error.kind

    def test_unwrap_exposes_error_specific_attributes(self):
        with pytest.raises(CircuitOpenError) as open_info:
            CallOutcome.fail(
                StandardError(
                    kind=ErrorKind.CIRCUIT_OPEN,
                    message="open",
                    details={"retry_after_ms": 1500},
                )
            ).unwrap()
        assert open_info.value.retry_after_ms == 1500

        with pytest.raises(ServiceConfigurationError) as config_info:
            CallOutcome.fail(
                StandardError(
                    kind=ErrorKind.UNAUTHORIZED,
                    message="missing",
                    details={"missing": ["REPLICATE_API_TOKEN"]},
                )
            ).unwrap()
        assert config_info.value.missing == ["REPLICATE_API_TOKEN"]

    def test_unauthorized_from_provider_is_plain_service_error(self):
        with pytest.raises(ServiceCallError) as exc_info:
            CallOutcome.fail(
                StandardError(kind=ErrorKind.UNAUTHORIZED, message="bad key", http_status=401)
            ).unwrap()
        assert type(exc_info.value) is ServiceCallError
        assert str(exc_info.value) == "[UNAUTHORIZED] bad key"

    def test_failure_without_error_unwraps_to_unknown(self):
        with pytest.raises(ServiceCallError) as exc_info:
            CallOutcome(success=False).unwrap()
        assert exc_info.value.kind == ErrorKind.UNKNOWN_ERROR
