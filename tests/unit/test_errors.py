"""Unit tests for error classification utilities."""

import json

import pytest
from pydantic import ValidationError

from src.core.errors import ErrorCode, ErrorSeverity, classify_data_source_error
from src.domain.task import Task


def _validation_error() -> ValidationError:
    try:
        Task.model_validate({"nazwa": "no id"})
    except ValidationError as e:
        return e
    raise AssertionError("expected a validation error")


@pytest.mark.unit
class TestClassifyDataSourceError:
    """Tests for classify_data_source_error function."""

    def test_rate_limit(self):
        """Test classification of HTTP 429 responses."""
        response = classify_data_source_error(Exception("HTTP 429: Too many requests"))

        assert response.code == ErrorCode.ERR_RATE_LIMIT_EXCEEDED
        assert response.severity == ErrorSeverity.MEDIUM
        assert "wait" in response.suggestion.lower()

    def test_authentication_by_message(self):
        response = classify_data_source_error(Exception("401 Unauthorized"))

        assert response.code == ErrorCode.ERR_AUTHENTICATION_FAILED
        assert response.severity == ErrorSeverity.CRITICAL

    def test_authentication_by_type(self):
        response = classify_data_source_error(PermissionError("nope"))

        assert response.code == ErrorCode.ERR_AUTHENTICATION_FAILED

    @pytest.mark.parametrize(
        "exception",
        [ConnectionError("refused"), TimeoutError(), Exception("502 Bad Gateway"), OSError("Network is unreachable")],
    )
    def test_network(self, exception):
        assert classify_data_source_error(exception).code == ErrorCode.ERR_NETWORK_ERROR

    def test_pydantic_validation_error_is_payload(self):
        response = classify_data_source_error(_validation_error())

        assert response.code == ErrorCode.ERR_INVALID_PAYLOAD
        assert response.severity == ErrorSeverity.HIGH

    def test_json_decode_error_is_payload(self):
        try:
            json.loads("{not json")
        except json.JSONDecodeError as e:
            error = e

        assert classify_data_source_error(error).code == ErrorCode.ERR_INVALID_PAYLOAD

    def test_payload_checked_before_network(self):
        """A validation message mentioning a connection is still a payload problem."""
        response = classify_data_source_error(ValueError("1 validation error: connection field required"))

        assert response.code == ErrorCode.ERR_INVALID_PAYLOAD

    def test_unknown(self):
        response = classify_data_source_error(RuntimeError("something odd"))

        assert response.code == ErrorCode.ERR_UNKNOWN
        assert response.message == "An unexpected error occurred."

