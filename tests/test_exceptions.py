"""Tests for the project exception taxonomy."""

import pytest

from src.exceptions import (
    APIRateLimitError,
    AppError,
    ConfigurationError,
    DataValidationError,
    ExternalServiceError,
    TimeoutExceededError,
)


def test_app_error_str_and_dict():
    err = AppError("CODE", "message", context={"table": "People"})
    assert str(err) == "CODE: message"
    assert err.to_dict() == {
        "error_code": "CODE",
        "message": "message",
        "context": {"table": "People"},
        "is_transient": False,
    }


@pytest.mark.parametrize(
    "cls,code,transient",
    [
        (ConfigurationError, "CONFIGURATION_ERROR", False),
        (DataValidationError, "DATA_VALIDATION_ERROR", False),
        (APIRateLimitError, "API_RATE_LIMIT_ERROR", True),
        (TimeoutExceededError, "TIMEOUT_EXCEEDED_ERROR", True),
        (ExternalServiceError, "EXTERNAL_SERVICE_ERROR", True),
    ],
)
def test_subclasses(cls, code, transient):
    err = cls("boom")
    assert isinstance(err, AppError)
    assert err.code == code
    assert err.transient is transient
    assert err.context == {}


def test_external_service_error_transient_override():
    assert ExternalServiceError("bad request", transient=False).transient is False
