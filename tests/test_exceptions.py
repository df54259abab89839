"""
Tests for error classification and exception payloads
"""

import pytest

from zoomkit.exceptions import (
    ApiErrorInfo,
    AuthenticationError,
    ConfigError,
    ConnectionFailureError,
    ErrorKind,
    NotFoundError,
    ValidationError,
    ZoomAPIError,
    ZoomkitError,
    classify_error,
)


class TestClassifyError:
    def test_unauthorized(self):
        info = classify_error(401, {"message": "Invalid token"})

        assert info == ApiErrorInfo(ErrorKind.UNAUTHORIZED, "Invalid token", 401)

    def test_forbidden_is_unauthorized(self):
        assert classify_error(403, {}).kind is ErrorKind.UNAUTHORIZED

    def test_not_found(self):
        assert classify_error(404, {"message": "User does not exist"}).kind is ErrorKind.NOT_FOUND

    @pytest.mark.parametrize("status", [400, 422])
    def test_validation(self, status):
        info = classify_error(status, {"message": "Bad", "errors": {"topic": ["required"]}})

        assert info.kind is ErrorKind.VALIDATION
        assert info.field_errors == {"topic": ["required"]}

    @pytest.mark.parametrize("status", [409, 429, 500, 503])
    def test_everything_else_is_generic(self, status):
        assert classify_error(status, {}).kind is ErrorKind.GENERIC

    def test_message_falls_back_to_error_field(self):
        assert classify_error(500, {"error": "boom"}).message == "boom"

    def test_message_prefers_message_over_error(self):
        assert classify_error(500, {"message": "first", "error": "second"}).message == "first"

    def test_default_message(self):
        assert classify_error(500, None).message == "API error"
        assert classify_error(500, ["not", "an", "object"]).message == "API error"

    def test_list_shaped_field_errors(self):
        body = {
            "message": "Validation Failed.",
            "errors": [
                {"field": "topic", "message": "required"},
                {"field": "topic", "message": "too long"},
                {"field": "start_time", "message": "invalid"},
            ],
        }

        info = classify_error(400, body)

        assert info.field_errors == {
            "topic": ["required", "too long"],
            "start_time": ["invalid"],
        }

    def test_scalar_field_error_is_wrapped(self):
        assert classify_error(422, {"errors": {"email": "taken"}}).field_errors == {
            "email": ["taken"]
        }

    @pytest.mark.parametrize("status", [401, 404, 500])
    def test_field_errors_only_for_validation(self, status):
        body = {"message": "x", "errors": [{"field": "topic", "message": "required"}]}
        assert classify_error(status, body).field_errors is None

    def test_zoom_code_captured(self):
        assert classify_error(404, {"code": 3001, "message": "x"}).zoom_code == 3001


class TestToException:
    @pytest.mark.parametrize(
        "status,exc_type",
        [
            (401, AuthenticationError),
            (404, NotFoundError),
            (422, ValidationError),
            (500, ZoomAPIError),
        ],
    )
    def test_exception_type(self, status, exc_type):
        exc = classify_error(status, {"message": "m"}).to_exception()

        assert type(exc) is exc_type
        assert exc.message == "m"
        assert exc.status_code == status

    def test_all_api_errors_share_base(self):
        exc = classify_error(401, {}).to_exception()
        assert isinstance(exc, ZoomAPIError)
        assert isinstance(exc, ZoomkitError)


class TestErrorPayloads:
    def test_validation_to_dict(self):
        exc = ValidationError("Bad", 422, {"topic": ["required"]})

        assert exc.to_dict() == {
            "code": "VALIDATION_FAILED",
            "message": "Bad",
            "details": "",
            "status_code": 422,
            "field_errors": {"topic": ["required"]},
        }

    def test_error_codes(self):
        assert AuthenticationError("x").code == "AUTH_FAILED"
        assert NotFoundError("x").code == "NOT_FOUND"
        assert ZoomAPIError("x").code == "API_ERROR"
        assert ConnectionFailureError("x").code == "CONNECTION_FAILED"
        assert ConfigError("x").code == "INVALID_CONFIG"

    def test_str_is_message(self):
        assert str(NotFoundError("Meeting not found", 404)) == "Meeting not found"
