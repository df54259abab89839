"""
Exception classes with error codes, and the HTTP status classifier
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

DEFAULT_ERROR_MESSAGE = "API error"


class ZoomkitError(Exception):
    """Base exception for zoomkit errors"""

    def __init__(self, message: str, code: str, details: str = ""):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output"""
        return {"code": self.code, "message": self.message, "details": self.details}


class ZoomAPIError(ZoomkitError):
    """Zoom API returned a non-2xx response"""

    default_code = "API_ERROR"

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        field_errors: dict[str, list[str]] | None = None,
        *,
        zoom_code: int | None = None,
        details: str = "",
    ):
        super().__init__(message, self.default_code, details)
        self.status_code = status_code
        self.field_errors = field_errors
        self.zoom_code = zoom_code

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["status_code"] = self.status_code
        if self.zoom_code is not None:
            data["zoom_code"] = self.zoom_code
        if self.field_errors:
            data["field_errors"] = self.field_errors
        return data


class AuthenticationError(ZoomAPIError):
    """Credentials are missing, invalid or expired"""

    default_code = "AUTH_FAILED"


class NotFoundError(ZoomAPIError):
    """Resource ID or path does not exist"""

    default_code = "NOT_FOUND"


class ValidationError(ZoomAPIError):
    """Request rejected as invalid; may carry field-level errors"""

    default_code = "VALIDATION_FAILED"


class ConnectionFailureError(ZoomkitError):
    """Network fault or timeout before an HTTP status was received"""

    def __init__(self, message: str, details: str = ""):
        super().__init__(message, "CONNECTION_FAILED", details)


class ConfigError(ZoomkitError):
    """Missing or invalid configuration"""

    def __init__(self, message: str, details: str = ""):
        super().__init__(message, "INVALID_CONFIG", details)


class ErrorKind(Enum):
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    GENERIC = "generic"


_EXCEPTION_BY_KIND: dict[ErrorKind, type[ZoomAPIError]] = {
    ErrorKind.UNAUTHORIZED: AuthenticationError,
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.VALIDATION: ValidationError,
    ErrorKind.GENERIC: ZoomAPIError,
}


@dataclass(frozen=True)
class ApiErrorInfo:
    """Result of classifying a failed response"""

    kind: ErrorKind
    message: str
    status_code: int
    field_errors: dict[str, list[str]] | None = None
    zoom_code: int | None = None

    def to_exception(self) -> ZoomAPIError:
        exc_cls = _EXCEPTION_BY_KIND[self.kind]
        return exc_cls(
            self.message,
            self.status_code,
            self.field_errors,
            zoom_code=self.zoom_code,
        )


def _kind_for_status(status_code: int) -> ErrorKind:
    if status_code in (401, 403):
        return ErrorKind.UNAUTHORIZED
    if status_code == 404:
        return ErrorKind.NOT_FOUND
    if status_code in (400, 422):
        return ErrorKind.VALIDATION
    return ErrorKind.GENERIC


def _field_errors(raw: Any) -> dict[str, list[str]] | None:
    """Normalize the ``errors`` member of an error body.

    Zoom sends either a mapping of field name to messages, or a list of
    ``{"field": ..., "message": ...}`` objects.
    """
    if isinstance(raw, dict):
        result: dict[str, list[str]] = {}
        for field_name, messages in raw.items():
            if isinstance(messages, list | tuple):
                result[str(field_name)] = [str(m) for m in messages]
            else:
                result[str(field_name)] = [str(messages)]
        return result
    if isinstance(raw, list):
        result = {}
        for entry in raw:
            if not isinstance(entry, dict):
                continue
            field_name = str(entry.get("field", ""))
            result.setdefault(field_name, []).append(str(entry.get("message", "")))
        return result
    return None


def classify_error(status_code: int, body: Any) -> ApiErrorInfo:
    """
    Classify a failed response.

    Args:
        status_code: HTTP status of the response
        body: Parsed JSON body (any type; non-dict bodies carry no detail)

    Returns:
        ApiErrorInfo describing the error kind, message and field errors
    """
    data = body if isinstance(body, dict) else {}
    message = data.get("message") or data.get("error") or DEFAULT_ERROR_MESSAGE
    zoom_code = data.get("code")
    kind = _kind_for_status(status_code)
    return ApiErrorInfo(
        kind=kind,
        message=str(message),
        status_code=status_code,
        field_errors=_field_errors(data.get("errors")) if kind is ErrorKind.VALIDATION else None,
        zoom_code=zoom_code if isinstance(zoom_code, int) else None,
    )
