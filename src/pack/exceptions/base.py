"""
Application-level exceptions.

Every error the service/repository layers raise on purpose derives from AppError.
The HTTP layer never decides status codes itself: each exception carries a
canonical `error_code`, `http_status()` maps it to a status and `to_payload()`
renders the uniform error envelope.
"""

from datetime import datetime, timezone
from http import HTTPStatus
from typing import Iterable

GENERIC_ERROR_MESSAGE = "An unexpected internal server error occurred. Please try again later."


class AppError(Exception):
    """
    Base exception for service/repository errors.

    - message: human-friendly message (safe to show to clients for 4xx errors)
    - details: optional list of "field: message" strings for per-field failures
    - error_code: canonical short code used to pick the HTTP status
    """

    # Map canonical error_code -> HTTP status.
    ERROR_CODE_TO_STATUS = {
        "invalid_input": 400,
        "validation_failed": 400,
        "not_found": 404,
        "file_too_large": 413,
        "payload_too_large": 413,
        "storage_error": 500,
        "repository_error": 500,
    }

    def __init__(self, message: str, *, details: Iterable[str] | None = None,
                 error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = list(details) if details else None
        self.error_code = error_code

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.details:
            parts.append(f"details: {'; '.join(self.details)}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def http_status(self) -> int:
        """
        Return the HTTP status code that should accompany this error.
        Unknown or missing codes fall back to 500.
        """
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, 500)
        return 500

    def public_message(self) -> str:
        # server-side failures never leak their internal message
        if self.http_status() >= 500:
            return GENERIC_ERROR_MESSAGE
        return self.message

    def to_payload(self, path: str) -> dict:
        """
        Return the JSON-serializable error envelope:
            {"timestamp", "status", "error", "message", "path", "details"?}
        """
        return error_payload(
            self.http_status(),
            self.public_message(),
            path,
            details=self.details if self.http_status() < 500 else None,
        )


def error_payload(status: int, message: str, path: str, *, details: Iterable[str] | None = None) -> dict:
    """
    Build the error envelope for any status; `details` is omitted when empty.
    """
    payload = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "status": status,
        "error": HTTPStatus(status).phrase,
        "message": message,
        "path": path,
    }
    if details:
        payload["details"] = list(details)
    return payload


class InvalidInputError(AppError):
    """Raised when the request is missing required input (e.g. no files)."""

    def __init__(self, message: str):
        super().__init__(message, error_code="invalid_input")


class ValidationFailedError(AppError):
    """Raised when form fields violate their constraints; carries per-field details."""

    DEFAULT_MESSAGE = "Validation failed. Check 'details' for more information."

    def __init__(self, details: Iterable[str], message: str = DEFAULT_MESSAGE):
        super().__init__(message, details=details, error_code="validation_failed")


class ResourceNotFoundError(AppError):
    """Raised when a resource or attachment does not exist (or has no data)."""

    def __init__(self, message: str = "Not found"):
        super().__init__(message, error_code="not_found")


class FileSizeLimitExceededError(AppError):
    """Raised when a single uploaded file is larger than the configured maximum."""

    def __init__(self, message: str):
        super().__init__(message, error_code="file_too_large")


class UploadSizeExceededError(AppError):
    """Raised when the whole request body is larger than the transport ceiling."""

    def __init__(self, message: str):
        super().__init__(message, error_code="payload_too_large")


class AttachmentStorageError(AppError):
    """Raised when reading the bytes of an uploaded file fails."""

    def __init__(self, message: str):
        super().__init__(message, error_code="storage_error")


class RepositoryError(AppError):
    """Raised for database failures; the message is for logs, clients get a generic one."""

    def __init__(self, message: str, *, details: Iterable[str] | None = None):
        super().__init__(message, details=details, error_code="repository_error")


__all__ = [
    "GENERIC_ERROR_MESSAGE",
    "AppError",
    "error_payload",
    "InvalidInputError",
    "ValidationFailedError",
    "ResourceNotFoundError",
    "FileSizeLimitExceededError",
    "UploadSizeExceededError",
    "AttachmentStorageError",
    "RepositoryError",
]
