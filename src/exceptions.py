"""
Application exceptions.

Every error the API reports is an AppException. Subclasses only pick the
HTTP status, the machine-readable code and a default message; the exception
handlers in src.core.handlers render them all the same way.

    AppException
    ├── AuthenticationError      401  AUTHENTICATION_FAILED
    │   └── InvalidTokenError    401  INVALID_TOKEN
    ├── AuthorizationError       400  AUTHORIZATION_FAILED
    ├── ResourceError
    │   ├── NotFoundError        400  NOT_FOUND
    │   └── ConflictError        400  CONFLICT
    ├── ValidationError          400  VALIDATION_ERROR
    └── InternalError            500  INTERNAL_ERROR

A rejected share transition is a client error whatever the reason, so the
share-related errors all answer 400 and differ only by code.
"""

from typing import Any


class AppException(Exception):
    """
    Base class for errors rendered as JSON error responses.

    Attributes:
        message: Human-readable message
        status_code: HTTP status of the response
        error_code: Machine-readable code
        details: Extra data for the client (never internal state)
    """

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        if error_code is not None:
            self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Body of the error response, without the meta block."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


class AuthenticationError(AppException):
    """No verified identity on the request."""

    status_code = 401
    error_code = "AUTHENTICATION_FAILED"
    default_message = "Authentication required"


class InvalidTokenError(AuthenticationError):
    """Auth token present but invalid, expired or missing claims."""

    error_code = "INVALID_TOKEN"
    default_message = "Invalid or expired token"


class AuthorizationError(AppException):
    """The caller is not the identity a record is addressed to."""

    status_code = 400
    error_code = "AUTHORIZATION_FAILED"
    default_message = "Not allowed"


class ResourceError(AppException):
    """Base class for errors about a stored record."""

    status_code = 400


class NotFoundError(ResourceError):
    """
    Referenced record is absent, or not in the state the transition needs.

    Example:
        raise NotFoundError("Account share")                    # "Account share not found"
        raise NotFoundError(message="No pending share request found")
    """

    error_code = "NOT_FOUND"

    def __init__(
        self,
        resource: str = "Resource",
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message or f"{resource} not found", details=details)


class ConflictError(ResourceError):
    """A write would break a state invariant (e.g. a second active share)."""

    error_code = "CONFLICT"
    default_message = "Resource conflict"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details=details)


class ValidationError(AppException):
    """Malformed input or a missing required field."""

    status_code = 400
    error_code = "VALIDATION_ERROR"
    default_message = "Validation failed"


class InternalError(AppException):
    """Server-side failure; the message is safe to show to clients."""

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details=details)
