"""
Application error taxonomy.

Every service and dependency failure is raised as one AppError subclass; the
handlers in app.core.error_handlers render it as the uniform envelope
``{"message": ..., "errorCode": ..., "errors"?: [...]}``.
"""

from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Stable numeric codes returned to clients as ``errorCode``."""

    USER_NOT_FOUND = 1001
    USER_ALREADY_EXISTS = 1002
    INCORRECT_PASSWORD = 1003
    USER_TASK_LIST_NOT_FOUND = 1004
    USER_TASK_NOT_FOUND = 1005
    UNPROCESSABLE_ENTITY = 2001
    INTERNAL_EXCEPTION = 3001
    UNAUTHORIZED = 4001
    ROUTE_NOT_FOUND = 4004
    VALIDATION_ERROR = 5002
    TOKEN_NOT_FOUND = 6001
    SELF_DEMOTION = 7001


class AppError(Exception):
    """Base error carrying client-facing message, error code and HTTP status."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.errors = errors
        super().__init__(message)

    def to_payload(self) -> dict[str, Any]:
        """Envelope body; ``errors`` is only present when non-empty."""
        payload: dict[str, Any] = {
            "message": self.message,
            "errorCode": int(self.error_code),
        }
        if self.errors:
            payload["errors"] = self.errors
        return payload


class BadRequestError(AppError):
    """Business-rule violation (duplicate email, wrong password, self-demotion)."""

    status_code = 400


class NotFoundError(AppError):
    """Referenced entity (user, task, session token) does not exist."""

    status_code = 404


class UnauthorizedError(AppError):
    """Missing, invalid, expired or revoked credential, or insufficient role."""

    status_code = 401


class ValidationFailedError(AppError):
    """Request payload failed schema validation; carries field-level detail."""

    status_code = 400

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        super().__init__("Validation failed", ErrorCode.VALIDATION_ERROR, errors)


class InternalError(AppError):
    """Unexpected failure; the message never carries internals."""

    status_code = 500

    def __init__(self, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__("Something went wrong!", ErrorCode.INTERNAL_EXCEPTION)
