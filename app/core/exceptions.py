"""
Application errors for VeMeet.

Every error carries an HTTP status and a machine-readable ``ErrorCode``;
the handlers in ``exception_handlers`` turn them into
``{"detail", "code", "field"?, "metadata"?}`` responses.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes shared with the client apps"""

    # 401
    AUTH_INVALID_CREDENTIALS = "AUTH_INVALID_CREDENTIALS"
    AUTH_TOKEN_EXPIRED = "AUTH_TOKEN_EXPIRED"
    AUTH_TOKEN_INVALID = "AUTH_TOKEN_INVALID"
    AUTH_NOT_AUTHENTICATED = "AUTH_NOT_AUTHENTICATED"

    # 404, 409
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    RESOURCE_ALREADY_EXISTS = "RESOURCE_ALREADY_EXISTS"
    RESOURCE_CONFLICT = "RESOURCE_CONFLICT"

    # 400, 422
    INVALID_OPERATION = "INVALID_OPERATION"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # 5xx
    SERVER_ERROR = "SERVER_ERROR"


class AppException(Exception):
    """
    Base class for errors that map onto an API response.

    Subclasses pick their status, code and default message as class
    attributes; instances may override the message and point at a field.
    """

    status_code: int = 500
    code: ErrorCode = ErrorCode.SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        field: str | None = None,
        metadata: dict[str, Any] | None = None,
    ):
        self.message = message or self.default_message
        self.field = field
        self.metadata = metadata or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"detail": self.message, "code": self.code.value}
        if self.field:
            body["field"] = self.field
        if self.metadata:
            body["metadata"] = self.metadata
        return body


# 401


class AuthenticationError(AppException):
    """No usable session on the request"""

    status_code = 401
    code = ErrorCode.AUTH_NOT_AUTHENTICATED
    default_message = "Authentication required"


class InvalidCredentialsError(AuthenticationError):
    code = ErrorCode.AUTH_INVALID_CREDENTIALS
    default_message = "Incorrect email or password"


class TokenExpiredError(AuthenticationError):
    code = ErrorCode.AUTH_TOKEN_EXPIRED
    default_message = "Session has expired"


class TokenInvalidError(AuthenticationError):
    """Malformed token, bad signature, or a token for an unknown user"""

    code = ErrorCode.AUTH_TOKEN_INVALID
    default_message = "Could not validate credentials"


# 404, 409


class NotFoundError(AppException):
    status_code = 404
    code = ErrorCode.RESOURCE_NOT_FOUND
    default_message = "Requested resource not found"

    def __init__(self, message: str | None = None, resource: str | None = None):
        super().__init__(message, metadata={"resource": resource} if resource else None)


class UserNotFoundError(NotFoundError):
    default_message = "User not found"

    def __init__(self, message: str | None = None):
        super().__init__(message, resource="user")


class AlreadyExistsError(AppException):
    status_code = 409
    code = ErrorCode.RESOURCE_ALREADY_EXISTS
    default_message = "Resource already exists"


class ConflictError(AppException):
    """
    A concurrent write won the race. Its result is already stored, so the
    client can re-read or simply retry.
    """

    status_code = 409
    code = ErrorCode.RESOURCE_CONFLICT
    default_message = "Request conflicted with a concurrent update, please retry"


# 400, 422


class InvalidOperationError(AppException):
    status_code = 400
    code = ErrorCode.INVALID_OPERATION
    default_message = "Operation not allowed"


class SelfSwipeError(InvalidOperationError):
    default_message = "You cannot swipe on yourself"

    def __init__(self, message: str | None = None):
        super().__init__(message, field="target_id")


class InvalidDecisionError(InvalidOperationError):
    def __init__(self, value: Any):
        super().__init__(
            f"Invalid swipe decision {value!r}, expected LIKE or PASS",
            field="decision",
        )


class ValidationError(AppException):
    """Request passed schema validation but breaks a business rule"""

    status_code = 422
    code = ErrorCode.VALIDATION_ERROR
    default_message = "Please check the submitted data"
