"""Domain exceptions for the application.

Services raise these; the handlers in ``gatekeeper.core.errors.handlers``
turn them into problem-detail responses with a short ``message``.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Short human-readable message returned to the caller
        error_code: Machine-readable error code for clients
        status_code: HTTP status code for the response
        details: Extra fields merged into the response body
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class BadRequestError(AppException):
    """Raised when a request is well-formed but cannot be applied.

    Example:
        raise BadRequestError("Permission already assigned to role")
    """

    message = "Bad request"
    error_code = "bad_request"
    status_code = 400


class UnauthorizedError(AppException):
    """Raised for bad credentials or a missing, invalid or expired token."""

    message = "Authentication required"
    error_code = "unauthorized"
    status_code = 401


class ForbiddenError(AppException):
    """Raised when a valid identity lacks the permission an operation needs.

    Example:
        raise ForbiddenError(
            "Missing required permission: users.delete",
            details={"required_permission": "users.delete"},
        )
    """

    message = "Access forbidden"
    error_code = "forbidden"
    status_code = 403


class NotFoundError(AppException):
    """Raised when an id does not resolve.

    Example:
        raise NotFoundError("Role not found", resource="role", resource_id=str(role_id))
    """

    message = "Resource not found"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details, **kwargs)


class ConflictError(AppException):
    """Raised when a uniqueness rule would be violated.

    Example:
        raise ConflictError("Email already exists", error_code="email_exists")
    """

    message = "Resource conflict"
    error_code = "conflict"
    status_code = 409
