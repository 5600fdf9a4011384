"""Domain exceptions for the hotel directory.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class DirectoryException(Exception):
    """Base exception for all directory application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body rendered by the exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(DirectoryException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(DirectoryException):
    """Raised when no actor can be established (missing/invalid token, inactive user)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        """Initialize with optional message.

        Args:
            message: Description of the authentication failure.
        """
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(DirectoryException):
    """Raised when the actor lacks a permission or references an entity outside its scope."""

    def __init__(
        self,
        permissions: tuple[str, ...] | list[str] | None = None,
        message: str = "Permission denied",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the acceptable permission keys and a message.

        Args:
            permissions: Permission keys any one of which would have been accepted.
            message: Human-readable message.
            details: Extra context (e.g. the out-of-scope entity).
        """
        merged: dict[str, Any] = dict(details or {})
        if permissions:
            merged["required_any"] = list(permissions)
        super().__init__(message, "PERMISSION_DENIED", merged)


class ResourceNotFoundException(DirectoryException):
    """Raised when a resource is absent or hidden by the actor's scope.

    Both cases produce the same error so existence is not disclosed across
    scope boundaries.
    """

    def __init__(self, resource_type: str, resource_id: int | str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'contact', 'hotel').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": str(resource_id)},
        )


class ConflictException(DirectoryException):
    """Raised when a create/update collides with an existing unique value."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "CONFLICT", details)


class DuplicateAssignmentException(DirectoryException):
    """Raised when an assignment (e.g. role to user, permission to role) already exists."""

    def __init__(
        self,
        message: str,
        assignment_type: str,
        details_extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with message and assignment type.

        Args:
            message: Human-readable message.
            assignment_type: e.g. 'role_permission', 'user_role'.
            details_extra: Optional extra keys for details (e.g. role_id, permission_id).
        """
        details: dict[str, Any] = {"assignment_type": assignment_type}
        if details_extra:
            details.update(details_extra)
        super().__init__(message, "DUPLICATE_ASSIGNMENT", details)


class InfrastructureException(DirectoryException):
    """Raised when the backing store fails; fatal for the request, never retried here."""

    def __init__(self, message: str = "Storage unavailable", operation: str | None = None) -> None:
        details = {"operation": operation} if operation else {}
        super().__init__(message, "INFRASTRUCTURE_ERROR", details)


class SqlNotConfiguredException(InfrastructureException):
    """Raised when no database URL is configured."""

    def __init__(self) -> None:
        super().__init__(
            "SQL database not configured: set DATABASE_URL",
            operation="connect",
        )
