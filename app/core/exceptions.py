"""
Base exception classes for application-wide error handling.

This module provides a standardized exception hierarchy that enables:
- Consistent error responses across the application
- Machine-readable error codes for client handling
- HTTP status mapping in one place (see core.exception_handlers)

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Malformed or missing input
    ├── NotFoundError - Referenced entity absent or not visible to caller
    ├── AuthorizationError - Caller lacks rights over an existing entity
    └── ConflictError - State conflicts
        └── DuplicateError - Uniqueness violations

Domain apps extend this hierarchy in their own exceptions module
(e.g. messaging.exceptions.ExpiredWindowError).

Usage:
    from core.exceptions import ValidationError, NotFoundError

    # Raise with message only
    raise ValidationError("Message text cannot be empty")

    # Raise with error code for client handling
    raise NotFoundError("Message not found", error_code="MESSAGE_NOT_FOUND")

    # Raise with additional details
    raise ValidationError(
        "Message text is too long",
        error_code="TEXT_TOO_LONG",
        details={"max_length": 1000, "length": 1203},
    )

Note:
    These exceptions are for domain/business logic errors raised by the
    service layer. DRF handles API-layer exceptions (serialization,
    authentication, etc.).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Provides a consistent interface for error handling across the application.
    All custom exceptions should inherit from this class.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, metadata, etc.)
        http_status: Status code used when rendered by the API layer

    Example:
        try:
            message = MessageService.edit_message(user, message_id, text)
        except NotFoundError as e:
            logger.warning(f"Message not found: {e.error_code}")
            return Response(e.to_dict(), status=e.http_status)
    """

    default_error_code: str = "APPLICATION_ERROR"
    http_status: int = 400

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dict with error, error_code, and details keys

        Example:
            {
                "error": "Message not found",
                "error_code": "MESSAGE_NOT_FOUND",
                "details": {"message_id": 123}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when input validation fails.

    Use for:
    - Empty or oversized message text
    - Unresolvable or ambiguous identity references
    - Missing required fields

    Example:
        raise ValidationError(
            "Message text must be between 1 and 1000 characters",
            error_code="INVALID_TEXT",
            details={"text": ["Ensure this field has no more than 1000 characters."]},
        )

    Note:
        For DRF serializer validation, use DRF's built-in validation.
        Use this for service-layer validation logic.
    """

    default_error_code: str = "VALIDATION_ERROR"
    http_status: int = 400


class NotFoundError(BaseApplicationError):
    """
    Raised when a requested resource is not found.

    Also used when the resource exists but is not visible to the caller
    (e.g. another owner's contact), so existence is not leaked.

    Example:
        contact = Contact.objects.filter(id=contact_id, owner=owner).first()
        if not contact:
            raise NotFoundError(
                "Contact not found",
                error_code="CONTACT_NOT_FOUND",
                details={"contact_id": contact_id},
            )
    """

    default_error_code: str = "NOT_FOUND"
    http_status: int = 404


class AuthorizationError(BaseApplicationError):
    """
    Raised when the caller lacks rights over an otherwise-existing entity.

    Example:
        if message.sender_id != user.id:
            raise AuthorizationError(
                "You can only edit your own messages",
                error_code="NOT_SENDER",
            )

    Note:
        For authentication failures (missing/invalid token), DRF's
        AuthenticationFailed is raised by the authentication classes.
        Use this for authorization failures.
    """

    default_error_code: str = "PERMISSION_DENIED"
    http_status: int = 403


class ConflictError(BaseApplicationError):
    """
    Raised when operation conflicts with current resource state.

    Use for:
    - Concurrent modification conflicts
    - Invalid state transitions

    Note:
        HTTP 409 Conflict is the appropriate status for these errors.
    """

    default_error_code: str = "CONFLICT"
    http_status: int = 409


class DuplicateError(ConflictError):
    """
    Raised when a uniqueness invariant would be violated.

    Example:
        if Contact.objects.filter(owner=owner, contact_user=target).exists():
            raise DuplicateError(
                "Contact already exists",
                error_code="CONTACT_EXISTS",
                details={"contact_user_id": target.id},
            )
    """

    default_error_code: str = "DUPLICATE"
