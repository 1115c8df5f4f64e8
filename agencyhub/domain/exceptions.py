"""
Domain-level exceptions for the hexagonal architecture.

Every user-visible failure carries a classified ``ErrorKind`` plus a message.
They are mapped to HTTP responses in the API layer.

Collaborator errors (storage, payment processor, notifications) are raised by
infrastructure adapters and translated by the application layer; they never
reach callers directly.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Classification attached to every domain error."""

    UNAUTHENTICATED = "unauthenticated"
    PERMISSION_DENIED = "permission_denied"
    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"
    RESOURCE_EXHAUSTED = "resource_exhausted"
    INTERNAL = "internal"


class DomainException(Exception):
    """Base exception for all domain-level errors."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def details(self) -> Dict[str, Any]:
        """Extra fields safe to return to the caller."""
        return {}


class UnauthenticatedError(DomainException):
    """Raised when an operation is attempted without an actor identity."""

    kind = ErrorKind.UNAUTHENTICATED

    def __init__(self, message: str = "User must be authenticated"):
        super().__init__(message)


class AuthorizationError(DomainException):
    """Base exception for authorization errors."""

    kind = ErrorKind.PERMISSION_DENIED


class PermissionDeniedError(AuthorizationError):
    """Raised when the actor lacks the required role or ownership."""
    pass


class ValidationError(DomainException):
    """Raised when required fields are missing or malformed."""

    kind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    def details(self) -> Dict[str, Any]:
        return {"field": self.field} if self.field else {}


class NotFoundError(DomainException):
    """Base exception for entities not found."""

    kind = ErrorKind.NOT_FOUND


class TenantNotFoundError(NotFoundError):
    """Raised when a tenant is not found."""

    def __init__(self, tenant_id: str):
        super().__init__(f"Tenant not found: {tenant_id}")
        self.tenant_id = tenant_id


class ResourceExhaustedError(DomainException):
    """Raised when a quota has been reached."""

    kind = ErrorKind.RESOURCE_EXHAUSTED

    def __init__(self, message: str, current: int, limit: int):
        super().__init__(message)
        self.current = current
        self.limit = limit

    def details(self) -> Dict[str, Any]:
        return {"current": self.current, "limit": self.limit}


class InternalError(DomainException):
    """Raised when a downstream collaborator fails unexpectedly."""

    kind = ErrorKind.INTERNAL

    def __init__(self, message: str, upstream_message: Optional[str] = None):
        super().__init__(message)
        self.upstream_message = upstream_message

    def details(self) -> Dict[str, Any]:
        return {"upstream": self.upstream_message} if self.upstream_message else {}


class CollaboratorError(Exception):
    """Base exception for failures raised by infrastructure adapters."""

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error
        self.context = context or {}


class StorageError(CollaboratorError):
    """Raised when the document store fails or times out."""
    pass


class PaymentGatewayError(CollaboratorError):
    """Raised when the payment processor rejects a call or times out."""
    pass


class NotificationError(CollaboratorError):
    """Raised when a notification cannot be queued."""
    pass


__all__ = [
    "ErrorKind",
    "DomainException",
    "UnauthenticatedError",
    "AuthorizationError",
    "PermissionDeniedError",
    "ValidationError",
    "NotFoundError",
    "TenantNotFoundError",
    "ResourceExhaustedError",
    "InternalError",
    "CollaboratorError",
    "StorageError",
    "PaymentGatewayError",
    "NotificationError",
]
