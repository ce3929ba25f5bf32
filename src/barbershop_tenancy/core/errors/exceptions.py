"""Domain exceptions for tenant resolution and tenant-scoped data access.

Resolution errors are categorized so navigation code can tell a
missing barbershop (redirect) apart from a transport failure (retry).
"""

from typing import Any

from barbershop_tenancy.core.constants import NOT_INITIALIZED_MESSAGE


class AppException(Exception):
    """Base exception for all library errors.

    All domain exceptions should inherit from this class.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"

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


class InvalidSlugFormat(AppException):
    """Raised when a slug fails client-side validation.

    Never reaches the network.

    Example:
        raise InvalidSlugFormat(slug, "Slug must be at least 3 characters long")
    """

    message = "Invalid slug format"
    error_code = "invalid_slug_format"

    def __init__(self, slug: str, reason: str | None = None, **kwargs: Any) -> None:
        details = kwargs.pop("details", {})
        details["slug"] = slug
        if reason:
            details["reason"] = reason
        self.slug = slug
        message = f"Invalid slug '{slug}': {reason}" if reason else None
        super().__init__(message=message, details=details, **kwargs)


class TenantNotFound(AppException):
    """Raised when the backend reports that no barbershop owns a slug."""

    message = "Barbershop not found"
    error_code = "tenant_not_found"

    def __init__(self, slug: str, **kwargs: Any) -> None:
        details = kwargs.pop("details", {})
        details["slug"] = slug
        self.slug = slug
        super().__init__(
            message=kwargs.pop("message", f"Barbershop '{slug}' not found"),
            details=details,
            **kwargs,
        )


class TenantResolutionFailed(AppException):
    """Raised on any transport or backend error while resolving a slug.

    The underlying exception is kept on ``cause`` for logging.
    """

    message = "Failed to resolve barbershop"
    error_code = "tenant_resolution_failed"

    def __init__(
        self,
        slug: str,
        cause: BaseException | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        details["slug"] = slug
        if cause is not None:
            details["cause"] = str(cause)
        self.slug = slug
        self.cause = cause
        super().__init__(
            message=kwargs.pop("message", f"Failed to resolve barbershop '{slug}'"),
            details=details,
            **kwargs,
        )


class TenantNotInitialized(AppException):
    """Raised when tenant-scoped data access happens with no bound tenant."""

    message = NOT_INITIALIZED_MESSAGE
    error_code = "tenant_not_initialized"


class RecordNotFound(AppException):
    """Raised when a record does not exist for the bound tenant.

    Example:
        raise RecordNotFound(resource="barbers", resource_id=barber_id)
    """

    message = "Record not found or access denied"
    error_code = "not_found"

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


class MutationFailed(AppException):
    """Raised when a create, update or delete is rejected by the backend."""

    message = "Mutation failed"
    error_code = "mutation_failed"

    def __init__(
        self,
        message: str | None = None,
        operation: str | None = None,
        entity: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if operation:
            details["operation"] = operation
        if entity:
            details["entity"] = entity
        super().__init__(message=message, details=details, **kwargs)


class StorageError(AppException):
    """Raised by a durable storage backend when an operation fails."""

    message = "Storage operation failed"
    error_code = "storage_error"


class StorageQuotaExceeded(StorageError):
    """Raised when durable storage has no room for another entry."""

    message = "Storage quota exceeded"
    error_code = "storage_quota_exceeded"
