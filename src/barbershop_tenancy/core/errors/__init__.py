"""Error taxonomy for tenant resolution and tenant-scoped stores."""

from barbershop_tenancy.core.errors.exceptions import (
    AppException,
    InvalidSlugFormat,
    MutationFailed,
    RecordNotFound,
    StorageError,
    StorageQuotaExceeded,
    TenantNotFound,
    TenantNotInitialized,
    TenantResolutionFailed,
)
from barbershop_tenancy.core.errors.handlers import describe_error


__all__ = [
    "AppException",
    "InvalidSlugFormat",
    "MutationFailed",
    "RecordNotFound",
    "StorageError",
    "StorageQuotaExceeded",
    "TenantNotFound",
    "TenantNotInitialized",
    "TenantResolutionFailed",
    "describe_error",
]
