"""Core services and cross-cutting concerns."""

from barbershop_tenancy.core.errors import (
    AppException,
    InvalidSlugFormat,
    MutationFailed,
    RecordNotFound,
    TenantNotFound,
    TenantNotInitialized,
    TenantResolutionFailed,
)


__all__ = [
    "AppException",
    "InvalidSlugFormat",
    "MutationFailed",
    "RecordNotFound",
    "TenantNotFound",
    "TenantNotInitialized",
    "TenantResolutionFailed",
]
