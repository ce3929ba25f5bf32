"""Tenant-scoped result stores."""

from barbershop_tenancy.core.store.base import (
    Bound,
    TenantScopedStore,
    Unbound,
    query_key,
)


__all__ = [
    "Bound",
    "TenantScopedStore",
    "Unbound",
    "query_key",
]
