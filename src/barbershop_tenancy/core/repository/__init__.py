"""Repository layer: base HTTP repositories and the tenant-aware wrapper."""

from barbershop_tenancy.core.repository.base import (
    EntityT,
    HttpRepository,
    Repository,
    TenantEntity,
)
from barbershop_tenancy.core.repository.tenant_aware import TenantAwareRepository


__all__ = [
    "EntityT",
    "HttpRepository",
    "Repository",
    "TenantAwareRepository",
    "TenantEntity",
]
