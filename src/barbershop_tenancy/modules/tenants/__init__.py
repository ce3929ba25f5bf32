"""Tenants module - slug resolution, tenant cache and the current-tenant context."""

from barbershop_tenancy.core.utils.text import generate_slug_from_name, validate_slug_format
from barbershop_tenancy.modules.tenants.cache import TenantCache, TenantCacheEntry
from barbershop_tenancy.modules.tenants.client import TenantApiClient
from barbershop_tenancy.modules.tenants.context import TenantContext, TenantState
from barbershop_tenancy.modules.tenants.resolver import TenantResolver
from barbershop_tenancy.modules.tenants.routing import RouteMatch, extract_slug_from_path
from barbershop_tenancy.modules.tenants.schemas import (
    PlanType,
    SlugAvailability,
    Tenant,
    TenantSettings,
)


__all__ = [
    "PlanType",
    "RouteMatch",
    "SlugAvailability",
    "Tenant",
    "TenantApiClient",
    "TenantCache",
    "TenantCacheEntry",
    "TenantContext",
    "TenantResolver",
    "TenantSettings",
    "TenantState",
    "extract_slug_from_path",
    "generate_slug_from_name",
    "validate_slug_format",
]
