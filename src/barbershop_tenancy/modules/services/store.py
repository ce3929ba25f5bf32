"""Service store."""

from barbershop_tenancy.core.constants import SERVICE_CACHE_TTL_SECONDS
from barbershop_tenancy.core.store import TenantScopedStore, query_key
from barbershop_tenancy.modules.services.schemas import Service


class ServiceStore(TenantScopedStore[Service]):
    entity_name = "services"
    default_ttl = SERVICE_CACHE_TTL_SECONDS

    async def fetch_active(self) -> list[Service]:
        """Load only the services clients can currently book."""
        filters = {"isActive": True}
        return await self._fetch(query_key(self.entity_name, filters), filters)
