"""Tenant-aware repository wrapper.

This module provides a repository wrapper that automatically scopes
every operation to the bound barbershop, so call sites never thread a
tenant id through business logic.
"""

from collections.abc import Callable, Mapping
from typing import Any, Generic

import structlog

from barbershop_tenancy.core.errors import RecordNotFound, TenantNotInitialized
from barbershop_tenancy.core.repository.base import EntityT, Repository


logger = structlog.get_logger()


class TenantAwareRepository(Generic[EntityT]):
    """Wraps a base repository with implicit tenant scoping.

    The tenant id is read through ``get_tenant_id`` on every call, not
    when the wrapper is built. When it returns None, every method fails
    with ``TenantNotInitialized`` before touching the base repository.

    Usage:
        barbers = TenantAwareRepository(BarberRepository(http), lambda: "bb-1")
        result = await barbers.find_all({"role": "barber"})
    """

    def __init__(
        self,
        base: Repository[EntityT],
        get_tenant_id: Callable[[], str | None],
    ) -> None:
        self.base = base
        self.get_tenant_id = get_tenant_id

    def _require_tenant(self) -> str:
        tenant_id = self.get_tenant_id()
        if not tenant_id:
            raise TenantNotInitialized()
        return tenant_id

    async def find_all(self, filters: Mapping[str, Any] | None = None) -> list[EntityT]:
        """List records of the bound barbershop."""
        tenant_id = self._require_tenant()
        return await self.base.find_all(tenant_id, filters)

    async def find_by_id(self, entity_id: str) -> EntityT | None:
        """Get a record of the bound barbershop by ID."""
        tenant_id = self._require_tenant()
        return await self.base.find_by_id(tenant_id, entity_id)

    async def exists(self, entity_id: str) -> bool:
        return await self.find_by_id(entity_id) is not None

    async def create(self, data: Mapping[str, Any]) -> EntityT:
        """Create a record owned by the bound barbershop."""
        tenant_id = self._require_tenant()
        return await self.base.create(tenant_id, data)

    async def update(self, entity_id: str, data: Mapping[str, Any]) -> EntityT:
        """Update a record after checking it belongs to the bound barbershop.

        Raises:
            RecordNotFound: If the record is not visible to this barbershop
        """
        tenant_id = self._require_tenant()
        if await self.base.find_by_id(tenant_id, entity_id) is None:
            logger.info("tenant_record_missing", tenant_id=tenant_id, entity_id=entity_id)
            raise RecordNotFound(resource_id=entity_id)
        return await self.base.update(tenant_id, entity_id, data)

    async def delete(self, entity_id: str) -> None:
        """Delete a record after checking it belongs to the bound barbershop.

        Raises:
            RecordNotFound: If the record is not visible to this barbershop
        """
        tenant_id = self._require_tenant()
        if await self.base.find_by_id(tenant_id, entity_id) is None:
            logger.info("tenant_record_missing", tenant_id=tenant_id, entity_id=entity_id)
            raise RecordNotFound(resource_id=entity_id)
        await self.base.delete(tenant_id, entity_id)
