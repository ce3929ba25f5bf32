"""Generic tenant-scoped store.

A store holds the visible results of one entity type for the bound
barbershop. It reads through a short-TTL result cache and writes through
a tenant-aware repository, and it never raises for expected failures:
they land in ``error`` so the caller can render an inline message.

Binding is explicit state::

    Unbound --initialize_tenant(id)--> Bound(id)
    Bound(a) --initialize_tenant(b)--> Bound(b)   (results cleared at once)
    Bound    --reset()-------------->  Unbound

Every await is followed by a check that the binding is still the one
the operation started with; results from an old binding are dropped.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Generic

import structlog

from barbershop_tenancy.core.cache.scoped import ResultCache, TenantScopedCache
from barbershop_tenancy.core.constants import NOT_INITIALIZED_MESSAGE
from barbershop_tenancy.core.errors import describe_error
from barbershop_tenancy.core.repository import (
    EntityT,
    Repository,
    TenantAwareRepository,
)


logger = structlog.get_logger()


@dataclass(frozen=True)
class Unbound:
    """No barbershop bound yet."""


@dataclass(frozen=True, eq=False)
class Bound(Generic[EntityT]):
    """Repository and cache closed over one barbershop id.

    Compared by identity: rebinding to the same id after a reset is a
    new binding.
    """

    tenant_id: str
    repository: TenantAwareRepository[EntityT]
    cache: TenantScopedCache


Binding = Unbound | Bound


def query_key(namespace: str, filters: Mapping[str, Any] | None = None) -> str:
    """Cache key for one query, e.g. ``appointments:{"status": "pending"}``."""
    return f"{namespace}:{json.dumps(dict(filters or {}), sort_keys=True, default=str)}"


class TenantScopedStore(Generic[EntityT]):
    """Result state for one entity type, scoped to the bound barbershop.

    Subclasses set ``entity_name`` (also the cache namespace) and
    ``default_ttl``, and add their own queries on top of ``_fetch``.
    """

    entity_name: ClassVar[str]
    default_ttl: ClassVar[float]

    def __init__(
        self,
        base_repository: Repository[EntityT],
        result_cache: ResultCache,
        ttl_seconds: float | None = None,
    ) -> None:
        self.base_repository = base_repository
        self.result_cache = result_cache
        self.ttl_seconds = self.default_ttl if ttl_seconds is None else ttl_seconds

        self.results: list[EntityT] = []
        self.is_loading = False
        self.error: str | None = None
        self._binding: Binding = Unbound()

    # ============================================================
    # Binding
    # ============================================================

    @property
    def tenant_id(self) -> str | None:
        if isinstance(self._binding, Bound):
            return self._binding.tenant_id
        return None

    @property
    def is_initialized(self) -> bool:
        return isinstance(self._binding, Bound)

    def initialize_tenant(self, tenant_id: str) -> None:
        """Bind the store to a barbershop.

        Calling again with the bound id keeps the current state. A
        different id replaces the repository and cache, drops the
        previous barbershop's cached results and clears the visible
        results in the same step.
        """
        previous = self._binding
        if isinstance(previous, Bound):
            if previous.tenant_id == tenant_id:
                return
            previous.cache.clear()

        repository: TenantAwareRepository[EntityT] = TenantAwareRepository(
            self.base_repository, lambda: tenant_id
        )
        cache = TenantScopedCache(self.result_cache, tenant_id, self.entity_name)
        self._binding = Bound(tenant_id=tenant_id, repository=repository, cache=cache)

        self.results = []
        self.error = None
        self.is_loading = False
        logger.debug("store_bound", entity=self.entity_name, tenant_id=tenant_id)

    def reset(self) -> None:
        """Unbind and forget all visible state."""
        if isinstance(self._binding, Bound):
            self._binding.cache.clear()
        self._binding = Unbound()
        self.results = []
        self.error = None
        self.is_loading = False

    def _require_binding(self) -> Bound[EntityT] | None:
        binding = self._binding
        if isinstance(binding, Bound):
            return binding
        self.error = NOT_INITIALIZED_MESSAGE
        logger.debug("store_not_initialized", entity=self.entity_name)
        return None

    # ============================================================
    # Queries
    # ============================================================

    async def fetch_all(self) -> list[EntityT]:
        """Load every record of the bound barbershop."""
        return await self._fetch(query_key(self.entity_name), None)

    async def _fetch(
        self, key: str, filters: Mapping[str, Any] | None
    ) -> list[EntityT]:
        """Serve ``key`` from cache or the repository.

        Returns:
            The results now visible, or an empty list when unbound or
            when the fetch failed
        """
        binding = self._require_binding()
        if binding is None:
            return []

        cached = binding.cache.get(key)
        if cached is not None:
            self.results = list(cached)
            self.error = None
            return self.results

        generation = binding.cache.generation
        self.is_loading = True
        self.error = None
        try:
            rows = await binding.repository.find_all(filters)
        except Exception as e:
            if self._binding is not binding:
                return []
            self.error = describe_error(e, f"Failed to load {self.entity_name}")
            self.is_loading = False
            logger.warning(
                "store_fetch_failed",
                entity=self.entity_name,
                tenant_id=binding.tenant_id,
                error=self.error,
            )
            return []

        if self._binding is not binding:
            logger.debug(
                "store_fetch_discarded",
                entity=self.entity_name,
                tenant_id=binding.tenant_id,
            )
            return []

        # Cache write and visible update happen together, with no await between.
        if binding.cache.generation == generation:
            binding.cache.set(key, list(rows), self.ttl_seconds)
        self.results = list(rows)
        self.is_loading = False
        return self.results

    # ============================================================
    # Mutations
    # ============================================================

    def _mutation_failed(self, binding: Bound[EntityT], operation: str, e: Exception) -> None:
        if self._binding is not binding:
            return
        self.error = describe_error(e, f"Failed to {operation} {self.entity_name}")
        self.is_loading = False
        logger.warning(
            "store_mutation_failed",
            entity=self.entity_name,
            operation=operation,
            tenant_id=binding.tenant_id,
            error=self.error,
        )

    def _mutation_committed(self, binding: Bound[EntityT]) -> bool:
        """Invalidate the namespace; False when the binding moved meanwhile."""
        binding.cache.clear()
        if self._binding is not binding:
            return False
        self.is_loading = False
        self.error = None
        return True

    async def create(self, data: Mapping[str, Any]) -> EntityT | None:
        """Create a record and append it to the visible results."""
        binding = self._require_binding()
        if binding is None:
            return None

        self.is_loading = True
        try:
            entity = await binding.repository.create(data)
        except Exception as e:
            self._mutation_failed(binding, "create", e)
            return None

        if self._mutation_committed(binding):
            self.results = [*self.results, entity]
        return entity

    async def update(self, entity_id: str, patch: Mapping[str, Any]) -> EntityT | None:
        """Update a record and replace it in the visible results."""
        binding = self._require_binding()
        if binding is None:
            return None

        self.is_loading = True
        try:
            entity = await binding.repository.update(entity_id, patch)
        except Exception as e:
            self._mutation_failed(binding, "update", e)
            return None

        if self._mutation_committed(binding):
            self.results = [entity if r.id == entity_id else r for r in self.results]
        return entity

    async def delete(self, entity_id: str) -> bool:
        """Delete a record and drop it from the visible results."""
        binding = self._require_binding()
        if binding is None:
            return False

        self.is_loading = True
        try:
            await binding.repository.delete(entity_id)
        except Exception as e:
            self._mutation_failed(binding, "delete", e)
            return False

        if self._mutation_committed(binding):
            self.results = [r for r in self.results if r.id != entity_id]
        return True

    # ============================================================
    # Setters
    # ============================================================

    def clear_error(self) -> None:
        self.error = None

    def set_loading(self, loading: bool) -> None:
        self.is_loading = loading
