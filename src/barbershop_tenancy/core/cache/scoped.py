"""In-process result cache partitioned by barbershop.

Entries are keyed by ``(tenant_id, namespace, key)`` tuples, so two
barbershops can never collide however their ids or query keys look.
All operations are synchronous: a store can read, check and write the
cache with no suspension point in between.

Each ``(tenant_id, namespace)`` pair carries a generation counter that
``clear_namespace`` bumps. A fetch that started before an invalidation
compares generations before writing and drops its stale result.
"""

import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

import structlog

from barbershop_tenancy.core.constants import SCOPED_CACHE_PREFIX


logger = structlog.get_logger()

T = TypeVar("T")

CacheKey = tuple[str, str, str]


@dataclass(frozen=True)
class _Entry:
    value: Any
    expires_at: float


class ResultCache:
    """TTL cache shared by every store of a session."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self.clock = clock
        self._entries: dict[CacheKey, _Entry] = {}
        self._generations: dict[tuple[str, str], int] = {}

    def get(self, tenant_id: str, namespace: str, key: str) -> Any | None:
        """Get a live value, evicting it if it has expired.

        Returns:
            The cached value or None on a miss
        """
        cache_key = (tenant_id, namespace, key)
        entry = self._entries.get(cache_key)
        if entry is None:
            return None
        if self.clock() > entry.expires_at:
            del self._entries[cache_key]
            return None
        return entry.value

    def set(
        self, tenant_id: str, namespace: str, key: str, value: Any, ttl: float
    ) -> None:
        self._entries[(tenant_id, namespace, key)] = _Entry(
            value=value, expires_at=self.clock() + ttl
        )

    def delete(self, tenant_id: str, namespace: str, key: str) -> bool:
        return self._entries.pop((tenant_id, namespace, key), None) is not None

    def clear_namespace(self, tenant_id: str, namespace: str) -> int:
        """Drop every entry of one barbershop's namespace.

        Also bumps the namespace generation so fetches in flight do not
        write their results back.

        Returns:
            Number of entries removed
        """
        stale = [k for k in self._entries if k[0] == tenant_id and k[1] == namespace]
        for cache_key in stale:
            del self._entries[cache_key]
        self._generations[(tenant_id, namespace)] = (
            self.generation(tenant_id, namespace) + 1
        )
        return len(stale)

    def generation(self, tenant_id: str, namespace: str) -> int:
        return self._generations.get((tenant_id, namespace), 0)

    def count(self, tenant_id: str | None = None, namespace: str | None = None) -> int:
        """Count entries, optionally restricted to a barbershop and namespace."""
        return sum(
            1
            for k in self._entries
            if (tenant_id is None or k[0] == tenant_id)
            and (namespace is None or k[1] == namespace)
        )


class TenantScopedCache:
    """View of a ``ResultCache`` fixed to one barbershop and namespace.

    Built once per binding, so the tenant id cannot change under it.

    Usage:
        cache = TenantScopedCache(result_cache, "bb-1", "appointments")
        cache.set("appointments:{}", rows, ttl=120)
    """

    def __init__(self, cache: ResultCache, tenant_id: str, namespace: str) -> None:
        self.cache = cache
        self.tenant_id = tenant_id
        self.namespace = namespace

    def describe(self, key: str) -> str:
        """Flat form of a key, for logs."""
        return f"{SCOPED_CACHE_PREFIX}{self.tenant_id}:{self.namespace}:{key}"

    @property
    def generation(self) -> int:
        return self.cache.generation(self.tenant_id, self.namespace)

    def get(self, key: str) -> Any | None:
        return self.cache.get(self.tenant_id, self.namespace, key)

    def set(self, key: str, value: Any, ttl: float) -> None:
        self.cache.set(self.tenant_id, self.namespace, key, value, ttl)

    def remove(self, key: str) -> bool:
        return self.cache.delete(self.tenant_id, self.namespace, key)

    def clear(self) -> int:
        """Invalidate the whole namespace for this barbershop."""
        removed = self.cache.clear_namespace(self.tenant_id, self.namespace)
        logger.debug(
            "scoped_cache_cleared",
            tenant_id=self.tenant_id,
            namespace=self.namespace,
            removed=removed,
        )
        return removed

    async def get_or_fetch(
        self, key: str, fetch: Callable[[], Awaitable[T]], ttl: float
    ) -> T:
        """Return the cached value for ``key`` or fetch and cache it.

        The fetched value is not cached if the namespace was cleared
        while the fetch was running.
        """
        cached = self.get(key)
        if cached is not None:
            logger.debug("scoped_cache_hit", key=self.describe(key))
            return cached

        generation = self.generation
        value = await fetch()
        if self.generation == generation:
            self.set(key, value, ttl)
        return value

    def stats(self) -> dict[str, Any]:
        return {
            "tenant_id": self.tenant_id,
            "namespace": self.namespace,
            "entries": self.cache.count(self.tenant_id, self.namespace),
            "generation": self.generation,
        }
