"""Durable TTL cache of resolved tenants, keyed by slug.

Provides:
- Per-slug entries with an absolute expiry time
- Two fast-lookup keys for the current barbershop id and slug
- Expired-entry cleanup that tolerates malformed stored data

Durability is a convenience here. Every storage failure is logged and
turned into a no-op or a cache miss, never raised to the caller.
"""

import time
from collections.abc import Callable, Mapping
from typing import Any

import structlog
from pydantic import BaseModel, ValidationError

from barbershop_tenancy.core.cache.storage import KeyValueStorage
from barbershop_tenancy.core.constants import (
    CURRENT_TENANT_ID_KEY,
    CURRENT_TENANT_SLUG_KEY,
    DEFAULT_TENANT_CACHE_TTL_SECONDS,
    TENANT_CACHE_PREFIX,
)
from barbershop_tenancy.core.errors import StorageError
from barbershop_tenancy.modules.tenants.schemas import Tenant


logger = structlog.get_logger()


class TenantCacheEntry(BaseModel):
    """Cached snapshot of a tenant."""

    tenant: Tenant
    cached_at: float
    expires_at: float

    def is_valid(self, now: float) -> bool:
        """An entry is served only while ``now <= expires_at``."""
        return now <= self.expires_at


class TenantCache:
    """TTL-bounded tenant storage on top of a key-value backend."""

    def __init__(
        self,
        storage: KeyValueStorage,
        default_ttl: float = DEFAULT_TENANT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the cache.

        Args:
            storage: Durable key-value backend
            default_ttl: TTL in seconds used when ``set`` gets none
            clock: Source of the current time in seconds
        """
        self.storage = storage
        self.default_ttl = default_ttl
        self.clock = clock

    @staticmethod
    def _key(slug: str) -> str:
        return f"{TENANT_CACHE_PREFIX}{slug}"

    async def set(self, slug: str, tenant: Tenant, ttl: float | None = None) -> None:
        """Store a tenant under its slug and record it as current.

        Args:
            slug: Slug the tenant was resolved from
            tenant: Resolved tenant
            ttl: Seconds until the entry expires
        """
        ttl = self.default_ttl if ttl is None else ttl
        now = self.clock()
        entry = TenantCacheEntry(tenant=tenant, cached_at=now, expires_at=now + ttl)
        try:
            await self.storage.set(self._key(slug), entry.model_dump_json())
        except StorageError as e:
            logger.warning("tenant_cache_write_failed", slug=slug, error=str(e))
            return
        await self.remember_current(slug, tenant.id)
        logger.debug("tenant_cached", slug=slug, ttl_seconds=ttl)

    async def get(self, slug: str) -> Tenant | None:
        """Return the cached tenant, or None when absent or expired.

        Expired and unreadable entries are evicted on the way out.
        """
        try:
            raw = await self.storage.get(self._key(slug))
        except StorageError as e:
            logger.warning("tenant_cache_read_failed", slug=slug, error=str(e))
            return None

        if raw is None:
            logger.debug("tenant_cache_miss", slug=slug)
            return None

        try:
            entry = TenantCacheEntry.model_validate_json(raw)
        except ValidationError:
            logger.warning("tenant_cache_entry_malformed", slug=slug)
            await self.remove(slug)
            return None

        if not entry.is_valid(self.clock()):
            logger.debug("tenant_cache_expired", slug=slug)
            await self.remove(slug)
            return None

        logger.debug("tenant_cache_hit", slug=slug)
        return entry.tenant

    async def has(self, slug: str) -> bool:
        """Check whether an unexpired entry exists."""
        return await self.get(slug) is not None

    async def update(self, slug: str, partial: Mapping[str, Any]) -> None:
        """Shallow-merge fields into a cached tenant and refresh its TTL.

        Does nothing when there is no unexpired entry for the slug.
        """
        existing = await self.get(slug)
        if existing is None:
            return
        data = existing.model_dump()
        data.update(partial)
        await self.set(slug, Tenant.model_validate(data))

    async def remove(self, slug: str) -> None:
        """Delete the entry for a slug."""
        try:
            await self.storage.delete(self._key(slug))
        except StorageError as e:
            logger.warning("tenant_cache_remove_failed", slug=slug, error=str(e))

    async def invalidate(self, slug: str) -> None:
        """Drop the entry for a slug after its tenant was changed."""
        await self.remove(slug)
        logger.info("tenant_cache_invalidated", slug=slug)

    async def clear(self) -> None:
        """Remove every tenant entry and the fast-lookup keys."""
        try:
            keys = await self.storage.keys(TENANT_CACHE_PREFIX)
            for key in keys:
                await self.storage.delete(key)
        except StorageError as e:
            logger.warning("tenant_cache_clear_failed", error=str(e))
            return
        await self.clear_current()
        logger.info("tenant_cache_cleared", removed=len(keys))

    async def clean_expired(self) -> int:
        """Remove entries past their expiry.

        Entries that cannot be parsed count as expired.

        Returns:
            Number of entries removed
        """
        cleaned = 0
        try:
            keys = await self.storage.keys(TENANT_CACHE_PREFIX)
            now = self.clock()
            for key in keys:
                raw = await self.storage.get(key)
                if raw is None:
                    continue
                try:
                    entry = TenantCacheEntry.model_validate_json(raw)
                except ValidationError:
                    expired = True
                else:
                    expired = entry.expires_at < now
                if expired:
                    await self.storage.delete(key)
                    cleaned += 1
        except StorageError as e:
            logger.warning("tenant_cache_cleanup_failed", error=str(e), cleaned=cleaned)
            return cleaned

        if cleaned:
            logger.info("tenant_cache_cleaned", cleaned=cleaned)
        return cleaned

    # ============================================================
    # Fast lookups
    # ============================================================

    async def remember_current(self, slug: str, tenant_id: str) -> None:
        """Record the current barbershop id and slug."""
        try:
            await self.storage.set(CURRENT_TENANT_ID_KEY, tenant_id)
            await self.storage.set(CURRENT_TENANT_SLUG_KEY, slug)
        except StorageError as e:
            logger.warning("tenant_current_write_failed", slug=slug, error=str(e))

    async def current_tenant_id(self) -> str | None:
        """Get the last recorded barbershop id."""
        try:
            return await self.storage.get(CURRENT_TENANT_ID_KEY)
        except StorageError as e:
            logger.warning("tenant_current_read_failed", error=str(e))
            return None

    async def current_slug(self) -> str | None:
        """Get the last recorded barbershop slug."""
        try:
            return await self.storage.get(CURRENT_TENANT_SLUG_KEY)
        except StorageError as e:
            logger.warning("tenant_current_read_failed", error=str(e))
            return None

    async def clear_current(self) -> None:
        """Forget the current barbershop id and slug, keeping cached entries."""
        try:
            await self.storage.delete(CURRENT_TENANT_ID_KEY)
            await self.storage.delete(CURRENT_TENANT_SLUG_KEY)
        except StorageError as e:
            logger.warning("tenant_current_clear_failed", error=str(e))
