"""Durable key-value storage backends.

The tenant cache persists through one of these backends: Redis for
deployments that share state between processes, or an in-process
dictionary. Both raise ``StorageError`` on failure so callers deal
with a single exception type.
"""

from typing import Protocol

import redis.asyncio as redis

from barbershop_tenancy.config import Settings
from barbershop_tenancy.core.cache.redis import redis_client
from barbershop_tenancy.core.errors import StorageError, StorageQuotaExceeded


class KeyValueStorage(Protocol):
    """Async string key-value storage used by the tenant cache."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def delete(self, key: str) -> bool: ...

    async def keys(self, prefix: str) -> list[str]: ...


class RedisStorage:
    """Redis-backed storage.

    Keys are stored under an optional prefix so several applications
    can share one Redis database.
    """

    def __init__(self, url: str | None = None, prefix: str = "") -> None:
        """Initialize storage with optional key prefix.

        Args:
            url: Redis URL; defaults to the configured redis_url
            prefix: Prefix for all keys (e.g., "barbershop:")
        """
        self.url = url
        self.prefix = prefix

    def _key(self, key: str) -> str:
        """Generate prefixed key."""
        return f"{self.prefix}{key}" if self.prefix else key

    async def get(self, key: str) -> str | None:
        try:
            async with redis_client(self.url) as client:
                return await client.get(self._key(key))
        except redis.RedisError as e:
            raise StorageError(f"Redis GET failed: {e}") from e

    async def set(self, key: str, value: str) -> None:
        try:
            async with redis_client(self.url) as client:
                await client.set(self._key(key), value)
        except redis.RedisError as e:
            raise StorageError(f"Redis SET failed: {e}") from e

    async def delete(self, key: str) -> bool:
        try:
            async with redis_client(self.url) as client:
                result = await client.delete(self._key(key))
                return result > 0
        except redis.RedisError as e:
            raise StorageError(f"Redis DEL failed: {e}") from e

    async def keys(self, prefix: str) -> list[str]:
        """List stored keys starting with prefix, without the storage prefix."""
        found: list[str] = []
        try:
            async with redis_client(self.url) as client:
                cursor = 0
                while True:
                    cursor, batch = await client.scan(
                        cursor=cursor,
                        match=f"{self._key(prefix)}*",
                        count=100,
                    )
                    found.extend(batch)
                    if cursor == 0:
                        break
        except redis.RedisError as e:
            raise StorageError(f"Redis SCAN failed: {e}") from e
        return [key[len(self.prefix) :] for key in found]


class MemoryStorage:
    """In-process storage with an optional entry quota."""

    def __init__(self, max_entries: int | None = None) -> None:
        self.max_entries = max_entries
        self._data: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        if (
            self.max_entries is not None
            and key not in self._data
            and len(self._data) >= self.max_entries
        ):
            raise StorageQuotaExceeded(details={"max_entries": self.max_entries})
        self._data[key] = value

    async def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    async def keys(self, prefix: str) -> list[str]:
        return [key for key in self._data if key.startswith(prefix)]


def create_storage(settings: Settings) -> KeyValueStorage:
    """Build the storage backend selected by ``cache_backend``."""
    if settings.cache_backend == "redis":
        return RedisStorage(str(settings.redis_url), prefix="barbershop:")
    return MemoryStorage()
