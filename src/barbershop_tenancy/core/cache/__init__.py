"""Cache module.

Provides:
- Redis client connection management
- Durable key-value storage backends (Redis, in-process)
- Tenant-partitioned in-process result cache
"""

from barbershop_tenancy.core.cache.redis import (
    close_redis_pool,
    redis_client,
    release_redis_pool,
    retain_redis_pool,
)
from barbershop_tenancy.core.cache.scoped import ResultCache, TenantScopedCache
from barbershop_tenancy.core.cache.storage import (
    KeyValueStorage,
    MemoryStorage,
    RedisStorage,
    create_storage,
)


__all__ = [
    "KeyValueStorage",
    "MemoryStorage",
    "RedisStorage",
    "ResultCache",
    "TenantScopedCache",
    "close_redis_pool",
    "create_storage",
    "redis_client",
    "release_redis_pool",
    "retain_redis_pool",
]
