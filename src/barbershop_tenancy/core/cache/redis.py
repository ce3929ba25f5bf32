"""Redis client configuration and connection management.

Provides an async Redis client with connection pooling for the
durable tenant cache.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool

from barbershop_tenancy.config import settings


# Connection pools for efficient connection reuse, one per URL
_pools: dict[str, ConnectionPool] = {}
# Open sessions using each pool
_pool_users: dict[str, int] = {}


def _get_pool(url: str | None = None) -> ConnectionPool:
    """Get or create the Redis connection pool for a URL."""
    url = url or str(settings.redis_url)
    pool = _pools.get(url)
    if pool is None:
        pool = ConnectionPool.from_url(
            url,
            max_connections=20,
            decode_responses=True,
        )
        _pools[url] = pool
    return pool


@asynccontextmanager
async def redis_client(url: str | None = None) -> AsyncGenerator[redis.Redis, None]:  # type: ignore[type-arg]
    """Context manager for Redis client.

    Usage:
        async with redis_client() as client:
            await client.set("key", "value")
    """
    client = redis.Redis(connection_pool=_get_pool(url))
    try:
        yield client
    finally:
        await client.aclose()


def retain_redis_pool(url: str | None = None) -> None:
    """Register one more user of the pool for a URL."""
    url = url or str(settings.redis_url)
    _pool_users[url] = _pool_users.get(url, 0) + 1


async def release_redis_pool(url: str | None = None) -> None:
    """Drop one user of the pool for a URL.

    The pool is disconnected once its last user has released it.
    Pools for other URLs are left alone.
    """
    url = url or str(settings.redis_url)
    remaining = _pool_users.get(url, 0) - 1
    if remaining > 0:
        _pool_users[url] = remaining
        return
    _pool_users.pop(url, None)
    pool = _pools.pop(url, None)
    if pool is not None:
        await pool.disconnect()


async def close_redis_pool() -> None:
    """Close every Redis connection pool.

    Call this at process shutdown.
    """
    _pool_users.clear()
    while _pools:
        _, pool = _pools.popitem()
        await pool.disconnect()
