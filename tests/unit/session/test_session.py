"""Tests for TenantSession."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from barbershop_tenancy.config import Settings
from barbershop_tenancy.core.cache import MemoryStorage, RedisStorage
from barbershop_tenancy.core.cache import redis as redis_module
from barbershop_tenancy.core.constants import TENANT_CACHE_PREFIX
from barbershop_tenancy.core.errors import TenantNotFound
from barbershop_tenancy.session import TenantSession, open_session


class TestTenantSession:
    """Tests for session wiring."""

    @pytest.fixture
    def session(self, http, storage) -> TenantSession:
        return TenantSession(settings=Settings(), http=http, storage=storage)

    @pytest.mark.asyncio
    async def test_stores_follow_context(self, session):
        await session.context.load_tenant("barbearia-alpha")

        assert [store.tenant_id for store in session.stores] == ["bb-1"] * 4

        await session.context.load_tenant("barbearia-beta")

        assert [store.tenant_id for store in session.stores] == ["bb-2"] * 4

    @pytest.mark.asyncio
    async def test_clear_unbinds_stores(self, session):
        await session.context.load_tenant("barbearia-alpha")

        await session.context.clear_tenant()

        assert all(not store.is_initialized for store in session.stores)

    @pytest.mark.asyncio
    async def test_failed_load_unbinds_stores(self, session):
        await session.context.load_tenant("barbearia-alpha")

        with pytest.raises(TenantNotFound):
            await session.context.load_tenant("barbearia-gamma")

        assert all(not store.is_initialized for store in session.stores)

    @pytest.mark.asyncio
    async def test_ttls_come_from_settings(self, http, storage):
        session = TenantSession(
            settings=Settings(appointment_cache_ttl_seconds=30),
            http=http,
            storage=storage,
        )
        assert session.appointments.ttl_seconds == 30
        assert session.barbers.ttl_seconds == 300

    @pytest.mark.asyncio
    async def test_close_keeps_borrowed_client(self, session, http):
        await session.close()
        assert http.is_closed is False

    @pytest.mark.asyncio
    async def test_close_stops_store_binding(self, session):
        await session.close()

        await session.context.load_tenant("barbearia-alpha")

        assert session.appointments.is_initialized is False


class TestOpenSession:
    """Tests for open_session."""

    @pytest.mark.asyncio
    async def test_start_cleans_expired_entries(self, http):
        storage = MemoryStorage()
        await storage.set(f"{TENANT_CACHE_PREFIX}old", "not an entry")

        async with open_session(
            settings=Settings(), http=http, storage=storage
        ) as session:
            assert session.context.tenant is None
            assert await storage.keys(TENANT_CACHE_PREFIX) == []

    @pytest.mark.asyncio
    async def test_owned_client_closed(self, storage):
        async with open_session(settings=Settings(), storage=storage) as session:
            http = session.http

        assert http.is_closed is True


class TestSessionRedisPool:
    """Sessions on the same Redis URL share one pool."""

    @pytest.mark.asyncio
    async def test_pool_survives_until_last_session_closes(self, http):
        url = "redis://cache:6379/5"
        pool = MagicMock()
        pool.disconnect = AsyncMock()
        other_pool = MagicMock()
        other_pool.disconnect = AsyncMock()

        with (
            patch.dict(redis_module._pools, {url: pool, "redis://other:6379/0": other_pool}),
            patch.dict(redis_module._pool_users, clear=True),
        ):
            first = TenantSession(settings=Settings(), http=http, storage=RedisStorage(url))
            second = TenantSession(settings=Settings(), http=http, storage=RedisStorage(url))

            await first.close()
            pool.disconnect.assert_not_awaited()

            await second.close()
            pool.disconnect.assert_awaited_once()
            other_pool.disconnect.assert_not_awaited()
