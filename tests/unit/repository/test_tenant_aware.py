"""Tests for TenantAwareRepository."""

from unittest.mock import AsyncMock

import pytest

from barbershop_tenancy.core.errors import RecordNotFound, TenantNotInitialized
from barbershop_tenancy.core.repository import TenantAwareRepository
from barbershop_tenancy.modules.barbers import Barber


def barber(**fields) -> Barber:
    return Barber.model_validate({"id": "b-1", "barbershopId": "bb-1", "name": "Joao", **fields})


class TestTenantAwareRepository:
    """Tests for implicit tenant scoping."""

    @pytest.mark.asyncio
    async def test_injects_current_tenant(self):
        base = AsyncMock()
        base.find_all.return_value = [barber()]
        repo = TenantAwareRepository(base, lambda: "bb-1")

        await repo.find_all({"isActive": True})

        base.find_all.assert_awaited_once_with("bb-1", {"isActive": True})

    @pytest.mark.asyncio
    async def test_tenant_read_at_call_time(self):
        base = AsyncMock()
        base.find_all.return_value = []
        current = {"id": "bb-1"}
        repo = TenantAwareRepository(base, lambda: current["id"])

        current["id"] = "bb-2"
        await repo.find_all()

        base.find_all.assert_awaited_once_with("bb-2", None)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "call",
        [
            lambda repo: repo.find_all(),
            lambda repo: repo.find_by_id("b-1"),
            lambda repo: repo.exists("b-1"),
            lambda repo: repo.create({"name": "X"}),
            lambda repo: repo.update("b-1", {"name": "X"}),
            lambda repo: repo.delete("b-1"),
        ],
    )
    async def test_unset_tenant_fails_without_io(self, call):
        base = AsyncMock()
        repo = TenantAwareRepository(base, lambda: None)

        with pytest.raises(TenantNotInitialized):
            await call(repo)

        assert base.mock_calls == []

    @pytest.mark.asyncio
    async def test_update_checks_ownership(self):
        base = AsyncMock()
        base.find_by_id.return_value = None
        repo = TenantAwareRepository(base, lambda: "bb-2")

        with pytest.raises(RecordNotFound):
            await repo.update("b-1", {"name": "Hijack"})

        base.find_by_id.assert_awaited_once_with("bb-2", "b-1")
        base.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_checks_ownership(self):
        base = AsyncMock()
        base.find_by_id.return_value = None
        repo = TenantAwareRepository(base, lambda: "bb-2")

        with pytest.raises(RecordNotFound):
            await repo.delete("b-1")

        base.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_owned_record(self):
        base = AsyncMock()
        base.find_by_id.return_value = barber()
        base.update.return_value = barber(name="Joao Silva")
        repo = TenantAwareRepository(base, lambda: "bb-1")

        updated = await repo.update("b-1", {"name": "Joao Silva"})

        assert updated.name == "Joao Silva"
        base.update.assert_awaited_once_with("bb-1", "b-1", {"name": "Joao Silva"})

    @pytest.mark.asyncio
    async def test_exists(self):
        base = AsyncMock()
        base.find_by_id.side_effect = [barber(), None]
        repo = TenantAwareRepository(base, lambda: "bb-1")

        assert await repo.exists("b-1") is True
        assert await repo.exists("b-2") is False
