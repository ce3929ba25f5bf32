"""Integration tests for multi-tenancy isolation.

These tests verify that switching barbershops never leaves data from
the previous barbershop reachable through the stores or their caches.
"""

import pytest

from barbershop_tenancy.config import Settings
from barbershop_tenancy.modules.tenants import TenantState
from barbershop_tenancy.session import TenantSession


pytestmark = pytest.mark.integration


class TestTenantIsolation:
    """Tests for multi-tenant data isolation."""

    @pytest.fixture(autouse=True)
    def seed(self, api):
        """Give both barbershops their own appointments, barbers and comments."""
        for tenant_id in ("bb-1", "bb-2"):
            api.add_record(
                tenant_id,
                "appointments",
                clientName=f"Client {tenant_id}",
                barberId=f"{tenant_id}-barber",
                date="2024-01-15",
                time="10:00",
                status="pending",
            )
            api.add_record(tenant_id, "barbers", name=f"Barber {tenant_id}")
            api.add_record(
                tenant_id,
                "comments",
                name=f"Reviewer {tenant_id}",
                comment="Muito bom",
                status="approved",
            )

    @pytest.fixture
    async def session(self, http, storage):
        session = TenantSession(settings=Settings(), http=http, storage=storage)
        await session.start()
        yield session
        await session.close()

    async def test_switching_tenant_switches_every_store(self, session, api):
        """Resolve alpha, fetch, switch to beta, fetch: only beta data remains."""
        stores = [session.appointments, session.barbers, session.comments]

        await session.context.load_tenant("barbearia-alpha")
        for store in stores:
            store.initialize_tenant("bb-1")
            await store.fetch_all()

        assert {e.barbershop_id for s in stores for e in s.results} == {"bb-1"}

        await session.context.load_tenant("barbearia-beta")
        for store in stores:
            store.initialize_tenant("bb-2")
            await store.fetch_all()

        assert session.context.state == TenantState.VALID
        assert session.context.tenant_id == "bb-2"
        for store in stores:
            assert store.results
            assert all(e.barbershop_id == "bb-2" for e in store.results)

    async def test_beta_fetch_never_served_from_alpha_cache(self, session, api):
        """Cache entries for one barbershop are invisible to the other."""
        store = session.barbers

        store.initialize_tenant("bb-1")
        await store.fetch_all()
        store.initialize_tenant("bb-2")
        await store.fetch_all()

        assert api.count_calls("GET", "/barbershops/bb-1/barbers") == 1
        assert api.count_calls("GET", "/barbershops/bb-2/barbers") == 1
        assert [b.barbershop_id for b in store.results] == ["bb-2"]

    async def test_switch_back_refetches(self, session, api):
        """Rebinding drops the previous barbershop's cached results."""
        store = session.barbers

        store.initialize_tenant("bb-1")
        await store.fetch_all()
        store.initialize_tenant("bb-2")
        store.initialize_tenant("bb-1")
        await store.fetch_all()

        assert api.count_calls("GET", "/barbershops/bb-1/barbers") == 2

    async def test_route_driven_switch(self, session):
        """Stores bound through the context follow navigation."""
        await session.context.sync_with_route("/app/barbearia-alpha/agenda")
        await session.appointments.fetch_all()

        await session.context.sync_with_route("/app/barbearia-beta/agenda")

        assert session.appointments.results == []
        await session.appointments.fetch_all()
        assert [a.barbershop_id for a in session.appointments.results] == ["bb-2"]

    async def test_cannot_modify_other_tenant_records(self, session, api):
        """A record of bb-2 is invisible to a store bound to bb-1."""
        foreign_id = api.records[("bb-2", "barbers")][0]["id"]
        session.barbers.initialize_tenant("bb-1")

        assert await session.barbers.delete(foreign_id) is False
        assert session.barbers.error == "Record not found or access denied"
        assert len(api.records[("bb-2", "barbers")]) == 1
