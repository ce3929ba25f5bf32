"""Tests for HttpRepository."""

import json
from datetime import date

import httpx
import pytest

from barbershop_tenancy.core.errors import MutationFailed
from barbershop_tenancy.modules.appointments import (
    AppointmentRepository,
    AppointmentStatus,
)
from barbershop_tenancy.modules.barbers import BarberRepository


class TestHttpRepository:
    """Tests for the REST base repository."""

    @pytest.mark.asyncio
    async def test_find_all_scoped_by_path(self, http, api):
        api.add_record("bb-1", "barbers", name="Joao")
        api.add_record("bb-2", "barbers", name="Pedro")

        barbers = await BarberRepository(http).find_all("bb-1")

        assert [b.name for b in barbers] == ["Joao"]
        assert barbers[0].barbershop_id == "bb-1"
        assert api.calls == [("GET", "/barbershops/bb-1/barbers")]

    @pytest.mark.asyncio
    async def test_filters_encoded_as_query(self):
        seen: list[httpx.URL] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url)
            return httpx.Response(200, json=[])

        async with httpx.AsyncClient(
            transport=httpx.MockTransport(handler), base_url="http://backend.test/api"
        ) as http:
            await AppointmentRepository(http).find_all(
                "bb-1",
                {
                    "status": AppointmentStatus.CONFIRMED,
                    "date": date(2024, 1, 15),
                    "paid": False,
                    "barberId": None,
                },
            )

        params = dict(seen[0].params)
        assert params == {"status": "confirmed", "date": "2024-01-15", "paid": "false"}

    @pytest.mark.asyncio
    async def test_find_by_id_missing_returns_none(self, http):
        assert await BarberRepository(http).find_by_id("bb-1", "barbers-404") is None

    @pytest.mark.asyncio
    async def test_create_sends_barbershop_id(self, http, api):
        barber = await BarberRepository(http).create("bb-1", {"name": "Joao"})

        assert barber.barbershop_id == "bb-1"
        assert api.records[("bb-1", "barbers")][0]["barbershopId"] == "bb-1"

    @pytest.mark.asyncio
    async def test_mutation_error_uses_backend_message(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(409, json={"message": "Horario indisponivel"})

        async with httpx.AsyncClient(
            transport=httpx.MockTransport(handler), base_url="http://backend.test/api"
        ) as http:
            with pytest.raises(MutationFailed) as exc_info:
                await AppointmentRepository(http).update("bb-1", "a-1", {"time": "10:00"})

        assert exc_info.value.message == "Horario indisponivel"
        assert exc_info.value.details == {"operation": "update", "entity": "appointments"}

    @pytest.mark.asyncio
    async def test_mutation_error_without_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert json.loads(request.content) == {"name": "X", "barbershopId": "bb-1"}
            return httpx.Response(500, text="oops")

        async with httpx.AsyncClient(
            transport=httpx.MockTransport(handler), base_url="http://backend.test/api"
        ) as http:
            with pytest.raises(MutationFailed) as exc_info:
                await BarberRepository(http).create("bb-1", {"name": "X"})

        assert "server responded with 500" in exc_info.value.message
