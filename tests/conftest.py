"""Pytest configuration and shared fixtures."""

import itertools
import json
from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest

from barbershop_tenancy.core.cache import MemoryStorage, ResultCache
from barbershop_tenancy.modules.tenants import (
    TenantApiClient,
    TenantCache,
    TenantContext,
    TenantResolver,
)
from factories.tenant import TenantFactory


API_BASE_URL = "http://backend.test/api"


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _query_form(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class FakeBarbershopApi:
    """In-memory stand-in for the barbershop REST backend.

    Serves the tenant lookup endpoints and
    ``/barbershops/{id}/{resource}[/{record_id}]`` for every entity.
    Every request is recorded in ``calls`` as ``(method, path)``.
    """

    def __init__(self) -> None:
        self.tenants: dict[str, dict[str, Any]] = {}
        self.records: dict[tuple[str, str], list[dict[str, Any]]] = {}
        self.calls: list[tuple[str, str]] = []
        self.error_status: int | None = None
        self._ids = itertools.count(1)

    def add_tenant(self, slug: str, tenant_id: str, **fields: Any) -> dict[str, Any]:
        tenant = {"id": tenant_id, "slug": slug, "name": slug.title(), **fields}
        self.tenants[slug] = tenant
        return tenant

    def add_record(self, tenant_id: str, resource: str, **fields: Any) -> dict[str, Any]:
        record = {
            "id": f"{resource}-{next(self._ids)}",
            "barbershopId": tenant_id,
            **fields,
        }
        self.records.setdefault((tenant_id, resource), []).append(record)
        return record

    def count_calls(self, method: str, path_prefix: str) -> int:
        return sum(
            1 for m, p in self.calls if m == method and p.startswith(path_prefix)
        )

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=httpx.MockTransport(self.handler), base_url=API_BASE_URL
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api")
        self.calls.append((request.method, path))
        parts = path.strip("/").split("/")

        if parts[:2] == ["tenants", "by-slug"]:
            tenant = self.tenants.get(parts[2])
            if tenant is None:
                return httpx.Response(404, json={"success": False, "message": "Not found"})
            return httpx.Response(200, json={"success": True, "data": tenant})

        if parts[:2] == ["tenants", "check-slug"]:
            taken = parts[2] in self.tenants
            return httpx.Response(
                200,
                json={
                    "available": not taken,
                    "message": "Slug already taken" if taken else "Slug available",
                },
            )

        if parts[0] == "barbershops" and len(parts) >= 3:
            if self.error_status is not None:
                return httpx.Response(
                    self.error_status, json={"message": "Backend unavailable"}
                )
            return self._entity(request, parts[1], parts[2], parts[3:])

        return httpx.Response(404)

    def _entity(
        self,
        request: httpx.Request,
        tenant_id: str,
        resource: str,
        rest: list[str],
    ) -> httpx.Response:
        rows = self.records.setdefault((tenant_id, resource), [])

        if not rest:
            if request.method == "GET":
                params = dict(request.url.params)
                found = [
                    r
                    for r in rows
                    if all(_query_form(r.get(k)) == v for k, v in params.items())
                ]
                return httpx.Response(200, json={"success": True, "data": found})
            if request.method == "POST":
                body = json.loads(request.content)
                record = self.add_record(tenant_id, resource, **body)
                return httpx.Response(201, json={"success": True, "data": record})

        record = next((r for r in rows if r["id"] == rest[0]), None) if rest else None
        if record is None:
            return httpx.Response(404, json={"message": "Record not found"})

        if request.method == "GET":
            return httpx.Response(200, json={"success": True, "data": record})
        if request.method == "PATCH":
            record.update(json.loads(request.content))
            return httpx.Response(200, json={"success": True, "data": record})
        if request.method == "DELETE":
            rows.remove(record)
            return httpx.Response(204)
        return httpx.Response(405)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def tenant_cache(storage: MemoryStorage, clock: FakeClock) -> TenantCache:
    return TenantCache(storage, default_ttl=300, clock=clock)


@pytest.fixture
def result_cache(clock: FakeClock) -> ResultCache:
    return ResultCache(clock=clock)


@pytest.fixture
def api() -> FakeBarbershopApi:
    """Backend with two barbershops: barbearia-alpha (bb-1) and barbearia-beta (bb-2)."""
    backend = FakeBarbershopApi()
    backend.add_tenant("barbearia-alpha", "bb-1", planType="pro")
    backend.add_tenant("barbearia-beta", "bb-2")
    return backend


@pytest.fixture
async def http(api: FakeBarbershopApi) -> AsyncGenerator[httpx.AsyncClient, None]:
    async with api.client() as client:
        yield client


@pytest.fixture
def resolver(http: httpx.AsyncClient, tenant_cache: TenantCache) -> TenantResolver:
    return TenantResolver(TenantApiClient(http), tenant_cache)


@pytest.fixture
def context(resolver: TenantResolver, tenant_cache: TenantCache) -> TenantContext:
    return TenantContext(resolver, tenant_cache)


@pytest.fixture
def tenant_factory() -> type[TenantFactory]:
    return TenantFactory
