"""Base repositories for barbershop-owned entities.

Every base repository method takes the barbershop id explicitly; the
tenant-aware wrapper is what supplies it. The HTTP implementation puts
the id in the request path and in write payloads.
"""

from collections.abc import Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any, ClassVar, Generic, Protocol, TypeVar

import httpx
import structlog
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from barbershop_tenancy.core.errors import MutationFailed


logger = structlog.get_logger()


class TenantEntity(BaseModel):
    """Fields shared by every record that belongs to a barbershop."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    id: str
    barbershop_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("id", "barbershop_id", mode="before")
    @classmethod
    def coerce_ids(cls, v: Any) -> Any:
        if isinstance(v, int):
            return str(v)
        return v


EntityT = TypeVar("EntityT", bound=TenantEntity)


class Repository(Protocol[EntityT]):
    """Data access for one entity type, scoped by an explicit barbershop id."""

    async def find_all(
        self, tenant_id: str, filters: Mapping[str, Any] | None = None
    ) -> list[EntityT]: ...

    async def find_by_id(self, tenant_id: str, entity_id: str) -> EntityT | None: ...

    async def create(self, tenant_id: str, data: Mapping[str, Any]) -> EntityT: ...

    async def update(
        self, tenant_id: str, entity_id: str, data: Mapping[str, Any]
    ) -> EntityT: ...

    async def delete(self, tenant_id: str, entity_id: str) -> None: ...


def _query_value(value: Any) -> Any:
    """Convert a filter value to its query-string form."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date | datetime):
        return value.isoformat()
    return value


def _error_message(response: httpx.Response) -> str | None:
    """Pull the backend's ``message`` out of an error body, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
        if isinstance(message, str):
            return message
    return None


class HttpRepository(Generic[EntityT]):
    """REST repository under ``/barbershops/{tenant_id}/{resource}``.

    Subclasses set ``resource`` and ``model``.
    """

    resource: ClassVar[str]
    model: type[EntityT]

    def __init__(self, http: httpx.AsyncClient) -> None:
        self.http = http

    def _url(self, tenant_id: str, entity_id: str | None = None) -> str:
        url = f"/barbershops/{tenant_id}/{self.resource}"
        if entity_id is not None:
            url = f"{url}/{entity_id}"
        return url

    def _parse(self, payload: Any) -> EntityT:
        if isinstance(payload, dict) and "data" in payload and "success" in payload:
            payload = payload["data"]
        return self.model.model_validate(payload)

    def _parse_list(self, payload: Any) -> list[EntityT]:
        if isinstance(payload, dict):
            payload = payload.get("data", payload.get(self.resource, []))
        if not isinstance(payload, list):
            return []
        return [self.model.model_validate(item) for item in payload]

    def _raise_for_mutation(self, response: httpx.Response, operation: str) -> None:
        if response.is_success:
            return
        message = _error_message(response) or (
            f"Failed to {operation} {self.resource}: "
            f"server responded with {response.status_code}"
        )
        raise MutationFailed(message, operation=operation, entity=self.resource)

    async def find_all(
        self, tenant_id: str, filters: Mapping[str, Any] | None = None
    ) -> list[EntityT]:
        """List records, passing non-empty filters as query parameters."""
        params = {
            key: _query_value(value)
            for key, value in (filters or {}).items()
            if value is not None
        }
        response = await self.http.get(self._url(tenant_id), params=params)
        response.raise_for_status()
        return self._parse_list(response.json())

    async def find_by_id(self, tenant_id: str, entity_id: str) -> EntityT | None:
        """Get one record, or None when the backend answers 404."""
        response = await self.http.get(self._url(tenant_id, entity_id))
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        response.raise_for_status()
        return self._parse(response.json())

    async def create(self, tenant_id: str, data: Mapping[str, Any]) -> EntityT:
        response = await self.http.post(
            self._url(tenant_id), json={**data, "barbershopId": tenant_id}
        )
        self._raise_for_mutation(response, "create")
        return self._parse(response.json())

    async def update(
        self, tenant_id: str, entity_id: str, data: Mapping[str, Any]
    ) -> EntityT:
        response = await self.http.patch(
            self._url(tenant_id, entity_id), json={**data, "barbershopId": tenant_id}
        )
        self._raise_for_mutation(response, "update")
        return self._parse(response.json())

    async def delete(self, tenant_id: str, entity_id: str) -> None:
        response = await self.http.delete(self._url(tenant_id, entity_id))
        self._raise_for_mutation(response, "delete")
