"""HTTP client for the tenant lookup endpoints.

Endpoints:
- GET /tenants/by-slug/{slug} returns the barbershop or 404
- GET /tenants/check-slug/{slug} returns {available, message}
"""

from typing import Any

import httpx
import structlog

from barbershop_tenancy.modules.tenants.schemas import SlugAvailability, Tenant


logger = structlog.get_logger()


def unwrap(payload: Any) -> Any:
    """Strip the ``{"success": ..., "data": ...}`` envelope when present."""
    if isinstance(payload, dict) and "data" in payload and "success" in payload:
        return payload["data"]
    return payload


class TenantApiClient:
    """Calls the backend tenant endpoints.

    Transport errors (including timeouts) and non-404 error statuses
    propagate as ``httpx.HTTPError`` for the resolver to categorize.
    """

    def __init__(self, http: httpx.AsyncClient) -> None:
        self.http = http

    async def get_by_slug(self, slug: str) -> Tenant | None:
        """Fetch a barbershop by slug.

        Args:
            slug: Validated barbershop slug

        Returns:
            The tenant, or None when the backend answers 404
        """
        response = await self.http.get(f"/tenants/by-slug/{slug}")
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        response.raise_for_status()
        return Tenant.model_validate(unwrap(response.json()))

    async def check_slug(self, slug: str) -> SlugAvailability:
        """Ask the backend whether a slug is still free.

        Raises:
            httpx.HTTPError: On transport errors and error statuses
            ValueError: If the body is not a JSON object
        """
        response = await self.http.get(f"/tenants/check-slug/{slug}")
        response.raise_for_status()
        data = unwrap(response.json())
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected check-slug payload: {type(data).__name__}")
        return SlugAvailability(
            slug=data.get("slug", slug),
            available=bool(data.get("available", False)),
            message=data.get("message", ""),
        )
