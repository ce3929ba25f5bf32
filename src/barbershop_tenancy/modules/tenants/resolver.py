"""Slug to tenant resolution.

Resolution is cache first with a network fallback. Slug format is
checked before anything else so malformed slugs never cost a request.
"""

import httpx
import structlog

from barbershop_tenancy.core.errors import (
    InvalidSlugFormat,
    TenantNotFound,
    TenantResolutionFailed,
)
from barbershop_tenancy.core.utils.text import validate_slug_format
from barbershop_tenancy.modules.tenants.cache import TenantCache
from barbershop_tenancy.modules.tenants.client import TenantApiClient
from barbershop_tenancy.modules.tenants.schemas import SlugAvailability, Tenant


logger = structlog.get_logger()


class TenantResolver:
    """Turns slugs into validated tenants."""

    def __init__(self, client: TenantApiClient, cache: TenantCache) -> None:
        self.client = client
        self.cache = cache

    async def resolve(self, slug: str) -> Tenant:
        """Resolve a slug to its tenant.

        Args:
            slug: Barbershop slug taken from the URL

        Returns:
            The tenant, from cache when an unexpired entry exists

        Raises:
            InvalidSlugFormat: If the slug fails format validation
            TenantNotFound: If the backend has no barbershop for the slug
            TenantResolutionFailed: On any transport or backend error
        """
        validation = validate_slug_format(slug)
        if not validation.valid:
            logger.debug("tenant_slug_rejected", slug=slug, reason=validation.message)
            raise InvalidSlugFormat(slug, validation.message)

        cached = await self.cache.get(slug)
        if cached is not None:
            logger.info("tenant_resolved", slug=slug, tenant_id=cached.id, source="cache")
            return cached

        try:
            tenant = await self.client.get_by_slug(slug)
        except (httpx.HTTPError, ValueError) as e:
            # ValueError covers undecodable JSON and payload validation
            logger.warning("tenant_resolution_failed", slug=slug, error=str(e))
            raise TenantResolutionFailed(slug, cause=e) from e

        if tenant is None:
            logger.info("tenant_not_found", slug=slug)
            raise TenantNotFound(slug)

        await self.cache.set(slug, tenant)
        logger.info("tenant_resolved", slug=slug, tenant_id=tenant.id, source="backend")
        return tenant

    async def check_slug_availability(self, slug: str) -> SlugAvailability:
        """Check whether a slug can be registered.

        Invalid slugs are answered locally. A failed request reports
        the slug as unavailable rather than guessing.
        """
        validation = validate_slug_format(slug)
        if not validation.valid:
            return SlugAvailability(slug=slug, available=False, message=validation.message)

        try:
            return await self.client.check_slug(slug)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("slug_availability_check_failed", slug=slug, error=str(e))
            return SlugAvailability(
                slug=slug,
                available=False,
                message="Could not verify slug availability, try again later",
            )
