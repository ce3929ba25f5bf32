"""Current-tenant binding for one client session.

The context moves between four states:

    Empty --(slug route)--> Loading --(resolved)--> Valid
                               |
                               +--(failed)--> Invalid

Valid and Invalid go back to Loading when the route slug changes and
to Empty on a public route or an explicit clear. Each load takes a
request token; a result that arrives after a newer load (or a clear)
was issued is discarded, so the binding always follows the most
recently requested slug.
"""

from collections.abc import Callable, Collection, Mapping
from enum import Enum
from typing import Any

import structlog

from barbershop_tenancy.config import settings
from barbershop_tenancy.core.errors import AppException
from barbershop_tenancy.modules.tenants.cache import TenantCache
from barbershop_tenancy.modules.tenants.resolver import TenantResolver
from barbershop_tenancy.modules.tenants.routing import extract_slug_from_path
from barbershop_tenancy.modules.tenants.schemas import PlanType, Tenant


logger = structlog.get_logger()

TenantListener = Callable[["TenantContext"], None]


class TenantState(str, Enum):
    """Lifecycle state of the tenant binding."""

    EMPTY = "empty"
    LOADING = "loading"
    VALID = "valid"
    INVALID = "invalid"


class TenantContext:
    """Single source of truth for the active barbershop.

    Attributes are read-only from the outside; they change only through
    ``load_tenant``, ``clear_tenant``, ``refresh_tenant``,
    ``update_settings`` and ``sync_with_route``.
    """

    def __init__(
        self,
        resolver: TenantResolver,
        cache: TenantCache,
        public_paths: Collection[str] | None = None,
        reserved_segments: Collection[str] | None = None,
    ) -> None:
        self.resolver = resolver
        self.cache = cache
        self.public_paths = frozenset(
            settings.public_paths if public_paths is None else public_paths
        )
        self.reserved_segments = frozenset(
            settings.reserved_path_segments
            if reserved_segments is None
            else reserved_segments
        )

        self._tenant_id: str | None = None
        self._slug: str | None = None
        self._tenant: Tenant | None = None
        self._loading = False
        self._error: AppException | None = None
        self._request_token = 0
        self._listeners: list[TenantListener] = []

    # ============================================================
    # State
    # ============================================================

    @property
    def tenant_id(self) -> str | None:
        return self._tenant_id

    @property
    def slug(self) -> str | None:
        return self._slug

    @property
    def tenant(self) -> Tenant | None:
        return self._tenant

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> AppException | None:
        return self._error

    @property
    def is_valid_tenant(self) -> bool:
        """True only when id, slug and tenant data are all bound."""
        return (
            self._tenant_id is not None
            and self._slug is not None
            and self._tenant is not None
        )

    @property
    def state(self) -> TenantState:
        if self._loading:
            return TenantState.LOADING
        if self.is_valid_tenant:
            return TenantState.VALID
        if self._error is not None:
            return TenantState.INVALID
        return TenantState.EMPTY

    @property
    def plan_type(self) -> PlanType | None:
        return self._tenant.plan_type if self._tenant else None

    @property
    def is_free_plan(self) -> bool:
        return self.plan_type == PlanType.FREE

    def subscribe(self, listener: TenantListener) -> Callable[[], None]:
        """Call ``listener`` after every committed state change.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    async def _restore_current(self) -> None:
        """Rewrite the fast-lookup keys from the committed state.

        Called when another transition ran while this one was writing
        to storage. A load still in flight writes the keys itself when
        it commits.
        """
        if self._loading:
            return
        if self._tenant_id is not None and self._slug is not None:
            await self.cache.remember_current(self._slug, self._tenant_id)
        elif self._slug is None:
            await self.cache.clear_current()

    # ============================================================
    # Transitions
    # ============================================================

    async def load_tenant(self, slug: str) -> Tenant | None:
        """Bind the context to the barbershop identified by ``slug``.

        Calling again with the slug that is already bound is a no-op.
        A call with a different slug supersedes any load in flight.

        Args:
            slug: Barbershop slug

        Returns:
            The bound tenant, or None if this load was superseded

        Raises:
            InvalidSlugFormat: If the slug is malformed
            TenantNotFound: If no barbershop has this slug
            TenantResolutionFailed: On transport or backend errors
        """
        if self.is_valid_tenant and self._slug == slug and not self._loading:
            return self._tenant
        return await self._load(slug)

    async def _load(self, slug: str) -> Tenant | None:
        self._request_token += 1
        token = self._request_token

        self._slug = slug
        self._tenant_id = None
        self._tenant = None
        self._error = None
        self._loading = True
        logger.info("tenant_load_started", slug=slug)
        self._notify()

        try:
            tenant = await self.resolver.resolve(slug)
        except AppException as e:
            if token != self._request_token:
                logger.debug("tenant_load_discarded", slug=slug, outcome="error")
                await self._restore_current()
                return None
            self._tenant_id = None
            self._tenant = None
            self._error = e
            self._loading = False
            logger.warning("tenant_load_failed", slug=slug, error_code=e.error_code)
            self._notify()
            raise

        if token != self._request_token:
            logger.debug("tenant_load_discarded", slug=slug, outcome="resolved")
            await self._restore_current()
            return None

        self._tenant_id = tenant.id
        self._tenant = tenant
        self._loading = False
        logger.info("tenant_loaded", slug=slug, tenant_id=tenant.id)
        self._notify()

        await self.cache.remember_current(slug, tenant.id)
        if token != self._request_token:
            await self._restore_current()
        return tenant

    async def clear_tenant(self) -> None:
        """Unbind the tenant and forget the current-tenant fast lookups.

        Cached tenant entries stay; they may still serve later loads.
        Any load in flight is superseded.
        """
        self._request_token += 1
        token = self._request_token
        previous = self._slug

        self._tenant_id = None
        self._slug = None
        self._tenant = None
        self._error = None
        self._loading = False
        logger.info("tenant_cleared", previous_slug=previous)
        self._notify()

        await self.cache.clear_current()
        if token != self._request_token:
            await self._restore_current()

    async def refresh_tenant(self) -> Tenant | None:
        """Drop the cached entry for the current slug and load it again."""
        slug = self._slug
        if slug is None:
            logger.warning("tenant_refresh_skipped", reason="no slug bound")
            return None

        await self.cache.invalidate(slug)
        return await self._load(slug)

    def update_settings(self, partial: Mapping[str, Any]) -> None:
        """Shallow-merge ``partial`` into the bound tenant's settings.

        Only the in-memory tenant changes; saving to the backend is the
        caller's job.
        """
        if self._tenant is None:
            logger.warning("tenant_settings_update_skipped", reason="no tenant bound")
            return

        settings_ = self._tenant.settings.merged(partial)
        self._tenant = self._tenant.model_copy(update={"settings": settings_})
        logger.info("tenant_settings_updated", keys=sorted(partial))
        self._notify()

    async def sync_with_route(self, path: str) -> Tenant | None:
        """Drive the binding from the active path.

        Public paths clear the binding. A slug different from the bound
        one starts a load. A path with no slug clears the binding unless
        it is an ``/app/`` route.

        Returns:
            The tenant bound after the transition, if any

        Raises:
            InvalidSlugFormat, TenantNotFound, TenantResolutionFailed:
                When the load started by this path fails, so navigation
                can redirect or offer a retry.
        """
        route = extract_slug_from_path(path, self.public_paths, self.reserved_segments)

        if route.is_public:
            if self.state != TenantState.EMPTY:
                await self.clear_tenant()
            return None

        if route.slug is not None and route.slug != self._slug:
            return await self.load_tenant(route.slug)

        if route.slug is None and self._slug is not None and not route.is_app_route:
            await self.clear_tenant()

        return self._tenant
