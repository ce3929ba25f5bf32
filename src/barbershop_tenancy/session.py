"""Per-session composition of the tenant components.

A ``TenantSession`` owns everything that used to be process-wide state:
the tenant cache, the current-tenant context and the entity stores.
Open one per client session and close it at the end.

Usage:
    async with open_session() as session:
        await session.context.sync_with_route("/app/barbearia-alpha/agenda")
        await session.appointments.fetch_all()
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
import structlog

from barbershop_tenancy.config import Settings, get_settings
from barbershop_tenancy.core.cache import (
    KeyValueStorage,
    RedisStorage,
    ResultCache,
    create_storage,
    release_redis_pool,
    retain_redis_pool,
)
from barbershop_tenancy.core.store import TenantScopedStore
from barbershop_tenancy.modules.appointments import (
    AppointmentRepository,
    AppointmentStore,
)
from barbershop_tenancy.modules.barbers import BarberRepository, BarberStore
from barbershop_tenancy.modules.comments import CommentRepository, CommentStore
from barbershop_tenancy.modules.services import ServiceRepository, ServiceStore
from barbershop_tenancy.modules.tenants import (
    TenantApiClient,
    TenantCache,
    TenantContext,
    TenantResolver,
    TenantState,
)


logger = structlog.get_logger()


class TenantSession:
    """Tenant cache, context and stores for one client session.

    The stores follow the context: when it commits a valid tenant they
    are bound to its id, and any other committed state unbinds them.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        http: httpx.AsyncClient | None = None,
        storage: KeyValueStorage | None = None,
    ) -> None:
        """Build the session.

        Args:
            settings: Library settings; defaults to the environment
            http: Client for the backend API; one is created (and later
                closed) from ``api_base_url`` when omitted
            storage: Durable storage for the tenant cache; defaults to
                the backend selected by ``cache_backend``
        """
        self.settings = settings or get_settings()
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            base_url=self.settings.api_base_url,
            timeout=self.settings.api_timeout_seconds,
        )
        self.storage = storage or create_storage(self.settings)
        if isinstance(self.storage, RedisStorage):
            retain_redis_pool(self.storage.url)

        self.tenant_cache = TenantCache(
            self.storage, default_ttl=self.settings.tenant_cache_ttl_seconds
        )
        self.api = TenantApiClient(self.http)
        self.resolver = TenantResolver(self.api, self.tenant_cache)
        self.context = TenantContext(
            self.resolver,
            self.tenant_cache,
            public_paths=self.settings.public_paths,
            reserved_segments=self.settings.reserved_path_segments,
        )

        self.result_cache = ResultCache()
        self.appointments = AppointmentStore(
            AppointmentRepository(self.http),
            self.result_cache,
            self.settings.appointment_cache_ttl_seconds,
        )
        self.barbers = BarberStore(
            BarberRepository(self.http),
            self.result_cache,
            self.settings.barber_cache_ttl_seconds,
        )
        self.comments = CommentStore(
            CommentRepository(self.http),
            self.result_cache,
            self.settings.comment_cache_ttl_seconds,
        )
        self.services = ServiceStore(
            ServiceRepository(self.http),
            self.result_cache,
            self.settings.service_cache_ttl_seconds,
        )

        self._unsubscribe = self.context.subscribe(self._on_tenant_change)

    @property
    def stores(self) -> list[TenantScopedStore]:
        return [self.appointments, self.barbers, self.comments, self.services]

    def _on_tenant_change(self, context: TenantContext) -> None:
        if context.state == TenantState.VALID and context.tenant_id is not None:
            for store in self.stores:
                store.initialize_tenant(context.tenant_id)
        else:
            for store in self.stores:
                store.reset()

    async def start(self) -> None:
        """Drop expired tenant cache entries left by earlier sessions."""
        removed = await self.tenant_cache.clean_expired()
        logger.info(
            "tenant_session_started",
            app=self.settings.app_name,
            expired_entries_removed=removed,
        )

    async def close(self) -> None:
        self._unsubscribe()
        if self._owns_http:
            await self.http.aclose()
        if isinstance(self.storage, RedisStorage):
            await release_redis_pool(self.storage.url)
        logger.info("tenant_session_closed")


@asynccontextmanager
async def open_session(
    settings: Settings | None = None,
    http: httpx.AsyncClient | None = None,
    storage: KeyValueStorage | None = None,
) -> AsyncGenerator[TenantSession, None]:
    """Open a started ``TenantSession`` and close it on exit."""
    session = TenantSession(settings=settings, http=http, storage=storage)
    await session.start()
    try:
        yield session
    finally:
        await session.close()
