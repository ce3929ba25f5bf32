"""Barber store."""

from barbershop_tenancy.core.constants import BARBER_CACHE_TTL_SECONDS
from barbershop_tenancy.core.store import TenantScopedStore
from barbershop_tenancy.modules.barbers.schemas import Barber


class BarberStore(TenantScopedStore[Barber]):
    entity_name = "barbers"
    default_ttl = BARBER_CACHE_TTL_SECONDS

    def get_by_id(self, barber_id: str) -> Barber | None:
        """Look a barber up in the loaded results, without a request."""
        return next((b for b in self.results if b.id == barber_id), None)
