"""Appointment store.

Appointments change often, so their results are cached for two minutes.
"""

from datetime import date

from barbershop_tenancy.core.constants import APPOINTMENT_CACHE_TTL_SECONDS
from barbershop_tenancy.core.store import TenantScopedStore, query_key
from barbershop_tenancy.modules.appointments.schemas import (
    Appointment,
    AppointmentStatus,
)


class AppointmentStore(TenantScopedStore[Appointment]):
    entity_name = "appointments"
    default_ttl = APPOINTMENT_CACHE_TTL_SECONDS

    async def fetch_by_status(self, status: AppointmentStatus) -> list[Appointment]:
        filters = {"status": AppointmentStatus(status)}
        return await self._fetch(query_key(self.entity_name, filters), filters)

    async def fetch_by_barber_id(self, barber_id: str) -> list[Appointment]:
        filters = {"barberId": barber_id}
        return await self._fetch(query_key(self.entity_name, filters), filters)

    async def fetch_by_date(self, day: date) -> list[Appointment]:
        filters = {"date": day}
        return await self._fetch(query_key(self.entity_name, filters), filters)

    async def update_status(
        self, appointment_id: str, status: AppointmentStatus
    ) -> Appointment | None:
        """Confirm, complete or cancel an appointment."""
        return await self.update(
            appointment_id, {"status": AppointmentStatus(status).value}
        )
