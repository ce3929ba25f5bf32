"""HTTP repository for barbers."""

from barbershop_tenancy.core.repository import HttpRepository
from barbershop_tenancy.modules.barbers.schemas import Barber


class BarberRepository(HttpRepository[Barber]):
    resource = "barbers"
    model = Barber
