"""HTTP repository for services."""

from barbershop_tenancy.core.repository import HttpRepository
from barbershop_tenancy.modules.services.schemas import Service


class ServiceRepository(HttpRepository[Service]):
    resource = "services"
    model = Service
