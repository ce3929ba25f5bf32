"""Services module."""

from barbershop_tenancy.modules.services.repos import ServiceRepository
from barbershop_tenancy.modules.services.schemas import Service
from barbershop_tenancy.modules.services.store import ServiceStore


__all__ = [
    "Service",
    "ServiceRepository",
    "ServiceStore",
]
