"""Barbers module."""

from barbershop_tenancy.modules.barbers.repos import BarberRepository
from barbershop_tenancy.modules.barbers.schemas import Barber
from barbershop_tenancy.modules.barbers.store import BarberStore


__all__ = [
    "Barber",
    "BarberRepository",
    "BarberStore",
]
