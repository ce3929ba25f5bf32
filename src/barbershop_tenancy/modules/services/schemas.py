"""Pydantic schemas for services offered by a barbershop."""

from barbershop_tenancy.core.repository import TenantEntity


class Service(TenantEntity):
    name: str
    price: float
    description: str | None = None
    duration: int | None = None  # minutes
    is_active: bool = True
