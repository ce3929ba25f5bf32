"""Pydantic schemas for barbers."""

from barbershop_tenancy.core.repository import TenantEntity


class Barber(TenantEntity):
    name: str
    username: str | None = None
    whatsapp: str | None = None
    pix: str | None = None
    is_active: bool = True
