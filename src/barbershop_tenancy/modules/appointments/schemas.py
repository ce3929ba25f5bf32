"""Pydantic schemas for appointments."""

from datetime import date as date_
from enum import Enum

from barbershop_tenancy.core.repository import TenantEntity


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Appointment(TenantEntity):
    """A client booking with one barber."""

    client_name: str
    service_name: str | None = None
    service_id: str | None = None
    barber_id: str
    barber_name: str | None = None
    date: date_
    time: str
    status: AppointmentStatus = AppointmentStatus.PENDING
    price: float | None = None
    wppclient: str | None = None
    notes: str | None = None
