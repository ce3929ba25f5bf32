"""Appointments module."""

from barbershop_tenancy.modules.appointments.repos import AppointmentRepository
from barbershop_tenancy.modules.appointments.schemas import (
    Appointment,
    AppointmentStatus,
)
from barbershop_tenancy.modules.appointments.store import AppointmentStore


__all__ = [
    "Appointment",
    "AppointmentRepository",
    "AppointmentStatus",
    "AppointmentStore",
]
