"""HTTP repository for appointments."""

from barbershop_tenancy.core.repository import HttpRepository
from barbershop_tenancy.modules.appointments.schemas import Appointment


class AppointmentRepository(HttpRepository[Appointment]):
    resource = "appointments"
    model = Appointment
