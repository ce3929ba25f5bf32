"""Tenant context and resolution for multi-tenant barbershop clients."""

__version__ = "0.1.0"
