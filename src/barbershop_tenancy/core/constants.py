"""Library-wide constants.

This module defines constants used throughout the package
to avoid magic numbers and keep storage keys consistent.
"""

# Slug format
MIN_SLUG_LENGTH = 3
MAX_SLUG_LENGTH = 50
SLUG_PATTERN = r"[a-z0-9-]+"

# Tenant cache storage keys
TENANT_CACHE_PREFIX = "tenant_cache_"
CURRENT_TENANT_ID_KEY = "current_barbershop_id"
CURRENT_TENANT_SLUG_KEY = "current_barbershop_slug"

# Tenant-scoped result cache
SCOPED_CACHE_PREFIX = "tenant:"

# TTL defaults (seconds)
DEFAULT_TENANT_CACHE_TTL_SECONDS = 300  # 5 minutes
APPOINTMENT_CACHE_TTL_SECONDS = 120  # 2 minutes
BARBER_CACHE_TTL_SECONDS = 300
COMMENT_CACHE_TTL_SECONDS = 300
SERVICE_CACHE_TTL_SECONDS = 300

# Routing
APP_ROUTE_PREFIX = "/app/"

# Defaults applied under whatever settings the backend returns
DEFAULT_TIMEZONE = "America/Sao_Paulo"
DEFAULT_THEME = "default"
DEFAULT_WORKING_HOURS: dict[str, dict[str, str]] = {
    "monday": {"start": "09:00", "end": "18:00"},
    "tuesday": {"start": "09:00", "end": "18:00"},
    "wednesday": {"start": "09:00", "end": "18:00"},
    "thursday": {"start": "09:00", "end": "18:00"},
    "friday": {"start": "09:00", "end": "18:00"},
    "saturday": {"start": "09:00", "end": "16:00"},
    "sunday": {"start": "10:00", "end": "14:00"},
}

# Store messages
NOT_INITIALIZED_MESSAGE = "Tenant not initialized. Call initialize_tenant first."
