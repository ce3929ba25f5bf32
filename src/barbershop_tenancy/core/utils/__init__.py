"""Pure helpers shared across the package."""

from barbershop_tenancy.core.utils.text import (
    SlugValidation,
    generate_slug_from_name,
    validate_slug_format,
)


__all__ = [
    "SlugValidation",
    "generate_slug_from_name",
    "validate_slug_format",
]
