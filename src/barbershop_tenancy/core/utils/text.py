"""Text processing utilities for barbershop slugs."""

import re
import unicodedata
from dataclasses import dataclass

from barbershop_tenancy.core.constants import MAX_SLUG_LENGTH, MIN_SLUG_LENGTH, SLUG_PATTERN


_SLUG_RE = re.compile(SLUG_PATTERN)


@dataclass(frozen=True)
class SlugValidation:
    """Outcome of a slug format check."""

    valid: bool
    message: str


def generate_slug_from_name(name: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Generate a URL-safe slug from a barbershop name.

    Converts the input string to a URL-friendly slug by:
    - Converting to lowercase
    - Stripping diacritics
    - Removing special characters
    - Replacing runs of whitespace with single hyphens
    - Collapsing repeated hyphens and trimming them from both ends
    - Truncating to max_length

    Args:
        name: The barbershop name
        max_length: Maximum length of output slug (default 50)

    Returns:
        URL-safe lowercase slug

    Examples:
        >>> generate_slug_from_name("Barbearia do João!!")
        'barbearia-do-joao'
        >>> generate_slug_from_name("  Corte  &  Cia -- Centro ")
        'corte-cia-centro'
    """
    slug = unicodedata.normalize("NFD", name.lower().strip())
    slug = "".join(ch for ch in slug if not unicodedata.combining(ch))
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    slug = slug.strip("-")
    return slug[:max_length].rstrip("-")


def validate_slug_format(slug: str) -> SlugValidation:
    """Check a slug against the format rules.

    Runs before any network call so malformed slugs never cost a request.

    Args:
        slug: Candidate slug

    Returns:
        SlugValidation with a human-readable reason when invalid
    """
    if not slug or not slug.strip():
        return SlugValidation(False, "Slug is required")

    if len(slug) < MIN_SLUG_LENGTH:
        return SlugValidation(
            False, f"Slug must be at least {MIN_SLUG_LENGTH} characters long"
        )

    if len(slug) > MAX_SLUG_LENGTH:
        return SlugValidation(
            False, f"Slug must be at most {MAX_SLUG_LENGTH} characters long"
        )

    if not _SLUG_RE.fullmatch(slug):
        return SlugValidation(
            False, "Slug may only contain lowercase letters, numbers and hyphens"
        )

    if slug.startswith("-") or slug.endswith("-"):
        return SlugValidation(False, "Slug cannot start or end with a hyphen")

    if "--" in slug:
        return SlugValidation(False, "Slug cannot contain consecutive hyphens")

    return SlugValidation(True, "Slug is valid")
