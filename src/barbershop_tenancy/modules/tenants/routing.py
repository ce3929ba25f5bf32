"""Slug extraction from application paths.

Two route shapes carry a slug: ``/app/<slug>/...`` and a bare
``/<slug>``. Public paths never carry one, and single segments that
name application pages are checked against the reserved list before
being taken as a slug.
"""

import re
from collections.abc import Collection
from dataclasses import dataclass
from urllib.parse import urlsplit

from barbershop_tenancy.core.constants import APP_ROUTE_PREFIX


_APP_ROUTE_RE = re.compile(r"^/app/([a-zA-Z0-9-]+)")
_BARE_ROUTE_RE = re.compile(r"^/([a-zA-Z0-9-]+)$")


@dataclass(frozen=True)
class RouteMatch:
    """What a path says about the tenant."""

    path: str
    slug: str | None
    is_public: bool
    is_app_route: bool


def normalize_path(path: str) -> str:
    """Drop query, fragment and trailing slash (except for the root)."""
    path = urlsplit(path).path or "/"
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def extract_slug_from_path(
    path: str,
    public_paths: Collection[str],
    reserved_segments: Collection[str],
) -> RouteMatch:
    """Work out which slug, if any, a path refers to.

    Args:
        path: Current location path, possibly with query string
        public_paths: Exact paths that never belong to a tenant
        reserved_segments: Single segments that are app pages, not slugs

    Returns:
        RouteMatch with ``slug`` set when the path is tenant-scoped

    Examples:
        >>> extract_slug_from_path("/app/barbearia-alpha/agenda", ["/"], []).slug
        'barbearia-alpha'
        >>> extract_slug_from_path("/dashboard", ["/"], ["dashboard"]).slug is None
        True
    """
    path = normalize_path(path)

    if path in public_paths:
        return RouteMatch(path=path, slug=None, is_public=True, is_app_route=False)

    if path.startswith(APP_ROUTE_PREFIX) or path == APP_ROUTE_PREFIX.rstrip("/"):
        match = _APP_ROUTE_RE.match(path)
        return RouteMatch(
            path=path,
            slug=match.group(1) if match else None,
            is_public=False,
            is_app_route=True,
        )

    slug = None
    match = _BARE_ROUTE_RE.match(path)
    if match and match.group(1) not in reserved_segments:
        slug = match.group(1)
    return RouteMatch(path=path, slug=slug, is_public=False, is_app_route=False)
