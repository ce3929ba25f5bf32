"""Command: clean-cache - Remove expired tenant cache entries."""

import asyncio

import typer
from rich.console import Console

from barbershop_tenancy.config import get_settings
from barbershop_tenancy.session import TenantSession


console = Console()


def clean_cache() -> None:
    """Remove expired and malformed entries from the tenant cache."""
    settings = get_settings()
    if settings.cache_backend != "redis":
        console.print(
            f"[yellow]![/yellow] The '{settings.cache_backend}' cache backend keeps "
            "nothing between runs, so there is nothing to clean. "
            "Set CACHE_BACKEND=redis to clean the shared cache."
        )
        raise typer.Exit(1)

    async def _clean() -> int:
        session = TenantSession(settings=settings)
        try:
            return await session.tenant_cache.clean_expired()
        finally:
            await session.close()

    removed = asyncio.run(_clean())
    console.print(f"[green]✓[/green] Removed {removed} expired tenant cache entries")
