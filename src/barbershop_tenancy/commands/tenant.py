"""Command: resolve - Resolve a slug to its barbershop."""

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from barbershop_tenancy.core.errors import AppException, TenantNotFound
from barbershop_tenancy.modules.tenants import Tenant
from barbershop_tenancy.session import open_session


console = Console()


def resolve(
    slug: str = typer.Argument(..., help="Barbershop slug"),
    refresh: bool = typer.Option(
        False, "--refresh", "-r", help="Skip the tenant cache"
    ),
) -> None:
    """Resolve a barbershop slug and show the tenant."""

    async def _resolve() -> Tenant:
        async with open_session() as session:
            if refresh:
                await session.tenant_cache.invalidate(slug)
            return await session.resolver.resolve(slug)

    try:
        tenant = asyncio.run(_resolve())
    except TenantNotFound as e:
        console.print(f"[yellow]Not found:[/yellow] {e.message}")
        raise typer.Exit(1)
    except AppException as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)

    table = Table(title=tenant.name, show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value")
    table.add_row("ID", tenant.id)
    table.add_row("Slug", tenant.slug)
    table.add_row("Plan", tenant.plan_type.value)
    table.add_row("Timezone", tenant.settings.timezone)
    table.add_row("Theme", tenant.settings.theme)

    console.print()
    console.print(table)
    console.print()
