"""Commands: slugify, validate-slug, check-slug."""

import asyncio

import typer
from rich.console import Console

from barbershop_tenancy.core.utils import generate_slug_from_name, validate_slug_format
from barbershop_tenancy.session import open_session


console = Console()


def slugify(
    name: str = typer.Argument(..., help="Barbershop display name"),
) -> None:
    """Print the slug generated from a barbershop name."""
    slug = generate_slug_from_name(name)
    if not slug:
        console.print(f"[red]Error:[/red] No slug can be generated from '{name}'.")
        raise typer.Exit(1)
    console.print(slug)


def validate_slug(
    slug: str = typer.Argument(..., help="Slug to validate"),
) -> None:
    """Check a slug against the format rules, without any request."""
    result = validate_slug_format(slug)
    if not result.valid:
        console.print(f"[red]✗[/red] {result.message}")
        raise typer.Exit(1)
    console.print(f"[green]✓[/green] {result.message}")


def check_slug(
    slug: str = typer.Argument(..., help="Slug to check"),
) -> None:
    """Ask the backend whether a slug is still free."""

    async def _check() -> tuple[bool, str]:
        async with open_session() as session:
            availability = await session.resolver.check_slug_availability(slug)
            return availability.available, availability.message

    available, message = asyncio.run(_check())
    if available:
        console.print(f"[green]✓[/green] '{slug}' is available. {message}".rstrip())
    else:
        console.print(f"[yellow]✗[/yellow] '{slug}' is not available. {message}".rstrip())
        raise typer.Exit(1)
