"""Barbershop tenancy CLI."""

import typer
from rich.console import Console

from barbershop_tenancy import __version__
from barbershop_tenancy.commands import cache, slug, tenant
from barbershop_tenancy.config import get_settings
from barbershop_tenancy.core.logging import configure_logging


console = Console()

app = typer.Typer(
    name="barbershop-tenancy",
    help="Resolve barbershops and manage the tenant cache.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register commands
app.command(name="slugify")(slug.slugify)
app.command(name="validate-slug")(slug.validate_slug)
app.command(name="check-slug")(slug.check_slug)
app.command(name="resolve")(tenant.resolve)
app.command(name="clean-cache")(cache.clean_cache)


@app.callback(invoke_without_command=True)
def version_callback(
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit."
    ),
) -> None:
    """Barbershop tenancy CLI - resolve barbershops and manage the tenant cache."""
    if version:
        console.print(f"[bold cyan]barbershop-tenancy[/bold cyan] version {__version__}")
        raise typer.Exit()
    configure_logging(get_settings())


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
