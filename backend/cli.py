"""
Menu admin CLI.

Command-line interface for database setup, demo data and running the server.

Usage:
    menu-admin init-db
    menu-admin seed --restaurant-id 00000000-0000-0000-0000-000000000001
    menu-admin serve --reload
    menu-admin show-config
"""

import sys

import typer
from rich.console import Console
from rich.table import Table
from sqlalchemy.engine import make_url

app = typer.Typer(
    name="menu-admin",
    help="Smart Restaurant menu management CLI",
    add_completion=False,
)
console = Console()


# =============================================================================
# Database Commands
# =============================================================================

@app.command()
def init_db():
    """Create all database tables."""
    from shared.infrastructure.db import engine
    from rest_api.models import Base

    console.print("[blue]Creating tables...[/blue]")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        console.print(f"[red]✗ Table creation failed: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]✓ {len(Base.metadata.tables)} tables ready[/green]")


@app.command()
def seed(
    restaurant_id: str = typer.Option(None, help="Restaurant to seed (defaults to the configured one)"),
    force: bool = typer.Option(False, "--force", "-f", help="Seed even if a menu exists"),
):
    """Seed the database with a demo menu."""
    from shared.config.settings import settings
    from shared.infrastructure.db import get_db_context
    from rest_api.seed import seed as seed_menu

    restaurant_id = restaurant_id or settings.default_restaurant_id
    console.print(f"[blue]Seeding demo menu for: {restaurant_id}[/blue]")

    try:
        with get_db_context() as db:
            created = seed_menu(db, restaurant_id, force=force)
    except Exception as e:
        console.print(f"[red]✗ Seeding failed: {e}[/red]")
        raise typer.Exit(1)

    if not any(created.values()):
        console.print("[yellow]Menu already present, nothing created (use --force)[/yellow]")
        return

    table = Table(title="Seeded rows")
    table.add_column("Entity", style="cyan")
    table.add_column("Created", style="green")
    for entity, count in created.items():
        table.add_row(entity, str(count))
    console.print(table)


# =============================================================================
# Server Commands
# =============================================================================

@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind address"),
    port: int = typer.Option(None, help="Port (defaults to REST_API_PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes"),
):
    """Run the REST API with uvicorn."""
    import uvicorn
    from shared.config.settings import settings

    port = port or settings.rest_api_port
    console.print(f"[blue]Starting menu API on {host}:{port}[/blue]")
    uvicorn.run("rest_api.main:app", host=host, port=port, reload=reload)


@app.command()
def show_config():
    """Show the effective settings (database password masked)."""
    from shared.config.settings import settings

    table = Table(title="Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    for name, value in settings.model_dump().items():
        if name == "database_url":
            value = make_url(value).render_as_string(hide_password=True)
        table.add_row(name, str(value))

    console.print(table)


@app.command()
def version():
    """Show version information."""
    table = Table(title="Menu API Version")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("API", "1.0.0")
    table.add_row("Python", sys.version.split()[0])

    console.print(table)


if __name__ == "__main__":
    app()
