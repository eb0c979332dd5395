"""Typer CLI root application with serve command."""

import typer

from variant_map.core.config import get_settings
from variant_map.core.logging import setup_logging

app = typer.Typer(name="variant-map", help="Variant map API management CLI")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
    host: str = typer.Option("0.0.0.0", "--host", help="Bind host"),  # noqa: S104
    port: int = typer.Option(8000, "--port", help="Bind port"),
) -> None:
    """Start the API server."""
    import uvicorn

    uvicorn.run(
        "variant_map.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


def _register_subcommands() -> None:
    """Register all CLI subcommand groups."""
    from variant_map.cli.admin_cmd import admin_app
    from variant_map.cli.db_cmd import db_app

    app.add_typer(db_app, name="db", help="Database migration commands")
    app.add_typer(admin_app, name="admin", help="Admin gate commands")


_register_subcommands()
