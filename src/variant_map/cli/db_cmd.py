"""Schema migration commands backed by Alembic."""

from pathlib import Path

import typer
from loguru import logger

db_app = typer.Typer()

ConfigOption = typer.Option(Path("alembic.ini"), "--config", "-c", help="Path to alembic.ini")


def _alembic_config(path: Path):  # type: ignore[no-untyped-def]
    """Load the Alembic config, failing fast when the ini file is absent."""
    from alembic.config import Config

    if not path.is_file():
        typer.echo(f"Error: Alembic config not found at {path}", err=True)
        raise typer.Exit(code=1)
    return Config(str(path))


@db_app.command()
def upgrade(
    revision: str = typer.Argument("head", help="Target revision"),
    config: Path = ConfigOption,
) -> None:
    """Apply migrations up to REVISION."""
    from alembic import command

    logger.info(f"Migrating schema up to {revision}")
    command.upgrade(_alembic_config(config), revision)
    logger.info("Schema is at the requested revision")


@db_app.command()
def downgrade(
    revision: str = typer.Argument("-1", help="Target revision"),
    config: Path = ConfigOption,
) -> None:
    """Revert migrations down to REVISION (one step by default)."""
    from alembic import command

    logger.info(f"Reverting schema to {revision}")
    command.downgrade(_alembic_config(config), revision)
    logger.info("Schema is at the requested revision")


@db_app.command()
def current(config: Path = ConfigOption) -> None:
    """Print the revision the database is at."""
    from alembic import command

    command.current(_alembic_config(config), verbose=True)


@db_app.command()
def history(config: Path = ConfigOption) -> None:
    """List known migrations, newest first."""
    from alembic import command

    command.history(_alembic_config(config))
