"""Admin gate CLI commands."""

import typer

from variant_map.core.errors import AuthError

admin_app = typer.Typer()


@admin_app.command("issue-token")
def issue_token(
    secret: str = typer.Option(..., prompt=True, hide_input=True, help="Admin secret"),
) -> None:
    """Exchange the admin secret for a bearer token and print it."""
    from variant_map.core.config import get_settings
    from variant_map.services.admin_service import issue_credential

    try:
        token = issue_credential(secret, get_settings())
    except AuthError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=1) from e
    typer.echo(token)


@admin_app.command("verify-token")
def verify_token(
    token: str = typer.Argument(..., help="Bearer token to check"),
) -> None:
    """Check a bearer token's signature and expiry."""
    from datetime import UTC, datetime

    from variant_map.core.config import get_settings
    from variant_map.services.admin_service import verify_credential

    try:
        payload = verify_credential(token, get_settings())
    except AuthError as e:
        typer.echo(f"Invalid: {e.message}", err=True)
        raise typer.Exit(code=1) from e
    expires = datetime.fromtimestamp(payload["exp"], tz=UTC)
    typer.echo(f"Valid until {expires.isoformat()}")
