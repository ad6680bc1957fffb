"""Upgrade command for updating stowaway itself."""

import shutil

import typer

from ..utils import get_version
from .helpers import fail_on_error, get_app_context


def register(app: typer.Typer) -> None:
    """Register the upgrade command with the app."""
    app.command()(upgrade)


def upgrade(ctx: typer.Context):
    """Upgrade stowaway to the latest version.

    Uses uv to upgrade the stowaway package.

    Example:
        stowaway upgrade
    """
    typer.echo(f"Current version: {get_version()}")

    if shutil.which("uv") is None:
        typer.echo(
            "Error: uv not found. Please upgrade manually with:",
            err=True,
        )
        typer.echo("  uv tool upgrade stowaway", err=True)
        raise typer.Exit(1)

    typer.echo("Upgrading stowaway...")
    app_ctx = get_app_context(ctx)
    with fail_on_error():
        app_ctx.runner.run("uv", "tool", "upgrade", "stowaway")
    typer.echo("✓ Upgrade complete")
