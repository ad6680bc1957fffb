"""Init command for stowaway CLI."""

from typing import Optional

import typer

from .helpers import fail_on_error, get_app_context


def register(app: typer.Typer) -> None:
    """Register the init command with the app."""
    app.command()(init)


def init(
    ctx: typer.Context,
    remote: Optional[str] = typer.Option(
        None, "--remote", help="Remote repository URL to add as origin"
    ),
):
    """Initialize a new dotfiles repository.

    Creates the dotfiles directory if needed, runs 'git init' in it and
    optionally adds a remote called origin.

    Examples:
        stowaway init
        stowaway init --remote git@github.com:me/dotfiles.git
    """
    app_ctx = get_app_context(ctx)
    with fail_on_error():
        app_ctx.config_or_defaults()
        app_ctx.dotfiles_repo().init(remote=remote)
    typer.echo("Dotfiles repository initialized successfully!")
