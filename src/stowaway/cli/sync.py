"""Setup, pull, sync and push commands for stowaway CLI."""

import typer

from .helpers import fail_on_error, get_app_context


def register(app: typer.Typer) -> None:
    """Register repository commands with the app."""
    app.command()(setup)
    app.command()(pull)
    app.command()(sync)
    app.command()(push)


def setup(ctx: typer.Context):
    """Clone and stow dotfiles.

    Clones the configured repository (unless the dotfiles directory
    already exists) and links its contents into your home directory.
    """
    app_ctx = get_app_context(ctx)
    with fail_on_error():
        dotfiles = app_ctx.dotfiles_repo()
        dotfiles.clone()
        dotfiles.stow()


def pull(ctx: typer.Context):
    """Pull the latest changes from the dotfiles repository."""
    app_ctx = get_app_context(ctx)
    with fail_on_error():
        app_ctx.dotfiles_repo().pull()


def sync(ctx: typer.Context):
    """Pull and stow the latest dotfiles."""
    app_ctx = get_app_context(ctx)
    with fail_on_error():
        dotfiles = app_ctx.dotfiles_repo()
        dotfiles.pull()
        dotfiles.stow()


def push(ctx: typer.Context):
    """Push local changes to the dotfiles repository.

    Stages everything, commits with a message that lists the added,
    modified and deleted files, and pushes to the tracked branch.
    Does nothing when the working tree is clean.
    """
    app_ctx = get_app_context(ctx)
    with fail_on_error():
        app_ctx.dotfiles_repo().publish()
