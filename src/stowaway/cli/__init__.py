"""Stowaway CLI - Command-line interface for dotfiles management."""

from pathlib import Path
from typing import Optional

import typer

from ..utils import get_version, setup_logging
from . import init, install, sync, upgrade
from .helpers import AppContext

# Create the main app
app = typer.Typer(
    name="stowaway",
    help="Manage your dotfiles with git and GNU Stow.",
    add_completion=True,
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging output.",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config.yml (default: search the usual locations).",
    ),
):
    """Stowaway - dotfiles manager with tool installation."""
    setup_logging(verbose=verbose)
    if ctx.obj is None:
        ctx.obj = AppContext(config_path=config)


# Register all commands
init.register(app)
sync.register(app)
install.register(app)
upgrade.register(app)


@app.command()
def version():
    """Show the version of stowaway."""
    typer.echo(f"stowaway version {get_version()}")


def main():
    """Main entry point for the stowaway CLI."""
    app()
