"""Install command for setting up the configured tools."""

from typing import Optional

import typer

from ..packages import ToolInstaller, parse_skip
from ..system import detect_platform
from .helpers import fail_on_error, get_app_context


def register(app: typer.Typer) -> None:
    """Register the install command with the app."""
    app.command()(install)


def install(
    ctx: typer.Context,
    skip: Optional[str] = typer.Option(
        None,
        "--skip",
        help="Comma-separated list of tools to skip during installation",
    ),
):
    """Install necessary tools and dependencies.

    Installs every tool listed under 'tools' in the config that is not
    already on your PATH, using apt, dnf, yay or Homebrew depending on
    the platform.

    Examples:
        stowaway install
        stowaway install --skip neovim,tmux
    """
    app_ctx = get_app_context(ctx)
    skip_set = parse_skip(skip)
    with fail_on_error():
        tools = app_ctx.config.tools
        if not tools:
            typer.echo("No tools specified for installation.")
            return
        installer = ToolInstaller(detect_platform(), runner=app_ctx.runner)
        installed = installer.install(tools, skip=skip_set)

    if installed:
        typer.echo(f"✓ Installed {len(installed)} tool(s): {', '.join(installed)}")
    elif all(tool in skip_set for tool in tools):
        typer.echo("Nothing to install: every tool was skipped.")
    else:
        typer.echo("✓ All tools are already installed.")
