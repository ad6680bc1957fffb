"""Shared helper functions for CLI commands."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer

from ..config import Config, find_config_path
from ..dotfiles import DotfilesRepo
from ..errors import StowawayError
from ..runner import CommandRunner
from ..system import Environment

logger = logging.getLogger(__name__)


class AppContext:
    """Per-invocation state shared by all commands.

    Built once in the app callback and stored on ``ctx.obj``. The config
    file is only read when a command first asks for it, so commands like
    ``version`` work without one.
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        env: Optional[Environment] = None,
        runner: Optional[CommandRunner] = None,
    ):
        self.config_path = config_path
        self.env = env or Environment()
        self.runner = runner or CommandRunner()
        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        if self._config is None:
            if self.config_path is not None:
                self._config = Config(self.config_path, env=self.env)
            else:
                self._config = Config.discover(self.env)
        return self._config

    def config_or_defaults(self) -> Config:
        """Like ``config``, but fall back to defaults when no file exists."""
        if self._config is None and self.config_path is None:
            if find_config_path(self.env.home) is None:
                self._config = Config(env=self.env)
        return self.config

    def dotfiles_repo(self) -> DotfilesRepo:
        config = self.config
        return DotfilesRepo(
            dotfiles_dir=config.dotfiles_dir,
            home=self.env.home,
            repo_url=config.repo_url,
            files=config.files,
            runner=self.runner,
        )


def get_app_context(ctx: typer.Context) -> AppContext:
    if ctx.obj is None:
        ctx.obj = AppContext()
    return ctx.obj


@contextmanager
def fail_on_error() -> Iterator[None]:
    """Log a StowawayError and exit with status 1."""
    try:
        yield
    except StowawayError as e:
        logger.error(str(e))
        raise typer.Exit(1)
