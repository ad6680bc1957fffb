from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import yaml

from .errors import ConfigError

if TYPE_CHECKING:
    from .system import Environment

logger = logging.getLogger(__name__)


def default_config_paths(home: Path) -> List[Path]:
    """Config locations, in the order they are searched."""
    return [
        Path("config.yml"),
        home / ".config" / "dotfiles" / "config.yml",
        home / ".dotfiles-config.yml",
    ]


def find_config_path(home: Path) -> Optional[Path]:
    """Return the first existing config file, or None."""
    for path in default_config_paths(home):
        if path.exists():
            return path
    return None


class Config:
    """Configuration for stowaway, read from a YAML file.

    Keys:
        dotfiles_repo: URL of the dotfiles git repository.
        dotfiles_dir: Local checkout directory (default ``~/dotfiles``).
        tools: Ordered list of tools to install.
        files: Stow packages to link; empty means the whole repository.
    """

    DEFAULT_CONFIG: Dict[str, Any] = {
        "dotfiles_repo": None,
        "dotfiles_dir": "~/dotfiles",
        "tools": [],
        "files": [],
    }

    def __init__(
        self,
        config_path: Optional[Path] = None,
        env: Optional[Environment] = None,
    ):
        # Use deepcopy to avoid mutating the class-level DEFAULT_CONFIG
        self.data = copy.deepcopy(self.DEFAULT_CONFIG)
        self.env = env
        self.path = config_path

        if config_path is not None:
            self._load(config_path)

    def _load(self, config_path: Path) -> None:
        try:
            with open(config_path, "r") as f:
                user_config = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(
                f"Failed to read config file {config_path}: {e}"
            ) from e
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Failed to parse config file {config_path}: {e}"
            ) from e

        if user_config is None:
            user_config = {}
        if not isinstance(user_config, dict):
            raise ConfigError(
                f"Config file {config_path} must contain a mapping"
            )

        for key in ("tools", "files"):
            value = user_config.get(key)
            if value is not None and not isinstance(value, list):
                raise ConfigError(f"'{key}' in {config_path} must be a list")

        # Explicit nulls fall back to the defaults
        self.data.update(
            {k: v for k, v in user_config.items() if v is not None}
        )
        logger.info(f"Configuration loaded from {config_path}")

    @classmethod
    def discover(cls, env: Environment) -> "Config":
        """Load the first config file found on the search path."""
        path = find_config_path(env.home)
        if path is None:
            searched = ", ".join(str(p) for p in default_config_paths(env.home))
            raise ConfigError(f"No configuration file found in: {searched}")
        return cls(path, env=env)

    @property
    def repo_url(self) -> Optional[str]:
        return self.data.get("dotfiles_repo")

    @property
    def dotfiles_dir(self) -> Path:
        raw = str(self.data.get("dotfiles_dir") or "~/dotfiles")
        if self.env is not None:
            return self.env.expand(raw)
        return Path(os.path.expandvars(raw)).expanduser()

    @property
    def tools(self) -> List[str]:
        return [str(t) for t in self.data.get("tools", [])]

    @property
    def files(self) -> List[str]:
        return [str(f) for f in self.data.get("files", [])]
