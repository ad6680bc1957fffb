"""Stowaway - a dotfiles manager backed by git and GNU Stow."""

from .cli import main
from .config import Config
from .dotfiles import DotfilesRepo, build_commit_message, parse_name_status
from .packages import ToolInstaller
from .system import Environment, detect_platform
from .utils import get_version

__all__ = [
    "Config",
    "DotfilesRepo",
    "Environment",
    "ToolInstaller",
    "build_commit_message",
    "detect_platform",
    "get_version",
    "main",
    "parse_name_status",
]
