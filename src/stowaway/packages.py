"""Platform-aware installation of the tools listed in the configuration."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Callable, FrozenSet, Iterable, List, Optional

from .errors import UnsupportedPlatformError
from .runner import CommandRunner
from .system import OS, Distro, Platform, is_installed

logger = logging.getLogger(__name__)

AUR_HELPER = "yay"
AUR_HELPER_REPO = "https://aur.archlinux.org/yay.git"

HOMEBREW_INSTALL_SCRIPT = (
    '/bin/bash -c "$(curl -fsSL '
    'https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh)"'
)


def parse_skip(value: Optional[str]) -> FrozenSet[str]:
    """Turn a comma-separated ``--skip`` value into a skip set."""
    if not value:
        return frozenset()
    return frozenset(name.strip() for name in value.split(",") if name.strip())


class ToolInstaller:
    """Installs missing tools with the platform's package manager.

    Tools are processed in the order given. Tools in the skip set and
    tools already on PATH are left alone. The first failing command
    raises and stops the run.
    """

    def __init__(
        self,
        platform: Platform,
        runner: Optional[CommandRunner] = None,
        is_installed: Callable[[str], bool] = is_installed,
    ):
        self.platform = platform
        self.runner = runner or CommandRunner()
        self.is_installed = is_installed
        self._index_refreshed = False

    def _get_privilege_cmd(self) -> List[str]:
        """Get the command prefix for privileged operations.

        Returns empty list if already root, otherwise ['sudo'].
        """
        if hasattr(os, "geteuid") and os.geteuid() == 0:
            return []
        return ["sudo"]

    def _privileged(self, *cmd: str) -> None:
        full = self._get_privilege_cmd() + list(cmd)
        self.runner.run(*full)

    def check_supported(self) -> None:
        """Raise UnsupportedPlatformError for an unknown OS family.

        An unknown Linux distribution only fails once a tool actually
        needs installing.
        """
        if self.platform.family is OS.UNSUPPORTED:
            raise UnsupportedPlatformError(
                f"Unsupported OS: {self.platform.system or 'unknown'}"
            )

    def install(
        self, tools: Iterable[str], skip: FrozenSet[str] = frozenset()
    ) -> List[str]:
        """Install every missing tool not in ``skip``.

        Returns the tools an install command was run for.
        """
        tools = list(tools)
        if not tools:
            logger.info("No tools specified for installation.")
            return []

        self.check_supported()
        self._index_refreshed = False

        logger.info("Installing necessary tools...")
        installed = []
        for tool in tools:
            if tool in skip:
                logger.info(f"Skipping tool: {tool}")
                continue
            if self.is_installed(tool):
                logger.info(f"Tool already installed: {tool}")
                continue
            self.install_tool(tool)
            installed.append(tool)
        return installed

    def install_tool(self, tool: str) -> None:
        """Install a single tool, dispatching on the detected platform."""
        family = self.platform.family
        if family is OS.MACOS:
            self._install_with_brew(tool)
        elif family is OS.LINUX:
            distro = self.platform.distro
            if distro in (Distro.UBUNTU, Distro.DEBIAN):
                self._install_with_apt(tool)
            elif distro is Distro.FEDORA:
                self._install_with_dnf(tool)
            elif distro is Distro.ARCH:
                self._install_with_aur(tool)
            else:
                raise UnsupportedPlatformError(
                    "Unsupported Linux distribution: "
                    f"{self.platform.distro_id}"
                )
        else:
            raise UnsupportedPlatformError(
                f"Unsupported OS: {self.platform.system or 'unknown'}"
            )

    def _refresh_apt_index(self) -> None:
        if self._index_refreshed:
            return
        logger.info("Updating package lists...")
        self._privileged("apt", "update")
        self._index_refreshed = True

    def _install_with_apt(self, tool: str) -> None:
        self._refresh_apt_index()
        logger.info(f"Installing {tool} via apt...")
        self._privileged("apt", "install", "-y", tool)

    def _install_with_dnf(self, tool: str) -> None:
        logger.info(f"Installing {tool} via dnf...")
        self._privileged("dnf", "install", "-y", tool)

    def _ensure_aur_helper(self) -> None:
        """Build and install yay from the AUR if it is not present."""
        if self.is_installed(AUR_HELPER):
            return

        logger.info(f"Installing {AUR_HELPER} package manager...")
        self._privileged("pacman", "-Sy", "--noconfirm")
        with tempfile.TemporaryDirectory(prefix="stowaway-") as tmp:
            build_dir = Path(tmp) / AUR_HELPER
            self.runner.run("git", "clone", AUR_HELPER_REPO, str(build_dir))
            self.runner.run("makepkg", "-si", "--noconfirm", cwd=build_dir)

    def _install_with_aur(self, tool: str) -> None:
        self._ensure_aur_helper()
        logger.info(f"Installing {tool} via {AUR_HELPER}...")
        self.runner.run(AUR_HELPER, "-S", "--noconfirm", tool)

    def _ensure_brew(self) -> None:
        """Install Homebrew if not present."""
        if self.is_installed("brew"):
            return

        logger.info("Homebrew not found. Installing Homebrew...")
        # Needs a shell for the $(...) expansion
        self.runner.run_shell(HOMEBREW_INSTALL_SCRIPT)

    def _install_with_brew(self, tool: str) -> None:
        self._ensure_brew()
        logger.info(f"Installing {tool} via Homebrew...")
        self.runner.run("brew", "install", tool)
