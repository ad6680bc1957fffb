"""Exceptions raised by stowaway components.

Components raise these and never exit the process themselves. The CLI
catches ``StowawayError`` and turns it into a non-zero exit status.
"""

from typing import Optional, Sequence


class StowawayError(Exception):
    """Base class for all stowaway errors."""


class ConfigError(StowawayError):
    """The configuration file is missing, unreadable or incomplete."""


class UnsupportedPlatformError(StowawayError):
    """The operating system or Linux distribution is not supported."""


class DetectionError(StowawayError):
    """The platform could not be identified."""


class StowError(StowawayError):
    """A stow target does not exist in the dotfiles repository."""


class CommandError(StowawayError):
    """An external command failed to start or exited non-zero."""

    def __init__(
        self,
        command: str,
        args: Sequence[str] = (),
        returncode: Optional[int] = None,
        reason: str = "",
    ):
        self.command = command
        self.args_list = list(args)
        self.returncode = returncode
        self.reason = reason
        super().__init__(self._format())

    @property
    def command_line(self) -> str:
        return " ".join([self.command] + self.args_list)

    def _format(self) -> str:
        msg = f"Command failed: {self.command_line}"
        if self.returncode is not None:
            msg += f" (exit status {self.returncode})"
        if self.reason:
            msg += f": {self.reason}"
        return msg
