"""Thin wrapper around subprocess for running external tools."""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from .errors import CommandError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def get_subprocess_error(e: subprocess.CalledProcessError) -> str:
    """Extract error message from CalledProcessError.

    Handles both string and bytes stderr, returning a clean string.
    """
    stderr = getattr(e, "stderr", "") or ""
    if isinstance(stderr, bytes):
        stderr = stderr.decode("utf-8", errors="replace")
    return stderr.strip()


class CommandRunner:
    """Runs external commands, raising CommandError on failure.

    There are two modes:

    - ``run`` passes the child's stdout/stderr straight through to the
      terminal, so package managers and git can show live output.
    - ``capture`` collects stdout as text for parsing.

    Neither mode applies a timeout.
    """

    def run(
        self, command: str, *args: str, cwd: Optional[PathLike] = None
    ) -> None:
        """Run a command with output streamed to our own stdout/stderr."""
        cmd = [command] + list(args)
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            subprocess.run(cmd, check=True, cwd=_cwd(cwd))
        except subprocess.CalledProcessError as e:
            raise CommandError(command, args, returncode=e.returncode) from e
        except OSError as e:
            raise CommandError(command, args, reason=str(e)) from e

    def capture(
        self, command: str, *args: str, cwd: Optional[PathLike] = None
    ) -> str:
        """Run a command and return its stdout as a string."""
        cmd = [command] + list(args)
        logger.debug(f"Capturing: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                check=True,
                capture_output=True,
                text=True,
                cwd=_cwd(cwd),
            )
        except subprocess.CalledProcessError as e:
            raise CommandError(
                command,
                args,
                returncode=e.returncode,
                reason=get_subprocess_error(e),
            ) from e
        except OSError as e:
            raise CommandError(command, args, reason=str(e)) from e
        return result.stdout

    def run_shell(self, script: str) -> None:
        """Run a shell snippet that needs expansion, e.g. ``$(curl ...)``."""
        self.run("/bin/bash", "-c", script)


def _cwd(cwd: Optional[PathLike]) -> Optional[str]:
    return str(cwd) if cwd is not None else None


def split_lines(output: str) -> List[str]:
    """Split command output into non-blank lines."""
    return [line for line in output.splitlines() if line.strip()]
