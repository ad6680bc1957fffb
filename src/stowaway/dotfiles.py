"""Dotfiles repository management: git for storage, GNU Stow for linking."""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .errors import ConfigError, StowError
from .runner import CommandRunner, split_lines

logger = logging.getLogger(__name__)

DEFAULT_COMMIT_MESSAGE = "Updated dotfiles"


class ChangeKind(Enum):
    ADDED = "Added"
    MODIFIED = "Modified"
    DELETED = "Deleted"


# git --name-status letters we report on; anything else is ignored
STATUS_LETTERS = {
    "A": ChangeKind.ADDED,
    "M": ChangeKind.MODIFIED,
    "D": ChangeKind.DELETED,
}


@dataclass(frozen=True)
class Change:
    path: str
    kind: ChangeKind


def parse_name_status(lines: Iterable[str]) -> List[Change]:
    """Parse ``git diff --name-status`` lines into changes.

    Lines with fewer than two fields are skipped, as are status letters
    other than A, M and D. Order is preserved.
    """
    changes = []
    for line in lines:
        fields = line.split(None, 1)
        if len(fields) < 2:
            continue
        kind = STATUS_LETTERS.get(fields[0])
        if kind is None:
            continue
        changes.append(Change(path=fields[1].strip(), kind=kind))
    return changes


def build_commit_message(changes: Sequence[Change]) -> str:
    """Summarize changes as ``Added: a, b; Modified: c; Deleted: d``."""
    groups = []
    for kind in ChangeKind:
        paths = [c.path for c in changes if c.kind is kind]
        if paths:
            groups.append(f"{kind.value}: {', '.join(paths)}")
    if not groups:
        return DEFAULT_COMMIT_MESSAGE
    return "; ".join(groups)


class DotfilesRepo:
    """A dotfiles git checkout that is linked into $HOME with stow."""

    def __init__(
        self,
        dotfiles_dir: Path,
        home: Path,
        repo_url: Optional[str] = None,
        files: Sequence[str] = (),
        runner: Optional[CommandRunner] = None,
    ):
        self.dotfiles_dir = Path(dotfiles_dir)
        self.home = Path(home)
        self.repo_url = repo_url
        self.files = list(files)
        self.runner = runner or CommandRunner()

    def _git(self, *args: str) -> None:
        self.runner.run("git", *args, cwd=self.dotfiles_dir)

    def _git_output(self, *args: str) -> str:
        return self.runner.capture("git", *args, cwd=self.dotfiles_dir)

    def init(self, remote: Optional[str] = None) -> None:
        """Create the directory if needed and initialize a git repository."""
        if not self.dotfiles_dir.exists():
            logger.info(f"Creating dotfiles directory: {self.dotfiles_dir}")
            self.dotfiles_dir.mkdir(parents=True)

        logger.info(f"Initializing Git repository in: {self.dotfiles_dir}")
        self._git("init")

        if remote:
            logger.info(f"Adding remote origin: {remote}")
            self._git("remote", "add", "origin", remote)

    def clone(self) -> bool:
        """Clone the repository unless the directory already exists.

        Returns True if a clone was made.
        """
        if self.dotfiles_dir.exists():
            logger.info(
                f"Dotfiles directory already exists: {self.dotfiles_dir}"
            )
            return False

        if not self.repo_url:
            raise ConfigError(
                "Dotfiles repository URL is required in the configuration"
            )

        logger.info(f"Cloning dotfiles repository: {self.repo_url}")
        self.runner.run("git", "clone", self.repo_url, str(self.dotfiles_dir))
        return True

    def pull(self) -> None:
        logger.info("Pulling latest changes from the repository...")
        self.runner.run("git", "-C", str(self.dotfiles_dir), "pull")

    def stow(self) -> List[str]:
        """Symlink dotfiles into $HOME, returning the stowed targets."""
        if not self.files:
            logger.info(
                "No specific dotfiles configured for syncing. "
                "Stowing everything in the repository."
            )
            targets = ["."]
        else:
            logger.info("Syncing specific dotfiles...")
            targets = self.files

        for target in targets:
            self._stow(target)
        logger.info("Dotfiles synced successfully.")
        return targets

    def _stow(self, target: str) -> None:
        if not (self.dotfiles_dir / target).exists():
            raise StowError(
                f"Failed to stow {target}: target does not exist "
                f"in {self.dotfiles_dir}"
            )
        self.runner.run(
            "stow",
            "-d",
            str(self.dotfiles_dir),
            "-t",
            str(self.home),
            target,
        )

    def has_changes(self) -> bool:
        return bool(self._git_output("status", "--porcelain").strip())

    def staged_changes(self) -> List[Change]:
        output = self._git_output("diff", "--cached", "--name-status")
        return parse_name_status(split_lines(output))

    def publish(self) -> bool:
        """Stage, commit and push all local changes.

        Returns False without touching the repository when there is
        nothing to commit. Any failing git command raises CommandError.
        """
        if not self.has_changes():
            logger.info("No changes to push.")
            return False

        logger.info("Staging changes...")
        self._git("add", "-A")

        message = build_commit_message(self.staged_changes())
        logger.info(f"Committing: {message}")
        self._git("commit", "-m", message)

        logger.info("Pushing changes to the repository...")
        self._git("push")
        logger.info("Dotfiles pushed successfully.")
        return True
