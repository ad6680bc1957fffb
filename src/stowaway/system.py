import logging
import os
import platform
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Optional

from .errors import DetectionError

logger = logging.getLogger(__name__)

OS_RELEASE = Path("/etc/os-release")


class OS(Enum):
    LINUX = "linux"
    MACOS = "darwin"
    UNSUPPORTED = "unsupported"


class Distro(Enum):
    UBUNTU = "ubuntu"
    DEBIAN = "debian"
    FEDORA = "fedora"
    ARCH = "arch"
    OTHER = "other"

    @classmethod
    def from_id(cls, distro_id: str) -> "Distro":
        for member in cls:
            if member is not cls.OTHER and member.value == distro_id:
                return member
        return cls.OTHER


@dataclass(frozen=True)
class Platform:
    """The detected OS family and, on Linux, the distribution."""

    family: OS
    distro: Optional[Distro] = None
    distro_id: str = ""
    system: str = ""


def detect_os() -> OS:
    system = platform.system().lower()
    if system == "linux":
        return OS.LINUX
    elif system == "darwin":
        return OS.MACOS
    return OS.UNSUPPORTED


def read_os_release(path: Path = OS_RELEASE) -> Dict[str, str]:
    """Parse a KEY=value os-release file into a dict."""
    try:
        text = path.read_text()
    except OSError as e:
        raise DetectionError(
            f"Failed to detect Linux distribution: cannot read {path}: {e}"
        ) from e

    data = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, v = line.split("=", 1)
        data[k.strip()] = v.strip().strip("\"'").strip()
    return data


def detect_distro_id(path: Path = OS_RELEASE) -> str:
    """Return the ``ID`` field of the os-release file."""
    distro_id = read_os_release(path).get("ID", "")
    if not distro_id:
        raise DetectionError(
            f"Failed to detect Linux distribution: no ID field in {path}"
        )
    return distro_id


def detect_platform(os_release: Path = OS_RELEASE) -> Platform:
    """Detect the current platform.

    Never fails for an unknown OS family; that is reported as
    ``OS.UNSUPPORTED`` for the caller to reject. On Linux a missing or
    malformed os-release file raises DetectionError.
    """
    family = detect_os()
    system = platform.system()
    if family is not OS.LINUX:
        return Platform(family=family, system=system)

    distro_id = detect_distro_id(os_release)
    logger.info(f"Detected Linux distribution: {distro_id}")
    return Platform(
        family=family,
        distro=Distro.from_id(distro_id),
        distro_id=distro_id,
        system=system,
    )


def is_installed(command_name: str) -> bool:
    """Check if a command is available in PATH."""
    return shutil.which(command_name) is not None


class Environment:
    """Detects and provides info about the current user environment."""

    def __init__(self):
        self.home = Path.home()

    def expand(self, value: str) -> Path:
        """Expand ``~`` and environment variables in a path string."""
        raw = os.path.expandvars(value)
        if raw == "~" or raw.startswith("~/"):
            path = Path(self.home, raw[2:])
        else:
            path = Path(raw).expanduser()
        if not path.is_absolute():
            path = self.home / path
        return path

    def __repr__(self) -> str:
        return f"Environment(home={self.home})"
