import logging
import sys
from importlib.metadata import PackageNotFoundError, version


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stdout, at DEBUG level when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )


def get_version() -> str:
    """Return the installed version of stowaway."""
    try:
        return version("stowaway")
    except PackageNotFoundError:
        return "unknown"
