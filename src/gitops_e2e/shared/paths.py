"""Path management for gitops-e2e.

The per-user state lives in ~/.gitops-e2e/; everything a test run writes
(the local git repository, scratch files) lives under the configured work dir.
"""

from pathlib import Path

# Base directory for per-user settings
E2E_HOME = Path.home() / ".gitops-e2e"

# Log directory (same as base for simplicity)
LOG_DIR = E2E_HOME

# Default scratch directory shared with the repo server containers
DEFAULT_WORK_DIR = Path("/tmp/argo-e2e")

# Name of the git repository initialised from testdata on every reset
REPO_DIR_NAME = "testdata.git"


def ensure_dirs() -> None:
    """Create ~/.gitops-e2e/ (mode 0o700) if missing."""
    E2E_HOME.mkdir(mode=0o700, exist_ok=True)


def get_log_file(name: str = "fixtures") -> Path:
    """Get path to a log file.

    Args:
        name: Log file name (without extension)

    Returns:
        Path to the log file
    """
    return LOG_DIR / f"{name}.log"


def repo_directory(work_dir: Path) -> Path:
    """Get the local test repository location inside a work dir."""
    return work_dir / REPO_DIR_NAME
