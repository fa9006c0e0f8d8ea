"""Shared modules for gitops-e2e.

Used by the fixtures, the pytest plugin and the CLI:
- Logging (structlog setup)
- Paths (~/.gitops-e2e and the scratch work dir)
"""

from .logging import bind_test_context, configure_logging, get_logger
from .paths import (
    DEFAULT_WORK_DIR,
    E2E_HOME,
    LOG_DIR,
    ensure_dirs,
    get_log_file,
    repo_directory,
)

__all__ = [
    # Paths
    "E2E_HOME",
    "LOG_DIR",
    "DEFAULT_WORK_DIR",
    "ensure_dirs",
    "get_log_file",
    "repo_directory",
    # Logging
    "bind_test_context",
    "configure_logging",
    "get_logger",
]
