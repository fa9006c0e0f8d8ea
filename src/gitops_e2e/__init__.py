"""gitops-e2e - given/when/then fixtures for GitOps end-to-end tests."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("gitops-e2e")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"  # Fallback for editable installs without metadata

from .app import Actions, Context, ContextSnapshot, given
from .fixture import FixtureServices, RepoURLType

__all__ = [
    "Actions",
    "Context",
    "ContextSnapshot",
    "FixtureServices",
    "RepoURLType",
    "given",
    "__version__",
]
