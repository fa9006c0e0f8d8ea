"""Given/when phases for application tests."""

from .actions import Actions
from .context import Context, ContextSnapshot, given

__all__ = ["Actions", "Context", "ContextSnapshot", "given"]
