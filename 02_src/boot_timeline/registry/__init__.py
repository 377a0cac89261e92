"""Activity Registry module."""

from .registry import ActivityRegistry, IActivityRegistry

__all__ = ["ActivityRegistry", "IActivityRegistry"]
