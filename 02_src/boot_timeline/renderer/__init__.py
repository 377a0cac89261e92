"""Timeline Renderer module."""

from .renderer import TimelineRenderer, escape_string, format_activity, make_console

__all__ = ["TimelineRenderer", "escape_string", "format_activity", "make_console"]
