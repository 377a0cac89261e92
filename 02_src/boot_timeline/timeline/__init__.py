"""Timeline construction module."""

from .builder import construct_timeline, find_event, mark_activity
from .rules import DEFAULT_RULES, PhaseRule

__all__ = [
    "DEFAULT_RULES",
    "PhaseRule",
    "construct_timeline",
    "find_event",
    "mark_activity",
]
