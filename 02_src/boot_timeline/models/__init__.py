"""Core data models for the boot timeline analyzer."""

from .activity import Activity, ActivityFlag
from .events import Event, EventSource, PendingContinuation

__all__ = [
    # Events
    "Event",
    "EventSource",
    "PendingContinuation",
    # Activities
    "Activity",
    "ActivityFlag",
]
