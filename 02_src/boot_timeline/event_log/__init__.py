"""Event Log module."""

from .event_log import CLOSE_MESSAGE, EventLog, IEventLog, trim_cr

__all__ = ["CLOSE_MESSAGE", "EventLog", "IEventLog", "trim_cr"]
