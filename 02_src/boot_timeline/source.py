"""Event source interface: the measured subsystem seen from the core."""

from typing import Protocol

from .event_log import IEventLog


class IEventSource(Protocol):
    """Drives the measured subsystem and delivers its events."""

    def warm_up(self) -> None:
        """Perform one unrecorded run to warm caches."""
        ...

    def run(self, log: IEventLog) -> None:
        """Perform one measured run, delivering events to ``log``."""
        ...
