"""Event-related data models."""

from dataclasses import dataclass
from enum import Enum


class EventSource(str, Enum):
    """Channel that produced an event."""

    TRACE = "trace"
    APPLIANCE = "appliance"
    LIBRARY = "library"
    LAUNCH_DONE = "launch_done"
    SUBPROCESS_QUIT = "subprocess_quit"
    CLOSE = "close"

    @property
    def fragmented(self) -> bool:
        """Whether output from this channel can arrive split across deliveries."""
        return self is EventSource.APPLIANCE


@dataclass
class Event:
    """A single timestamped, single-line message captured during a run."""

    timestamp: int  # monotonic nanoseconds
    source: EventSource
    message: str


@dataclass(frozen=True)
class PendingContinuation:
    """An appliance message still waiting for its line terminator."""

    run: int
    index: int  # position of the open event in the run's Event Log
    raw: bytes  # undecoded, untrimmed output received so far
