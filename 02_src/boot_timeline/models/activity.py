"""Activity data models."""

from dataclasses import dataclass, field
from enum import Flag


class ActivityFlag(Flag):
    """Per-activity behaviour flags."""

    NONE = 0
    LONG = 1  # expected to take a large share; never highlighted


@dataclass
class Activity:
    """A named phase of the boot sequence and its statistics across runs."""

    name: str
    passes: int
    flags: ActivityFlag = ActivityFlag.NONE
    start_event: list[int | None] = field(default_factory=list)
    end_event: list[int | None] = field(default_factory=list)

    # Filled in by the synthesizer (nanoseconds, relative to run start)
    start_offset: float = 0.0
    end_offset: float = 0.0
    mean: float = 0.0
    variance: float = 0.0
    sd: float = 0.0
    percent: float = 0.0
    warning: bool = False

    def __post_init__(self):
        if not self.start_event:
            self.start_event = [None] * self.passes
        if not self.end_event:
            self.end_event = [None] * self.passes

    @property
    def long_running(self) -> bool:
        """Whether the activity is exempt from warnings."""
        return bool(self.flags & ActivityFlag.LONG)

    def has_data(self, run: int) -> bool:
        """Check whether boundaries were marked for a run."""
        return self.start_event[run] is not None or self.end_event[run] is not None

    def mark(self, run: int, start_event: int, end_event: int) -> None:
        """Record the start and end event indices for a run."""
        self.start_event[run] = start_event
        self.end_event[run] = end_event
