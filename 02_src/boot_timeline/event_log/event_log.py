"""Per-run Event Log with continuation merging for fragmented output."""

from typing import Iterator, Protocol

from ..config import ARMING_MESSAGE, FRAGMENT_WINDOW_NS
from ..logging_config import get_logger
from ..models import Event, EventSource, PendingContinuation

logger = get_logger(__name__)

CLOSE_MESSAGE = "close callback"


def trim_cr(message: str) -> str:
    """Trim (multiple) carriage returns from the end of a message."""
    return message.rstrip("\r")


def _decode(data: bytes | str) -> str:
    # Undecodable bytes survive as lone surrogates.
    return data.decode("utf-8", "surrogateescape") if isinstance(data, bytes) else data


class IEventLog(Protocol):
    """Receiver for the events of one measured run."""

    def record(self, source: EventSource, timestamp: int, data: bytes | str) -> None:
        """Record a delivery from an event source."""
        ...

    def finish(self, timestamp: int) -> None:
        """Mark the end of the run."""
        ...


class EventLog:
    """Append-only ordered record of the events of one run.

    Nothing is stored until the arming milestone (a trace message equal to
    ``arming_message``) has been seen. Appliance output may arrive in
    arbitrary fragments; a fragment without a line terminator stays open as
    a continuation for at most ``fragment_window_ns`` and is completed by
    the following appliance deliveries.
    """

    def __init__(
        self,
        run: int,
        arming_message: str = ARMING_MESSAGE,
        fragment_window_ns: int = FRAGMENT_WINDOW_NS,
    ):
        self.run = run
        self.armed = False
        self.continuation: PendingContinuation | None = None
        self.end_timestamp: int | None = None
        self._arming_message = arming_message
        self._fragment_window_ns = fragment_window_ns
        self._events: list[Event] = []

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self._events.copy())

    def __getitem__(self, index: int) -> Event:
        return self._events[index]

    @property
    def events(self) -> list[Event]:
        """Get all recorded events."""
        return self._events.copy()

    @property
    def start_timestamp(self) -> int | None:
        """Timestamp of the first recorded event."""
        return self._events[0].timestamp if self._events else None

    @property
    def elapsed_ns(self) -> int:
        """Time from the first recorded event to the end of the run."""
        if self.start_timestamp is None or self.end_timestamp is None:
            return 0
        return self.end_timestamp - self.start_timestamp

    def record(self, source: EventSource, timestamp: int, data: bytes | str) -> None:
        """Record a delivery from an event source."""
        if not self.armed:
            if source is not EventSource.TRACE or _decode(data) != self._arming_message:
                return
            self.armed = True
            logger.debug("Pass %d armed at %d", self.run, timestamp, extra={"run": self.run})

        if source.fragmented:
            raw = data if isinstance(data, bytes) else data.encode("utf-8", "surrogateescape")
            self._record_fragment(source, timestamp, raw)
        else:
            self._record_complete(source, timestamp, _decode(data))

    def finish(self, timestamp: int) -> None:
        """Record the terminal event and fix the end of the run."""
        if not self.armed:
            return

        self._append(Event(timestamp, EventSource.CLOSE, CLOSE_MESSAGE))
        self.end_timestamp = timestamp
        logger.info(
            "Pass %d finished: %d events in %d ns",
            self.run,
            len(self._events),
            self.elapsed_ns,
            extra={"run": self.run, "elapsed_ns": self.elapsed_ns},
        )

    def _append(self, event: Event) -> int:
        self._events.append(event)
        return len(self._events) - 1

    def _record_complete(self, source: EventSource, timestamp: int, text: str) -> None:
        # Complete messages are stored as-is, one event per line.
        lines = text.split("\n")
        if len(lines) > 1 and lines[-1] == "":
            lines.pop()
        for line in lines:
            self._append(Event(timestamp, source, trim_cr(line)))

    def _record_fragment(self, source: EventSource, timestamp: int, data: bytes) -> None:
        pending = self.continuation

        # Time has moved on too far: leave the old message as it is and
        # give the new output its own timestamp.
        if pending is not None:
            opened = self._events[pending.index].timestamp
            if timestamp - opened >= self._fragment_window_ns:
                logger.debug(
                    "Pass %d: abandoning continuation of event %d",
                    self.run,
                    pending.index,
                    extra={"run": self.run},
                )
                pending = self.continuation = None

        # Merged bytes are decoded as a whole, so a character split
        # between deliveries comes out intact.
        if pending is not None:
            head, terminator, data = data.partition(b"\n")
            raw = pending.raw + head
            self._events[pending.index].message = trim_cr(_decode(raw))
            if not terminator:
                self.continuation = PendingContinuation(self.run, pending.index, raw)
                return
            self.continuation = None

        while data:
            head, terminator, data = data.partition(b"\n")
            index = self._append(Event(timestamp, source, trim_cr(_decode(head))))
            if not terminator:
                self.continuation = PendingContinuation(self.run, index, head)
                return
