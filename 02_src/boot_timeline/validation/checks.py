"""Sanity checks run between collection and synthesis."""

from ..context import AnalysisContext
from ..errors import InstrumentationError, MeasurementError
from ..event_log import EventLog
from ..logging_config import get_logger

logger = get_logger(__name__)


def check_pass_data(context: AnalysisContext) -> None:
    """Check every run against the Event Log invariants.

    Raises:
        MeasurementError: On the first run that breaks an invariant.
    """
    settings = context.settings
    if len(context.runs) != settings.passes:
        raise MeasurementError(
            len(context.runs),
            f"expected {settings.passes} passes, collected {len(context.runs)}",
        )

    for expected, log in enumerate(context.runs):
        try:
            _check_run(log, expected, settings.min_elapsed_ns)
        except MeasurementError as exc:
            logger.error("Invalid measurement: %s", exc, extra={"run": exc.run})
            raise


def _check_run(log: EventLog, expected: int, min_elapsed_ns: int) -> None:
    if log.run != expected:
        raise MeasurementError(expected, f"out of order (found pass {log.run})")
    if len(log) == 0:
        raise MeasurementError(log.run, "no events collected")
    if log.elapsed_ns <= min_elapsed_ns:
        raise MeasurementError(
            log.run, f"elapsed time {log.elapsed_ns} ns is not above {min_elapsed_ns} ns"
        )

    previous = None
    for j, event in enumerate(log.events):
        if previous is not None and event.timestamp < previous:
            raise MeasurementError(log.run, f"event #{j} goes back in time")
        previous = event.timestamp

        if "\n" in event.message:
            raise MeasurementError(log.run, f"event #{j} contains a line terminator")
        if event.message.endswith("\r"):
            raise MeasurementError(log.run, f"event #{j} ends with a carriage return")


def check_activities(context: AnalysisContext) -> None:
    """Check that every activity was marked with valid events in every run.

    Raises:
        InstrumentationError: On the first activity with missing or
            out-of-range boundaries.
    """
    for activity in context.registry:
        for log in context.runs:
            start = activity.start_event[log.run]
            end = activity.end_event[log.run]
            if start is None or end is None:
                raise InstrumentationError(
                    f"activity '{activity.name}' has no data for pass {log.run}"
                )
            if not (0 <= start < len(log) and 0 <= end < len(log)):
                raise InstrumentationError(
                    f"activity '{activity.name}' refers to events outside pass {log.run}"
                )
