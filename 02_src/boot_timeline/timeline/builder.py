"""Timeline construction: marks activity boundaries in every recorded run."""

import re

from ..context import AnalysisContext
from ..errors import InstrumentationError
from ..event_log import EventLog
from ..logging_config import get_logger
from ..models import ActivityFlag, EventSource
from ..registry import IActivityRegistry
from ..synthesizer import RUN_ACTIVITY
from .rules import (
    DEFAULT_RULES,
    INITCALL_CALLING_RE,
    INITCALL_PREFIX,
    INITCALL_RETURNED_RE,
    PhaseRule,
)

logger = get_logger(__name__)


def construct_timeline(
    context: AnalysisContext,
    rules: tuple[PhaseRule, ...] | list[PhaseRule] = DEFAULT_RULES,
) -> None:
    """
    Register activities and mark their boundaries in every run.

    Args:
        context: Analysis context holding the recorded runs.
        rules: Phase rules to look for.

    Raises:
        InstrumentationError: If an activity is marked twice for one run.
    """
    registry = context.registry

    for log in context.runs:
        if len(log) == 0:
            continue

        mark_activity(
            registry, RUN_ACTIVITY, log.run, 0, len(log) - 1, ActivityFlag.LONG
        )

        for rule in rules:
            start = find_event(log, rule.start_re, rule.start_source)
            if start is None:
                continue
            end = find_event(log, rule.end_re, rule.end_source, start + 1)
            if end is None:
                logger.debug(
                    "Pass %d: %s started but never ended",
                    log.run,
                    rule.name,
                    extra={"run": log.run, "activity": rule.name},
                )
                continue
            mark_activity(registry, rule.name, log.run, start, end, rule.flags)

        _mark_initcalls(registry, log)

    logger.info("Constructed timeline with %d activities", len(registry))


def find_event(
    log: EventLog,
    pattern: re.Pattern,
    source: EventSource | None = None,
    first: int = 0,
) -> int | None:
    """Find the index of the first event at or after ``first`` matching pattern."""
    for j in range(first, len(log)):
        event = log[j]
        if source is not None and event.source is not source:
            continue
        if pattern.search(event.message):
            return j
    return None


def mark_activity(
    registry: IActivityRegistry,
    name: str,
    run: int,
    start: int,
    end: int,
    flags: ActivityFlag = ActivityFlag.NONE,
) -> None:
    """Register ``name`` if needed and record its boundaries for one run."""
    if not registry.exists(name):
        registry.register(name, flags)
    elif not registry.exists_with_no_data(name, run):
        raise InstrumentationError(f"activity '{name}' marked twice in pass {run}")

    registry.lookup(name).mark(run, start, end)


def _mark_initcalls(registry: IActivityRegistry, log: EventLog) -> None:
    # Pair each "calling  fn" with its "initcall fn ... returned".
    calling: dict[str, int] = {}
    for j in range(len(log)):
        event = log[j]
        if event.source is not EventSource.APPLIANCE:
            continue

        match = INITCALL_CALLING_RE.search(event.message)
        if match:
            calling[match.group(1)] = j
            continue

        match = INITCALL_RETURNED_RE.search(event.message)
        if match and match.group(1) in calling:
            fn = match.group(1)
            mark_activity(registry, INITCALL_PREFIX + fn, log.run, calling.pop(fn), j)
