"""Timeline Synthesizer: per-activity statistics across all runs."""

import math
import statistics

from ..context import AnalysisContext
from ..logging_config import get_logger
from ..models import Activity

logger = get_logger(__name__)

RUN_ACTIVITY = "run"  # reserved name of the whole-run activity


class TimelineSynthesizer:
    """Aggregates each activity's per-run timings into a single picture."""

    def __init__(self, context: AnalysisContext):
        self._context = context

    def synthesize(self) -> list[Activity]:
        """
        Compute statistics for every activity.

        Returns:
            Activities sorted by ascending start offset.

        Raises:
            InstrumentationError: If the whole-run activity is missing.
        """
        registry = self._context.registry
        activities = registry.activities

        for activity in activities:
            self._analyze(activity)

        total = registry.lookup(RUN_ACTIVITY)
        threshold = self._context.settings.warning_threshold
        for activity in activities:
            activity.percent = 100.0 * activity.mean / total.mean
            activity.warning = (
                not activity.long_running and activity.percent >= threshold
            )

        logger.info(
            "Synthesized %d activities over %d passes (total %.0f ns)",
            len(activities),
            len(self._context.runs),
            total.mean,
        )
        return by_start_offset(activities)

    def _analyze(self, activity: Activity) -> None:
        offsets = []
        durations = []
        for log in self._context.runs:
            start = log[activity.start_event[log.run]].timestamp
            end = log[activity.end_event[log.run]].timestamp
            offsets.append(start - log.start_timestamp)
            durations.append(end - start)

        activity.start_offset = statistics.fmean(offsets)
        activity.mean = statistics.fmean(durations)

        # One unit short, so an activity ends just before the next begins.
        activity.end_offset = activity.start_offset + activity.mean - 1

        activity.variance = statistics.pvariance(durations, mu=activity.mean)
        activity.sd = math.sqrt(activity.variance)


def by_start_offset(activities: list[Activity]) -> list[Activity]:
    """Sort activities into temporal order."""
    return sorted(activities, key=lambda activity: activity.start_offset)


def longest_first(activities: list[Activity]) -> list[Activity]:
    """Sort activities by descending mean duration."""
    return sorted(activities, key=lambda activity: activity.mean, reverse=True)
