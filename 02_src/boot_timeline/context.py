"""Analysis context shared by every stage of the pipeline."""

from .config import AnalysisSettings
from .errors import BootAnalysisError
from .event_log import EventLog
from .registry import ActivityRegistry


class AnalysisContext:
    """Owns the run Event Logs and the Activity Registry for one analysis."""

    def __init__(self, settings: AnalysisSettings | None = None):
        self.settings = settings or AnalysisSettings()
        self.runs: list[EventLog] = []
        self.registry = ActivityRegistry(self.settings.passes)

    def new_run(self, run: int) -> EventLog:
        """Create the Event Log for the next run."""
        if run != len(self.runs):
            raise BootAnalysisError(f"pass {run} started out of order")
        if run >= self.settings.passes:
            raise BootAnalysisError(
                f"pass {run} exceeds the configured {self.settings.passes} passes"
            )

        log = EventLog(
            run,
            arming_message=self.settings.arming_message,
            fragment_window_ns=self.settings.fragment_window_ns,
        )
        self.runs.append(log)
        return log

    def release(self) -> None:
        """Drop all runs and activities once the report is out."""
        self.runs.clear()
        self.registry.clear()
