"""Fatal error types raised by the analysis core."""


class BootAnalysisError(RuntimeError):
    """Base class for conditions that invalidate the whole analysis."""


class MeasurementError(BootAnalysisError):
    """A recorded run breaks an Event Log invariant."""

    def __init__(self, run: int, reason: str):
        super().__init__(f"pass {run}: {reason}")
        self.run = run
        self.reason = reason


class InstrumentationError(BootAnalysisError):
    """The activity set does not match what was instrumented."""
