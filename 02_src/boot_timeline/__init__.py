"""Boot timeline analyzer core."""

from .app import BootAnalyzer
from .config import AnalysisSettings, __version__
from .context import AnalysisContext
from .errors import BootAnalysisError, InstrumentationError, MeasurementError
from .event_log import EventLog, IEventLog
from .models import Activity, ActivityFlag, Event, EventSource, PendingContinuation
from .registry import ActivityRegistry, IActivityRegistry
from .renderer import TimelineRenderer, make_console
from .source import IEventSource
from .synthesizer import RUN_ACTIVITY, TimelineSynthesizer
from .timeline import DEFAULT_RULES, PhaseRule, construct_timeline
from .validation import check_activities, check_pass_data

__all__ = [
    "__version__",
    # Application
    "BootAnalyzer",
    "AnalysisSettings",
    "AnalysisContext",
    # Errors
    "BootAnalysisError",
    "InstrumentationError",
    "MeasurementError",
    # Models
    "Activity",
    "ActivityFlag",
    "Event",
    "EventSource",
    "PendingContinuation",
    # Components
    "IEventLog",
    "EventLog",
    "IActivityRegistry",
    "ActivityRegistry",
    "IEventSource",
    "TimelineSynthesizer",
    "TimelineRenderer",
    "make_console",
    "RUN_ACTIVITY",
    "DEFAULT_RULES",
    "PhaseRule",
    "construct_timeline",
    "check_activities",
    "check_pass_data",
]
