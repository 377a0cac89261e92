"""Activity Registry: the process-wide table of named boot phases."""

from typing import Iterator, Protocol

from ..errors import InstrumentationError
from ..logging_config import get_logger
from ..models import Activity, ActivityFlag

logger = get_logger(__name__)


class IActivityRegistry(Protocol):
    """Named phases and their per-run boundary events."""

    def register(self, name: str, flags: ActivityFlag = ActivityFlag.NONE) -> Activity:
        """Add a new activity."""
        ...

    def lookup(self, name: str) -> Activity:
        """Get a registered activity."""
        ...

    def exists(self, name: str) -> bool:
        """Check whether an activity is registered."""
        ...

    def exists_with_no_data(self, name: str, run: int) -> bool:
        """Check whether an activity is registered but unmarked for a run."""
        ...


class ActivityRegistry:
    """In-memory activity table, kept in registration order."""

    def __init__(self, passes: int):
        self._passes = passes
        self._activities: dict[str, Activity] = {}

    def __len__(self) -> int:
        return len(self._activities)

    def __iter__(self) -> Iterator[Activity]:
        return iter(list(self._activities.values()))

    @property
    def activities(self) -> list[Activity]:
        """Get all activities in registration order."""
        return list(self._activities.values())

    def register(self, name: str, flags: ActivityFlag = ActivityFlag.NONE) -> Activity:
        """Add a new activity; registering a name twice is an error."""
        if name in self._activities:
            raise InstrumentationError(f"activity '{name}' registered twice")

        activity = Activity(name=name, passes=self._passes, flags=flags)
        self._activities[name] = activity
        logger.debug("Registered activity %s (flags=%s)", name, flags)
        return activity

    def lookup(self, name: str) -> Activity:
        """Get a registered activity; unknown names are an error."""
        try:
            return self._activities[name]
        except KeyError:
            raise InstrumentationError(
                f"internal error: could not find activity '{name}'"
            ) from None

    def exists(self, name: str) -> bool:
        """Check whether an activity is registered."""
        return name in self._activities

    def exists_with_no_data(self, name: str, run: int) -> bool:
        """Check whether an activity is registered but unmarked for a run."""
        activity = self._activities.get(name)
        return activity is not None and not activity.has_data(run)

    def clear(self) -> None:
        """Drop all activities."""
        self._activities.clear()
