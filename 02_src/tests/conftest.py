"""Pytest configuration and fixtures."""

import io
import sys
from pathlib import Path

import pytest
from rich.console import Console

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

BASE_NS = 1_000_000_000


@pytest.fixture
def settings():
    """Create settings for a short three-pass analysis."""
    from boot_timeline.config import AnalysisSettings

    return AnalysisSettings(passes=3, warmup_passes=0)


@pytest.fixture
def context(settings):
    """Create an empty analysis context."""
    from boot_timeline.context import AnalysisContext

    return AnalysisContext(settings)


@pytest.fixture
def registry():
    """Create an activity registry for three passes."""
    from boot_timeline.registry import ActivityRegistry

    return ActivityRegistry(3)


@pytest.fixture
def build_run():
    """Return a helper that records one armed run into a context.

    Events are (offset_ns, source, message) relative to the arming event.
    """
    from boot_timeline.models import EventSource

    def _build(context, run, events, end, start=BASE_NS):
        log = context.new_run(run)
        log.record(EventSource.TRACE, start, "launch")
        for offset, source, message in events:
            log.record(source, start + offset, message)
        log.finish(start + end)
        return log

    return _build


@pytest.fixture
def output():
    """Create a text buffer for captured report output."""
    return io.StringIO()


@pytest.fixture
def console(output):
    """Create a colourless console writing into the output buffer."""
    return Console(
        file=output,
        force_terminal=False,
        color_system=None,
        width=200,
        highlight=False,
        markup=False,
        emoji=False,
        soft_wrap=True,
    )


@pytest.fixture
def make_activity():
    """Return a helper that builds an already-synthesized activity."""
    from boot_timeline.models import Activity, ActivityFlag

    def _make(
        name,
        start_offset=0.0,
        end_offset=0.0,
        mean=None,
        sd=0.0,
        percent=0.0,
        warning=False,
        flags=ActivityFlag.NONE,
    ):
        return Activity(
            name=name,
            passes=1,
            flags=flags,
            start_offset=start_offset,
            end_offset=end_offset,
            mean=end_offset - start_offset + 1 if mean is None else mean,
            sd=sd,
            percent=percent,
            warning=warning,
        )

    return _make
