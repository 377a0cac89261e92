"""Tests for timeline construction."""

import re

import pytest

from boot_timeline.errors import InstrumentationError
from boot_timeline.models import EventSource
from boot_timeline.synthesizer import RUN_ACTIVITY
from boot_timeline.timeline import PhaseRule, construct_timeline, find_event

APPLIANCE = EventSource.APPLIANCE
LIBRARY = EventSource.LIBRARY

BOOT = [
    (10, LIBRARY, "begin building supermin appliance"),
    (50, LIBRARY, "finished building supermin appliance"),
    (60, APPLIANCE, b"[    0.1] calling  acpi_init+0x0/0x4a0 @ 1\n"),
    (70, APPLIANCE, b"[    0.2] calling  pci_init+0x0/0x40 @ 1\n"),
    (90, APPLIANCE, b"[    0.3] initcall pci_init+0x0/0x40 returned 0 after 20 usecs\n"),
    (95, APPLIANCE, b"[    0.4] initcall acpi_init+0x0/0x4a0 returned 0 after 35 usecs\n"),
]

RULES = [
    PhaseRule(
        "supermin:build",
        r"^begin building supermin appliance",
        r"^finished building supermin appliance",
        start_source=LIBRARY,
    ),
    PhaseRule("never", r"^no such message", r"^close callback"),
]


@pytest.fixture
def booted(context, build_run):
    """Create a context with three identical boot runs."""
    for i in range(3):
        build_run(context, i, BOOT, end=5000)
    return context


class TestConstructTimeline:
    """Tests for construct_timeline()."""

    def test_marks_whole_run(self, booted):
        """Test that the run activity spans first to last event."""
        construct_timeline(booted, RULES)

        run = booted.registry.lookup(RUN_ACTIVITY)
        assert run.long_running
        assert run.start_event == [0, 0, 0]
        assert run.end_event == [7, 7, 7]

    def test_marks_matching_rule(self, booted):
        """Test that rule boundaries are the first matches."""
        construct_timeline(booted, RULES)

        build = booted.registry.lookup("supermin:build")
        assert build.start_event == [1, 1, 1]
        assert build.end_event == [2, 2, 2]

    def test_unmatched_rule_is_not_registered(self, booted):
        """Test that a rule with no match registers nothing."""
        construct_timeline(booted, RULES)
        assert not booted.registry.exists("never")

    def test_pairs_initcalls(self, booted):
        """Test one activity per kernel initcall."""
        construct_timeline(booted, RULES)

        acpi = booted.registry.lookup("initcall acpi_init")
        pci = booted.registry.lookup("initcall pci_init")
        assert (acpi.start_event[0], acpi.end_event[0]) == (3, 6)
        assert (pci.start_event[0], pci.end_event[0]) == (4, 5)

    def test_end_must_follow_start(self, context, build_run):
        """Test that an end message before the start is not used."""
        events = [
            (10, LIBRARY, "stop here"),
            (20, LIBRARY, "start here"),
            (30, LIBRARY, "stop here"),
        ]
        for i in range(3):
            build_run(context, i, events, end=5000)

        construct_timeline(context, [PhaseRule("phase", r"start here", r"stop here")])

        phase = context.registry.lookup("phase")
        assert phase.start_event == [2, 2, 2]
        assert phase.end_event == [3, 3, 3]

    def test_marking_twice_fails(self, booted):
        """Test that re-running instrumentation over the same runs is an error."""
        construct_timeline(booted, RULES)
        with pytest.raises(InstrumentationError, match="marked twice in pass 0"):
            construct_timeline(booted, RULES)


class TestFindEvent:
    """Tests for find_event()."""

    def test_filters_by_source(self, context, build_run):
        """Test that a source restriction skips other channels."""
        log = build_run(
            context,
            0,
            [(10, LIBRARY, "marker"), (20, APPLIANCE, b"marker\n")],
            end=5000,
        )
        pattern = re.compile("marker")
        assert find_event(log, pattern) == 1
        assert find_event(log, pattern, APPLIANCE) == 2
        assert find_event(log, pattern, first=2) == 2
        assert find_event(log, re.compile("absent")) is None
