"""Tests for the simulated appliance."""

from boot_timeline.event_log import EventLog
from boot_timeline.models import EventSource
from sim import Sim


def record(sim):
    log = EventLog(0)
    sim.run(log)
    return log


class TestSimRun:
    """Tests for Sim.run()."""

    def test_run_is_armed_and_finished(self):
        """Test that a run starts at the milestone and ends with close."""
        log = record(Sim(seed=1))

        assert log.armed
        assert log[0].source == EventSource.TRACE
        assert log[0].message == "launch"
        assert log[-1].source == EventSource.CLOSE
        assert log.elapsed_ns > 0

    def test_prelude_is_not_recorded(self):
        """Test that output before the milestone is discarded."""
        log = record(Sim(seed=1))
        assert not any(e.message.startswith("create:") for e in log.events)

    def test_fragments_are_reassembled(self):
        """Test that every appliance line arrives whole."""
        log = record(Sim(seed=3, fragment_probability=1.0))

        appliance = [e.message for e in log.events if e.source == EventSource.APPLIANCE]
        assert "SeaBIOS (version 1.16.3-debian-1.16.3-2)" in appliance
        assert "supermin: chroot" in appliance
        for message in appliance:
            assert "\n" not in message
            assert not message.endswith("\r")

    def test_timestamps_non_decreasing(self):
        """Test the virtual clock only moves forward."""
        log = record(Sim(seed=5))
        stamps = [e.timestamp for e in log.events]
        assert stamps == sorted(stamps)

    def test_same_seed_same_timings(self):
        """Test that seeding makes runs reproducible."""
        first = record(Sim(seed=11))
        second = record(Sim(seed=11))

        def relative(log):
            return [(e.timestamp - log.start_timestamp, e.message) for e in log.events]

        assert relative(first) == relative(second)


class TestSimWarmUp:
    """Tests for Sim.warm_up()."""

    def test_warm_up_advances_clock(self):
        """Test that a warm-up run takes time but records nothing."""
        sim = Sim(seed=2)
        before = sim._clock
        sim.warm_up()
        assert sim._clock > before
