"""SIM implementation - simulated appliance boot for exercising the analyzer."""

import random
import time

from boot_timeline.event_log import IEventLog
from boot_timeline.logging_config import get_logger
from boot_timeline.models import EventSource

logger = get_logger(__name__)

MS = 1_000_000  # ns

APPLIANCE = EventSource.APPLIANCE
LIBRARY = EventSource.LIBRARY
TRACE = EventSource.TRACE

# Output seen before "launch"; never recorded.
PRELUDE = [
    (LIBRARY, "create: flags = 0, handle = 0x55d0c0a0, program = boot-timeline"),
    (TRACE, 'set_backend "direct"'),
    (TRACE, 'add_drive_opts "/dev/null" "format:raw" "readonly:true"'),
]

# (delay before the message in ms, source, message)
LIBRARY_STEPS = [
    (0.0, TRACE, "launch"),
    (0.2, LIBRARY, "launch: program=boot-timeline"),
    (0.1, LIBRARY, "launch: backend=direct"),
    (0.3, LIBRARY, "begin building supermin appliance"),
    (42.0, LIBRARY, "finished building supermin appliance"),
    (0.4, LIBRARY, "begin testing qemu features"),
    (61.0, LIBRARY, "finished testing qemu features"),
    (0.3, LIBRARY, "qemu version 8.2.2"),
    (0.5, LIBRARY, "command: running qemu-system-x86_64"),
]

FIRMWARE_STEPS = [
    (84.0, "SeaBIOS (version 1.16.3-debian-1.16.3-2)"),
    (103.0, "Booting from ROM..."),
    (21.0, "Probing EDD (edd=off to disable)... ok"),
    (28.0, "[    0.000000] Linux version 6.1.0-13-amd64 (debian-kernel@lists.debian.org)"),
    (0.1, "[    0.000000] Command line: panic=1 console=ttyS0 initcall_debug"),
]

# (function, run time in ms)
INITCALLS = [
    ("pci_subsys_init", 8.0),
    ("acpi_init", 45.0),
    ("chr_dev_init", 3.0),
    ("serial8250_init", 12.0),
    ("virtio_pci_driver_init", 6.0),
]

USERSPACE_STEPS = [
    (4.0, APPLIANCE, "[    0.590000] Freeing unused kernel image (initmem) memory: 2920K"),
    (2.0, APPLIANCE, "supermin: ext2 mini initrd starting up: 5.3.3"),
    (1.0, APPLIANCE, "supermin: mounting /proc"),
    (9.0, APPLIANCE, "supermin: picked /sys/block/sdb/dev (8:16) as root device"),
    (58.0, APPLIANCE, "supermin: chroot"),
    (3.0, APPLIANCE, "Starting /init script ..."),
    (140.0, APPLIANCE, "starting guestfsd"),
    (12.0, LIBRARY, "appliance is up"),
    (0.1, EventSource.LAUNCH_DONE, "launch done callback"),
    (0.1, TRACE, "launch = 0"),
    (0.2, TRACE, "close"),
]

SHUTDOWN_MS = 35.0


class Sim:
    """Simulated appliance boot with a virtual clock and per-run jitter.

    Appliance output is sometimes delivered in fragments, the way a serial
    console hands over whatever bytes it has.
    """

    def __init__(
        self,
        seed: int | None = None,
        jitter: float = 0.05,
        fragment_probability: float = 0.3,
    ):
        self._random = random.Random(seed)
        self._jitter = jitter
        self._fragment_probability = fragment_probability
        self._clock = time.monotonic_ns()
        self._runs = 0

    def warm_up(self) -> None:
        """Run the boot once without recording anything."""
        self._boot(None)

    def run(self, log: IEventLog) -> None:
        """Run the boot once, delivering every event to ``log``."""
        self._runs += 1
        logger.debug("Simulated run %d starting at %d", self._runs, self._clock)
        self._boot(log)

    def _advance(self, ms: float) -> int:
        factor = 1.0 + self._random.uniform(-self._jitter, self._jitter)
        self._clock += max(1, int(ms * MS * factor))
        return self._clock

    def _emit(self, log: IEventLog | None, source: EventSource, message: str) -> None:
        if log is not None:
            log.record(source, self._clock, message)

    def _emit_appliance(self, log: IEventLog | None, message: str) -> None:
        if log is None:
            return
        data = (message + "\r\n").encode()
        if len(data) > 4 and self._random.random() < self._fragment_probability:
            cut = self._random.randrange(1, len(data) - 1)
            log.record(APPLIANCE, self._clock, data[:cut])
            self._advance(0.5)
            log.record(APPLIANCE, self._clock, data[cut:])
        else:
            log.record(APPLIANCE, self._clock, data)

    def _boot(self, log: IEventLog | None) -> None:
        for source, message in PRELUDE:
            self._advance(0.1)
            self._emit(log, source, message)

        for delay, source, message in LIBRARY_STEPS:
            self._advance(delay)
            self._emit(log, source, message)

        for delay, message in FIRMWARE_STEPS:
            self._advance(delay)
            self._emit_appliance(log, message)

        kernel_start = self._clock
        for fn, ms in INITCALLS:
            self._advance(0.2)
            stamp = (self._clock - kernel_start) / 1e9
            self._emit_appliance(log, f"[{stamp:12.6f}] calling  {fn}+0x0/0x4a0 @ 1")
            self._advance(ms)
            stamp = (self._clock - kernel_start) / 1e9
            usecs = int(ms * 1000)
            self._emit_appliance(
                log,
                f"[{stamp:12.6f}] initcall {fn}+0x0/0x4a0 returned 0 after {usecs} usecs",
            )

        for delay, source, message in USERSPACE_STEPS:
            self._advance(delay)
            if source is APPLIANCE:
                self._emit_appliance(log, message)
            else:
                self._emit(log, source, message)

        self._advance(SHUTDOWN_MS)
        if log is not None:
            log.finish(self._clock)
