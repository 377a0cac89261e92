"""Phase rules describing the appliance boot sequence."""

import re
from dataclasses import dataclass

from ..models import ActivityFlag, EventSource


@dataclass(frozen=True)
class PhaseRule:
    """An activity bounded by the first messages matching two patterns."""

    name: str
    start: str
    end: str
    flags: ActivityFlag = ActivityFlag.NONE
    start_source: EventSource | None = None
    end_source: EventSource | None = None

    @property
    def start_re(self) -> re.Pattern:
        """Compiled start pattern."""
        return re.compile(self.start)

    @property
    def end_re(self) -> re.Pattern:
        """Compiled end pattern."""
        return re.compile(self.end)


# Kernel initcall_debug output.
INITCALL_CALLING_RE = re.compile(r"calling  ([\w.]+)\+0x[0-9a-f]+/0x[0-9a-f]+")
INITCALL_RETURNED_RE = re.compile(
    r"initcall ([\w.]+)\+0x[0-9a-f]+/0x[0-9a-f]+ returned"
)
INITCALL_PREFIX = "initcall "


DEFAULT_RULES = (
    PhaseRule(
        "supermin:build",
        r"^begin building supermin appliance",
        r"^finished building supermin appliance",
        start_source=EventSource.LIBRARY,
        end_source=EventSource.LIBRARY,
    ),
    PhaseRule(
        "qemu:feature-detect",
        r"^begin testing qemu features",
        r"^finished testing qemu features",
        start_source=EventSource.LIBRARY,
        end_source=EventSource.LIBRARY,
    ),
    PhaseRule(
        "qemu",
        r"^command: running qemu",
        r"^launch done callback",
        flags=ActivityFlag.LONG,
        start_source=EventSource.LIBRARY,
        end_source=EventSource.LAUNCH_DONE,
    ),
    PhaseRule(
        "qemu:overhead",
        r"^command: running qemu",
        r"^SeaBIOS",
        start_source=EventSource.LIBRARY,
        end_source=EventSource.APPLIANCE,
    ),
    PhaseRule(
        "seabios",
        r"^SeaBIOS",
        r"^Booting from ROM",
        start_source=EventSource.APPLIANCE,
        end_source=EventSource.APPLIANCE,
    ),
    PhaseRule(
        "bootloader",
        r"^Booting from ROM",
        r"Linux version",
        end_source=EventSource.APPLIANCE,
    ),
    PhaseRule(
        "kernel",
        r"Linux version",
        r"^supermin: ext2 mini initrd starting up",
        flags=ActivityFlag.LONG,
        start_source=EventSource.APPLIANCE,
        end_source=EventSource.APPLIANCE,
    ),
    PhaseRule(
        "kernel:initcalls",
        r"calling  ",
        r"Freeing unused kernel",
        start_source=EventSource.APPLIANCE,
        end_source=EventSource.APPLIANCE,
    ),
    PhaseRule(
        "supermin:mini-initrd",
        r"^supermin: ext2 mini initrd starting up",
        r"^supermin: chroot",
        start_source=EventSource.APPLIANCE,
        end_source=EventSource.APPLIANCE,
    ),
    PhaseRule(
        "/init",
        r"^Starting /init script",
        r"^starting guestfsd",
        start_source=EventSource.APPLIANCE,
        end_source=EventSource.APPLIANCE,
    ),
    PhaseRule(
        "guestfsd",
        r"^starting guestfsd",
        r"^launch done callback",
        start_source=EventSource.APPLIANCE,
        end_source=EventSource.LAUNCH_DONE,
    ),
    PhaseRule(
        "shutdown",
        r"^launch done callback",
        r"^close callback",
        start_source=EventSource.LAUNCH_DONE,
        end_source=EventSource.CLOSE,
    ),
)
