"""Timeline Renderer: column diagram, ranked report and diagnostic dumps."""

import platform
from typing import IO

from rich.console import Console
from rich.text import Text

from ..config import PACKAGE_NAME, SPACER_THRESHOLD_NS, __version__
from ..context import AnalysisContext
from ..models import Activity
from ..synthesizer import longest_first

# Styles
TIME_STYLE = "bold blue"
COLUMN_STYLE = "bold magenta"
NORMAL_STYLE = "green"
WARNING_STYLE = "bold red"

# Glyphs
START_GLYPH = "▲ "
END_GLYPH = "▼ "
THROUGH_GLYPH = "│ "
EMPTY_GLYPH = "  "
SPACER_PREFIX = " " * 11

# Run 0 messages containing all of one of these identify a component version.
APPLIANCE_INFO_MARKERS = (
    ("qemu version",),
    ("SeaBIOS", "version"),
    ("Linux version",),
    ("supermin", "starting up"),
)


def make_console(force_colour: bool = False, file: IO[str] | None = None) -> Console:
    """Create the report console; colour only on a terminal unless forced."""
    return Console(
        file=file,
        force_terminal=True if force_colour else None,
        highlight=False,
        markup=False,
        emoji=False,
        soft_wrap=True,
    )


def escape_string(message: str) -> str:
    """Replace non-printable characters with one \\xNN escape per UTF-8 byte."""
    out = []
    for ch in message:
        if ch.isprintable():
            out.append(ch)
            continue
        code = ord(ch)
        # Undecodable bytes arrive as lone surrogates.
        if 0xDC80 <= code <= 0xDCFF:
            raw = bytes([code - 0xDC00])
        else:
            raw = ch.encode("utf-8", "surrogatepass")
        out.extend(f"\\x{byte:02x}" for byte in raw)
    return "".join(out)


def format_activity(activity: Activity) -> Text:
    """Format one activity summary: name, mean, s.d. and share of the run."""
    style = WARNING_STYLE if activity.warning else NORMAL_STYLE
    text = Text()
    text.append(escape_string(activity.name), style=style)
    text.append(f" {activity.mean / 1e9:1.6f}s ±{activity.sd / 1e6:.1f}ms ")
    text.append(f"({activity.percent:.1f}%) ", style=style)
    return text


class TimelineRenderer:
    """Prints the analysis results to a rich console."""

    def __init__(self, console: Console, spacer_threshold_ns: int = SPACER_THRESHOLD_NS):
        self._console = console
        self._spacer_threshold_ns = spacer_threshold_ns

    def _emit(self, line: Text | str = "") -> None:
        self._console.print(line)

    def print_info(self, context: AnalysisContext) -> None:
        """Print enough about the test system to identify it later."""
        self._emit(f"{PACKAGE_NAME} {__version__}")

        self._emit("Host:")
        self._emit(platform.platform())
        self._emit(f"machine: {platform.machine() or 'unknown'}")

        # Component versions can be dug out of the appliance messages.
        self._emit("Appliance:")
        if not context.runs:
            return
        for event in context.runs[0].events:
            if any(
                all(marker in event.message for marker in markers)
                for markers in APPLIANCE_INFO_MARKERS
            ):
                self._emit(escape_string(event.message))

    def dump_pass_data(self, context: AnalysisContext) -> None:
        """Print every recorded event of every run."""
        for log in context.runs:
            self._emit(f"pass {log.run}")
            self._emit(f"    number of events collected {len(log)}")
            self._emit(f"    elapsed time {log.elapsed_ns} ns")
            for j, event in enumerate(log.events):
                ns = event.timestamp - log.start_timestamp
                self._emit(
                    f"    #{j}: +{ns} [{event.source.value}] "
                    f'"{escape_string(event.message)}"'
                )

    def dump_timeline(self, activities: list[Activity]) -> None:
        """Print the raw statistics of every activity."""
        for i, activity in enumerate(activities):
            self._emit(f"activity {i}:")
            self._emit(f"    name = {escape_string(activity.name)}")
            self._emit(
                f"    start - end = {activity.start_offset:.1f} - {activity.end_offset:.1f}"
            )
            self._emit(f"    mean elapsed = {activity.mean:.1f}")
            self._emit(f"    variance = {activity.variance:.1f}")
            self._emit(f"    s.d = {activity.sd:.1f}")
            self._emit(f"    percent = {activity.percent:.1f}")

    def print_analysis(self, activities: list[Activity]) -> None:
        """
        Print the column timeline.

        Each row is an instant at which some activity starts or ends.
        Overlapping activities occupy separate columns; a column is reused
        once its activity has ended.

        Args:
            activities: Synthesized activities in ascending start order.
        """
        # Which column holds which activity (index into activities).
        columns: list[int | None] = [None] * len(activities)
        last_free_column = 0
        t = -1.0

        instants = sorted(
            {a.start_offset for a in activities} | {a.end_offset for a in activities}
        )
        for instant in instants:
            if instant <= t:
                continue
            last_t, t = t, instant

            # Spacer line, but only across a large jump.
            if t - last_t >= self._spacer_threshold_ns:
                row = Text(SPACER_PREFIX)
                for j in range(last_free_column):
                    held = columns[j]
                    if held is not None and activities[held].end_offset != last_t:
                        row.append(THROUGH_GLYPH, style=COLUMN_STYLE)
                    else:
                        row.append(EMPTY_GLYPH, style=COLUMN_STYLE)
                self._emit(row)

            for j, held in enumerate(columns):
                if held is not None and activities[held].end_offset < t:
                    columns[j] = None

            while last_free_column > 0 and columns[last_free_column - 1] is None:
                last_free_column -= 1

            for i, activity in enumerate(activities):
                if activity.start_offset == t:
                    j = columns.index(None)
                    columns[j] = i
                    last_free_column = max(last_free_column, j + 1)

            self._emit(self._format_row(activities, columns[:last_free_column], t))

    def _format_row(
        self, activities: list[Activity], columns: list[int | None], t: float
    ) -> Text:
        row = Text(f"{t / 1e9:1.6f}s: ", style=TIME_STYLE)

        for held in columns:
            if held is None:
                glyph = EMPTY_GLYPH
            elif activities[held].start_offset == t:
                glyph = START_GLYPH
            elif activities[held].end_offset == t:
                glyph = END_GLYPH
            else:
                glyph = THROUGH_GLYPH
            row.append(glyph, style=COLUMN_STYLE)

        for held in columns:
            if held is not None and activities[held].start_offset == t:
                row.append_text(format_activity(activities[held]))

        return row

    def print_longest_to_shortest(self, activities: list[Activity]) -> None:
        """Print every activity summary, longest mean duration first."""
        for activity in longest_first(activities):
            self._emit(format_activity(activity))
