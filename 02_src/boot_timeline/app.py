"""Analyzer bootstrap: collect the runs, then validate, synthesize and report."""

from rich.console import Console

from .config import AnalysisSettings
from .context import AnalysisContext
from .logging_config import get_logger
from .models import Activity
from .renderer import TimelineRenderer, make_console
from .source import IEventSource
from .synthesizer import TimelineSynthesizer
from .timeline import DEFAULT_RULES, PhaseRule, construct_timeline
from .validation import check_activities, check_pass_data

logger = get_logger(__name__)


class BootAnalyzer:
    """Runs the boot sequence repeatedly and prints the averaged timeline."""

    def __init__(
        self,
        settings: AnalysisSettings,
        source: IEventSource,
        console: Console | None = None,
        rules: tuple[PhaseRule, ...] | list[PhaseRule] = DEFAULT_RULES,
    ):
        self._settings = settings
        self._source = source
        self._console = console or make_console(settings.force_colour)
        self._rules = rules
        self._renderer = TimelineRenderer(
            self._console, spacer_threshold_ns=settings.spacer_threshold_ns
        )
        self._context: AnalysisContext | None = None

    @property
    def context(self) -> AnalysisContext:
        """Get the context of the current analysis."""
        if not self._context:
            raise RuntimeError("Analyzer not started")
        return self._context

    def run(self) -> list[Activity]:
        """
        Run the full measurement and print the report.

        Returns:
            The synthesized activities in temporal order.

        Raises:
            BootAnalysisError: If a run or the instrumentation is invalid.
        """
        settings = self._settings
        console = self._console
        self._context = context = AnalysisContext(settings)

        console.print("Warming up the cache ...")
        for _ in range(settings.warmup_passes):
            self._source.warm_up()

        console.print(f"Running the tests in {settings.passes} passes ...")
        for i in range(settings.passes):
            log = context.new_run(i)
            self._source.run(log)
            console.print(
                f"    pass {i + 1}: {len(log)} events collected in {log.elapsed_ns} ns"
            )

        if settings.verbose:
            self._renderer.dump_pass_data(context)

        console.print("Analyzing the results ...")
        check_pass_data(context)
        construct_timeline(context, self._rules)
        check_activities(context)
        activities = TimelineSynthesizer(context).synthesize()

        if settings.verbose:
            self._renderer.dump_timeline(activities)

        console.print()
        self._renderer.print_info(context)
        console.print()
        self._renderer.print_analysis(activities)
        console.print()
        console.print("Longest activities:")
        console.print()
        self._renderer.print_longest_to_shortest(activities)

        context.release()
        logger.info("Analysis complete")
        return activities
