"""Main entry point for the boot timeline analyzer."""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from boot_timeline import AnalysisSettings, BootAnalysisError, BootAnalyzer
from boot_timeline.logging_config import get_logger, setup_logging
from sim import Sim

logger = get_logger(__name__)


def main() -> int:
    """Run the analysis against the simulated appliance."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")
    setup_logging()

    # Get configuration from environment
    try:
        settings = AnalysisSettings.from_env()
    except ValidationError as exc:
        logger.error("Invalid configuration: %s", exc)
        print(f"boot-timeline: invalid configuration:\n{exc}", file=sys.stderr)
        return 2

    seed = os.getenv("SIM_SEED")
    sim = Sim(seed=int(seed) if seed else None)

    analyzer = BootAnalyzer(settings, sim)
    try:
        analyzer.run()
    except BootAnalysisError as exc:
        logger.error("Analysis aborted: %s", exc)
        print(f"boot-timeline: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
