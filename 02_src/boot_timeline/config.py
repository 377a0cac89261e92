"""Project-level configuration and path helpers."""

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "boot_timeline.log"

PACKAGE_NAME = "boot-timeline"
__version__ = "0.1.0"

ENV_PREFIX = "BOOT_ANALYSIS_"

# Tuning parameters; all overridable through AnalysisSettings.
NR_TEST_PASSES = 5
NR_WARMUP_PASSES = 3
WARNING_THRESHOLD = 1.0
FRAGMENT_WINDOW_NS = 10_000_000  # 10 ms
SPACER_THRESHOLD_NS = 1_000_000  # 1 ms
MIN_ELAPSED_NS = 1000
ARMING_MESSAGE = "launch"


class AnalysisSettings(BaseModel):
    """Configuration consumed by the analysis core."""

    model_config = ConfigDict(frozen=True)

    passes: int = Field(default=NR_TEST_PASSES, ge=1)
    warmup_passes: int = Field(default=NR_WARMUP_PASSES, ge=0)
    warning_threshold: float = Field(default=WARNING_THRESHOLD, ge=0)
    force_colour: bool = False
    verbose: bool = False
    fragment_window_ns: int = Field(default=FRAGMENT_WINDOW_NS, gt=0)
    spacer_threshold_ns: int = Field(default=SPACER_THRESHOLD_NS, gt=0)
    min_elapsed_ns: int = Field(default=MIN_ELAPSED_NS, ge=0)
    arming_message: str = Field(default=ARMING_MESSAGE, min_length=1)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "AnalysisSettings":
        """
        Build settings from BOOT_ANALYSIS_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ.

        Returns:
            Validated settings; unset variables keep their defaults.

        Raises:
            pydantic.ValidationError: If a variable holds a malformed value.
        """
        if environ is None:
            environ = dict(os.environ)

        values = {}
        for name in cls.model_fields:
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is not None and raw != "":
                values[name] = raw

        return cls(**values)
