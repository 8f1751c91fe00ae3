"""Standardized CLI exit codes for sweep-code.

Exit code scheme:

    0  SUCCESS        -- scan completed (findings or not)
    1  GENERAL_ERROR  -- unexpected failure, crash, unhandled exception
    2  USAGE_ERROR    -- invalid arguments, bad flags, unknown command (Click default)
    3  CONFIG_ERROR   -- the scan configuration is invalid (bad root, pattern, category)
    5  GATE_FAILURE   -- --fail-on-findings was given and findings passed the threshold

CI jobs can tell "the project has removable files" (5) apart from
"the tool could not run" (1, 3).
"""

from __future__ import annotations

import click

# ---------------------------------------------------------------------------
# Exit code constants
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_ERROR: int = 1
EXIT_USAGE: int = 2
EXIT_CONFIG: int = 3
EXIT_GATE_FAILURE: int = 5

DESCRIPTIONS: dict[int, str] = {
    EXIT_SUCCESS: "success",
    EXIT_ERROR: "unexpected error",
    EXIT_USAGE: "invalid usage (bad arguments or flags)",
    EXIT_CONFIG: "invalid scan configuration",
    EXIT_GATE_FAILURE: "findings above the confidence threshold",
}

# ---------------------------------------------------------------------------
# Custom exceptions (caught by Click and turned into exit codes)
# ---------------------------------------------------------------------------


class SweepError(click.ClickException):
    """Base class for sweep-specific errors with exit codes."""

    def __init__(self, message: str, exit_code: int = EXIT_ERROR):
        super().__init__(message)
        self.exit_code = exit_code

    def format_message(self) -> str:
        return self.message


class ConfigError(SweepError):
    """Raised when the scan configuration cannot describe a valid file set."""

    def __init__(self, message: str):
        super().__init__(message, EXIT_CONFIG)


class GateFailureError(SweepError):
    """Raised when findings at or above the threshold exist and the caller asked to fail."""

    def __init__(self, message: str = "Unused items found above the confidence threshold."):
        super().__init__(message, EXIT_GATE_FAILURE)

