"""
Run logging and console reporting.

RunLog is the reporting collaborator handed to the pipeline. It owns the
log file handler for exactly one run: open() attaches it, close() flushes
and detaches it. Console output goes through the colored print helpers.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from .config import DEFAULT_LOG_FILE

if TYPE_CHECKING:
    from .pipeline import ProcessOutcome, RunReport


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
ROOT_LOGGER = "scrambler"


# ---------------------------------------------------------------------------
# Color output helpers
# ---------------------------------------------------------------------------


class Colors:
    """ANSI color codes for terminal output."""
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    RESET = "\033[0m"
    BOLD = "\033[1m"


def colored(text: str, color: str) -> str:
    """Return colored text for terminal output."""
    return f"{color}{text}{Colors.RESET}"


def print_error(msg: str) -> None:
    """Print error message to stderr."""
    print(colored(f"✗ Error: {msg}", Colors.RED), file=sys.stderr)


def print_success(msg: str) -> None:
    print(colored(f"✓ {msg}", Colors.GREEN))


def print_warning(msg: str) -> None:
    print(colored(f"⚠ Warning: {msg}", Colors.YELLOW))


def print_info(msg: str) -> None:
    print(colored(f"ℹ {msg}", Colors.CYAN))


# ---------------------------------------------------------------------------
# Run log
# ---------------------------------------------------------------------------


class RunLog:
    """Per-run log file plus console progress."""

    def __init__(
        self,
        log_file: Optional[Path] = Path(DEFAULT_LOG_FILE),
        verbose: bool = False,
        quiet: bool = False,
    ):
        self.log_file = log_file
        self.verbose = verbose
        self.quiet = quiet
        self.logger = logging.getLogger(ROOT_LOGGER)
        self._handler: Optional[logging.Handler] = None
        self._previous_level = logging.NOTSET

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> "RunLog":
        if self._handler is not None or self.log_file is None:
            return self

        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(self.log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.setLevel(logging.DEBUG if self.verbose else logging.INFO)

        self.logger.addHandler(handler)
        self._previous_level = self.logger.level
        if self.logger.level == logging.NOTSET or self.logger.level > handler.level:
            self.logger.setLevel(handler.level)

        self._handler = handler
        return self

    def close(self) -> None:
        if self._handler is None:
            return

        self._handler.flush()
        self.logger.removeHandler(self._handler)
        self._handler.close()
        self._handler = None
        self.logger.setLevel(self._previous_level)

    def __enter__(self) -> "RunLog":
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def info(self, msg: str) -> None:
        self.logger.info(msg)
        if self.verbose and not self.quiet:
            print(colored(f"  → {msg}", Colors.BLUE))

    def error(self, msg: str) -> None:
        self.logger.error(msg)

    def outcome(self, outcome: "ProcessOutcome") -> None:
        if outcome.ok:
            self.logger.info("Successfully processed: %s", outcome.source)
            if not self.quiet:
                print(f"  ✓ {outcome.source} → {outcome.output}")
        else:
            self.logger.error("Failed to process %s: %s", outcome.source, outcome.error)
            if not self.quiet:
                print(colored(f"  ✗ {outcome.source}: {outcome.error}", Colors.RED))

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    def summary(self, report: "RunReport") -> None:
        """Print success and failure counts, listing each failure."""

        self.logger.info(
            "Run finished: %d succeeded, %d failed",
            len(report.succeeded),
            len(report.failed),
        )

        print()
        print(colored("Processing Summary:", Colors.BOLD))
        print("===================")
        print(f"Successfully processed: {len(report.succeeded)} files")

        if report.failed:
            print()
            print(colored(f"Failed to process: {len(report.failed)} files", Colors.YELLOW))
            for outcome in report.failed:
                print(f"  {outcome.source}: {outcome.error}")
