"""Logging configuration for pattern-scout.

Logs go to stderr through rich so that stdout stays clean for ``--json-only``
output. The level comes from ``PATTERN_SCOUT_LOG_LEVEL`` (default WARNING).
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "PATTERN_SCOUT_LOG_LEVEL"

logger = logging.getLogger("pattern_scout")
logger.setLevel(os.getenv(LOG_LEVEL_ENV, "WARNING").upper())

# Only add handler if not already configured
if not logger.handlers:
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        log_time_format="%H:%M:%S",
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)


def configure_logging(level: int) -> None:
    """Change the package log level at runtime (e.g. from ``--verbose``)."""
    logger.setLevel(level)


class TimingContext:
    """Captures elapsed time of an operation.

    Attributes:
        elapsed: Elapsed time in seconds (set after context exits).
    """

    def __init__(self) -> None:
        self.elapsed: float = 0.0
        self._start: float = 0.0

    def start(self) -> None:
        self._start = time.perf_counter()

    def stop(self) -> None:
        self.elapsed = time.perf_counter() - self._start


@contextmanager
def log_operation(
    operation: str,
    details: dict[str, Any] | None = None,
) -> Generator[TimingContext, None, None]:
    """Log start/end of an operation with timing.

    Args:
        operation: Name of the operation.
        details: Optional details dict to include in start message.

    Yields:
        TimingContext with elapsed time after the context exits.

    Example:
        with log_operation("detect_patterns", {"directory": "src"}) as timing:
            ...
        print(f"Took {timing.elapsed:.2f}s")
    """
    details_str = ""
    if details:
        details_str = " " + " ".join(f"{k}={v}" for k, v in details.items())

    logger.info("Starting %s%s", operation, details_str)

    ctx = TimingContext()
    ctx.start()

    try:
        yield ctx
    except Exception as e:
        ctx.stop()
        logger.error("%s failed after %.2fs: %s", operation, ctx.elapsed, e)
        raise
    else:
        ctx.stop()
        logger.info("Completed %s in %.2fs", operation, ctx.elapsed)
