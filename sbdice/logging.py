"""Logging configuration for sbdice.

Logs to stderr so stdout stays free for command output (batch reports).
Provides tqdm progress bars for directory runs.
"""

import logging
import os
import sys
import time
from collections.abc import Generator, Iterable
from contextlib import contextmanager
from typing import Any, TypeVar

from tqdm import tqdm as _tqdm

# Check if progress bars should be disabled
# - SBDICE_DISABLE_PROGRESS=1 explicitly disables
# - Non-TTY stderr also disables (pipes, CI)
_DISABLE_PROGRESS = (
    os.getenv("SBDICE_DISABLE_PROGRESS", "").lower() in ("1", "true", "yes")
    or not sys.stderr.isatty()
)

# Create logger that outputs to stderr
logger = logging.getLogger("sbdice")
logger.setLevel(os.getenv("SBDICE_LOG_LEVEL", "INFO").upper())

# Only add handler if not already configured
if not logger.handlers:
    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter(
        "[sbdice] %(asctime)s %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def set_log_level(level: str | int) -> None:
    """Change the sbdice logger level at runtime.

    Args:
        level: A logging level name ("DEBUG", "warning") or number.
    """
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)


@contextmanager
def log_operation(operation: str, details: dict[str, Any] | None = None) -> Generator[None, None, None]:
    """Log the start (debug) and end (info) of an operation with its duration.

    A failure is logged at error level and re-raised.
    """
    details_str = ""
    if details:
        details_str = " " + " ".join(f"{k}={v}" for k, v in details.items())

    logger.debug("Starting %s%s", operation, details_str)
    start = time.perf_counter()
    try:
        yield
    except Exception as e:
        logger.error("%s failed after %.2fs: %s", operation, time.perf_counter() - start, e)
        raise
    logger.info("Completed %s in %.2fs%s", operation, time.perf_counter() - start, details_str)


T = TypeVar("T")


def progress_bar(iterable: Iterable[T], desc: str, total: int, unit: str = "files") -> Iterable[T]:
    """Show a tqdm bar on stderr for a batch loop, unless progress is disabled."""
    if _DISABLE_PROGRESS:
        return iterable
    return _tqdm(iterable, desc=f"  {desc}", total=total, unit=unit, file=sys.stderr, ncols=80, leave=False)
