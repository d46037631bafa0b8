"""Logging configuration for ngmigration.

Logs to stderr so stdout stays free for the recommendation (or JSON) output.
Provides a tqdm progress bar for visual feedback on large trees.
"""

import logging
import sys
import time
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from tqdm import tqdm

# Non-TTY stderr disables progress bars (pipes, CI logs)
_DISABLE_PROGRESS = not sys.stderr.isatty()

# Create logger that outputs to stderr
logger = logging.getLogger("ngmigration")
logger.setLevel(logging.INFO)

# Only add handler if not already configured
if not logger.handlers:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.DEBUG)
    formatter = logging.Formatter(
        "[ngmigration] %(asctime)s %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def set_verbosity(verbose: bool) -> None:
    """Switch the package logger between INFO and DEBUG."""
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


class TimingContext:
    """Context object that captures elapsed time from an operation.

    Attributes:
        elapsed: Elapsed time in seconds (set after context exits).
        elapsed_ms: Elapsed time in milliseconds (set after context exits).
    """

    def __init__(self) -> None:
        self.elapsed: float = 0.0
        self.elapsed_ms: float = 0.0
        self._start: float = 0.0

    def start(self) -> None:
        """Start the timer."""
        self._start = time.perf_counter()

    def stop(self) -> None:
        """Stop the timer and record elapsed time."""
        self.elapsed = time.perf_counter() - self._start
        self.elapsed_ms = self.elapsed * 1000


@contextmanager
def log_operation(
    operation: str,
    details: dict[str, Any] | None = None,
) -> Generator[TimingContext, None, None]:
    """Context manager for logging operation start/end with timing.

    Args:
        operation: Name of the operation.
        details: Optional details dict to include in start message.

    Yields:
        TimingContext object with elapsed time after context exits.

    Example:
        with log_operation("resolve_files", {"root": "/path/to/app"}) as timing:
            files = resolve_files(root, patterns)
        print(f"Took {timing.elapsed_ms:.1f}ms")
    """
    details_str = ""
    if details:
        details_str = " " + " ".join(f"{k}={v}" for k, v in details.items())

    logger.info("▶ Starting %s%s", operation, details_str)

    ctx = TimingContext()
    ctx.start()

    try:
        yield ctx
    except Exception as e:
        ctx.stop()
        logger.error("✗ %s failed after %.2fs: %s", operation, ctx.elapsed, e)
        raise
    else:
        ctx.stop()
        logger.info("✓ Completed %s in %.2fs", operation, ctx.elapsed)


# =============================================================================
# Progress Bar Support (tqdm)
# =============================================================================


class ProgressBar:
    """Context manager for manual progress bar updates.

    Use when results arrive out of order (e.g. from a worker pool) and the
    bar has to be advanced by hand.

    Example:
        with ProgressBar(total=len(files), desc="Scanning") as pbar:
            for future in as_completed(futures):
                pbar.update()
    """

    def __init__(
        self,
        total: int,
        desc: str | None = None,
        unit: str = "it",
        disable: bool = False,
    ):
        self.total = total
        self.desc = desc
        self.unit = unit
        self.disable = disable
        self._pbar: Any = None
        self._current = 0
        self._start_time = 0.0

    def __enter__(self) -> "ProgressBar":
        """Enter context and start progress bar."""
        self._start_time = time.perf_counter()
        if not self.disable and not _DISABLE_PROGRESS:
            self._pbar = tqdm(
                total=self.total,
                desc=f"  {self.desc}" if self.desc else None,
                unit=self.unit,
                file=sys.stderr,
                ncols=80,
                leave=False,
                bar_format="{l_bar}{bar}| {n_fmt}/{total_fmt} [{elapsed}<{remaining}, {rate_fmt}]",
            )
        elif not self.disable and self.total > 100:
            logger.info("  %s: processing %d %s...", self.desc or "Progress", self.total, self.unit)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Exit context and clean up progress bar."""
        if self._pbar is not None:
            self._pbar.close()
        elif not self.disable:
            elapsed = time.perf_counter() - self._start_time
            rate = self._current / elapsed if elapsed > 0 else 0
            logger.debug(
                "  %s: completed %d %s in %.2fs (%.1f/s)",
                self.desc or "Progress",
                self._current,
                self.unit,
                elapsed,
                rate,
            )

    def update(self, n: int = 1) -> None:
        """Update progress by n items."""
        self._current += n
        if self._pbar is not None:
            self._pbar.update(n)
