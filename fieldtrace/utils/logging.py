# fieldtrace/utils/logging.py
"""
Timing, memory and progress reporting for trace batches.

Reports go to stdout; degraded numerical paths are reported elsewhere
through ``warnings``.
"""

from __future__ import annotations
from typing import Optional, Dict, Callable, Tuple
import sys
import time

import psutil
from tqdm import tqdm


def memory_info() -> Dict[str, float]:
    """
    Memory figures in MB: this process' resident set ('rss_mb') and what the
    system still has available ('available_mb').
    """
    rss = psutil.Process().memory_info().rss
    available = psutil.virtual_memory().available
    return {"rss_mb": rss / 2**20, "available_mb": available / 2**20}


class Timer:
    """
    Wall-clock timer for one CLI stage, used as a context manager.

    On exit it prints ``"<name>: <seconds>s"`` unless ``quiet``; with
    ``track_memory`` the change in resident memory is appended.
    """

    def __init__(self, name: str = "Timer", track_memory: bool = False, quiet: bool = False):
        self.name = name
        self.track_memory = track_memory
        self.quiet = quiet
        self._t0: Optional[float] = None
        self._t1: Optional[float] = None
        self._rss0: Optional[float] = None
        self._rss1: Optional[float] = None

    def start(self) -> None:
        self._t0 = time.perf_counter()
        self._t1 = None
        if self.track_memory:
            self._rss0 = memory_info()["rss_mb"]

    def stop(self) -> float:
        """Stop the clock; returns the elapsed seconds."""
        if self._t0 is None:
            raise RuntimeError(f"Timer '{self.name}' was never started")
        self._t1 = time.perf_counter()
        if self.track_memory:
            self._rss1 = memory_info()["rss_mb"]
        return self.elapsed

    @property
    def elapsed(self) -> float:
        if self._t0 is None:
            return 0.0
        return (self._t1 if self._t1 is not None else time.perf_counter()) - self._t0

    @property
    def memory_delta(self) -> Optional[float]:
        """Change in resident memory (MB), None unless tracked and stopped."""
        if self._rss0 is None or self._rss1 is None:
            return None
        return self._rss1 - self._rss0

    def report(self) -> str:
        line = f"{self.name}: {self.elapsed:.4f}s"
        if self.memory_delta is not None:
            line += f" ({self.memory_delta:+.1f} MB)"
        print(line)
        return line

    def __enter__(self) -> 'Timer':
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
        if not self.quiet:
            self.report()


def _line_progress(total: int, desc: str) -> Callable[[int], None]:
    # About twenty updates per batch, rewritten in place; newline on the last
    every = max(1, total // 20)
    t0 = time.perf_counter()

    def update(n_done: int) -> None:
        if n_done % every and n_done != total:
            return
        line = f"{desc}: {n_done}/{total} ({100.0 * n_done / max(1, total):.1f}%)"
        elapsed = time.perf_counter() - t0
        if elapsed > 0 and n_done:
            line += f", {n_done / elapsed:.1f} lines/s"
        print(f"\r{line}", end="\n" if n_done == total else "", flush=True)

    return update


def make_progress(total: int, desc: str = "Tracing", style: str = "auto") -> Tuple[Callable[[int], None], Callable[[], None]]:
    """
    Create a progress reporter.

    Returns a pair ``(update(n_done), close())``. ``style`` is one of
    'auto' / 'tqdm' (progress bar), 'simple' (single rewritten line) or
    'none'. 'auto' uses a bar when stdout is a terminal, otherwise the
    single line.
    """
    style = (style or "auto").lower()
    if style == "auto":
        style = "tqdm" if sys.stdout.isatty() else "simple"

    if style == "none":
        return (lambda n_done: None), (lambda: None)

    if style == "tqdm":
        bar = tqdm(total=total, desc=desc, leave=True)

        def update_bar(n_done: int) -> None:
            bar.update(n_done - bar.n)

        return update_bar, bar.close

    return _line_progress(total, desc), (lambda: None)
