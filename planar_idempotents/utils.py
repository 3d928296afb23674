"""
Diagnostic helpers: a stopwatch and human-readable memory sizes.

Nothing here feeds into a computed count.
"""

from __future__ import annotations
from typing import Optional
import time


class Timer:
    """Stopwatch started on creation (or by start())."""

    def __init__(self):
        self._start: float = time.perf_counter()
        self._stop: Optional[float] = None

    def start(self) -> Timer:
        self._start = time.perf_counter()
        self._stop = None
        return self

    def stop(self) -> float:
        self._stop = time.perf_counter()
        return self.elapsed

    @property
    def elapsed(self) -> float:
        end = self._stop if self._stop is not None else time.perf_counter()
        return end - self._start

    def string(self) -> str:
        return format_seconds(self.elapsed)

    def __str__(self) -> str:
        return self.string()


def format_seconds(seconds: float) -> str:
    """E.g. 0.000012 -> '12µs', 75.5 -> '1m 15s'."""
    if seconds < 1e-3:
        return f"{seconds * 1e6:.0f}µs"
    if seconds < 1:
        return f"{seconds * 1e3:.0f}ms"
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, secs = divmod(int(seconds), 60)
    if minutes < 60:
        return f"{minutes}m {secs}s"
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h {minutes}m {secs}s"


def format_bytes(mem: float) -> str:
    """Scale a byte count to bytes / KB / MB / GB (powers of 1024)."""
    if mem > 1024 ** 3:
        return f"{mem / 1024 ** 3:.2f} GB"
    if mem > 1024 ** 2:
        return f"{mem / 1024 ** 2:.2f} MB"
    if mem > 1024:
        return f"{mem / 1024:.2f} KB"
    return f"{mem:.0f} bytes"


__all__ = [
    "Timer",
    "format_seconds",
    "format_bytes",
]
