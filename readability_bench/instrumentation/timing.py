"""
Timing utilities for parser benchmarking.

Provides a timer, a context manager and a sample collector, plus the
measurement loop that turns repeated calls of an operation into a
distribution summary:
- 3 untimed warmup calls
- a best-effort garbage collection before the timed loop
- per-call wall-clock samples in milliseconds
- mean, median, min, max and p95 over the sorted samples
"""

import gc
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

DEFAULT_WARMUP_RUNS = 3


@dataclass(frozen=True)
class TimingStats:
    """Distribution summary of one measured operation."""

    samples: tuple[float, ...]
    mean: float
    median: float
    min: float
    max: float
    p95: float

    @property
    def iterations(self) -> int:
        """Number of timed samples."""
        return len(self.samples)


class Timer:
    """Simple timer for manual timing control."""

    def __init__(self, name: str = "timer"):
        self.name = name
        self.start_time: float = 0.0
        self.end_time: float = 0.0
        self._running = False

    def start(self) -> "Timer":
        """Start the timer."""
        self.start_time = time.perf_counter()
        self._running = True
        return self

    def stop(self) -> "Timer":
        """Stop the timer."""
        self.end_time = time.perf_counter()
        self._running = False
        return self

    @property
    def elapsed_ms(self) -> float:
        """Elapsed time in milliseconds."""
        end = self.end_time if not self._running else time.perf_counter()
        return (end - self.start_time) * 1000


@contextmanager
def timed(name: str = "operation") -> Iterator[Timer]:
    """Context manager for timing synchronous operations.

    Usage:
        with timed("parse") as timer:
            parse(html)
        print(f"Elapsed: {timer.elapsed_ms}ms")

    The timer is stopped even when the body raises; the exception is
    not suppressed.
    """
    timer = Timer(name).start()
    try:
        yield timer
    finally:
        timer.stop()


def stats_from_samples(samples: list[float]) -> TimingStats:
    """Reduce duration samples to a TimingStats.

    Median and p95 pick a single element of the sorted sequence
    (indices n // 2 and int(n * 0.95)) without interpolation, so the
    median of an even-length sequence is the upper middle element.
    """
    if not samples:
        raise ValueError("Cannot compute statistics for an empty sample list")

    ordered = sorted(samples)
    n = len(ordered)
    return TimingStats(
        samples=tuple(ordered),
        mean=sum(ordered) / n,
        median=ordered[n // 2],
        min=ordered[0],
        max=ordered[-1],
        p95=ordered[int(n * 0.95)],
    )


class SampleCollector:
    """Collects duration samples across the timed runs of one operation."""

    def __init__(self, name: str = "operation"):
        self.name = name
        self.samples: list[float] = []

    def add(self, duration_ms: float) -> None:
        """Add a duration sample in milliseconds."""
        self.samples.append(duration_ms)

    def clear(self) -> None:
        """Clear all collected samples."""
        self.samples.clear()

    @property
    def count(self) -> int:
        """Number of collected samples."""
        return len(self.samples)

    def stats(self) -> TimingStats:
        """Calculate aggregate statistics."""
        return stats_from_samples(self.samples)


def measure(
    fn: Callable[[], object],
    iterations: int,
    warmup_runs: int = DEFAULT_WARMUP_RUNS,
    collect_garbage: bool = True,
    name: Optional[str] = None,
) -> TimingStats:
    """Time `fn` over `iterations` calls after `warmup_runs` untimed calls.

    Exceptions raised by `fn` during warmup or timing propagate to the
    caller unchanged.
    """
    if iterations < 1:
        raise ValueError(f"iterations must be >= 1, got {iterations}")

    for _ in range(warmup_runs):
        fn()

    if collect_garbage:
        gc.collect()

    collector = SampleCollector(name or getattr(fn, "__name__", "operation"))
    for _ in range(iterations):
        with timed(collector.name) as timer:
            fn()
        collector.add(timer.elapsed_ms)

    return collector.stats()
