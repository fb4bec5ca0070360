"""
Instrumentation module for parser benchmarking.

Provides timing utilities and tracing integration.
"""

from .timing import (
    DEFAULT_WARMUP_RUNS,
    SampleCollector,
    Timer,
    TimingStats,
    measure,
    stats_from_samples,
    timed,
)

from .traces import (
    Tracer,
    TracingConfig,
)

__all__ = [
    # Timing
    "DEFAULT_WARMUP_RUNS",
    "SampleCollector",
    "Timer",
    "TimingStats",
    "measure",
    "stats_from_samples",
    "timed",
    # Tracing
    "Tracer",
    "TracingConfig",
]
