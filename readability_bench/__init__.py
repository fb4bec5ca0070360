"""
Readability Bench - timing and comparison of interchangeable article parsers.

Runs the same Mozilla Readability test pages through two parse
implementations, stores each run's timings, and renders a side-by-side
comparison report.

Key modules:
- instrumentation: Timing harness and tracing integration
- harness: Benchmark orchestration, result storage, comparison and reporting
- scenarios: Size-grouped test pages
"""

__version__ = "0.1.0"

from . import instrumentation
from . import harness
from . import scenarios

__all__ = [
    "instrumentation",
    "harness",
    "scenarios",
]
