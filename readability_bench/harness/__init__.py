"""
Benchmark harness for parser comparisons.

Provides orchestration, persistence, comparison and reporting.
"""

from .records import (
    DEFAULT_BATCH_DOCUMENT_COUNT,
    BenchmarkRecord,
    ResultSet,
)

from .runner import (
    BenchmarkConfig,
    BenchmarkRunner,
    load_implementation,
)

from .store import (
    ResultsStore,
    load_results,
    save_results,
)

from .comparison import (
    SIZE_THRESHOLD_BYTES,
    BatchRow,
    Comparison,
    ComparisonRow,
    Summary,
    build_comparison,
    compare,
    compare_batch,
    direction_label,
    shared_batch_document_count,
    summarize,
)

from .reporter import (
    ChartReporter,
    ConsoleReporter,
    MarkdownReporter,
    emit,
    format_bytes,
    format_ms,
    save_report,
)

__all__ = [
    # Records
    "DEFAULT_BATCH_DOCUMENT_COUNT",
    "BenchmarkRecord",
    "ResultSet",
    # Runner
    "BenchmarkConfig",
    "BenchmarkRunner",
    "load_implementation",
    # Store
    "ResultsStore",
    "load_results",
    "save_results",
    # Comparison
    "SIZE_THRESHOLD_BYTES",
    "BatchRow",
    "Comparison",
    "ComparisonRow",
    "Summary",
    "build_comparison",
    "compare",
    "compare_batch",
    "direction_label",
    "shared_batch_document_count",
    "summarize",
    # Reporter
    "ChartReporter",
    "ConsoleReporter",
    "MarkdownReporter",
    "emit",
    "format_bytes",
    "format_ms",
    "save_report",
]
