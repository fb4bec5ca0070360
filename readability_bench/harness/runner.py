"""
Benchmark orchestrator for parser timing runs.

Runs every test page through one parse implementation, strictly one
measurement at a time, and collects the records into a ResultSet.
"""

import importlib
import platform
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional

from ..config import DEFAULT_BASE_URL
from ..instrumentation.timing import DEFAULT_WARMUP_RUNS, measure
from ..instrumentation.traces import Tracer
from ..scenarios import ALL_CASES, BATCH_CASES, DocumentCase, load_test_case
from .records import BenchmarkRecord, ResultSet
from .reporter import ConsoleReporter

# parse(html, base_url) -> extracted article, or None when nothing was found
ParseFn = Callable[[str, Optional[str]], Optional[Any]]


def load_implementation(path: str) -> ParseFn:
    """Import a parse callable from a "module:attribute" path."""
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Implementation must look like 'module:callable', got {path!r}")

    module = importlib.import_module(module_name)
    target: Any = module
    for part in attr.split("."):
        target = getattr(target, part)

    if not callable(target):
        raise ValueError(f"{path} is not callable")
    return target


@dataclass
class BenchmarkConfig:
    """Configuration for a benchmark run."""

    name: str
    implementation: str = ""
    iterations: int = 50
    large_iterations: int = 10
    batch_iterations: int = 50
    warmup_runs: int = DEFAULT_WARMUP_RUNS
    base_url: Optional[str] = DEFAULT_BASE_URL
    keep_going: bool = False
    cases: list[DocumentCase] = field(default_factory=lambda: list(ALL_CASES))
    batch_cases: list[str] = field(default_factory=lambda: list(BATCH_CASES))

    def iterations_for(self, case: DocumentCase) -> int:
        return self.large_iterations if case.is_large else self.iterations


class BenchmarkRunner:
    """Orchestrates benchmark execution for one parse implementation."""

    def __init__(
        self,
        parse: ParseFn,
        config: BenchmarkConfig,
        pages_dir: Path,
        tracer: Optional[Tracer] = None,
        reporter: Optional[ConsoleReporter] = None,
        verbose: bool = True,
    ):
        self.parse = parse
        self.config = config
        self.pages_dir = Path(pages_dir)
        self.tracer = tracer or Tracer()
        self.reporter = reporter or ConsoleReporter()
        self.verbose = verbose
        self.skipped: dict[str, str] = {}

    def _print(self, line: str) -> None:
        if self.verbose:
            print(line)

    def measure_document(self, case: DocumentCase, html: str) -> BenchmarkRecord:
        """Time parsing of one page. Parse failures propagate."""
        parse, base_url = self.parse, self.config.base_url
        iterations = self.config.iterations_for(case)
        size = len(html.encode("utf-8"))

        attributes = {
            "test_case": case.name,
            "size_category": case.category,
            "size_bytes": size,
            "iterations": iterations,
        }
        with self.tracer.span("measure_document", attributes) as span:
            stats = measure(
                lambda: parse(html, base_url),
                iterations,
                warmup_runs=self.config.warmup_runs,
                name=case.name,
            )
            span.set_attribute("mean_ms", stats.mean)

        return BenchmarkRecord.from_stats(stats, size=size, size_category=case.category)

    def measure_batch(self, documents: list[str]) -> BenchmarkRecord:
        """Time parsing of all documents back to back in a single call."""
        parse, base_url = self.parse, self.config.base_url

        def parse_all() -> None:
            for html in documents:
                parse(html, base_url)

        total_size = sum(len(html.encode("utf-8")) for html in documents)
        attributes = {
            "document_count": len(documents),
            "size_bytes": total_size,
            "iterations": self.config.batch_iterations,
        }
        with self.tracer.span("measure_batch", attributes) as span:
            stats = measure(
                parse_all,
                self.config.batch_iterations,
                warmup_runs=self.config.warmup_runs,
                name="batch",
            )
            span.set_attribute("mean_ms", stats.mean)

        return BenchmarkRecord.from_stats(
            stats,
            size=total_size,
            document_count=len(documents),
            total_size=total_size,
        )

    def _attempt(
        self,
        name: str,
        fn: Callable[[], BenchmarkRecord],
    ) -> Optional[BenchmarkRecord]:
        """Run a measurement; with keep_going, a failing parse skips it instead.

        MemoryError always aborts the run.
        """
        if not self.config.keep_going:
            return fn()
        try:
            return fn()
        except MemoryError:
            raise
        except Exception as e:
            self.skipped[name] = str(e)
            self._print(self.reporter.skipped(name, f"parse failed: {e}"))
            return None

    def run_single(self) -> tuple[dict[str, BenchmarkRecord], dict[str, BenchmarkRecord]]:
        """Measure every configured page; returns (single, large) records."""
        single: dict[str, BenchmarkRecord] = {}
        large: dict[str, BenchmarkRecord] = {}

        self._print(self.reporter.section("Single Document Parsing"))
        for case in self.config.cases:
            html = load_test_case(case.name, self.pages_dir)
            if html is None:
                self.skipped[case.name] = "file not found"
                self._print(self.reporter.skipped(case.name, "file not found"))
                continue

            record = self._attempt(case.name, lambda: self.measure_document(case, html))
            if record is None:
                continue

            self._print(self.reporter.case_line(case.name, record))
            if case.is_large:
                large[case.name] = record
            else:
                single[case.name] = record

        return single, large

    def run_batch(self) -> Optional[BenchmarkRecord]:
        """Measure the batch, or None when none of its pages are present."""
        self._print(self.reporter.section(f"Batch Processing ({len(self.config.batch_cases)} documents)"))

        documents = []
        for name in self.config.batch_cases:
            html = load_test_case(name, self.pages_dir)
            if html is None:
                self._print(self.reporter.skipped(name, "file not found"))
                continue
            documents.append(html)

        if not documents:
            self._print("No batch documents found")
            return None

        record = self._attempt("batch", lambda: self.measure_batch(documents))
        if record is None:
            return None

        self._print(self.reporter.batch_line(record))
        return record

    def run_all(self) -> ResultSet:
        """Run single, large and batch measurements in sequence."""
        start_time = datetime.now()
        self._print(self.reporter.banner(f"Parser Benchmark: {self.config.name}"))

        single, large = self.run_single()
        batch = self.run_batch()

        if large:
            self._print(self.reporter.section("Large Document Parsing"))
            for name, record in large.items():
                self._print(self.reporter.throughput_line(name, record))

        end_time = datetime.now()
        self._print("\n" + "=" * 70)

        return ResultSet(
            single=single,
            large=large,
            batch=batch,
            metadata={
                "implementation": self.config.name,
                "callable": self.config.implementation,
                "start_time": start_time.isoformat(),
                "end_time": end_time.isoformat(),
                "python": platform.python_version(),
                "platform": platform.platform(),
            },
        )
