#!/usr/bin/env python3
"""
Readability Bench - Main entry point for running and comparing parser benchmarks.

Usage:
    python main.py [command] [options]

Commands:
    run       - Benchmark one parse implementation and save its results
    compare   - Compare two saved result sets and write the markdown report
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from readability_bench.config import Settings
from readability_bench.harness import (
    BenchmarkConfig,
    BenchmarkRunner,
    ChartReporter,
    ConsoleReporter,
    MarkdownReporter,
    ResultsStore,
    build_comparison,
    emit,
    load_implementation,
    save_report,
)
from readability_bench.instrumentation import Tracer, TracingConfig

# Load environment variables from .env file
load_dotenv()

EXIT_FAILURE = 1
EXIT_MISSING_RESULTS = 2


def run_benchmark(args, settings: Settings) -> int:
    """Benchmark one implementation and save its result set."""
    if not args.impl:
        emit("Error: run needs --impl MODULE:CALLABLE", EXIT_FAILURE)

    parse = load_implementation(args.impl)
    config = BenchmarkConfig(
        name=args.name,
        implementation=args.impl,
        iterations=args.runs,
        large_iterations=args.large_runs,
        batch_iterations=args.batch_runs,
        base_url=settings.base_url,
        keep_going=args.keep_going,
    )
    tracer = Tracer(TracingConfig(enabled=args.trace or settings.tracing))
    runner = BenchmarkRunner(
        parse,
        config,
        pages_dir=settings.pages_dir,
        tracer=tracer,
        reporter=ConsoleReporter(use_color=not args.no_color),
    )

    try:
        result_set = runner.run_all()
    finally:
        tracer.shutdown()

    path = ResultsStore(settings.results_dir).save(args.name, result_set)
    print(f"Results saved to: {path}")
    if runner.skipped:
        print(f"Skipped {len(runner.skipped)} test case(s): {', '.join(sorted(runner.skipped))}")
    return 0


def missing_results_message(store: ResultsStore, first: str, second: str, missing: list[str]) -> str:
    """Diagnostic plus reproduction steps for a comparison without inputs."""
    lines = ["Missing benchmark results. Run both benchmarks first."]
    for name in missing:
        lines.append(f"  not found or unreadable: {store.path_for(name)}")
    lines.append(f"  1. python main.py run --name {first} --impl MODULE:CALLABLE")
    lines.append(f"  2. python main.py run --name {second} --impl MODULE:CALLABLE")
    return "\n".join(lines)


def compare_results(args, settings: Settings) -> int:
    """Compare two saved result sets, print the report and save it."""
    store = ResultsStore(settings.results_dir)
    first = store.load(args.first)
    second = store.load(args.second)

    if first is None or second is None:
        missing = [name for name, rs in ((args.first, first), (args.second, second)) if rs is None]
        emit(missing_results_message(store, args.first, args.second, missing), EXIT_MISSING_RESULTS)

    comparison = build_comparison(first, second, args.first, args.second)
    document = MarkdownReporter().render(comparison)

    console = ConsoleReporter(use_color=not args.no_color)
    emit(console.banner(f"Benchmark Comparison: {args.first} vs {args.second}") + "\n")
    emit(document)

    path = save_report(document, settings.report_path)
    print(f"\nResults saved to: {path}")

    if args.chart:
        chart_path = ChartReporter(settings.report_path.parent).speedup_bar_chart(comparison)
        if chart_path:
            print(f"Chart saved to: {chart_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Readability Bench - Time and compare article parser implementations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python main.py run --name baseline --impl mypkg.parsers:parse_v1
    python main.py run --name candidate --impl mypkg.parsers:parse_v2 --runs 100
    python main.py compare --first baseline --second candidate --chart
        """,
    )

    parser.add_argument(
        "command",
        choices=["run", "compare"],
        help="Action to perform",
    )
    parser.add_argument(
        "--impl",
        help="Parse callable to benchmark, as MODULE:CALLABLE (run only)",
    )
    parser.add_argument(
        "--name",
        default="baseline",
        help="Name the results are saved under (default: baseline)",
    )
    parser.add_argument(
        "--runs",
        type=int,
        default=50,
        help="Timed iterations per small/medium document (default: 50)",
    )
    parser.add_argument(
        "--large-runs",
        type=int,
        default=10,
        help="Timed iterations per large document (default: 10)",
    )
    parser.add_argument(
        "--batch-runs",
        type=int,
        default=50,
        help="Timed iterations of the batch (default: 50)",
    )
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Skip test cases whose parse raises instead of aborting the run",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Export an OpenTelemetry span per measurement to stderr",
    )
    parser.add_argument(
        "--first",
        default="baseline",
        help="Result set compared as the first implementation (default: baseline)",
    )
    parser.add_argument(
        "--second",
        default="candidate",
        help="Result set compared as the second implementation (default: candidate)",
    )
    parser.add_argument(
        "--chart",
        action="store_true",
        help="Also write a speedup bar chart next to the report",
    )
    parser.add_argument(
        "--pages-dir",
        type=Path,
        help="Directory of test pages (default: $READABILITY_BENCH_PAGES_DIR or tests/test-pages)",
    )
    parser.add_argument(
        "--results-dir",
        type=Path,
        help="Directory for result files (default: $READABILITY_BENCH_RESULTS_DIR or results/)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Report path (default: <results-dir>/BENCHMARK_RESULTS.md)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors in console output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def resolve_settings(args) -> Settings:
    """Environment settings with command-line overrides applied."""
    settings = Settings.from_env()
    results_dir = args.results_dir or settings.results_dir
    report_path = args.output
    if report_path is None:
        # --results-dir moves the default report with it
        report_path = settings.report_path if args.results_dir is None else None
    return Settings(
        pages_dir=args.pages_dir or settings.pages_dir,
        results_dir=results_dir,
        report_path=report_path,
        base_url=settings.base_url,
        tracing=settings.tracing,
    )


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = resolve_settings(args)

    # Map commands to functions
    commands = {
        "run": run_benchmark,
        "compare": compare_results,
    }

    try:
        return commands[args.command](args, settings)
    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user")
        sys.exit(EXIT_FAILURE)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(EXIT_FAILURE)


if __name__ == "__main__":
    sys.exit(main())
