"""
Report rendering for benchmark comparisons.

Provides markdown reports, console progress lines, and an optional
speedup chart.
"""

import sys
from pathlib import Path
from typing import Optional

from .comparison import BatchRow, Comparison, ComparisonRow, direction_label
from .records import LARGE, SINGLE, BenchmarkRecord

CATEGORY_TITLES = {
    SINGLE: "Single Document Parsing",
    LARGE: "Large Document Parsing",
}


def format_ms(ms: float) -> str:
    """Format a duration in milliseconds, switching to microseconds below 1ms."""
    if ms < 1:
        return f"{ms * 1000:.2f} µs"
    return f"{ms:.2f} ms"


def format_bytes(size: int) -> str:
    """Format a byte count as B, KB or MB."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.2f} MB"


def emit(document: str, status: int = 0) -> None:
    """Print a document; a nonzero status goes to stderr and ends the process."""
    if status == 0:
        print(document)
        return
    print(document, file=sys.stderr)
    raise SystemExit(status)


def save_report(document: str, path: Path) -> Path:
    """Persist a rendered report."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(document, encoding="utf-8")
    return path


class MarkdownReporter:
    """Renders a Comparison as a markdown document."""

    def render(self, comparison: Comparison) -> str:
        """Tables for every category with matched rows, then the summary."""
        return self.tables(comparison) + "\n" + self.summary(comparison)

    def tables(self, comparison: Comparison) -> str:
        lines = [
            f"## Performance Comparison: {comparison.first_name} vs {comparison.second_name}\n",
        ]

        for category in (SINGLE, LARGE):
            rows = comparison.rows(category)
            if not rows:
                continue
            lines.append(f"### {CATEGORY_TITLES[category]}\n")
            lines.extend(self._record_table(comparison, rows))
            lines.append("")

        if comparison.batch:
            count = comparison.batch_document_count
            heading = f"### Batch Processing ({count} documents)" if count else "### Batch Processing"
            lines.append(f"{heading}\n")
            lines.extend(self._batch_table(comparison, comparison.batch))
            lines.append("")

        return "\n".join(lines).rstrip("\n") + "\n"

    def _record_table(self, comparison: Comparison, rows: list[ComparisonRow]) -> list[str]:
        first, second = comparison.first_name, comparison.second_name
        lines = [
            f"| Test Case | Size | {first} (mean) | {second} (mean) | Speedup |",
            "|-----------|------|-------------|-------------|---------|",
        ]
        for row in rows:
            lines.append(
                f"| {row.test_case} | {format_bytes(row.size)} | {format_ms(row.first.mean)} | "
                f"{format_ms(row.second.mean)} | {row.label} |"
            )
        return lines

    def _batch_table(self, comparison: Comparison, rows: list[BatchRow]) -> list[str]:
        first, second = comparison.first_name, comparison.second_name
        lines = [
            f"| Metric | {first} | {second} | Speedup |",
            "|--------|------|------|---------|",
        ]
        for row in rows:
            lines.append(
                f"| {row.metric} | {format_ms(row.first_ms)} | {format_ms(row.second_ms)} | {row.label} |"
            )
        return lines

    def summary(self, comparison: Comparison) -> str:
        summary = comparison.summary
        if not summary.has_data:
            return "\nNo comparable results found.\n"

        first, second = comparison.first_name, comparison.second_name
        kb = summary.threshold_bytes // 1024

        def bucket(average: Optional[float], count: int) -> str:
            if average is None:
                return "no comparable results in this size range"
            noun = "document" if count == 1 else "documents"
            return f"{first} is **{direction_label(average)}** than {second} on average ({count} {noun})"

        return f"""
### Summary

**Performance varies by document size:**

- **Small documents (< {kb}KB)**: {bucket(summary.small_average, summary.small_count)}
- **Large documents (>= {kb}KB)**: {bucket(summary.large_average, summary.large_count)}

**How to read this report:**
- Speedup is {second}'s mean parse time divided by {first}'s; "faster" and "slower" describe {first}
- Size averages are unweighted means of per-document speedups, not ratios of summed times
- Batch figures time all batch documents parsed back to back in one call

> Both implementations ran on the same test documents from Mozilla's Readability test suite.
> Lower times are better.
"""


class ConsoleReporter:
    """Generates console lines while a benchmark runs."""

    def __init__(self, use_color: bool = True):
        self.use_color = use_color

    def _color(self, text: str, color: str) -> str:
        """Apply ANSI color if enabled."""
        if not self.use_color:
            return text

        colors = {
            "green": "\033[92m",
            "red": "\033[91m",
            "yellow": "\033[93m",
            "blue": "\033[94m",
            "bold": "\033[1m",
            "reset": "\033[0m",
        }

        return f"{colors.get(color, '')}{text}{colors['reset']}"

    def banner(self, title: str) -> str:
        rule = self._color("=" * 70, "blue")
        return f"{rule}\n{self._color(title, 'bold')}\n{rule}"

    def section(self, title: str) -> str:
        return f"\n{self._color(title, 'bold')}\n{'-' * 70}"

    def case_line(self, test_case: str, record: BenchmarkRecord) -> str:
        """One line per measured test case."""
        return (
            f"{test_case:<20} ({format_bytes(record.size):>10}) | "
            f"mean: {format_ms(record.mean):>12} | "
            f"median: {format_ms(record.median):>12} | "
            f"p95: {format_ms(record.p95):>12}"
        )

    def batch_line(self, record: BenchmarkRecord) -> str:
        return (
            f"{record.document_count} documents ({format_bytes(record.total_size or record.size)} total) | "
            f"mean: {format_ms(record.mean)} | "
            f"per-doc avg: {format_ms(record.per_document_mean)}"
        )

    def throughput_line(self, test_case: str, record: BenchmarkRecord) -> str:
        """Large-document throughput in KB per millisecond."""
        throughput = record.size / record.mean / 1024 if record.mean > 0 else 0.0
        return (
            f"{test_case:<20} ({format_bytes(record.size):>10}) | "
            f"mean: {format_ms(record.mean):>12} | "
            f"throughput: {throughput:.2f} KB/ms"
        )

    def skipped(self, test_case: str, reason: str) -> str:
        return self._color(f"Skipping {test_case}: {reason}", "yellow")


class ChartReporter:
    """Generates a speedup chart using matplotlib."""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = output_dir or Path("results/charts")

    def speedup_bar_chart(
        self,
        comparison: Comparison,
        filename: Optional[str] = None,
    ) -> Optional[Path]:
        """Bar chart of per-case speedups, with the break-even line at 1x."""
        rows = comparison.single + comparison.large
        if not rows:
            return None

        import matplotlib
        matplotlib.use("Agg")  # Non-interactive backend
        import matplotlib.pyplot as plt
        import numpy as np

        names = [row.test_case for row in rows]
        speedups = [row.speedup for row in rows]
        colors = ["seagreen" if s >= 1 else "coral" for s in speedups]

        x = np.arange(len(names))

        fig, ax = plt.subplots(figsize=(12, 6))
        ax.bar(x, speedups, color=colors)
        ax.axhline(1.0, color="black", linestyle="--", linewidth=1, label="break-even")

        ax.set_xlabel("Test case")
        ax.set_ylabel(f"Speedup ({comparison.second_name} mean / {comparison.first_name} mean)")
        ax.set_title(f"{comparison.first_name} vs {comparison.second_name}")
        ax.set_xticks(x)
        ax.set_xticklabels(names, rotation=45, ha="right")
        ax.legend()

        fig.tight_layout()

        self.output_dir.mkdir(parents=True, exist_ok=True)
        filename = filename or "speedup_bar_chart.png"
        filepath = self.output_dir / filename
        fig.savefig(filepath, dpi=150, bbox_inches="tight")
        plt.close(fig)

        return filepath
