"""
Comparison of two result sets.

Rows are built only for test cases both implementations measured. The
speedup of a row is second mean / first mean, so a value >= 1 means the
first implementation is faster.
"""

import math
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .records import LARGE, SINGLE, BenchmarkRecord, ResultSet

SIZE_THRESHOLD_BYTES = 150 * 1024


def speedup_ratio(first_ms: float, second_ms: float) -> float:
    """Ratio of the second duration to the first."""
    if first_ms <= 0:
        return math.inf
    return second_ms / first_ms


def direction_label(speedup: float) -> str:
    """Render a speedup so the ratio shown is always >= 1."""
    if speedup >= 1:
        return f"{speedup:.1f}x faster"
    slowdown = 1 / speedup if speedup > 0 else math.inf
    return f"{slowdown:.1f}x slower"


@dataclass(frozen=True)
class ComparisonRow:
    """One test case measured by both implementations."""

    test_case: str
    size: int
    first: BenchmarkRecord
    second: BenchmarkRecord
    speedup: float

    @property
    def label(self) -> str:
        return direction_label(self.speedup)

    def describe(self, first_name: str = "A", second_name: str = "B") -> str:
        """Sentence form, e.g. "A: 2.0x faster than B"."""
        return f"{first_name}: {self.label} than {second_name}"


@dataclass(frozen=True)
class BatchRow:
    """One batch metric (total or per-document) for both implementations."""

    metric: str
    first_ms: float
    second_ms: float

    @property
    def speedup(self) -> float:
        return speedup_ratio(self.first_ms, self.second_ms)

    @property
    def label(self) -> str:
        return direction_label(self.speedup)


@dataclass(frozen=True)
class Summary:
    """Mean speedup of small and large documents.

    An average is None when its bucket holds no matched rows.
    """

    small_average: Optional[float]
    large_average: Optional[float]
    small_count: int = 0
    large_count: int = 0
    threshold_bytes: int = SIZE_THRESHOLD_BYTES

    @property
    def has_data(self) -> bool:
        return bool(self.small_count or self.large_count)


@dataclass(frozen=True)
class Comparison:
    """Everything a report needs from one comparison."""

    first_name: str
    second_name: str
    single: list[ComparisonRow] = field(default_factory=list)
    large: list[ComparisonRow] = field(default_factory=list)
    batch: list[BatchRow] = field(default_factory=list)
    summary: Summary = field(default_factory=lambda: Summary(None, None))
    batch_document_count: Optional[int] = None

    def rows(self, category: str) -> list[ComparisonRow]:
        if category == SINGLE:
            return self.single
        if category == LARGE:
            return self.large
        raise ValueError(f"Unknown record category: {category}")


def _pair(
    test_case: str,
    first: Optional[BenchmarkRecord],
    second: Optional[BenchmarkRecord],
) -> Optional[ComparisonRow]:
    if first is None or second is None:
        return None
    return ComparisonRow(
        test_case=test_case,
        size=first.size or second.size,
        first=first,
        second=second,
        speedup=speedup_ratio(first.mean, second.mean),
    )


def compare_records(
    first: Mapping[str, BenchmarkRecord],
    second: Mapping[str, BenchmarkRecord],
) -> list[ComparisonRow]:
    """Rows for ids present in both mappings, sorted by id."""
    rows = []
    for test_case in sorted(set(first) | set(second)):
        row = _pair(test_case, first.get(test_case), second.get(test_case))
        if row is not None:
            rows.append(row)
    return rows


def compare(first: ResultSet, second: ResultSet, category: str) -> list[ComparisonRow]:
    """Compare one category (`single` or `large`) of two result sets."""
    return compare_records(first.category(category), second.category(category))


def _mean(values: list[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def summarize(first: ResultSet, second: ResultSet) -> Summary:
    """Bucket matched single and large rows by size and average their speedups.

    Single and large sections are merged per side with large winning, so a
    test case listed in both sections counts once.
    """
    rows = compare_records({**first.single, **first.large}, {**second.single, **second.large})

    small = [row.speedup for row in rows if row.size < SIZE_THRESHOLD_BYTES]
    large = [row.speedup for row in rows if row.size >= SIZE_THRESHOLD_BYTES]

    return Summary(
        small_average=_mean(small),
        large_average=_mean(large),
        small_count=len(small),
        large_count=len(large),
    )


def compare_batch(first: ResultSet, second: ResultSet) -> list[BatchRow]:
    """Total and per-document rows, or nothing unless both sides have a batch."""
    if first.batch is None or second.batch is None:
        return []

    return [
        BatchRow("Total time", first.batch.mean, second.batch.mean),
        BatchRow(
            "Per document avg",
            first.batch.per_document_mean,
            second.batch.per_document_mean,
        ),
    ]


def shared_batch_document_count(first: ResultSet, second: ResultSet) -> Optional[int]:
    """Document count shared by both batches, or None when the sides differ."""
    counts = {rs.batch.document_count for rs in (first, second) if rs.batch is not None}
    if len(counts) != 1:
        return None
    return counts.pop()


def build_comparison(
    first: ResultSet,
    second: ResultSet,
    first_name: str = "A",
    second_name: str = "B",
) -> Comparison:
    """Run every comparison step over two result sets."""
    return Comparison(
        first_name=first_name,
        second_name=second_name,
        single=compare(first, second, SINGLE),
        large=compare(first, second, LARGE),
        batch=compare_batch(first, second),
        summary=summarize(first, second),
        batch_document_count=shared_batch_document_count(first, second),
    )
