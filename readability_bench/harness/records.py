"""
Benchmark records and result sets.

A ResultSet is produced once per implementation per run and is never
updated after it has been written.
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional

from ..instrumentation.timing import TimingStats

SINGLE = "single"
LARGE = "large"
BATCH = "batch"

RECORD_CATEGORIES = (SINGLE, LARGE)

DEFAULT_BATCH_DOCUMENT_COUNT = 10


@dataclass(frozen=True)
class BenchmarkRecord:
    """Timing summary for one test case (or one batch) of one implementation."""

    mean: float
    median: float
    min: float
    max: float
    p95: float
    iterations: int
    size: int
    samples: tuple[float, ...] = ()
    size_category: Optional[str] = None
    document_count: Optional[int] = None
    total_size: Optional[int] = None

    @classmethod
    def from_stats(
        cls,
        stats: TimingStats,
        size: int,
        size_category: Optional[str] = None,
        document_count: Optional[int] = None,
        total_size: Optional[int] = None,
    ) -> "BenchmarkRecord":
        return cls(
            mean=stats.mean,
            median=stats.median,
            min=stats.min,
            max=stats.max,
            p95=stats.p95,
            iterations=stats.iterations,
            size=size,
            samples=stats.samples,
            size_category=size_category,
            document_count=document_count,
            total_size=total_size,
        )

    @property
    def per_document_mean(self) -> float:
        """Mean time per document for a batch record."""
        if not self.document_count:
            raise ValueError("per-document mean needs a batch record with a document count")
        return self.mean / self.document_count

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization, omitting unset optional fields."""
        data = {
            "mean": self.mean,
            "median": self.median,
            "min": self.min,
            "max": self.max,
            "p95": self.p95,
            "iterations": self.iterations,
            "size": self.size,
            "samples": list(self.samples),
        }
        if self.size_category is not None:
            data["size_category"] = self.size_category
        if self.document_count is not None:
            data["document_count"] = self.document_count
        if self.total_size is not None:
            data["total_size"] = self.total_size
        return data


@dataclass(frozen=True)
class ResultSet:
    """All records from one full benchmark run of one implementation."""

    single: Mapping[str, BenchmarkRecord] = field(default_factory=dict)
    large: Mapping[str, BenchmarkRecord] = field(default_factory=dict)
    batch: Optional[BenchmarkRecord] = None
    metadata: Mapping[str, str] = field(default_factory=dict)

    def category(self, name: str) -> Mapping[str, BenchmarkRecord]:
        """Records of the `single` or `large` section."""
        if name == SINGLE:
            return self.single
        if name == LARGE:
            return self.large
        raise ValueError(f"Unknown record category: {name}")

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "single": {k: r.to_dict() for k, r in self.single.items()},
            "large": {k: r.to_dict() for k, r in self.large.items()},
            "batch": self.batch.to_dict() if self.batch else None,
            "metadata": dict(self.metadata),
        }
