"""Pydantic schemas for persisted result sets.

Result files come from more than one producer, so field spellings vary
(`document_count` / `documentCount`, `size_category` / `sizeCategory`).
Validation maps every accepted spelling onto one canonical field and
fills the batch document count when a producer left it out or wrote a
non-positive one.
"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .records import DEFAULT_BATCH_DOCUMENT_COUNT, BenchmarkRecord, ResultSet


class RecordSchema(BaseModel):
    """One timing record as stored on disk."""

    model_config = ConfigDict(extra="ignore")

    mean: float
    median: float
    min: float
    max: float
    p95: float
    iterations: int
    size: int
    samples: list[float] = Field(default_factory=list)
    size_category: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("size_category", "sizeCategory"),
    )
    document_count: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("document_count", "documentCount"),
    )
    total_size: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("total_size", "totalSize"),
    )

    def to_record(self) -> BenchmarkRecord:
        return BenchmarkRecord(
            mean=self.mean,
            median=self.median,
            min=self.min,
            max=self.max,
            p95=self.p95,
            iterations=self.iterations,
            size=self.size,
            samples=tuple(self.samples),
            size_category=self.size_category,
            document_count=self.document_count,
            total_size=self.total_size,
        )


class ResultSetSchema(BaseModel):
    """A full result file: single, large and batch sections."""

    model_config = ConfigDict(extra="ignore")

    single: dict[str, RecordSchema] = Field(default_factory=dict)
    large: dict[str, RecordSchema] = Field(default_factory=dict)
    batch: Optional[RecordSchema] = None
    metadata: dict[str, str] = Field(default_factory=dict)

    @field_validator("batch")
    @classmethod
    def default_document_count(cls, batch: Optional[RecordSchema]) -> Optional[RecordSchema]:
        if batch is not None and (batch.document_count or 0) <= 0:
            return batch.model_copy(update={"document_count": DEFAULT_BATCH_DOCUMENT_COUNT})
        return batch

    def to_result_set(self) -> ResultSet:
        return ResultSet(
            single={k: r.to_record() for k, r in self.single.items()},
            large={k: r.to_record() for k, r in self.large.items()},
            batch=self.batch.to_record() if self.batch else None,
            metadata=dict(self.metadata),
        )
