import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path for `import main` and `import readability_bench.*`
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from readability_bench.harness.records import BenchmarkRecord, ResultSet  # noqa: E402


def make_record(mean: float, size: int = 10_000, **kwargs) -> BenchmarkRecord:
    fields = {
        "mean": mean,
        "median": mean,
        "min": mean,
        "max": mean,
        "p95": mean,
        "iterations": 5,
        "size": size,
        "samples": (mean,) * 5,
    }
    fields.update(kwargs)
    return BenchmarkRecord(**fields)


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def sample_result_set():
    return ResultSet(
        single={
            "001": make_record(1.25, size=12_000, size_category="small"),
            "medium-1": make_record(4.5, size=60_000, size_category="medium"),
        },
        large={
            "guardian-1": make_record(30.0, size=900_000, size_category="large"),
        },
        batch=make_record(40.0, size=400_000, document_count=10, total_size=400_000),
        metadata={"implementation": "baseline"},
    )


@pytest.fixture
def pages_dir(tmp_path):
    """A test-pages directory holding a few small documents."""
    root = tmp_path / "test-pages"
    for name, body in {
        "001": "<p>first</p>",
        "002": "<p>second</p>",
        "guardian-1": "<article>" + "x" * 2048 + "</article>",
    }.items():
        page = root / name
        page.mkdir(parents=True)
        (page / "source.html").write_text(f"<html><body>{body}</body></html>", encoding="utf-8")
    return root
