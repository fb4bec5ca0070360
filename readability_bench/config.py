"""
Runtime settings read from the environment.

`main.py` loads a `.env` file first, so any of these can live there.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_PAGES_DIR = Path("tests/test-pages")
DEFAULT_RESULTS_DIR = Path("results")
DEFAULT_BASE_URL = "https://example.com"
REPORT_FILENAME = "BENCHMARK_RESULTS.md"


@dataclass
class Settings:
    """Locations and defaults shared by the run and compare commands."""

    pages_dir: Path = DEFAULT_PAGES_DIR
    results_dir: Path = DEFAULT_RESULTS_DIR
    report_path: Optional[Path] = None
    base_url: str = DEFAULT_BASE_URL
    tracing: bool = False

    def __post_init__(self):
        self.pages_dir = Path(self.pages_dir)
        self.results_dir = Path(self.results_dir)
        if self.report_path is None:
            self.report_path = self.results_dir / REPORT_FILENAME
        else:
            self.report_path = Path(self.report_path)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from READABILITY_BENCH_* environment variables."""
        report = os.getenv("READABILITY_BENCH_REPORT")
        return cls(
            pages_dir=Path(os.getenv("READABILITY_BENCH_PAGES_DIR", DEFAULT_PAGES_DIR)),
            results_dir=Path(os.getenv("READABILITY_BENCH_RESULTS_DIR", DEFAULT_RESULTS_DIR)),
            report_path=Path(report) if report else None,
            base_url=os.getenv("READABILITY_BENCH_BASE_URL", DEFAULT_BASE_URL),
            tracing=os.getenv("READABILITY_BENCH_TRACING", "").lower() in ("1", "true", "yes"),
        )
