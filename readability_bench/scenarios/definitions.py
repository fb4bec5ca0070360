"""
Test-case definitions for parser benchmarking.

Pages come from Mozilla's Readability test suite, grouped by size:
1. Small pages
2. Medium pages
3. Large pages (timed with fewer iterations)
4. A batch of ten pages parsed back to back

wikipedia-2 is left out; its DOM makes single runs take too long to be
useful in a timing loop.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

SMALL = "small"
MEDIUM = "medium"
LARGE = "large"

CATEGORIES = (SMALL, MEDIUM, LARGE)


@dataclass(frozen=True)
class DocumentCase:
    """A named test page with a fixed size category."""

    name: str
    category: str

    @property
    def is_large(self) -> bool:
        return self.category == LARGE


SMALL_CASES = [
    DocumentCase("001", SMALL),
    DocumentCase("002", SMALL),
    DocumentCase("aclu", SMALL),
]

MEDIUM_CASES = [
    DocumentCase("medium-1", MEDIUM),
    DocumentCase("nytimes-1", MEDIUM),
    DocumentCase("ars-1", MEDIUM),
]

LARGE_CASES = [
    DocumentCase("guardian-1", LARGE),
    DocumentCase("yahoo-2", LARGE),
]

ALL_CASES = SMALL_CASES + MEDIUM_CASES + LARGE_CASES

BATCH_CASES = [
    "001",
    "002",
    "aclu",
    "ars-1",
    "bbc-1",
    "buzzfeed-1",
    "cnet",
    "cnn",
    "ehow-1",
    "herald-sun-1",
]


def page_path(name: str, pages_dir: Path) -> Path:
    """Location of a test page's HTML source."""
    return Path(pages_dir) / name / "source.html"


def load_test_case(name: str, pages_dir: Path) -> Optional[str]:
    """Read a test page's HTML, or None when the page is not present."""
    try:
        return page_path(name, pages_dir).read_text(encoding="utf-8")
    except (FileNotFoundError, NotADirectoryError):
        return None


def get_test_case(name: str) -> DocumentCase:
    """Get a test case by name."""
    for case in ALL_CASES:
        if case.name == name:
            return case
    raise ValueError(f"Unknown test case: {name}")


def get_cases_by_category(category: str) -> list[DocumentCase]:
    """Get all test cases in a size category."""
    if category not in CATEGORIES:
        raise ValueError(f"Unknown size category: {category}")
    return [case for case in ALL_CASES if case.category == category]


def list_test_cases() -> list[str]:
    """List all single-document test case names."""
    return [case.name for case in ALL_CASES]
