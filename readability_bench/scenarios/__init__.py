"""
Test-case catalog for parser benchmarking.
"""

from .definitions import (
    ALL_CASES,
    BATCH_CASES,
    CATEGORIES,
    LARGE,
    LARGE_CASES,
    MEDIUM,
    MEDIUM_CASES,
    SMALL,
    SMALL_CASES,
    DocumentCase,
    get_cases_by_category,
    get_test_case,
    list_test_cases,
    load_test_case,
    page_path,
)

__all__ = [
    "ALL_CASES",
    "BATCH_CASES",
    "CATEGORIES",
    "LARGE",
    "LARGE_CASES",
    "MEDIUM",
    "MEDIUM_CASES",
    "SMALL",
    "SMALL_CASES",
    "DocumentCase",
    "get_cases_by_category",
    "get_test_case",
    "list_test_cases",
    "load_test_case",
    "page_path",
]
