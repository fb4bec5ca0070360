"""Tests for the benchmark runner and the test-case catalog."""

import os.path

import pytest

from readability_bench.harness.runner import BenchmarkConfig, BenchmarkRunner, load_implementation
from readability_bench.instrumentation.traces import Tracer, TracingConfig
from readability_bench.scenarios import (
    ALL_CASES,
    BATCH_CASES,
    LARGE,
    DocumentCase,
    get_cases_by_category,
    get_test_case,
    list_test_cases,
    load_test_case,
    page_path,
)

CASES = [DocumentCase("001", "small"), DocumentCase("002", "small"), DocumentCase("guardian-1", LARGE)]


def _config(**overrides):
    fields = dict(
        name="fake",
        iterations=4,
        large_iterations=2,
        batch_iterations=3,
        cases=list(CASES),
        batch_cases=["001", "002", "missing"],
    )
    fields.update(overrides)
    return BenchmarkConfig(**fields)


def _runner(parse, pages_dir, **overrides):
    return BenchmarkRunner(
        parse,
        _config(**overrides),
        pages_dir=pages_dir,
        tracer=Tracer(TracingConfig(enabled=False)),
        verbose=False,
    )


class TestCatalog:
    def test_categories(self):
        assert [c.name for c in get_cases_by_category(LARGE)] == ["guardian-1", "yahoo-2"]
        assert len(ALL_CASES) == 8
        assert len(BATCH_CASES) == 10
        assert "wikipedia-2" not in list_test_cases()

    def test_unknown_lookups(self):
        with pytest.raises(ValueError):
            get_test_case("nope")
        with pytest.raises(ValueError):
            get_cases_by_category("huge")

    def test_load_test_case(self, pages_dir):
        assert "first" in load_test_case("001", pages_dir)
        assert load_test_case("cnn", pages_dir) is None
        assert page_path("001", pages_dir) == pages_dir / "001" / "source.html"
        assert page_path("001", pages_dir).is_file()


class TestLoadImplementation:
    def test_module_attribute(self):
        assert load_implementation("os.path:join") is os.path.join

    def test_dotted_attribute(self):
        assert load_implementation("os:path.basename") is os.path.basename

    @pytest.mark.parametrize("path", ["os.path.join", ":join", "os.path:"])
    def test_malformed_path(self, path):
        with pytest.raises(ValueError):
            load_implementation(path)

    def test_not_callable(self):
        with pytest.raises(ValueError):
            load_implementation("os:sep")


class TestRunner:
    def test_run_all_sorts_records_into_sections(self, pages_dir):
        calls = []

        def parse(html, base_url):
            calls.append((len(html), base_url))
            return {"content": html}

        result_set = _runner(parse, pages_dir).run_all()

        assert sorted(result_set.single) == ["001", "002"]
        assert list(result_set.large) == ["guardian-1"]
        assert result_set.single["001"].iterations == 4
        assert result_set.single["001"].size_category == "small"
        assert result_set.large["guardian-1"].iterations == 2
        assert result_set.batch.document_count == 2
        assert result_set.batch.total_size == result_set.single["001"].size + result_set.single["002"].size
        assert result_set.metadata["implementation"] == "fake"
        assert all(base_url == "https://example.com" for _, base_url in calls)
        # 3 warmups + timed runs for each case, then for the batch (2 docs per call)
        assert len(calls) == (3 + 4) * 2 + (3 + 2) + (3 + 3) * 2

    def test_size_is_utf8_bytes(self, tmp_path):
        page = tmp_path / "001"
        page.mkdir()
        (page / "source.html").write_text("é" * 10, encoding="utf-8")

        runner = _runner(lambda html, url: None, tmp_path, cases=[DocumentCase("001", "small")], batch_cases=[])
        result_set = runner.run_all()

        assert result_set.single["001"].size == 20
        assert result_set.batch is None

    def test_missing_pages_are_skipped(self, tmp_path):
        runner = _runner(lambda html, url: None, tmp_path)
        result_set = runner.run_all()

        assert result_set.single == {}
        assert result_set.large == {}
        assert result_set.batch is None
        assert runner.skipped["001"] == "file not found"

    def test_parse_failure_propagates_by_default(self, pages_dir):
        def parse(html, base_url):
            if "second" in html:
                raise RuntimeError("cannot parse")

        with pytest.raises(RuntimeError, match="cannot parse"):
            _runner(parse, pages_dir).run_all()

    def test_keep_going_skips_failing_case(self, pages_dir):
        def parse(html, base_url):
            if "second" in html:
                raise RuntimeError("cannot parse")

        runner = _runner(parse, pages_dir, keep_going=True)
        result_set = runner.run_all()

        assert "002" not in result_set.single
        assert "001" in result_set.single
        assert result_set.batch is None
        assert set(runner.skipped) == {"002", "batch"}

    def test_memory_error_aborts_even_with_keep_going(self, pages_dir):
        def parse(html, base_url):
            raise MemoryError

        with pytest.raises(MemoryError):
            _runner(parse, pages_dir, keep_going=True).run_all()

    def test_verbose_output(self, pages_dir, capsys):
        runner = BenchmarkRunner(
            lambda html, url: None,
            _config(),
            pages_dir=pages_dir,
            tracer=Tracer(TracingConfig(enabled=False)),
        )
        runner.reporter.use_color = False
        runner.run_all()

        out = capsys.readouterr().out
        assert "Parser Benchmark: fake" in out
        assert "Skipping missing: file not found" in out
        assert "throughput:" in out
