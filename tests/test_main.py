"""End-to-end tests for the command-line entry point."""

import json
import sys
import types

import pytest

import main
from readability_bench.config import DEFAULT_RESULTS_DIR
from readability_bench.harness.store import ResultsStore, load_results

from conftest import make_record
from readability_bench.harness.records import ResultSet


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in (
        "READABILITY_BENCH_PAGES_DIR",
        "READABILITY_BENCH_RESULTS_DIR",
        "READABILITY_BENCH_REPORT",
        "READABILITY_BENCH_TRACING",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def fake_parser(monkeypatch):
    module = types.ModuleType("fake_parsers")
    module.fast = lambda html, base_url: {"length": len(html)}
    module.broken = lambda html, base_url: (_ for _ in ()).throw(RuntimeError("boom"))
    monkeypatch.setitem(sys.modules, "fake_parsers", module)
    return module


def test_compare_without_inputs_exits_and_writes_nothing(tmp_path, capsys):
    report = tmp_path / "BENCHMARK_RESULTS.md"

    with pytest.raises(SystemExit) as exc_info:
        main.main(["compare", "--results-dir", str(tmp_path), "--output", str(report)])

    assert exc_info.value.code == main.EXIT_MISSING_RESULTS != 0
    err = capsys.readouterr().err
    assert "Missing benchmark results" in err
    assert "1. python main.py run --name baseline" in err
    assert "2. python main.py run --name candidate" in err
    assert not report.exists()


def test_compare_with_one_malformed_input(tmp_path, capsys, sample_result_set):
    ResultsStore(tmp_path).save("baseline", sample_result_set)
    (tmp_path / "candidate-results.json").write_text("[]", encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        main.main(["compare", "--results-dir", str(tmp_path)])

    assert exc_info.value.code == main.EXIT_MISSING_RESULTS
    err = capsys.readouterr().err
    assert "candidate-results.json" in err
    assert "baseline-results.json" not in err
    assert not (tmp_path / "BENCHMARK_RESULTS.md").exists()


def test_compare_writes_and_prints_report(tmp_path, capsys, sample_result_set):
    store = ResultsStore(tmp_path)
    store.save("baseline", sample_result_set)
    store.save(
        "candidate",
        ResultSet(single={"001": make_record(2.5, size=12_000)}),
    )

    status = main.main(["compare", "--results-dir", str(tmp_path), "--no-color"])

    assert status == 0
    report = (tmp_path / "BENCHMARK_RESULTS.md").read_text(encoding="utf-8")
    assert "| 001 | 11.7 KB | 1.25 ms | 2.50 ms | 2.0x faster |" in report
    assert "### Batch Processing" not in report
    out = capsys.readouterr().out
    assert "Benchmark Comparison: baseline vs candidate" in out
    assert report in out


def test_compare_with_zero_batch_document_count(tmp_path, sample_result_set):
    ResultsStore(tmp_path).save("baseline", sample_result_set)
    candidate = sample_result_set.to_dict()
    candidate["batch"].pop("document_count")
    candidate["batch"]["documentCount"] = 0
    (tmp_path / "candidate-results.json").write_text(json.dumps(candidate), encoding="utf-8")

    status = main.main(["compare", "--results-dir", str(tmp_path), "--no-color"])

    assert status == 0
    report = (tmp_path / "BENCHMARK_RESULTS.md").read_text(encoding="utf-8")
    assert "### Batch Processing (10 documents)" in report
    assert "| Per document avg | 4.00 ms | 4.00 ms | 1.0x faster |" in report
    assert "| 001 |" in report


def test_run_then_compare(tmp_path, pages_dir, fake_parser):
    results_dir = tmp_path / "results"
    common = ["--pages-dir", str(pages_dir), "--results-dir", str(results_dir), "--no-color"]
    fast_runs = ["--runs", "2", "--large-runs", "1", "--batch-runs", "1"]

    assert main.main(["run", "--impl", "fake_parsers:fast", "--name", "baseline", *fast_runs, *common]) == 0
    assert main.main(["run", "--impl", "fake_parsers:fast", "--name", "candidate", *fast_runs, *common]) == 0

    baseline = load_results(results_dir / "baseline-results.json")
    assert sorted(baseline.single) == ["001", "002"]
    assert baseline.metadata["callable"] == "fake_parsers:fast"

    assert main.main(["compare", *common]) == 0
    assert (results_dir / "BENCHMARK_RESULTS.md").is_file()


def test_run_failure_exits_with_error(tmp_path, pages_dir, fake_parser, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main.main([
            "run", "--impl", "fake_parsers:broken",
            "--pages-dir", str(pages_dir), "--results-dir", str(tmp_path),
        ])

    assert exc_info.value.code == main.EXIT_FAILURE
    assert "Error: boom" in capsys.readouterr().out
    assert not (tmp_path / "baseline-results.json").exists()


def test_run_requires_impl(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        main.main(["run", "--results-dir", str(tmp_path)])
    assert exc_info.value.code == main.EXIT_FAILURE


def test_settings_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("READABILITY_BENCH_RESULTS_DIR", str(tmp_path))
    args = main.build_parser().parse_args(["compare"])

    settings = main.resolve_settings(args)

    assert settings.results_dir == tmp_path
    assert settings.report_path == tmp_path / "BENCHMARK_RESULTS.md"


@pytest.mark.parametrize("value, expected", [("true", True), ("1", True), ("0", False), ("", False)])
def test_tracing_flag_from_environment(monkeypatch, value, expected):
    monkeypatch.setenv("READABILITY_BENCH_TRACING", value)
    args = main.build_parser().parse_args(["compare"])

    assert main.resolve_settings(args).tracing is expected


def test_settings_defaults():
    settings = main.resolve_settings(main.build_parser().parse_args(["compare"]))

    assert settings.results_dir == DEFAULT_RESULTS_DIR
    assert ResultsStore(settings.results_dir).path_for("baseline") == DEFAULT_RESULTS_DIR / "baseline-results.json"
    assert settings.tracing is False
