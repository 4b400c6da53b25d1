from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from bktreex import config as bx_config
from cli.bench.app import app
from cli.bench.benchmark import SearchBenchmarkResult, benchmark_search


@pytest.fixture(autouse=True)
def isolate_runtime_env(monkeypatch: pytest.MonkeyPatch):
    # The CLI writes overrides into os.environ; setenv records the originals.
    monkeypatch.setenv("BKTREEX_METRIC", "levenshtein")
    monkeypatch.setenv("BKTREEX_LOG_LEVEL", "INFO")
    monkeypatch.setenv("BKTREEX_ENABLE_DIAGNOSTICS", "1")
    bx_config.reset_runtime_config_cache()
    yield
    bx_config.reset_runtime_config_cache()


def test_cli_benchmark_runs_and_agrees_with_linear_scan() -> None:
    runner = CliRunner()

    result = runner.invoke(
        app,
        [
            "--tree-words",
            "150",
            "--queries",
            "12",
            "--max-distance",
            "1",
            "--seed",
            "4",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "[bktreex] words=" in result.output
    assert "matches=" in result.output
    assert "MISMATCH" not in result.output


def test_cli_metric_option_is_applied() -> None:
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["--tree-words", "40", "--queries", "4", "--metric", "indel", "describe"],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["metric"] == "indel"
    assert payload["log_level"] == "WARNING"
    assert "levenshtein" in payload["available_metrics"]


def test_cli_exits_nonzero_on_mismatch(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_benchmark(words, queries, *, max_distance, metric=None):
        return SearchBenchmarkResult(
            tree_words=len(words),
            tree_nodes=len(words),
            queries=len(queries),
            max_distance=max_distance,
            build_seconds=0.0,
            tree_latency_ms={},
            scan_latency_ms={},
            visited_fraction=1.0,
            matches=0,
            mismatches=["abc"],
        )

    monkeypatch.setattr("cli.bench.app.benchmark_search", fake_benchmark)
    runner = CliRunner()

    result = runner.invoke(app, ["--tree-words", "10", "--queries", "2"])

    assert result.exit_code == 1
    assert "MISMATCH" in result.output


def test_cli_rejects_inverted_length_range() -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["--min-length", "5", "--max-length", "2"])

    assert result.exit_code != 0


def test_benchmark_search_summarises_latencies() -> None:
    words = ["cat", "cats", "bat", "bad", "hat", "dog"]

    result = benchmark_search(words, ["cat", "dgo", "zzz"], max_distance=1)

    assert result.ok
    assert result.tree_words == 6
    assert result.queries == 3
    assert result.tree_latency_ms["samples"] == 3.0
    assert 0.0 < result.visited_fraction <= 1.0


def test_cli_bench_app_attribute_is_the_submodule() -> None:
    import cli.bench
    import cli.bench.app as bench_app

    assert cli.bench.app is bench_app
    assert hasattr(bench_app, "benchmark_search")


def test_cli_rejects_unknown_metric() -> None:
    runner = CliRunner()

    result = runner.invoke(
        app, ["--tree-words", "10", "--queries", "2", "--metric", "bogus"]
    )

    assert result.exit_code == 2
    assert not isinstance(result.exception, KeyError)


def test_cli_describe_rejects_unknown_metric() -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["--metric", "bogus", "describe"])

    assert result.exit_code == 2
