from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Optional

from numpy.random import default_rng
import typer
from typing_extensions import Annotated

from bktreex import available_metrics, config as bx_config
from tests.utils.datasets import DEFAULT_ALPHABET, word_dataset

from .benchmark import SearchBenchmarkResult, benchmark_search


@dataclass
class BenchCLIOptions:
    tree_words: int = 5_000
    queries: int = 200
    max_distance: int = 2
    min_length: int = 3
    max_length: int = 10
    alphabet: str = DEFAULT_ALPHABET
    max_edits: int = 2
    seed: int = 0
    metric: str | None = None
    diagnostics: bool | None = None
    log_level: str | None = "WARNING"


app = typer.Typer(
    add_completion=False,
    pretty_exceptions_enable=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
    help="Benchmark the BK-tree range search against a linear scan.",
)

_SHAPE_PANEL = "Benchmark shape"
_RUNTIME_PANEL = "Runtime controls"


@app.callback(invoke_without_command=True)
def cli(
    ctx: typer.Context,
    tree_words: Annotated[
        int,
        typer.Option(
            "--tree-words",
            help="Number of random words inserted before querying.",
            rich_help_panel=_SHAPE_PANEL,
        ),
    ] = 5_000,
    queries: Annotated[
        int,
        typer.Option(
            "--queries",
            help="Number of queries; half are perturbed copies of stored words.",
            rich_help_panel=_SHAPE_PANEL,
        ),
    ] = 200,
    max_distance: Annotated[
        int,
        typer.Option(
            "--max-distance",
            min=0,
            help="Search tolerance passed to every query.",
            rich_help_panel=_SHAPE_PANEL,
        ),
    ] = 2,
    min_length: Annotated[
        int,
        typer.Option("--min-length", min=0, rich_help_panel=_SHAPE_PANEL),
    ] = 3,
    max_length: Annotated[
        int,
        typer.Option("--max-length", min=0, rich_help_panel=_SHAPE_PANEL),
    ] = 10,
    alphabet: Annotated[
        str,
        typer.Option(
            "--alphabet",
            help="Characters random words are drawn from.",
            rich_help_panel=_SHAPE_PANEL,
        ),
    ] = DEFAULT_ALPHABET,
    max_edits: Annotated[
        int,
        typer.Option(
            "--max-edits",
            min=0,
            help="Upper bound on edits applied to perturbed queries.",
            rich_help_panel=_SHAPE_PANEL,
        ),
    ] = 2,
    seed: Annotated[
        int,
        typer.Option(
            "--seed",
            help="Random seed for word/query generation.",
            rich_help_panel=_SHAPE_PANEL,
        ),
    ] = 0,
    metric: Annotated[
        Optional[str],
        typer.Option(
            "--metric",
            case_sensitive=False,
            help="Distance metric (default from BKTREEX_METRIC).",
            rich_help_panel=_RUNTIME_PANEL,
        ),
    ] = None,
    diagnostics: Annotated[
        Optional[bool],
        typer.Option(
            "--enable-diagnostics/--disable-diagnostics",
            help="Control resource polling in operation logs.",
            rich_help_panel=_RUNTIME_PANEL,
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            help="Override runtime log level; per-query logs appear at INFO.",
            rich_help_panel=_RUNTIME_PANEL,
        ),
    ] = "WARNING",
) -> None:
    options = BenchCLIOptions(
        tree_words=tree_words,
        queries=queries,
        max_distance=max_distance,
        min_length=min_length,
        max_length=max_length,
        alphabet=alphabet,
        max_edits=max_edits,
        seed=seed,
        metric=metric,
        diagnostics=diagnostics,
        log_level=log_level,
    )
    ctx.obj = options
    if ctx.invoked_subcommand is None:
        result = run_benchmark(options)
        if not result.ok:
            raise typer.Exit(code=1)


@app.command()
def describe(ctx: typer.Context) -> None:
    """Print the active runtime configuration as JSON."""

    options = ctx.obj if isinstance(ctx.obj, BenchCLIOptions) else BenchCLIOptions()
    _apply_runtime_overrides(options)
    payload = bx_config.describe_runtime()
    payload["available_metrics"] = list(available_metrics())
    typer.echo(json.dumps(payload, indent=2, sort_keys=True))


def _apply_runtime_overrides(options: BenchCLIOptions) -> None:
    if options.metric is not None:
        known = available_metrics()
        if options.metric.strip().lower() not in known:
            raise typer.BadParameter(
                f"Unknown metric '{options.metric}'. Choose from: {', '.join(known)}.",
                param_hint="--metric",
            )
        os.environ["BKTREEX_METRIC"] = options.metric
    if options.log_level is not None:
        os.environ["BKTREEX_LOG_LEVEL"] = options.log_level
    if options.diagnostics is not None:
        os.environ["BKTREEX_ENABLE_DIAGNOSTICS"] = "1" if options.diagnostics else "0"
    bx_config.reset_runtime_config_cache()


def _print_summary(result: SearchBenchmarkResult) -> None:
    print(
        f"[bktreex] words={result.tree_words} nodes={result.tree_nodes} "
        f"build={result.build_seconds:.3f}s"
    )
    latencies = (("tree", result.tree_latency_ms), ("scan", result.scan_latency_ms))
    for label, summary in latencies:
        if not summary:
            continue
        print(
            f"[bktreex] {label} latency_ms mean={summary['mean']:.3f} "
            f"p50={summary['p50']:.3f} p90={summary['p90']:.3f} p99={summary['p99']:.3f}"
        )
    print(
        f"[bktreex] queries={result.queries} max_distance={result.max_distance} "
        f"matches={result.matches} visited_fraction={result.visited_fraction:.3f}"
    )
    if result.mismatches:
        preview = ", ".join(repr(query) for query in result.mismatches[:5])
        print(
            f"[bktreex] MISMATCH against linear scan for "
            f"{len(result.mismatches)} queries: {preview}"
        )


def run_benchmark(options: BenchCLIOptions) -> SearchBenchmarkResult:
    if options.max_length < options.min_length:
        raise typer.BadParameter("--max-length must be >= --min-length.")
    _apply_runtime_overrides(options)
    runtime = bx_config.runtime_config()
    rng = default_rng(options.seed)
    words, query_words = word_dataset(
        rng,
        tree_words=options.tree_words,
        queries=options.queries,
        min_length=options.min_length,
        max_length=options.max_length,
        alphabet=options.alphabet,
        max_edits=options.max_edits,
    )
    result = benchmark_search(
        words,
        query_words,
        max_distance=options.max_distance,
        metric=runtime.metric,
    )
    _print_summary(result)
    return result


def main() -> None:
    app()


__all__ = ["BenchCLIOptions", "app", "main", "run_benchmark"]
