from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

import numpy as np

from bktreex import BKTree, LinearScanIndex, Metric, SearchResult
from bktreex.queries.range import range_search


@dataclass(frozen=True)
class SearchBenchmarkResult:
    tree_words: int
    tree_nodes: int
    queries: int
    max_distance: int
    build_seconds: float
    tree_latency_ms: Dict[str, float]
    scan_latency_ms: Dict[str, float]
    visited_fraction: float
    matches: int
    mismatches: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.mismatches


def _ms(value: float) -> float:
    return float(value) * 1e3


def _metric_summary(values: np.ndarray) -> Dict[str, float]:
    arr = np.asarray(values, dtype=np.float64)
    finite = arr[np.isfinite(arr)]
    if finite.size == 0:
        return {}
    summary: Dict[str, float] = {
        "samples": float(finite.size),
        "min": float(np.min(finite)),
        "max": float(np.max(finite)),
        "mean": float(np.mean(finite)),
    }
    for pct in (50, 90, 99):
        summary[f"p{pct}"] = float(np.percentile(finite, pct))
    return summary


def _build_indexes(
    words: Sequence[str], *, metric: Metric | str | None
) -> Tuple[BKTree, LinearScanIndex, float]:
    start = time.perf_counter()
    tree = BKTree.from_words(words, metric=metric)
    build_seconds = time.perf_counter() - start
    scan = LinearScanIndex.from_words(words, metric=tree.metric)
    return tree, scan, build_seconds


def _as_set(results: Sequence[SearchResult]) -> set[Tuple[str, int]]:
    return {(result.word, result.distance) for result in results}


def benchmark_search(
    words: Sequence[str],
    queries: Sequence[str],
    *,
    max_distance: int,
    metric: Metric | str | None = None,
) -> SearchBenchmarkResult:
    """Time tree searches against a linear scan and cross-check every result."""

    tree, scan, build_seconds = _build_indexes(words, metric=metric)
    tree_latency = np.zeros(len(queries), dtype=np.float64)
    scan_latency = np.zeros(len(queries), dtype=np.float64)
    visited = np.zeros(len(queries), dtype=np.float64)
    mismatches: List[str] = []
    matches = 0

    for i, query in enumerate(queries):
        start = time.perf_counter()
        found, stats = range_search(tree, query, max_distance, return_stats=True)
        tree_latency[i] = _ms(time.perf_counter() - start)

        start = time.perf_counter()
        expected = scan.search(query, max_distance)
        scan_latency[i] = _ms(time.perf_counter() - start)

        visited[i] = stats.visited
        matches += len(found)
        if len(found) != len(expected) or _as_set(found) != _as_set(expected):
            mismatches.append(query)

    nodes = max(tree.num_nodes, 1)
    return SearchBenchmarkResult(
        tree_words=len(tree),
        tree_nodes=tree.num_nodes,
        queries=len(queries),
        max_distance=max_distance,
        build_seconds=build_seconds,
        tree_latency_ms=_metric_summary(tree_latency),
        scan_latency_ms=_metric_summary(scan_latency),
        visited_fraction=float(np.mean(visited) / nodes) if len(queries) else 0.0,
        matches=matches,
        mismatches=mismatches,
    )


__all__ = ["SearchBenchmarkResult", "benchmark_search"]
