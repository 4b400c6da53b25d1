from __future__ import annotations

from .app import BenchCLIOptions, main, run_benchmark
from .benchmark import SearchBenchmarkResult, benchmark_search

__all__ = [
    "BenchCLIOptions",
    "SearchBenchmarkResult",
    "benchmark_search",
    "main",
    "run_benchmark",
]
