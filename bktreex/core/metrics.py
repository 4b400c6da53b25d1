from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Protocol, Sequence, Tuple

import numpy as np

from bktreex import config as bx_config
from bktreex.metrics.edit import edit_distance, indel_distance


class DistanceKernel(Protocol):
    def __call__(self, lhs: str, rhs: str) -> int:
        ...


@dataclass(frozen=True)
class Metric:
    """Container for a string metric used by the tree algorithms.

    The kernel must be a true metric; the tree's pruning silently drops valid
    matches otherwise.
    """

    name: str
    kernel: DistanceKernel

    def distance(self, lhs: str, rhs: str) -> int:
        return int(self.kernel(lhs, rhs))

    def pairwise(self, lhs: Sequence[str], rhs: Sequence[str]) -> np.ndarray:
        """Return the ``(len(lhs), len(rhs))`` int64 distance matrix."""

        rows, cols = len(lhs), len(rhs)
        if rows == 0 or cols == 0:
            return np.zeros((rows, cols), dtype=np.int64)
        flat = np.fromiter(
            (self.kernel(left, right) for left in lhs for right in rhs),
            dtype=np.int64,
            count=rows * cols,
        )
        return flat.reshape(rows, cols)


class MetricRegistry:
    """Minimal registry for runtime-selectable metrics."""

    def __init__(self) -> None:
        self._metrics: Dict[str, Metric] = {}

    def register(self, metric: Metric, *, overwrite: bool = False) -> None:
        name = metric.name.lower()
        if not overwrite and name in self._metrics:
            raise ValueError(f"Metric '{metric.name}' already registered.")
        self._metrics[name] = metric

    def get(self, name: str) -> Metric:
        key = name.lower()
        if key not in self._metrics:
            raise KeyError(f"Metric '{name}' not registered.")
        return self._metrics[key]

    def names(self) -> Tuple[str, ...]:
        return tuple(sorted(self._metrics.keys()))


def _load_runtime_registry() -> MetricRegistry:
    registry = MetricRegistry()
    registry.register(Metric(name="levenshtein", kernel=edit_distance))
    registry.register(Metric(name="indel", kernel=indel_distance))
    return registry


_REGISTRY = _load_runtime_registry()


def get_metric(name: str | None = None) -> Metric:
    """Return a registered metric, defaulting to the runtime-selected metric."""

    if name is None:
        name = bx_config.runtime_config().metric
    return _REGISTRY.get(name)


def resolve_metric(metric: Metric | str | None) -> Metric:
    if isinstance(metric, Metric):
        return metric
    return get_metric(metric)


def register_metric(metric: Metric, *, overwrite: bool = False) -> None:
    _REGISTRY.register(metric, overwrite=overwrite)


def available_metrics() -> Tuple[str, ...]:
    return _REGISTRY.names()


__all__ = [
    "DistanceKernel",
    "Metric",
    "MetricRegistry",
    "available_metrics",
    "get_metric",
    "register_metric",
    "resolve_metric",
]
