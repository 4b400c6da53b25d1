"""Core data structures for the BK-tree."""

from .metrics import (
    Metric,
    MetricRegistry,
    available_metrics,
    get_metric,
    register_metric,
    resolve_metric,
)
from .types import SearchResult
from .tree import BKNode, BKTree, NodeExport, TreeStats

__all__ = [
    "BKNode",
    "BKTree",
    "NodeExport",
    "TreeStats",
    "SearchResult",
    "Metric",
    "MetricRegistry",
    "available_metrics",
    "get_metric",
    "register_metric",
    "resolve_metric",
]
