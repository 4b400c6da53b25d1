"""bktreex: BK-tree index for approximate string matching.

Quick Start
-----------
>>> from bktreex import BKTree
>>>
>>> tree = BKTree.from_words(["cat", "cats", "bat", "bad"])
>>> matches = tree.search("cat", 1)   # cat:0, cats:1, bat:1 in traversal order
>>> tree.remove("cat")                # tombstone; the node keeps its place
>>> closest = tree.nearest("cab", k=2)

Classes
-------
BKTree : Metric tree with insert / search / remove / export.
LinearScanIndex : Brute-force reference with the same surface.
Metric : Named string metric; see ``available_metrics()``.
"""

from importlib.metadata import version as _pkg_version

try:
    __version__ = _pkg_version("bktreex")
except Exception:  # pragma: no cover - best effort during local development
    __version__ = "0.0.1"

# Core must load before the query modules it wires in.
from .core import (
    BKNode,
    BKTree,
    Metric,
    MetricRegistry,
    NodeExport,
    SearchResult,
    TreeStats,
    available_metrics,
    get_metric,
    register_metric,
)
from .baseline import LinearScanIndex
from .metrics import edit_distance, indel_distance
from .queries import RangeSearchStats, nearest, range_search

__all__ = [
    "__version__",
    "BKTree",
    "BKNode",
    "NodeExport",
    "TreeStats",
    "SearchResult",
    "LinearScanIndex",
    "Metric",
    "MetricRegistry",
    "available_metrics",
    "get_metric",
    "register_metric",
    "edit_distance",
    "indel_distance",
    "RangeSearchStats",
    "nearest",
    "range_search",
]
