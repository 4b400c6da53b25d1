"""Query algorithms over a :class:`~bktreex.core.tree.BKTree`."""

from .knn import nearest
from .range import RangeSearchStats, range_search

__all__ = ["RangeSearchStats", "nearest", "range_search"]
