from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Tuple

from bktreex.core.metrics import Metric
from bktreex.core.types import SearchResult, ensure_max_distance, ensure_word
from bktreex.diagnostics import log_operation
from bktreex.logging import get_logger

if TYPE_CHECKING:  # pragma: no cover - typing only
    from bktreex.core.tree import BKNode, BKTree


LOGGER = get_logger("queries.range")


@dataclass(frozen=True)
class RangeSearchStats:
    visited: int
    pruned: int


def _collect_within(
    root: "BKNode | None",
    metric: Metric,
    query: str,
    radius: int,
) -> Tuple[List[SearchResult], int]:
    """Pre-order walk restricted to child keys in ``[d - radius, d + radius]``.

    Tombstoned nodes are skipped in the output but their children are still
    considered. Keys are always >= 1 so the lower bound is clamped there.
    """

    results: List[SearchResult] = []
    if root is None:
        return results, 0

    visited = 0
    stack: List["BKNode"] = [root]
    while stack:
        node = stack.pop()
        visited += 1
        distance = metric.distance(query, node.word)
        if distance <= radius and not node.deleted:
            results.append(SearchResult(node.word, distance))

        children = node.children
        if not children:
            continue
        lower = max(1, distance - radius)
        upper = distance + radius
        # Push in descending key order so the smallest key is visited first.
        if upper - lower + 1 <= len(children):
            stack.extend(
                children[key] for key in range(upper, lower - 1, -1) if key in children
            )
        else:
            stack.extend(
                children[key]
                for key in sorted(children, reverse=True)
                if lower <= key <= upper
            )
    return results, visited


def range_search(
    tree: "BKTree",
    query: str,
    max_distance: int,
    *,
    return_stats: bool = False,
) -> List[SearchResult] | Tuple[List[SearchResult], RangeSearchStats]:
    query = ensure_word(query, name="query")
    radius = ensure_max_distance(max_distance)
    with log_operation(LOGGER, "range_search") as op_log:
        results, visited = _collect_within(tree.root, tree.metric, query, radius)
        stats = RangeSearchStats(visited=visited, pruned=tree.num_nodes - visited)
        op_log.add_metadata(
            radius=radius,
            nodes=tree.num_nodes,
            visited=stats.visited,
            pruned=stats.pruned,
            matches=len(results),
        )
    return (results, stats) if return_stats else results


__all__ = ["RangeSearchStats", "range_search"]
