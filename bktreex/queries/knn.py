from __future__ import annotations

import bisect
import heapq
from typing import TYPE_CHECKING, List, Tuple

from bktreex.core.metrics import Metric
from bktreex.core.types import SearchResult, ensure_k, ensure_word
from bktreex.diagnostics import log_operation
from bktreex.logging import get_logger

if TYPE_CHECKING:  # pragma: no cover - typing only
    from bktreex.core.tree import BKNode, BKTree


LOGGER = get_logger("queries.knn")


def _best_first(
    root: "BKNode | None",
    metric: Metric,
    query: str,
    k: int,
) -> Tuple[List[SearchResult], int]:
    """Best-first walk keeping the ``k`` smallest ``(distance, word)`` pairs.

    Every word below a child keyed ``key`` sits exactly ``key`` away from the
    parent, so ``|d(query, parent) - key|`` lower-bounds the whole subtree.
    """

    if root is None:
        return [], 0

    best: List[Tuple[int, str]] = []
    candidates: List[Tuple[int, int, "BKNode"]] = [(0, 0, root)]
    counter = 1
    visited = 0

    while candidates:
        bound, _, node = heapq.heappop(candidates)
        if len(best) >= k and bound > best[-1][0]:
            break
        visited += 1
        distance = metric.distance(query, node.word)
        if not node.deleted:
            entry = (distance, node.word)
            if len(best) < k:
                bisect.insort(best, entry)
            elif entry < best[-1]:
                bisect.insort(best, entry)
                best.pop()

        for key, child in node.children.items():
            child_bound = max(bound, abs(distance - key))
            if len(best) >= k and child_bound > best[-1][0]:
                continue
            heapq.heappush(candidates, (child_bound, counter, child))
            counter += 1

    return [SearchResult(word, distance) for distance, word in best], visited


def nearest(tree: "BKTree", query: str, *, k: int = 1) -> List[SearchResult]:
    """Return the ``k`` closest active words ordered by ``(distance, word)``."""

    query = ensure_word(query, name="query")
    k = ensure_k(k)
    with log_operation(LOGGER, "knn_query") as op_log:
        results, visited = _best_first(tree.root, tree.metric, query, k)
        op_log.add_metadata(
            k=k,
            nodes=tree.num_nodes,
            visited=visited,
            matches=len(results),
        )
    return results


__all__ = ["nearest"]
