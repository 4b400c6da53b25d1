"""BK-tree over strings.

Every node stores one word; its children are keyed by their exact distance
from that node. Removal only tombstones a node, so the tree shape never
shrinks. Walks use explicit stacks rather than recursion.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Tuple

from bktreex.core.metrics import Metric, resolve_metric
from bktreex.core.types import SearchResult, ensure_word
from bktreex.diagnostics import log_operation
from bktreex.logging import get_logger
from bktreex.queries.knn import nearest as nearest_query
from bktreex.queries.range import range_search


LOGGER = get_logger("core.tree")


class BKNode:
    __slots__ = ("word", "children", "deleted")

    def __init__(self, word: str) -> None:
        self.word = word
        self.children: Dict[int, BKNode] = {}
        self.deleted = False

    def __repr__(self) -> str:
        flag = " deleted" if self.deleted else ""
        return f"BKNode({self.word!r}{flag}, children={sorted(self.children)})"


@dataclass(frozen=True)
class NodeExport:
    """Read-only snapshot of a node and its subtree.

    ``distance`` is the key under the parent (0 for the root); ``children``
    are ordered by ascending key.
    """

    word: str
    deleted: bool
    distance: int
    children: Tuple["NodeExport", ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "deleted": self.deleted,
            "distance": self.distance,
            "children": [child.to_dict() for child in self.children],
        }

    def count(self) -> int:
        total = 0
        stack: List[NodeExport] = [self]
        while stack:
            node = stack.pop()
            total += 1
            stack.extend(node.children)
        return total


@dataclass(frozen=True)
class TreeStats:
    nodes: int
    active: int
    tombstones: int
    height: int
    max_fanout: int


class BKTree:
    """Metric tree answering "every word within ``max_distance`` of a query".

    >>> tree = BKTree.from_words(["cat", "cats", "bat", "bad"])
    >>> sorted(tree.search("cat", 1))
    [SearchResult(word='bat', distance=1), SearchResult(word='cat', distance=0), SearchResult(word='cats', distance=1)]
    """

    __slots__ = ("root", "metric", "_num_nodes", "_num_tombstones")

    def __init__(self, metric: Metric | str | None = None) -> None:
        self.root: BKNode | None = None
        self.metric = resolve_metric(metric)
        self._num_nodes = 0
        self._num_tombstones = 0

    @classmethod
    def from_words(
        cls, words: Iterable[str], *, metric: Metric | str | None = None
    ) -> "BKTree":
        tree = cls(metric=metric)
        tree.insert_many(words)
        return tree

    # ------------------------------------------------------------------
    # Mutation

    def insert(self, word: str) -> bool:
        """Insert ``word``; reactivate it if tombstoned.

        Returns ``True`` when a node was created or reactivated and ``False``
        when the word was already active.
        """

        word = ensure_word(word)
        with log_operation(LOGGER, "insert", level=logging.DEBUG) as op_log:
            if self.root is None:
                self.root = BKNode(word)
                self._num_nodes = 1
                op_log.add_metadata(outcome="created", depth=0)
                return True

            node = self.root
            depth = 0
            while True:
                distance = self.metric.distance(word, node.word)
                if distance == 0:
                    if node.deleted:
                        node.deleted = False
                        self._num_tombstones -= 1
                        op_log.add_metadata(outcome="reactivated", depth=depth)
                        return True
                    op_log.add_metadata(outcome="present", depth=depth)
                    return False
                depth += 1
                child = node.children.get(distance)
                if child is None:
                    node.children[distance] = BKNode(word)
                    self._num_nodes += 1
                    op_log.add_metadata(outcome="created", depth=depth)
                    return True
                node = child

    def insert_many(self, words: Iterable[str]) -> int:
        """Insert ``words`` in iteration order; return the number of effective inserts."""

        with log_operation(LOGGER, "insert_many", level=logging.DEBUG) as op_log:
            seen = 0
            changed = 0
            for word in words:
                seen += 1
                if self.insert(word):
                    changed += 1
            op_log.add_metadata(words=seen, inserted=changed, nodes=self._num_nodes)
        return changed

    def remove(self, word: str) -> bool:
        """Tombstone ``word`` if present and active; the node stays in place."""

        word = ensure_word(word)
        with log_operation(LOGGER, "remove", level=logging.DEBUG) as op_log:
            node = self._find(word)
            if node is None:
                op_log.add_metadata(outcome="missing")
                return False
            if node.deleted:
                op_log.add_metadata(outcome="tombstoned")
                return False
            node.deleted = True
            self._num_tombstones += 1
            op_log.add_metadata(outcome="removed")
            return True

    def compact(self) -> "BKTree":
        """Return a new tree holding only the active words."""

        return BKTree.from_words(self.words(), metric=self.metric)

    # ------------------------------------------------------------------
    # Queries

    def search(self, word: str, max_distance: int) -> List[SearchResult]:
        """Return every active word within ``max_distance`` of ``word``.

        Results follow pre-order traversal with children visited by ascending
        key; they are not sorted by distance.
        """

        return range_search(self, word, max_distance)

    def nearest(self, word: str, k: int = 1) -> List[SearchResult]:
        """Return the ``k`` closest active words, closest first."""

        return nearest_query(self, word, k=k)

    def _find(self, word: str) -> BKNode | None:
        node = self.root
        while node is not None:
            distance = self.metric.distance(word, node.word)
            if distance == 0:
                return node
            node = node.children.get(distance)
        return None

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False
        node = self._find(word)
        return node is not None and not node.deleted

    # ------------------------------------------------------------------
    # Introspection

    def _iter_nodes(self) -> Iterator[Tuple[BKNode, int]]:
        """Yield ``(node, depth)`` in pre-order, children by ascending key."""

        if self.root is None:
            return
        stack: List[Tuple[BKNode, int]] = [(self.root, 1)]
        while stack:
            node, depth = stack.pop()
            yield node, depth
            for key in sorted(node.children, reverse=True):
                stack.append((node.children[key], depth + 1))

    def words(self) -> List[str]:
        return [node.word for node, _ in self._iter_nodes() if not node.deleted]

    def __iter__(self) -> Iterator[str]:
        return iter(self.words())

    def __len__(self) -> int:
        return self._num_nodes - self._num_tombstones

    def is_empty(self) -> bool:
        return self.root is None

    @property
    def num_nodes(self) -> int:
        return self._num_nodes

    @property
    def num_tombstones(self) -> int:
        return self._num_tombstones

    @property
    def height(self) -> int:
        return max((depth for _, depth in self._iter_nodes()), default=0)

    def stats(self) -> TreeStats:
        height = 0
        max_fanout = 0
        for node, depth in self._iter_nodes():
            height = max(height, depth)
            max_fanout = max(max_fanout, len(node.children))
        return TreeStats(
            nodes=self._num_nodes,
            active=len(self),
            tombstones=self._num_tombstones,
            height=height,
            max_fanout=max_fanout,
        )

    def export(self) -> NodeExport | None:
        """Snapshot the full tree shape for renderers; ``None`` when empty."""

        if self.root is None:
            return None
        built: Dict[int, NodeExport] = {}
        stack: List[Tuple[BKNode, int, bool]] = [(self.root, 0, False)]
        while stack:
            node, key, expanded = stack.pop()
            if not expanded:
                stack.append((node, key, True))
                for child_key, child in node.children.items():
                    stack.append((child, child_key, False))
                continue
            children = tuple(
                built.pop(id(node.children[child_key]))
                for child_key in sorted(node.children)
            )
            built[id(node)] = NodeExport(
                word=node.word,
                deleted=node.deleted,
                distance=key,
                children=children,
            )
        return built[id(self.root)]

    def __repr__(self) -> str:
        return (
            f"BKTree(metric={self.metric.name!r}, nodes={self._num_nodes}, "
            f"active={len(self)})"
        )


__all__ = ["BKNode", "BKTree", "NodeExport", "TreeStats"]
