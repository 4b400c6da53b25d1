"""Brute-force reference index.

Scans every stored word with the metric's pairwise kernel. Used as the
correctness oracle for the tree and as the benchmark baseline.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

import numpy as np

from bktreex.core.metrics import Metric, resolve_metric
from bktreex.core.types import (
    SearchResult,
    ensure_k,
    ensure_max_distance,
    ensure_word,
)


class LinearScanIndex:
    def __init__(self, metric: Metric | str | None = None) -> None:
        self.metric = resolve_metric(metric)
        self._words: List[str] = []
        self._positions: Dict[str, int] = {}
        self._active = np.zeros(0, dtype=bool)

    @classmethod
    def from_words(
        cls, words: Iterable[str], *, metric: Metric | str | None = None
    ) -> "LinearScanIndex":
        index = cls(metric=metric)
        for word in words:
            index.insert(word)
        return index

    def insert(self, word: str) -> bool:
        word = ensure_word(word)
        position = self._positions.get(word)
        if position is None:
            self._positions[word] = len(self._words)
            self._words.append(word)
            self._active = np.append(self._active, True)
            return True
        if self._active[position]:
            return False
        self._active[position] = True
        return True

    def remove(self, word: str) -> bool:
        word = ensure_word(word)
        position = self._positions.get(word)
        if position is None or not self._active[position]:
            return False
        self._active[position] = False
        return True

    def distances(self, query: str) -> np.ndarray:
        """Distances from ``query`` to every stored word, in insertion order."""

        query = ensure_word(query, name="query")
        return self.metric.pairwise([query], self._words)[0]

    def search(self, query: str, max_distance: int) -> List[SearchResult]:
        radius = ensure_max_distance(max_distance)
        distances = self.distances(query)
        hits = np.flatnonzero((distances <= radius) & self._active)
        return [SearchResult(self._words[i], int(distances[i])) for i in hits]

    def nearest(self, query: str, k: int = 1) -> List[SearchResult]:
        k = ensure_k(k)
        distances = self.distances(query)
        ranked = sorted(
            (int(distances[i]), self._words[i]) for i in np.flatnonzero(self._active)
        )
        return [SearchResult(word, distance) for distance, word in ranked[:k]]

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False
        position = self._positions.get(word)
        return position is not None and bool(self._active[position])

    def __len__(self) -> int:
        return int(np.count_nonzero(self._active))


__all__ = ["LinearScanIndex"]
