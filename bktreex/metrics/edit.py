"""Edit-distance kernels on strings.

Both kernels are true metrics (non-negative, symmetric, zero only for equal
strings, triangle inequality), which is what the BK-tree pruning relies on.
"""

from __future__ import annotations

from typing import List


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit cost substitution, insertion and deletion.

    The classic ``(len(b) + 1) x (len(a) + 1)`` table is evaluated one row at a
    time, keeping only the previous row. Rows run over the shorter string so
    memory is ``O(min(len(a), len(b)))``.
    """

    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous: List[int] = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(
                    1 + min(previous[j - 1], current[j - 1], previous[j])
                )
        previous = current
    return previous[-1]


def indel_distance(a: str, b: str) -> int:
    """Edit distance restricted to insertions and deletions.

    Equals ``len(a) + len(b) - 2 * lcs(a, b)``.
    """

    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous: List[int] = [0] * (len(b) + 1)
    for char_a in a:
        current = [0]
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current.append(previous[j - 1] + 1)
            else:
                current.append(max(previous[j], current[j - 1]))
        previous = current
    return len(a) + len(b) - 2 * previous[-1]


__all__ = ["edit_distance", "indel_distance"]
