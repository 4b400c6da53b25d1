from __future__ import annotations

import operator
from typing import Any, NamedTuple


class SearchResult(NamedTuple):
    """A matched word and its distance from the query."""

    word: str
    distance: int


def ensure_word(value: Any, *, name: str = "word") -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a str, got {type(value).__name__}.")
    return value


def ensure_max_distance(value: Any) -> int:
    """Validate a search tolerance; negative values are rejected."""

    if isinstance(value, bool):
        raise TypeError("max_distance must be an integer, got bool.")
    try:
        radius = operator.index(value)
    except TypeError as exc:
        raise TypeError(
            f"max_distance must be an integer, got {type(value).__name__}."
        ) from exc
    if radius < 0:
        raise ValueError(f"max_distance must be non-negative, got {radius}.")
    return int(radius)


def ensure_k(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("k must be an integer, got bool.")
    try:
        k = operator.index(value)
    except TypeError as exc:
        raise TypeError(f"k must be an integer, got {type(value).__name__}.") from exc
    if k <= 0:
        raise ValueError("k must be positive.")
    return int(k)


__all__ = ["SearchResult", "ensure_k", "ensure_max_distance", "ensure_word"]
