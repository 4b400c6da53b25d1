from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np
from numpy.random import Generator, default_rng

DEFAULT_ALPHABET = "abcdefgh"


def _ensure_rng(rng: Generator | None) -> Generator:
    return rng or default_rng()


def random_words(
    rng: Generator | None,
    count: int,
    *,
    min_length: int = 1,
    max_length: int = 8,
    alphabet: str = DEFAULT_ALPHABET,
) -> List[str]:
    """Sample `count` words with lengths drawn uniformly from the given range."""

    if min_length < 0 or max_length < min_length:
        raise ValueError("Word lengths must satisfy 0 <= min_length <= max_length.")
    if not alphabet:
        raise ValueError("Alphabet must not be empty.")
    generator = _ensure_rng(rng)
    if count <= 0:
        return []
    letters = np.asarray(list(alphabet))
    lengths = generator.integers(min_length, max_length + 1, size=count)
    return ["".join(generator.choice(letters, size=int(length))) for length in lengths]


def perturb_word(
    rng: Generator | None,
    word: str,
    *,
    max_edits: int = 2,
    alphabet: str = DEFAULT_ALPHABET,
) -> str:
    """Apply up to `max_edits` random substitutions, insertions or deletions."""

    generator = _ensure_rng(rng)
    letters = list(alphabet)
    chars = list(word)
    edits = int(generator.integers(0, max_edits + 1))
    for _ in range(edits):
        op = int(generator.integers(0, 3))
        if op == 0 and chars:
            position = int(generator.integers(0, len(chars)))
            chars[position] = str(generator.choice(letters))
        elif op == 1 or not chars:
            position = int(generator.integers(0, len(chars) + 1))
            chars.insert(position, str(generator.choice(letters)))
        else:
            del chars[int(generator.integers(0, len(chars)))]
    return "".join(chars)


def word_dataset(
    rng: Generator | None,
    *,
    tree_words: int,
    queries: int,
    min_length: int = 1,
    max_length: int = 8,
    alphabet: str = DEFAULT_ALPHABET,
    max_edits: int = 2,
) -> Tuple[List[str], List[str]]:
    """Return `(words, queries)`; half the queries are near-misses of stored words."""

    generator = _ensure_rng(rng)
    words = random_words(
        generator,
        tree_words,
        min_length=min_length,
        max_length=max_length,
        alphabet=alphabet,
    )
    near = queries // 2 if words else 0
    picks: Sequence[int] = generator.integers(0, len(words), size=near) if near else ()
    query_words = [
        perturb_word(generator, words[int(i)], max_edits=max_edits, alphabet=alphabet)
        for i in picks
    ]
    query_words.extend(
        random_words(
            generator,
            queries - near,
            min_length=min_length,
            max_length=max_length,
            alphabet=alphabet,
        )
    )
    return words, query_words
