"""Lazy combination / permutation enumeration over index ranges.

Both producers are plain generators: finite, consumed once, restarted by
calling again. Callers may stop iterating at any point.
"""

from __future__ import annotations

import itertools
import math
from collections.abc import Iterator, MutableSequence

from inkrec.errors import InvalidArgumentError


def combinations(n: int, r: int) -> Iterator[tuple[int, ...]]:
    """Every strictly increasing r-tuple drawn from range(n), lexicographically.

    Arguments are validated eagerly so a bad request fails at the call site.
    """
    if n < 1:
        raise InvalidArgumentError("Can't take combinations of an empty set")
    if r < 1:
        raise InvalidArgumentError(f"Combination size must be at least 1, got {r}")
    if r > n:
        raise InvalidArgumentError(f"Can't choose {r} elements out of {n}")
    return itertools.combinations(range(n), r)


def count_combinations(n: int, r: int) -> int:
    return math.comb(n, r)


def next_permutation(seq: MutableSequence[int]) -> bool:
    """Advance ``seq`` in place to its next lexicographic permutation.

    Returns False (leaving ``seq`` untouched) when it is already the last one.
    """
    # Longest non-increasing suffix starts right after the pivot
    i = len(seq) - 2
    while i >= 0 and seq[i] >= seq[i + 1]:
        i -= 1
    if i < 0:
        return False

    j = len(seq) - 1
    while seq[j] <= seq[i]:
        j -= 1
    seq[i], seq[j] = seq[j], seq[i]
    seq[i + 1 :] = reversed(seq[i + 1 :])
    return True


def permutations(n: int) -> Iterator[tuple[int, ...]]:
    """Every permutation of range(n) in lexicographic order."""
    if n < 1:
        raise InvalidArgumentError(f"Permutation length must be at least 1, got {n}")
    return _permutations(n)


def _permutations(n: int) -> Iterator[tuple[int, ...]]:
    current = list(range(n))
    yield tuple(current)
    while next_permutation(current):
        yield tuple(current)
