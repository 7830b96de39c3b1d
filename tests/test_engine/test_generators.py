"""Tests for the combination and permutation generators."""

import itertools
import math

import pytest

from inkrec.engine.generators import combinations, count_combinations, next_permutation, permutations
from inkrec.errors import InvalidArgumentError


@pytest.mark.parametrize("n,r", [(1, 1), (5, 1), (5, 3), (6, 6), (8, 4)])
def test_combination_count(n, r):
    combos = list(combinations(n, r))
    assert len(combos) == math.comb(n, r) == count_combinations(n, r)


def test_combinations_lexicographic_and_increasing():
    combos = list(combinations(5, 3))
    assert combos == sorted(combos)
    assert combos[0] == (0, 1, 2)
    assert combos[-1] == (2, 3, 4)
    assert all(all(a < b for a, b in zip(c, c[1:])) for c in combos)


@pytest.mark.parametrize("n,r", [(0, 1), (3, 0), (3, 4), (-1, 1)])
def test_combinations_invalid(n, r):
    # Raised at call time, before iteration
    with pytest.raises(InvalidArgumentError):
        combinations(n, r)


def test_combinations_restart():
    assert list(combinations(4, 2)) == list(combinations(4, 2))


def test_combinations_early_stop():
    gen = combinations(20, 10)
    first = list(itertools.islice(gen, 3))
    assert first[0] == tuple(range(10))
    assert len(first) == 3


@pytest.mark.parametrize("n", [1, 2, 3, 5])
def test_permutation_count(n):
    perms = list(permutations(n))
    assert len(perms) == math.factorial(n)
    assert len(set(perms)) == len(perms)


def test_permutations_match_itertools():
    assert list(permutations(4)) == list(itertools.permutations(range(4)))


def test_permutations_invalid():
    with pytest.raises(InvalidArgumentError):
        permutations(0)


def test_next_permutation_in_place():
    seq = [1, 3, 2]
    assert next_permutation(seq)
    assert seq == [2, 1, 3]


def test_next_permutation_last():
    seq = [3, 2, 1]
    assert not next_permutation(seq)
    assert seq == [3, 2, 1]
