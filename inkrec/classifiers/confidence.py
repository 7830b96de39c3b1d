"""Total order over optional recognition confidences.

A missing confidence (None) sorts below every present value; two missing
confidences are equal.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from functools import cmp_to_key
from typing import Any, TypeVar

T = TypeVar("T")


def compare_confidence(a: float | None, b: float | None) -> int:
    """-1, 0 or 1 as ``a`` is less than, equal to or greater than ``b``."""
    if a is None and b is None:
        return 0
    if a is None:
        return -1
    if b is None:
        return 1
    return (a > b) - (a < b)


def confidence_key(confidence: float | None) -> tuple[int, float]:
    """Sort key consistent with compare_confidence."""
    if confidence is None:
        return (0, 0.0)
    return (1, confidence)


def _confidence_of(item: Any) -> float | None:
    if item is None:
        return None
    return getattr(item, "confidence", None)


def compare_interpretations(a: Any, b: Any) -> int:
    """Compare two interpretations (or None) by their ``confidence`` attribute."""
    return compare_confidence(_confidence_of(a), _confidence_of(b))


def rank_by_confidence(
    items: Iterable[T],
    confidence: Callable[[T], float | None] = _confidence_of,
    descending: bool = True,
) -> list[T]:
    """Items ordered by confidence, most confident first unless ``descending`` is False.

    The sort is stable, so equally confident items keep their input order.
    """
    ordering = cmp_to_key(lambda a, b: compare_confidence(confidence(a), confidence(b)))
    return sorted(items, key=ordering, reverse=descending)
