"""Collision detection between points and strokes.

Strokes are bisected at their midpoint (``len // 2``) and the halves tested
pairwise until single points remain; any colliding point pair makes the strokes
collide. Only sampled points are compared, so two strokes whose segments cross
between samples are not reported.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from inkrec.engine.config import CollisionConfig
from inkrec.errors import InvalidArgumentError
from inkrec.models.stroke import Point, Stroke

Collidable = Point | Stroke


class CollisionDetector:
    def __init__(self, config: CollisionConfig | None = None) -> None:
        self.config = config or CollisionConfig()

    def collides(self, a: Collidable, b: Collidable, threshold: float | None = None) -> bool:
        limit = self.config.point_threshold if threshold is None else threshold
        return _bisect(_as_array(a), _as_array(b), limit)


def _as_array(item: Collidable) -> NDArray[np.float64]:
    if isinstance(item, Point):
        return np.array([[item.x, item.y]], dtype=np.float64)
    if isinstance(item, Stroke):
        return item.xy
    raise InvalidArgumentError(f"Cannot test collisions for {type(item).__name__}")


def _points_collide(p: NDArray[np.float64], q: NDArray[np.float64], threshold: float) -> bool:
    return bool(np.hypot(p[0] - q[0], p[1] - q[1]) <= threshold)


def _bisect(a: NDArray[np.float64], b: NDArray[np.float64], threshold: float) -> bool:
    if len(a) == 0 or len(b) == 0:
        return False
    if len(a) == 1 and len(b) == 1:
        return _points_collide(a[0], b[0], threshold)
    if len(a) == 1:
        return _bisect(b, a, threshold)
    if len(b) == 1:
        mid = len(a) // 2
        return _bisect(a[:mid], b, threshold) or _bisect(a[mid:], b, threshold)

    mid_a = len(a) // 2
    mid_b = len(b) // 2
    a_first, a_last = a[:mid_a], a[mid_a:]
    b_first, b_last = b[:mid_b], b[mid_b:]
    return (
        _bisect(a_first, b_first, threshold)
        or _bisect(a_last, b_first, threshold)
        or _bisect(a_last, b_last, threshold)
        or _bisect(a_first, b_last, threshold)
    )


_default_detector = CollisionDetector()


def collides(a: Collidable, b: Collidable, threshold: float | None = None) -> bool:
    """True when any sampled point of ``a`` lies within ``threshold`` of one of ``b``.

    Accepts any pairing of Point and Stroke. ``threshold`` defaults to
    ``CollisionConfig.point_threshold``.
    """
    return _default_detector.collides(a, b, threshold)
