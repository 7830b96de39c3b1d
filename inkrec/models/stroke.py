"""Ink data model: points, strokes and corner sets.

A Stroke is an immutable, temporally ordered sequence of Points. Analysis code
borrows strokes read-only; slicing produces new strokes.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field, replace
from functools import cached_property
from typing import overload

import numpy as np
from numpy.typing import NDArray

from inkrec.errors import InvalidArgumentError

CornerSet = tuple[int, ...]


@dataclass(frozen=True)
class Point:
    x: float
    y: float
    time: int = 0
    pressure: float | None = None

    def distance(self, other: Point) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    @property
    def xy(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Stroke(Sequence[Point]):
    """Ordered, read-only sequence of points drawn in one pen-down/pen-up."""

    points: tuple[Point, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        points = tuple(self.points)
        if len(points) > 1 and all(p.time == points[0].time for p in points):
            # Unstamped points (e.g. Point(x, y)) are stamped with their sample order
            points = tuple(replace(p, time=i) for i, p in enumerate(points))
        object.__setattr__(self, "points", points)

    @classmethod
    def from_xy(
        cls,
        coords: Iterable[Sequence[float]],
        times: Iterable[int] | None = None,
    ) -> Stroke:
        """Build a stroke from (x, y) pairs. Times default to the point index."""
        coords = list(coords)
        stamps = list(times) if times is not None else list(range(len(coords)))
        if len(stamps) != len(coords):
            raise InvalidArgumentError(
                f"Got {len(coords)} coordinates but {len(stamps)} timestamps"
            )
        return cls(tuple(Point(float(c[0]), float(c[1]), int(t)) for c, t in zip(coords, stamps)))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    @overload
    def __getitem__(self, index: int) -> Point: ...

    @overload
    def __getitem__(self, index: slice) -> Stroke: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Stroke(self.points[index])
        return self.points[index]

    @property
    def first(self) -> Point:
        return self.points[0]

    @property
    def last(self) -> Point:
        return self.points[-1]

    @cached_property
    def xy(self) -> NDArray[np.float64]:
        """Nx2 array of (x, y)."""
        if not self.points:
            return np.empty((0, 2))
        return np.array([(p.x, p.y) for p in self.points], dtype=np.float64)

    @cached_property
    def times(self) -> NDArray[np.int64]:
        return np.array([p.time for p in self.points], dtype=np.int64)

    @property
    def path_length(self) -> float:
        if len(self.points) < 2:
            return 0.0
        diffs = np.diff(self.xy, axis=0)
        return float(np.sum(np.sqrt(np.sum(diffs**2, axis=1))))

    @property
    def bbox(self) -> tuple[float, float, float, float]:
        """(xmin, ymin, xmax, ymax)"""
        if not self.points:
            return (0.0, 0.0, 0.0, 0.0)
        pts = self.xy
        return (
            float(np.min(pts[:, 0])),
            float(np.min(pts[:, 1])),
            float(np.max(pts[:, 0])),
            float(np.max(pts[:, 1])),
        )

    @property
    def bbox_diagonal(self) -> float:
        xmin, ymin, xmax, ymax = self.bbox
        return math.hypot(xmax - xmin, ymax - ymin)


def normalize_corners(indices: Iterable[int], num_points: int) -> CornerSet:
    """Return the canonical corner set for a stroke of ``num_points`` points.

    Sorted, unique, always containing the first and last index. Indices outside
    ``[0, num_points - 1]`` are rejected rather than clamped.
    """
    if num_points < 1:
        raise InvalidArgumentError("Cannot build a corner set for an empty stroke")
    last = num_points - 1
    corners = {0, last}
    for idx in indices:
        idx = int(idx)
        if idx < 0 or idx > last:
            raise InvalidArgumentError(f"Corner index {idx} outside [0, {last}]")
        corners.add(idx)
    return tuple(sorted(corners))


def is_valid_corner_set(corners: Sequence[int], num_points: int) -> bool:
    if num_points < 1 or not corners:
        return False
    if corners[0] != 0 or corners[-1] != num_points - 1:
        return False
    return all(a < b for a, b in zip(corners, corners[1:]))
