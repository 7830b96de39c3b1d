"""Objective functions: score a corner set by how well its polyline fits the stroke.

Lower is better. Each consecutive corner pair (a, b) is fitted with the
straight segment from stroke[a] to stroke[b]; the points stroke[a:b] are
measured against it (b itself opens the next segment).

Segment errors are independent of each other, so callers scoring many corner
sets of one stroke can pass a ``SegmentErrorCache`` and every (a, b) segment
is measured once.
"""

from __future__ import annotations

import abc
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from inkrec.models.stroke import Stroke
from inkrec.utils.geometry import feature_area_to_segment, squared_segment_error

SegmentErrorCache = dict[tuple[int, int], float]


class ObjectiveFunction(abc.ABC):
    name: str = ""

    def solve(
        self,
        corners: Sequence[int],
        stroke: Stroke,
        cache: SegmentErrorCache | None = None,
    ) -> float:
        """Return the fit error of the polyline implied by ``corners``."""
        ordered = sorted(corners)
        if len(ordered) < 2:
            return 0.0

        pts = stroke.xy
        total_error = 0.0
        for a, b in zip(ordered, ordered[1:]):
            if cache is None:
                total_error += self.segment_error(pts, a, b)
                continue
            err = cache.get((a, b))
            if err is None:
                err = cache[(a, b)] = self.segment_error(pts, a, b)
            total_error += err
        return self.aggregate(total_error, ordered)

    @abc.abstractmethod
    def segment_error(self, pts: NDArray[np.float64], a: int, b: int) -> float:
        """Error of the points pts[a:b] against the segment pts[a]-pts[b]."""

    def aggregate(self, total_error: float, ordered: Sequence[int]) -> float:
        return total_error


class PolylineMSEObjective(ObjectiveFunction):
    """Mean-squared polyline error, normalized over all segment points at once."""

    name = "polyline_mse"

    def segment_error(self, pts: NDArray[np.float64], a: int, b: int) -> float:
        return squared_segment_error(pts[a:b], pts[a], pts[b])

    def aggregate(self, total_error: float, ordered: Sequence[int]) -> float:
        # Segments cover pts[first:last] exactly once
        num_points = ordered[-1] - ordered[0]
        if num_points == 0:
            return 0.0
        return total_error / num_points


class PolylineFeatureAreaObjective(ObjectiveFunction):
    """Total area between the stroke and its polyline approximation."""

    name = "polyline_feature_area"

    def segment_error(self, pts: NDArray[np.float64], a: int, b: int) -> float:
        return feature_area_to_segment(pts[a:b], pts[a], pts[b])
