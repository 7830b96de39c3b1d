"""Segmenter base class and shared stroke pre-processing."""

from __future__ import annotations

import abc
import logging
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from inkrec.errors import InvalidArgumentError
from inkrec.models.segmentation import Segmentation
from inkrec.models.stroke import CornerSet, Stroke, normalize_corners

logger = logging.getLogger(__name__)


class Segmenter(abc.ABC):
    """Proposes a corner set for a stroke.

    Subclasses implement ``_find_corners``; the base class guarantees that the
    returned corner set is canonical (sorted, unique, both endpoints present).
    """

    name: str = ""
    default_confidence: float = 0.8

    def propose_corners(self, stroke: Stroke) -> CornerSet:
        if len(stroke) == 0:
            raise InvalidArgumentError(f"{self.name or type(self).__name__} received an empty stroke")
        if len(stroke) == 1:
            return (0,)
        return normalize_corners(self._find_corners(stroke), len(stroke))

    def confidence(self, stroke: Stroke) -> float:
        return self.default_confidence

    def segment(self, stroke: Stroke) -> Segmentation:
        corners = self.propose_corners(stroke)
        logger.debug("%s proposed %d corners", self.name, len(corners))
        return Segmentation(
            segmenter_name=self.name,
            corners=corners,
            confidence=self.confidence(stroke),
            label=self.name,
        )

    @abc.abstractmethod
    def _find_corners(self, stroke: Stroke) -> Sequence[int]:
        """Corner indices into ``stroke`` (len(stroke) >= 2)."""


def clean_indices(stroke: Stroke) -> NDArray[np.int64]:
    """Indices of the points that survive de-duplication.

    Drops a point that repeats the previous kept point's position or
    timestamp. The first and last points are always kept.
    """
    n = len(stroke)
    if n <= 2:
        return np.arange(n, dtype=np.int64)

    kept = [0]
    for i in range(1, n - 1):
        prev = stroke[kept[-1]]
        cur = stroke[i]
        if (cur.x == prev.x and cur.y == prev.y) or cur.time == prev.time:
            continue
        kept.append(i)
    kept.append(n - 1)
    return np.asarray(kept, dtype=np.int64)


def nearest_arc_index(arc: NDArray[np.float64], position: float) -> int:
    """Index of the sample whose cumulative arc length is closest to ``position``."""
    idx = int(np.searchsorted(arc, position))
    if idx <= 0:
        return 0
    if idx >= len(arc):
        return len(arc) - 1
    if position - arc[idx - 1] <= arc[idx] - position:
        return idx - 1
    return idx
