"""Segmentation results and feature vectors."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace

import numpy as np
from numpy.typing import NDArray

from inkrec.models.stroke import CornerSet, Stroke


@dataclass(frozen=True)
class Segmentation:
    """A named candidate partition of a stroke at a set of corner indices."""

    segmenter_name: str
    corners: CornerSet
    confidence: float = 1.0
    # Objective-function error; None until a combiner scores it
    error: float | None = None
    # Name of the segmenter that originally proposed the corners
    label: str = ""

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be in [0, 1], got {self.confidence}")

    @property
    def num_corners(self) -> int:
        return len(self.corners)

    @property
    def num_segments(self) -> int:
        return max(len(self.corners) - 1, 0)

    def segments(self, stroke: Stroke) -> list[Stroke]:
        """Sub-strokes between consecutive corners, both corner points included."""
        return [stroke[a : b + 1] for a, b in zip(self.corners, self.corners[1:])]

    def with_error(self, error: float) -> Segmentation:
        return replace(self, error=error)


@dataclass(frozen=True)
class FeatureVector:
    """Fixed-length feature values extracted from a shape or stroke."""

    values: tuple[float, ...]
    label: int | None = None
    group: int | None = None
    names: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.values, tuple):
            object.__setattr__(self, "values", tuple(float(v) for v in self.values))
        if self.names and len(self.names) != len(self.values):
            raise ValueError(
                f"{len(self.names)} feature names for {len(self.values)} feature values"
            )

    def __len__(self) -> int:
        return len(self.values)

    def as_array(self) -> NDArray[np.float64]:
        return np.asarray(self.values, dtype=np.float64)

    def feature(self, name: str) -> float:
        return self.values[self.names.index(name)]

    @classmethod
    def from_values(
        cls,
        values: Sequence[float],
        label: int | None = None,
        group: int | None = None,
    ) -> FeatureVector:
        return cls(tuple(float(v) for v in values), label=label, group=group)
