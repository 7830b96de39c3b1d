"""Douglas-Peucker corner finder with a chord-relative split threshold."""

from __future__ import annotations

import numpy as np

from inkrec.engine.config import DouglasPeuckerConfig, LineTestConfig
from inkrec.engine.registry import segmenter
from inkrec.engine.segmenters.base import Segmenter
from inkrec.models.stroke import Stroke
from inkrec.utils.geometry import arc_lengths, distance, is_line, point_line_distances


@segmenter(
    name="DouglasPeucker",
    tags={"polyline"},
    description="Recursive split at the farthest point from the chord",
)
class DouglasPeuckerSegmenter(Segmenter):
    def __init__(
        self,
        config: DouglasPeuckerConfig | None = None,
        line_test: LineTestConfig | None = None,
    ) -> None:
        self.config = config or DouglasPeuckerConfig()
        self.line_test = line_test or LineTestConfig()
        self.default_confidence = self.config.confidence

    def _find_corners(self, stroke: Stroke) -> list[int]:
        pts = stroke.xy
        corners = {0, len(pts) - 1}

        spans = [(0, len(pts) - 1)]
        while spans:
            anchor, floater = spans.pop()
            if floater - anchor < 2:
                continue
            chord = distance(pts[anchor], pts[floater])
            if chord <= 0:
                continue
            dists = point_line_distances(pts[anchor + 1 : floater], pts[anchor], pts[floater])
            k = int(np.argmax(dists))
            if dists[k] > self.config.dist_offset_threshold * chord:
                split = anchor + 1 + k
                corners.add(split)
                spans.append((split, floater))
                spans.append((anchor, split))

        return self._remove_collinear(sorted(corners), pts)

    def _remove_collinear(self, corners: list[int], pts: np.ndarray) -> list[int]:
        path = arc_lengths(pts)
        lt = self.line_test
        filtered = list(corners)
        i = 1
        while i < len(filtered) - 1:
            if is_line(
                filtered[i - 1],
                filtered[i + 1],
                pts,
                path,
                self.config.line_vs_arc_threshold,
                lt.size_threshold,
                lt.point_threshold,
            ):
                del filtered[i]
            else:
                i += 1
        return filtered
