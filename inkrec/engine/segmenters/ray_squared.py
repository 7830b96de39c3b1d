"""RaySquared: sequential error-walk corner finder.

From an anchor ``i`` the probe ``j`` walks forward. The benefit of extending
the current segment to ``j`` is the chord length minus the summed
perpendicular distances of the points between: ``F_j = |p_i p_j| - E_j``.
While the stroke is straight F grows with every step; once it drops the
previous point closes the segment and becomes the new anchor.
"""

from __future__ import annotations

from inkrec.engine.config import RaySquaredConfig
from inkrec.engine.registry import segmenter
from inkrec.engine.segmenters.base import Segmenter
from inkrec.models.stroke import Stroke
from inkrec.utils.geometry import distance, point_line_distances


@segmenter(
    name="RaySquared",
    tags={"polyline", "default"},
    description="Chord length minus perpendicular error, closed when the benefit drops",
)
class RaySquaredSegmenter(Segmenter):
    def __init__(self, config: RaySquaredConfig | None = None) -> None:
        self.config = config or RaySquaredConfig()
        self.default_confidence = self.config.confidence

    def _find_corners(self, stroke: Stroke) -> list[int]:
        pts = stroke.xy
        n = len(pts)
        tol = self.config.improvement_tolerance

        corners = [0]
        i = 0
        prev_benefit = distance(pts[0], pts[1])
        for j in range(2, n):
            chord = distance(pts[i], pts[j])
            error = float(point_line_distances(pts[i + 1 : j], pts[i], pts[j]).sum())
            benefit = chord - error
            if benefit < prev_benefit - tol:
                corners.append(j - 1)
                i = j - 1
                prev_benefit = distance(pts[i], pts[j])
            else:
                prev_benefit = benefit
        corners.append(n - 1)
        return corners
