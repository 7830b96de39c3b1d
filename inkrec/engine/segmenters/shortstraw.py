"""ShortStraw: polyline corner finding from straw lengths on a resampled stroke.

Resample the stroke to uniform spacing, measure each point's "straw" (distance
between the points ``window`` steps before and after it) and take local minima
well below the median straw as corners. A post-processing pass adds corners
to spans that fail a line test, removes collinear corners and drops hooks near
the endpoints. Resampled corners are mapped back to the original point with
the closest arc-length position.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from inkrec.engine.config import LineTestConfig, ShortStrawConfig
from inkrec.engine.registry import segmenter
from inkrec.engine.segmenters.base import Segmenter, clean_indices, nearest_arc_index
from inkrec.models.stroke import Stroke
from inkrec.utils.geometry import arc_lengths, bbox_diagonal, distance, is_line, resample


@segmenter(
    name="ShortStraw",
    tags={"polyline", "default"},
    description="Straw-length local minima on a uniformly resampled stroke",
)
class ShortStrawSegmenter(Segmenter):
    def __init__(
        self,
        config: ShortStrawConfig | None = None,
        line_test: LineTestConfig | None = None,
    ) -> None:
        self.config = config or ShortStrawConfig()
        self.line_test = line_test or LineTestConfig()
        self.default_confidence = self.config.confidence

    def confidence(self, stroke: Stroke) -> float:
        if self._is_short(stroke.xy[clean_indices(stroke)]):
            return self.config.short_stroke_confidence
        return self.config.confidence

    def _is_short(self, pts: NDArray[np.float64]) -> bool:
        path = arc_lengths(pts)
        total = float(path[-1]) if len(path) else 0.0
        return total < self.config.short_stroke_threshold or len(pts) < self.config.min_points

    def _find_corners(self, stroke: Stroke) -> list[int]:
        cfg = self.config
        last = len(stroke) - 1

        kept = clean_indices(stroke)
        pts = stroke.xy[kept]
        times = stroke.times[kept]
        if self._is_short(pts):
            return [0, last]

        orig_arc = arc_lengths(pts)
        spacing = bbox_diagonal(pts) / cfg.points_per_diagonal
        if spacing < cfg.min_resample_spacing:
            resampled = pts
            res_arc = orig_arc
        else:
            resampled, _ = resample(pts, times, spacing)
            # Resampled points sit at exact multiples of the spacing along the path
            res_arc = np.arange(len(resampled), dtype=np.float64) * spacing

        if len(resampled) <= 2 * cfg.window:
            return [0, last]

        straws = self._straws(resampled)
        corners = self._initial_corners(straws)
        corners = self._post_process(corners, resampled, straws)

        mapped = [0]
        for c in corners[1:-1]:
            mapped.append(int(kept[nearest_arc_index(orig_arc, float(res_arc[c]))]))
        mapped.append(last)
        return mapped

    def _straws(self, pts: NDArray[np.float64]) -> NDArray[np.float64]:
        w = self.config.window
        straws = np.full(len(pts), np.inf)
        ahead = pts[2 * w :]
        behind = pts[: len(pts) - 2 * w]
        straws[w : len(pts) - w] = np.hypot(ahead[:, 0] - behind[:, 0], ahead[:, 1] - behind[:, 1])
        return straws

    def _initial_corners(self, straws: NDArray[np.float64]) -> list[int]:
        w = self.config.window
        n = len(straws)
        interior = np.sort(straws[w : n - w])
        median = float(interior[len(interior) // 2])
        threshold = self.config.median_percentage * median

        corners = [0]
        i = w
        while i < n - w:
            if straws[i] < threshold:
                local_min = np.inf
                local_min_index = i
                while i < n - w and straws[i] < threshold:
                    if straws[i] < local_min:
                        local_min = straws[i]
                        local_min_index = i
                    i += 1
                corners.append(local_min_index)
            else:
                i += 1
        corners.append(n - 1)
        return corners

    def _post_process(
        self,
        corners: list[int],
        pts: NDArray[np.float64],
        straws: NDArray[np.float64],
    ) -> list[int]:
        cfg = self.config
        lt = self.line_test
        path = arc_lengths(pts)
        filtered = list(corners)

        def line(a: int, b: int) -> bool:
            return is_line(a, b, pts, path, cfg.line_vs_arc_threshold, lt.size_threshold, lt.point_threshold)

        # Split spans until every span passes the line test
        all_lines = False
        while not all_lines:
            all_lines = True
            i = 1
            while i < len(filtered):
                c1, c2 = filtered[i - 1], filtered[i]
                if not line(c1, c2):
                    filtered.insert(i, _min_straw_between(c1, c2, straws))
                    all_lines = False
                i += 1

        # Collinear corners
        i = 1
        while i < len(filtered) - 1:
            if line(filtered[i - 1], filtered[i + 1]):
                del filtered[i]
            else:
                i += 1

        # Hooks near the endpoints
        hook = min(bbox_diagonal(pts) * cfg.hook_pct_threshold, cfg.hook_max_threshold)
        while len(filtered) > 2 and distance(pts[0], pts[filtered[1]]) < hook:
            del filtered[1]
        while len(filtered) > 2 and distance(pts[-1], pts[filtered[-2]]) < hook:
            del filtered[-2]

        return filtered


def _min_straw_between(c1: int, c2: int, straws: NDArray[np.float64]) -> int:
    """Index of the shortest straw between 1/4 and 3/4 of the way from c1 to c2."""
    to_mid = (c2 - c1) // 4
    lo, hi = c1 + to_mid, c2 - to_mid
    window = straws[lo:hi]
    if len(window) == 0 or not np.any(np.isfinite(window)):
        return (c1 + c2) // 2
    return lo + int(np.argmin(window))
