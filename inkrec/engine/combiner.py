"""Segmentation combiner: score segmenter proposals and search their corner union.

Every segmenter proposes a corner set; each proposal is scored with an
objective function. Feature-subset selection then searches the pooled interior
corners for the best subset of every size and picks the size at the error
"elbow", the smallest corner count whose removal would make the fit much
worse. The pick joins the candidates as the FSS segmentation and the whole
list is ranked by corner count, then error.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Sequence

from inkrec.engine.config import CombinerConfig
from inkrec.engine.generators import combinations
from inkrec.engine.objectives import ObjectiveFunction, PolylineMSEObjective, SegmentErrorCache
from inkrec.engine.registry import discover_segmenters
from inkrec.engine.segmenters.base import Segmenter
from inkrec.engine.timing import Deadline
from inkrec.errors import InvalidArgumentError, InvalidParametersError
from inkrec.models.segmentation import Segmentation
from inkrec.models.stroke import CornerSet, Stroke, normalize_corners

logger = logging.getLogger(__name__)


def default_segmenters() -> list[Segmenter]:
    """One instance of every registered polyline segmenter, in name order."""
    registry = discover_segmenters()
    return [spec.cls() for spec in registry.with_tag("polyline")]


def rank_segmentations(results: Sequence[Segmentation]) -> list[Segmentation]:
    """Fewest corners first, then lowest error. Ties keep their input order."""
    return sorted(
        results,
        key=lambda s: (s.num_corners, s.error if s.error is not None else math.inf),
    )


class SegmentationCombiner:
    """Merges several segmenters' proposals into one ranked list."""

    def __init__(
        self,
        segmenters: Sequence[Segmenter] | None = None,
        objective: ObjectiveFunction | None = None,
        config: CombinerConfig | None = None,
    ) -> None:
        self.segmenters = list(segmenters) if segmenters is not None else default_segmenters()
        self.objective = objective or PolylineMSEObjective()
        self.config = config or CombinerConfig()

    def combine(self, stroke: Stroke, deadline: Deadline | None = None) -> list[Segmentation]:
        """Ranked segmentations of ``stroke``: every proposal plus the FSS pick."""
        if len(stroke) == 0:
            raise InvalidParametersError("Cannot segment a stroke with no points")
        deadline = deadline or Deadline.none()
        start = time.perf_counter()
        cache: SegmentErrorCache = {}

        candidates: list[Segmentation] = []
        for seg in self.segmenters:
            deadline.check()
            try:
                proposal = seg.segment(stroke)
            except InvalidArgumentError as e:
                logger.warning("  %s FAILED: %s", seg.name, e)
                continue
            candidates.append(proposal.with_error(self.score(proposal.corners, stroke, cache)))

        pool = sorted({c for s in candidates for c in s.corners[1:-1]})
        candidates.append(self.select_features(stroke, pool, deadline, cache))

        ranked = rank_segmentations(candidates)
        logger.debug(
            "Combined %d candidates over %d pooled corners in %.1fms",
            len(candidates),
            len(pool),
            (time.perf_counter() - start) * 1000,
        )
        return ranked

    def score(
        self,
        corners: Sequence[int],
        stroke: Stroke,
        cache: SegmentErrorCache | None = None,
    ) -> float:
        return self.objective.solve(corners, stroke, cache)

    def select_features(
        self,
        stroke: Stroke,
        pool: Sequence[int],
        deadline: Deadline | None = None,
        cache: SegmentErrorCache | None = None,
    ) -> Segmentation:
        """Best corner subset of ``pool`` at the error elbow, as a Segmentation."""
        deadline = deadline or Deadline.none()
        cache = {} if cache is None else cache
        cfg = self.config
        max_k = min(cfg.max_subset_size, len(pool))

        if len(pool) <= cfg.max_search_candidates:
            best = self._exhaustive_search(stroke, pool, max_k, deadline, cache)
        else:
            best = self._backward_selection(stroke, pool, max_k, deadline, cache)

        k = self._elbow([best[i][1] for i in range(max_k + 1)])
        corners, error = best[k]
        logger.debug("FSS picked %d of %d pooled corners (error %.4g)", k, len(pool), error)
        return Segmentation(
            segmenter_name=cfg.fss_name,
            corners=corners,
            confidence=cfg.fss_confidence,
            error=error,
            label=cfg.fss_name,
        )

    def _corner_set(self, subset: Sequence[int], stroke: Stroke) -> CornerSet:
        return normalize_corners(subset, len(stroke))

    def _exhaustive_search(
        self,
        stroke: Stroke,
        pool: Sequence[int],
        max_k: int,
        deadline: Deadline,
        cache: SegmentErrorCache,
    ) -> dict[int, tuple[CornerSet, float]]:
        empty = self._corner_set((), stroke)
        best = {0: (empty, self.score(empty, stroke, cache))}
        for k in range(1, max_k + 1):
            winner: tuple[CornerSet, float] | None = None
            for idxs in combinations(len(pool), k):
                deadline.check()
                corners = self._corner_set([pool[i] for i in idxs], stroke)
                err = self.score(corners, stroke, cache)
                if winner is None or err < winner[1]:
                    winner = (corners, err)
            best[k] = winner
        return best

    def _backward_selection(
        self,
        stroke: Stroke,
        pool: Sequence[int],
        max_k: int,
        deadline: Deadline,
        cache: SegmentErrorCache,
    ) -> dict[int, tuple[CornerSet, float]]:
        """Drop one corner at a time, always the one whose removal hurts least."""
        current = list(pool)
        best: dict[int, tuple[CornerSet, float]] = {}
        full = self._corner_set(current, stroke)
        if len(current) <= max_k:
            best[len(current)] = (full, self.score(full, stroke, cache))

        while current:
            deadline.check()
            winner: tuple[int, CornerSet, float] | None = None
            for pos in range(len(current)):
                corners = self._corner_set(current[:pos] + current[pos + 1 :], stroke)
                err = self.score(corners, stroke, cache)
                if winner is None or err < winner[2]:
                    winner = (pos, corners, err)
            pos, corners, err = winner
            del current[pos]
            if len(current) <= max_k:
                best[len(current)] = (corners, err)
        return best

    def _elbow(self, errors: Sequence[float]) -> int:
        """Most interior corners k such that dropping to k-1 multiplies the error past the ratio."""
        floor = self.config.error_floor
        for k in range(len(errors) - 1, 0, -1):
            ratio = (errors[k - 1] + floor) / (errors[k] + floor)
            if ratio > self.config.elbow_ratio:
                return k
        return 0
