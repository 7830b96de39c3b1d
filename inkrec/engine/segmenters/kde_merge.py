"""KDE merge: consensus corners from several segmenters.

Every base segmenter's corner indices are pooled and smoothed with a Gaussian
KDE; corners land on the local maxima of the density.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from inkrec.classifiers.kde import local_maxima, univariate_kde
from inkrec.engine.config import KDEConfig
from inkrec.engine.registry import segmenter
from inkrec.engine.segmenters.base import Segmenter
from inkrec.models.stroke import Stroke

logger = logging.getLogger(__name__)


def _default_base_segmenters() -> list[Segmenter]:
    from inkrec.engine.segmenters.douglas_peucker import DouglasPeuckerSegmenter
    from inkrec.engine.segmenters.ray_squared import RaySquaredSegmenter
    from inkrec.engine.segmenters.shortstraw import ShortStrawSegmenter

    return [ShortStrawSegmenter(), DouglasPeuckerSegmenter(), RaySquaredSegmenter()]


@segmenter(
    name="KDEMerge",
    tags={"combination"},
    description="Local maxima of a KDE over corners pooled from several segmenters",
)
class KDEMergeSegmenter(Segmenter):
    def __init__(
        self,
        base_segmenters: Sequence[Segmenter] | None = None,
        config: KDEConfig | None = None,
    ) -> None:
        self.base_segmenters = list(base_segmenters) if base_segmenters else _default_base_segmenters()
        self.config = config or KDEConfig()
        self.default_confidence = self.config.confidence

    def _find_corners(self, stroke: Stroke) -> list[int]:
        last = len(stroke) - 1
        pooled: list[int] = []
        for seg in self.base_segmenters:
            pooled.extend(seg.propose_corners(stroke))

        kde = univariate_kde(
            pooled,
            self.config.bandwidth,
            spacing=self.config.grid_spacing,
            padding=self.config.padding_fraction,
        )
        peaks = local_maxima(kde)
        logger.debug("KDE merge pooled %d corners into %d peaks", len(pooled), len(peaks))

        corners = [0, last]
        corners.extend(min(max(int(round(p)), 0), last) for p in peaks)
        return corners
