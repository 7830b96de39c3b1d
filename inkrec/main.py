"""Process bootstrap: logging from settings and engine factories."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from inkrec.config import settings
from inkrec.engine.combiner import SegmentationCombiner
from inkrec.engine.config import CombinerConfig
from inkrec.engine.recognizer import StrokeSegmentationRecognizer
from inkrec.engine.registry import discover_segmenters
from inkrec.engine.segmenters.base import Segmenter
from inkrec.models.segmentation import Segmentation
from inkrec.models.stroke import Stroke

load_dotenv()


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or settings.inkrec_log_level).upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def create_combiner(
    segmenter_names: list[str] | None = None,
    config: CombinerConfig | None = None,
) -> SegmentationCombiner:
    """Combiner over the named registered segmenters (all polyline segmenters by default)."""
    registry = discover_segmenters()
    segmenters: list[Segmenter] | None = None
    if segmenter_names is not None:
        segmenters = [registry.create(name) for name in segmenter_names]
    if config is None:
        config = CombinerConfig(max_search_candidates=settings.inkrec_max_search_candidates)
    return SegmentationCombiner(segmenters=segmenters, config=config)


def create_recognizer(
    combiner: SegmentationCombiner | None = None,
) -> StrokeSegmentationRecognizer:
    """Factory function for a recognizer using the process-wide timeout default."""
    return StrokeSegmentationRecognizer(
        combiner=combiner or create_combiner(),
        default_timeout_ms=settings.inkrec_default_timeout_ms,
    )


def segment_stroke(stroke: Stroke, timeout_ms: float | None = None) -> list[Segmentation]:
    """Ranked segmentations of a single stroke, within ``timeout_ms`` when given."""
    recognizer = create_recognizer()
    recognizer.submit(stroke)
    if timeout_ms is None:
        return recognizer.recognize()[0]
    return recognizer.recognize_timed(timeout_ms)[0]


configure_logging()
