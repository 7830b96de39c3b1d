"""inkrec stroke segmentation engine."""

from inkrec.engine.combiner import SegmentationCombiner, rank_segmentations
from inkrec.engine.registry import get_registry, segmenter
from inkrec.engine.recognizer import RecognitionState, StrokeSegmentationRecognizer
from inkrec.engine.timing import Deadline

__all__ = [
    "Deadline",
    "RecognitionState",
    "SegmentationCombiner",
    "StrokeSegmentationRecognizer",
    "get_registry",
    "rank_segmentations",
    "segmenter",
]
