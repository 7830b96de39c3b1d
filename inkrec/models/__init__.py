"""Data model for ink analysis."""

from inkrec.models.segmentation import FeatureVector, Segmentation
from inkrec.models.stroke import CornerSet, Point, Stroke, is_valid_corner_set, normalize_corners

__all__ = [
    "CornerSet",
    "FeatureVector",
    "Point",
    "Segmentation",
    "Stroke",
    "is_valid_corner_set",
    "normalize_corners",
]
