"""inkrec: corner finding, segmentation ranking and statistical classification for digital ink."""

from inkrec.errors import (
    InkrecError,
    InvalidArgumentError,
    InvalidParametersError,
    RecognitionTimedOut,
)
from inkrec.models import FeatureVector, Point, Segmentation, Stroke

__version__ = "0.1.0"

__all__ = [
    "FeatureVector",
    "InkrecError",
    "InvalidArgumentError",
    "InvalidParametersError",
    "Point",
    "RecognitionTimedOut",
    "Segmentation",
    "Stroke",
]
