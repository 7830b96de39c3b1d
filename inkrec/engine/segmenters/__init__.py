"""Corner-finding segmenters.

Each module registers its segmenter with ``@segmenter``:
  ShortStraw      straw-length minima on a resampled stroke
  RaySquared      chord-minus-error walk
  DouglasPeucker  farthest-point splitting
  KDEMerge        density peaks over the corners of the others
"""

from inkrec.engine.segmenters.base import Segmenter
from inkrec.engine.segmenters.douglas_peucker import DouglasPeuckerSegmenter
from inkrec.engine.segmenters.kde_merge import KDEMergeSegmenter
from inkrec.engine.segmenters.ray_squared import RaySquaredSegmenter
from inkrec.engine.segmenters.shortstraw import ShortStrawSegmenter

__all__ = [
    "DouglasPeuckerSegmenter",
    "KDEMergeSegmenter",
    "RaySquaredSegmenter",
    "Segmenter",
    "ShortStrawSegmenter",
]
