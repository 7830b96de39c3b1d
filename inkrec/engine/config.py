"""Analysis thresholds: injected constants, never discovered at runtime."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ShortStrawConfig:
    """Thresholds for the straw-length corner finder."""

    # Points on either side of a point used to measure its straw
    window: int = 3
    # Corners possible below this fraction of the median straw
    median_percentage: float = 0.95
    # Chord / path-length ratio a span must exceed to count as a line
    line_vs_arc_threshold: float = 0.95
    # Resampled points per bounding-box diagonal
    points_per_diagonal: float = 80.0
    # Hooks: corners closer than min(pct * diagonal, max) to an endpoint are dropped
    hook_pct_threshold: float = 0.1
    hook_max_threshold: float = 15.0
    # Shortest resample spacing we allow
    min_resample_spacing: float = 0.1
    # Strokes shorter than this (path length) are not segmented
    short_stroke_threshold: float = 20.0
    confidence: float = 0.8
    short_stroke_confidence: float = 0.95

    @property
    def min_points(self) -> int:
        return self.window * 3


@dataclass
class RaySquaredConfig:
    # Benefit must drop by more than this before a segment is closed
    improvement_tolerance: float = 1e-9
    confidence: float = 0.8


@dataclass
class DouglasPeuckerConfig:
    # Split when the farthest point is this fraction of the chord length away
    dist_offset_threshold: float = 0.10
    line_vs_arc_threshold: float = 0.92
    confidence: float = 0.8


@dataclass
class LineTestConfig:
    """Local thresholds for the chord / path-length line test."""

    # Spans shorter than this path length always pass
    size_threshold: float = 10.0
    # Spans with fewer index steps than this always pass
    point_threshold: int = 5


@dataclass
class KDEConfig:
    bandwidth: float = 4.0
    grid_spacing: float = 0.25
    padding_fraction: float = 0.10
    confidence: float = 0.8


@dataclass
class CombinerConfig:
    """Controls the feature-subset-selection search over candidate corners."""

    # Largest number of interior corners a final segmentation may have
    max_subset_size: int = 8
    # Candidate pools larger than this use sequential backward selection
    max_search_candidates: int = 12
    # Error growth factor that marks a corner as necessary
    elbow_ratio: float = 1.9887473405191085
    # Added to both sides of the elbow ratio so perfect fits compare sanely
    error_floor: float = 1e-6
    fss_name: str = "FSS"
    fss_confidence: float = 0.8


@dataclass
class CollisionConfig:
    point_threshold: float = 6.0


@dataclass
class GaussianConfig:
    # Added to the covariance diagonal on the first regularization attempt
    ridge: float = 1e-4
    # Scale (relative to the mean variance) of the structural fallback's ridge
    structural_scale: float = 1e-3
