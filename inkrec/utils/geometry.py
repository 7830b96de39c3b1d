"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import numpy as np
import shapely
from numpy.typing import NDArray


def distance(a: NDArray[np.float64], b: NDArray[np.float64]) -> float:
    return float(np.hypot(a[0] - b[0], a[1] - b[1]))


def bbox(points: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(points[:, 0])),
        float(np.min(points[:, 1])),
        float(np.max(points[:, 0])),
        float(np.max(points[:, 1])),
    )


def bbox_diagonal(points: NDArray[np.float64]) -> float:
    xmin, ymin, xmax, ymax = bbox(points)
    return float(np.hypot(xmax - xmin, ymax - ymin))


def arc_lengths(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Cumulative arc-length along a point sequence."""
    if len(points) == 0:
        return np.empty(0)
    diffs = np.diff(points, axis=0)
    segment_lengths = np.sqrt(np.sum(diffs**2, axis=1))
    return np.concatenate([[0.0], np.cumsum(segment_lengths)])


def point_segment_distances(
    points: NDArray[np.float64],
    a: NDArray[np.float64],
    b: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Distance from each point to the closed segment a-b."""
    if len(points) == 0:
        return np.empty(0)
    if a[0] == b[0] and a[1] == b[1]:
        return np.hypot(points[:, 0] - a[0], points[:, 1] - a[1])
    segment = shapely.linestrings(np.stack([a, b]))
    return np.asarray(shapely.distance(shapely.points(points), segment), dtype=np.float64)


def point_line_distances(
    points: NDArray[np.float64],
    a: NDArray[np.float64],
    b: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Perpendicular distance from each point to the infinite line through a and b.

    Falls back to point distance when a and b coincide.
    """
    if len(points) == 0:
        return np.empty(0)
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    length = float(np.hypot(dx, dy))
    if length < 1e-12:
        return np.hypot(points[:, 0] - a[0], points[:, 1] - a[1])
    cross = dx * (points[:, 1] - a[1]) - dy * (points[:, 0] - a[0])
    return np.abs(cross) / length


def squared_segment_error(
    points: NDArray[np.float64],
    a: NDArray[np.float64],
    b: NDArray[np.float64],
) -> float:
    """Sum of squared point-to-segment distances."""
    d = point_segment_distances(points, a, b)
    return float(np.sum(d**2))


def feature_area_to_segment(
    points: NDArray[np.float64],
    a: NDArray[np.float64],
    b: NDArray[np.float64],
) -> float:
    """Area swept between a polyline and the segment a-b.

    Each consecutive point pair contributes a trapezoid whose parallel sides are
    the two point-to-segment distances b1, b2 and whose height is the pair's
    spacing projected along the segment: h = sqrt(|d² − (b1 − b2)²|).
    """
    if len(points) < 2:
        return 0.0
    dists = point_segment_distances(points, a, b)
    b1 = dists[:-1]
    b2 = dists[1:]
    steps = np.diff(points, axis=0)
    d_sq = np.sum(steps**2, axis=1)
    h = np.sqrt(np.abs(d_sq - (b1 - b2) ** 2))
    return float(np.sum(np.abs(0.5 * (b1 + b2) * h)))


def is_line(
    start: int,
    end: int,
    points: NDArray[np.float64],
    path_lengths: NDArray[np.float64],
    threshold: float,
    size_threshold: float = 10.0,
    point_threshold: int = 5,
) -> bool:
    """Chord / path-length line test between two indices of a point sequence.

    Very short or sparsely sampled spans always pass.
    """
    path_distance = float(path_lengths[end] - path_lengths[start])
    if path_distance < size_threshold or end - start < point_threshold:
        return True
    chord = distance(points[start], points[end])
    return chord / path_distance > threshold


def resample(
    points: NDArray[np.float64],
    times: NDArray[np.int64],
    spacing: float,
) -> tuple[NDArray[np.float64], NDArray[np.int64]]:
    """Resample a polyline at uniform arc-length spacing ($1-recognizer style).

    Times are interpolated linearly alongside the coordinates. The first point
    is always kept; a trailing remainder shorter than ``spacing`` is dropped.
    """
    if len(points) < 2 or spacing <= 0:
        return points.copy(), times.copy()

    out_pts: list[tuple[float, float]] = [(float(points[0, 0]), float(points[0, 1]))]
    out_times: list[int] = [int(times[0])]

    prev = points[0].astype(np.float64)
    prev_t = float(times[0])
    accumulated = 0.0
    i = 1
    while i < len(points):
        cur = points[i]
        cur_t = float(times[i])
        d = distance(prev, cur)
        if d > 0 and accumulated + d >= spacing:
            frac = (spacing - accumulated) / d
            q = prev + frac * (cur - prev)
            q_t = prev_t + frac * (cur_t - prev_t)
            out_pts.append((float(q[0]), float(q[1])))
            out_times.append(int(round(q_t)))
            # q becomes the new previous point; cur is revisited
            prev = q
            prev_t = q_t
            accumulated = 0.0
        else:
            accumulated += d
            prev = cur
            prev_t = cur_t
            i += 1

    return np.array(out_pts, dtype=np.float64), np.array(out_times, dtype=np.int64)
