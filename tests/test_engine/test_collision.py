"""Tests for the collision detector."""

import pytest

from inkrec.engine.collision import CollisionDetector, collides
from inkrec.engine.config import CollisionConfig
from inkrec.errors import InvalidArgumentError
from inkrec.models.stroke import Point, Stroke


@pytest.mark.parametrize("threshold,expected", [(0.5, False), (0.999, False), (1.0, True), (6.0, True)])
def test_point_pair_threshold(threshold, expected):
    assert collides(Point(0, 0), Point(1, 0), threshold) is expected


def test_default_threshold():
    assert collides(Point(0, 0), Point(5, 0))
    assert not collides(Point(0, 0), Point(7, 0))


def test_stroke_and_point():
    stroke = Stroke.from_xy([(0, 0), (10, 0), (20, 0), (30, 0), (40, 0)])
    assert collides(stroke, Point(31, 2))
    assert collides(Point(31, 2), stroke)
    assert not collides(stroke, Point(15, 20))


def test_crossing_strokes_share_a_point():
    horizontal = Stroke.from_xy([(x, 50) for x in range(0, 101, 10)])
    vertical = Stroke.from_xy([(50, y) for y in range(0, 101, 10)])
    assert collides(horizontal, vertical)


def test_far_apart_strokes():
    a = Stroke.from_xy([(x, 0) for x in range(0, 50, 5)])
    b = Stroke.from_xy([(x, 100) for x in range(0, 50, 5)])
    assert not collides(a, b)


def test_odd_length_strokes_checked_everywhere():
    a = Stroke.from_xy([(0, 0), (100, 0), (200, 0), (300, 0), (400, 0), (500, 0), (600, 0)])
    b = Stroke.from_xy([(1000, 0), (1100, 0), (601, 1)])
    assert collides(a, b)


def test_empty_strokes_never_collide(empty_stroke):
    assert not collides(empty_stroke, Point(0, 0))
    assert not collides(empty_stroke, empty_stroke)
    assert not collides(Stroke.from_xy([(0, 0)]), empty_stroke)


def test_detector_config():
    detector = CollisionDetector(CollisionConfig(point_threshold=20.0))
    assert detector.collides(Point(0, 0), Point(15, 0))
    assert not detector.collides(Point(0, 0), Point(15, 0), threshold=10.0)


def test_rejects_other_types():
    with pytest.raises(InvalidArgumentError):
        collides((0, 0), Point(0, 0))
