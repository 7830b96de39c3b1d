"""Shared test fixtures."""

from __future__ import annotations

import pytest

from inkrec.models.stroke import Stroke


# Two perpendicular legs meeting at (100, 0), sampled every 2 units
L_SHAPE_COORDS = [(2.0 * k, 0.0) for k in range(51)] + [(100.0, 2.0 * m) for m in range(1, 51)]
L_SHAPE_CORNER = 50

STRAIGHT_COORDS = [(0.0, 0.0), (1.0, 1.0), (2.0, 2.0), (3.0, 3.0)]

# Horizontal line, 61 points 2 units apart
LONG_LINE_COORDS = [(2.0 * k, 10.0) for k in range(61)]

# Square-bracket shape: right, down, left with corners at indices 40 and 80
U_SHAPE_COORDS = (
    [(2.0 * k, 0.0) for k in range(41)]
    + [(80.0, 2.0 * m) for m in range(1, 41)]
    + [(80.0 - 2.0 * k, 80.0) for k in range(1, 41)]
)
U_SHAPE_CORNERS = (0, 40, 80, 120)


@pytest.fixture
def l_stroke() -> Stroke:
    return Stroke.from_xy(L_SHAPE_COORDS)


@pytest.fixture
def straight_stroke() -> Stroke:
    return Stroke.from_xy(STRAIGHT_COORDS)


@pytest.fixture
def line_stroke() -> Stroke:
    return Stroke.from_xy(LONG_LINE_COORDS)


@pytest.fixture
def u_stroke() -> Stroke:
    return Stroke.from_xy(U_SHAPE_COORDS)


@pytest.fixture
def empty_stroke() -> Stroke:
    return Stroke(())


@pytest.fixture
def single_point_stroke() -> Stroke:
    return Stroke.from_xy([(5.0, 5.0)])
