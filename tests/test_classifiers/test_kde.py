"""Tests for the univariate KDE."""

import math

import numpy as np
import pytest
from scipy.integrate import trapezoid

from inkrec.classifiers.kde import KDEResult, local_maxima, univariate_kde
from inkrec.errors import InvalidArgumentError


def test_generated_grid():
    result = univariate_kde([0.0, 10.0], bandwidth=1.0)
    assert result.grid_generated
    assert result.grid[0] == pytest.approx(-1.0)
    assert result.grid[-1] >= 11.0 - 1e-9
    np.testing.assert_allclose(np.diff(result.grid), 0.25)
    assert len(result.density) == len(result.grid)


def test_explicit_grid():
    result = univariate_kde([0.0], bandwidth=2.0, grid=[0.0, 2.0])
    assert not result.grid_generated
    expected_peak = 1 / (2.0 * math.sqrt(2 * math.pi))
    assert result.density[0] == pytest.approx(expected_peak)
    assert result.density[1] == pytest.approx(expected_peak * math.exp(-0.5))


def test_empty_grid_is_generated():
    assert univariate_kde([1.0, 2.0], bandwidth=1.0, grid=[]).grid_generated


def test_density_integrates_to_one():
    samples = [2.0, 3.0, 7.0]
    grid = np.linspace(-20.0, 30.0, 5001)
    result = univariate_kde(samples, bandwidth=1.5, grid=grid)
    assert trapezoid(result.density, grid) == pytest.approx(1.0, abs=1e-6)


def test_single_repeated_sample():
    result = univariate_kde([4.0, 4.0], bandwidth=1.0)
    assert len(result) == 1
    assert result.grid[0] == 4.0


@pytest.mark.parametrize("bandwidth", [0.0, -1.0])
def test_bad_bandwidth(bandwidth):
    with pytest.raises(InvalidArgumentError):
        univariate_kde([1.0], bandwidth)


def test_no_samples():
    with pytest.raises(InvalidArgumentError):
        univariate_kde([], 1.0)


def test_local_maxima_two_clusters():
    result = univariate_kde([10.0, 10.0, 10.0, 40.0, 40.0], bandwidth=2.0)
    assert local_maxima(result) == pytest.approx([10.0, 40.0])


def test_local_maxima_plateau_counted_once():
    result = KDEResult(
        grid=np.arange(5, dtype=np.float64),
        density=np.array([0.0, 1.0, 1.0, 0.5, 0.0]),
        grid_generated=False,
    )
    assert local_maxima(result) == [1.0]
