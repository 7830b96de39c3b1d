"""Tests for the multivariate Gaussian and the per-class classifier."""

import math

import numpy as np
import pytest
from scipy.stats import multivariate_normal, norm

from inkrec.classifiers.gaussian import Gaussian, GaussianClassifier
from inkrec.errors import InvalidArgumentError, InvalidParametersError
from inkrec.models.segmentation import FeatureVector


class TestGaussian:
    def test_standard_normal_1d(self):
        g = Gaussian([0.0], [[1.0]])
        assert g.likelihood([1.0]) == pytest.approx(norm.pdf(1.0))
        assert g.inversion_strategy == "direct"

    def test_matches_scipy(self):
        mean = [1.0, -2.0]
        cov = [[2.0, 0.3], [0.3, 1.0]]
        g = Gaussian(mean, cov)
        x = [0.5, -1.0]
        assert g.likelihood(x) == pytest.approx(multivariate_normal(mean, cov).pdf(x))
        assert g.log_likelihood(x) == pytest.approx(multivariate_normal(mean, cov).logpdf(x))

    def test_identity_at_mean(self):
        g = Gaussian([0.0, 0.0], np.eye(2))
        assert g.likelihood([0.0, 0.0]) == pytest.approx(1 / (2 * math.pi))

    def test_zero_covariance_is_regularized(self):
        g = Gaussian([0.0, 0.0], np.zeros((2, 2)))
        value = g.likelihood([0.0, 0.0])
        assert math.isfinite(value)
        assert value > 0
        assert g.inversion_strategy == "ridge"

    def test_zero_covariance_far_from_mean(self):
        g = Gaussian([0.0, 0.0], np.zeros((2, 2)))
        value = g.likelihood([5.0, 5.0])
        assert math.isfinite(value)
        assert not math.isnan(value)

    def test_high_dimensional_zero_covariance(self):
        g = Gaussian(np.zeros(250), np.zeros((250, 250)))
        assert g.inversion_strategy not in ("direct", "ridge")
        value = g.likelihood(np.zeros(250))
        assert math.isfinite(value)
        assert value > 0

    def test_rank_deficient_covariance(self):
        g = Gaussian([0.0, 0.0], [[1.0, 1.0], [1.0, 1.0]])
        assert g.inversion_strategy != "direct"
        assert math.isfinite(g.likelihood([0.3, 0.1]))

    def test_covariance_setter_recomputes_inverse(self):
        g = Gaussian([0.0, 0.0], np.eye(2))
        g.covariance = 4 * np.eye(2)
        np.testing.assert_allclose(g.inverse_covariance, 0.25 * np.eye(2))
        assert g.log_determinant == pytest.approx(math.log(16.0))

    def test_mean_setter_keeps_inverse(self):
        g = Gaussian([0.0], [[1.0]])
        inverse = g.inverse_covariance
        g.mean = [2.0]
        assert g.inverse_covariance is inverse
        assert g.likelihood([2.0]) == pytest.approx(norm.pdf(0.0))

    def test_shape_mismatch(self):
        with pytest.raises(InvalidArgumentError):
            Gaussian([0.0, 0.0], np.eye(3))
        g = Gaussian([0.0, 0.0], np.eye(2))
        with pytest.raises(InvalidArgumentError):
            g.likelihood([1.0])

    def test_non_finite_covariance_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Gaussian([0.0], [[np.nan]])

    def test_fit(self):
        samples = np.array([[0.0, 0.0], [2.0, 0.0], [0.0, 2.0], [2.0, 2.0]])
        g = Gaussian.fit(samples)
        np.testing.assert_allclose(g.mean, [1.0, 1.0])
        np.testing.assert_allclose(g.covariance, np.cov(samples, rowvar=False))

    def test_fit_single_sample(self):
        g = Gaussian.fit([[1.0, 2.0]])
        np.testing.assert_allclose(g.covariance, np.zeros((2, 2)))
        assert math.isfinite(g.likelihood([1.0, 2.0]))


def _cluster(cx: float, cy: float, label: int) -> list[FeatureVector]:
    offsets = [(-0.3, -0.1), (0.2, 0.3), (0.1, -0.2), (-0.2, 0.25), (0.3, 0.0), (0.0, -0.3)]
    return [FeatureVector.from_values([cx + dx, cy + dy], label=label) for dx, dy in offsets]


@pytest.fixture
def training_set() -> list[FeatureVector]:
    return _cluster(0.0, 0.0, 0) + _cluster(10.0, 10.0, 1)


class TestGaussianClassifier:
    def test_predict(self, training_set):
        clf = GaussianClassifier().train(training_set)
        assert clf.labels == [0, 1]
        assert clf.predict(FeatureVector.from_values([0.1, 0.1])) == 0
        assert clf.predict([9.8, 10.2]) == 1

    def test_posteriors_sorted_and_normalized(self, training_set):
        results = GaussianClassifier().train(training_set).classify([0.0, 0.2])
        assert results[0].label == 0
        assert results[0].confidence >= results[1].confidence
        assert sum(r.confidence for r in results) == pytest.approx(1.0)

    def test_untrained(self):
        with pytest.raises(InvalidParametersError):
            GaussianClassifier().classify([0.0, 0.0])

    def test_mixed_lengths_rejected(self):
        vectors = [FeatureVector.from_values([0.0], label=0), FeatureVector.from_values([0.0, 1.0], label=1)]
        with pytest.raises(InvalidArgumentError):
            GaussianClassifier().train(vectors)

    def test_unlabeled_rejected(self):
        with pytest.raises(InvalidArgumentError):
            GaussianClassifier().train([FeatureVector.from_values([0.0])])

    def test_empty_training_set(self):
        with pytest.raises(InvalidArgumentError):
            GaussianClassifier().train([])

    def test_wrong_feature_count(self, training_set):
        clf = GaussianClassifier().train(training_set)
        with pytest.raises(InvalidArgumentError):
            clf.classify([0.0, 0.0, 0.0])
