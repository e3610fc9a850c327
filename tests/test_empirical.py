"""Tests for quantized empirical CDF knots."""

import numpy as np
import pytest

from distributions.empirical import sampled_cdf


def test_every_distinct_value_kept_at_fine_resolution() -> None:
    data = np.array([1.0, 2.0, 3.0, 4.0])
    xs, ys = sampled_cdf(data, 0.01)
    assert xs == [1.0, 2.0, 3.0, 4.0]
    np.testing.assert_allclose(ys, [0.2, 0.4, 0.6, 0.8])


def test_duplicates_collapse_to_one_knot() -> None:
    data = np.array([1.0, 1.0, 1.0, 2.0, 3.0, 3.0])
    xs, ys = sampled_cdf(data, 0.01)
    assert xs == [1.0, 2.0, 3.0]
    np.testing.assert_allclose(ys, [3 / 7, 4 / 7, 6 / 7])


def test_largest_sample_never_reaches_one() -> None:
    xs, ys = sampled_cdf(np.arange(100, dtype=float), 0.1)
    assert ys[-1] == pytest.approx(100 / 101)
    assert xs[-1] == 99.0


def test_knots_thinned_to_quantile_resolution() -> None:
    data = np.sort(np.random.default_rng(0).random(100_000))
    xs, ys = sampled_cdf(data, 0.1)
    # first value, one knot per 0.1 of mass, and the last value
    assert 10 <= len(xs) <= 12
    assert np.all(np.diff(xs) > 0)
    assert np.all(np.diff(ys) > 0)
    steps = np.diff(ys[:-1])
    assert np.all(steps <= 0.1 + 1e-4)


def test_knot_count_independent_of_sample_count() -> None:
    rng = np.random.default_rng(1)
    small = sampled_cdf(np.sort(rng.random(5_000)), 0.05)[0]
    large = sampled_cdf(np.sort(rng.random(200_000)), 0.05)[0]
    assert abs(len(small) - len(large)) <= 1


def test_single_value() -> None:
    xs, ys = sampled_cdf(np.array([5.0, 5.0]), 0.1)
    assert xs == [5.0]
    assert ys == [pytest.approx(2 / 3)]


def test_empty() -> None:
    assert sampled_cdf(np.array([]), 0.1) == ([], [])
