import math

import numpy as np
import pytest

from tail_risk import FinancialModelError, quantile


def test_quantile_bounds_are_min_and_max() -> None:
    xs = [0.3, -1.2, 4.5, 0.0, 2.2]
    assert quantile(xs, 0) == min(xs)
    assert quantile(xs, 1) == max(xs)


def test_quantile_median_of_odd_series() -> None:
    assert quantile([5.0, 1.0, 3.0, 9.0, 7.0], 0.5) == 5.0


def test_quantile_interpolates_linearly() -> None:
    assert quantile([1.0, 2.0, 3.0, 4.0], 0.5) == pytest.approx(2.5)
    # rank = 3 * 0.1 = 0.3 -> 1 * 0.7 + 2 * 0.3
    assert quantile([4.0, 3.0, 2.0, 1.0], 0.1) == pytest.approx(1.3)


def test_quantile_matches_numpy_linear_method() -> None:
    rng = np.random.default_rng(11)
    xs = rng.normal(size=97)
    for p in (0.01, 0.05, 0.33, 0.5, 0.9, 0.975):
        assert quantile(xs, p) == pytest.approx(np.quantile(xs, p), rel=1e-12, abs=1e-15)


def test_quantile_never_extrapolates() -> None:
    xs = [1.0, 2.0, 3.0]
    assert quantile(xs, 1.5) == 3.0
    assert quantile(xs, -0.5) == 1.0


def test_quantile_of_empty_series_is_nan() -> None:
    assert math.isnan(quantile([], 0.5))


def test_quantile_rejects_bad_input() -> None:
    with pytest.raises(FinancialModelError):
        quantile([1.0, math.nan], 0.5)
    with pytest.raises(FinancialModelError):
        quantile([1.0, 2.0], math.nan)


def test_quantile_does_not_sort_input_in_place() -> None:
    xs = np.array([3.0, 1.0, 2.0])
    quantile(xs, 0.5)
    assert xs.tolist() == [3.0, 1.0, 2.0]
