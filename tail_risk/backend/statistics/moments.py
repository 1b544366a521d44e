"""Sample moment statistics over a numeric series."""

from __future__ import annotations

import math
from typing import Any

import numpy as np

from ...validation import ensure_finite_array, ensure_min_length


def mean(values: Any) -> float:
    """Arithmetic mean of a non-empty finite series."""
    return _mean(ensure_finite_array(values, "array"))


def stddev(values: Any) -> float:
    """Sample standard deviation with Bessel's correction (``n - 1``)."""
    array = ensure_finite_array(values, "array")
    ensure_min_length(array, 2, "Standard deviation requires at least 2 data points")
    return _stddev(array)


def skewness(values: Any) -> float:
    """Adjusted Fisher-Pearson standardized third moment.

    ``n / ((n - 1)(n - 2)) * sum(((x - mean) / s) ** 3)`` with ``s`` the
    sample standard deviation. A flat series has zero skew.
    """
    array = ensure_finite_array(values, "array")
    ensure_min_length(array, 3, "Skewness calculation requires at least 3 data points")
    return _skewness(array)


def kurtosis_excess(values: Any) -> float:
    """Bias-adjusted excess kurtosis.

    Computed as ``(n(n+1) * sum(z**4) - 3(n-1)**2) / ((n-1)(n-2)(n-3))``
    where ``z = (x - mean) / s``. A flat series returns 0.
    """
    array = ensure_finite_array(values, "array")
    ensure_min_length(array, 4, "Kurtosis calculation requires at least 4 data points")
    return _kurtosis_excess(array)


# The underscore variants take an already validated float64 array.


def _mean(array: np.ndarray) -> float:
    return float(np.sum(array) / array.size)


def _stddev(array: np.ndarray) -> float:
    deviations = array - _mean(array)
    variance = float(np.sum(deviations * deviations)) / (array.size - 1)
    return math.sqrt(max(variance, 0.0))


def _skewness(array: np.ndarray) -> float:
    n = array.size
    s = _stddev(array)
    if s == 0:
        return 0.0
    z = (array - _mean(array)) / s
    return (n / ((n - 1) * (n - 2))) * float(np.sum(z**3))


def _kurtosis_excess(array: np.ndarray) -> float:
    n = array.size
    s = _stddev(array)
    if s == 0:
        return 0.0
    z = (array - _mean(array)) / s
    sum4 = float(np.sum(z**4))
    return (n * (n + 1) * sum4 - 3 * (n - 1) ** 2) / ((n - 1) * (n - 2) * (n - 3))
