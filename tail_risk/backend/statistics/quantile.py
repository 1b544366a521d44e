"""Linear-interpolated empirical quantile."""

from __future__ import annotations

import math
from typing import Any

import numpy as np

from ...validation import ensure_finite_array, ensure_finite_scalar


def quantile(values: Any, p: float) -> float:
    """Return the ``p``-quantile of ``values``, interpolating between order statistics.

    The fractional rank is ``(n - 1) * p``; the result is the weighted blend of
    the two neighbouring sorted elements. ``p`` is clamped into ``[0, 1]`` so
    the estimate never leaves ``[min, max]``. An empty series yields ``nan``.
    """
    array = ensure_finite_array(values, "array", allow_empty=True)
    if array.size == 0:
        return math.nan
    prob = ensure_finite_scalar(p, "p")
    return _sorted_quantile(np.sort(array), prob)


def _sorted_quantile(sorted_values: np.ndarray, p: float) -> float:
    """Quantile of an ascending, non-empty array."""
    p = min(max(p, 0.0), 1.0)
    rank = (sorted_values.size - 1) * p
    lo = math.floor(rank)
    hi = math.ceil(rank)
    if lo == hi:
        return float(sorted_values[lo])
    w = rank - lo
    return float(sorted_values[lo] * (1 - w) + sorted_values[hi] * w)
