"""Tail-risk estimators over a return series.

Every metric is reported as a positive fractional loss: ``0.05`` means a 5%
loss over one period at the requested confidence level.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from ...validation import ensure_finite_array, ensure_finite_scalar, ensure_min_length
from ..statistics.moments import _kurtosis_excess, _mean, _skewness, _stddev
from ..statistics.normal import inv_norm_cdf
from ..statistics.quantile import _sorted_quantile


def tail_probability(confidence: float) -> float:
    """Lower-tail probability ``alpha = 1 - confidence`` clamped into ``[0, 1]``."""
    confidence = ensure_finite_scalar(confidence, "confidence")
    return max(0.0, min(1.0, 1.0 - confidence))


def historical_var(returns: Any, confidence: float) -> float:
    """Compute historical Value at Risk as ``-quantile(returns, 1 - confidence)``."""
    samples = ensure_finite_array(returns, "returns")
    return _historical_var(samples, tail_probability(confidence))


def expected_shortfall(returns: Any, confidence: float) -> float:
    """Compute Expected Shortfall: the mean loss of returns at or below the VaR quantile."""
    samples = ensure_finite_array(returns, "returns")
    return _expected_shortfall(samples, tail_probability(confidence))


def cornish_fisher_var(returns: Any, confidence: float) -> float:
    """Compute parametric VaR with a Cornish-Fisher adjusted normal quantile.

    The normal z-score of the lower tail is corrected for sample skewness
    ``s`` and excess kurtosis ``k``::

        z_adj = z + (z**2 - 1) s / 6 + (z**3 - 3z) k / 24 - (2z**3 - 5z) s**2 / 36

    and the loss is ``-(mean + z_adj * stddev)``. Requires at least four
    returns.
    """
    samples = ensure_finite_array(returns, "returns")
    ensure_min_length(samples, 4, "Kurtosis calculation requires at least 4 data points")
    return _cornish_fisher_var(samples, tail_probability(confidence))


def to_monetary(amount_pct: float, notional: float) -> float:
    """Convert a fractional loss into currency units of ``notional``."""
    return ensure_finite_scalar(amount_pct, "amount_pct") * ensure_finite_scalar(notional, "notional")


def summarize_tail_risk(returns: Any, confidence: float) -> dict[str, float]:
    """Return a dict containing historical VaR, ES and Cornish-Fisher VaR."""
    samples = ensure_finite_array(returns, "returns")
    ensure_min_length(samples, 4, "Kurtosis calculation requires at least 4 data points")
    alpha = tail_probability(confidence)
    return {
        "var_hist": _historical_var(samples, alpha),
        "es_hist": _expected_shortfall(samples, alpha),
        "var_cf": _cornish_fisher_var(samples, alpha),
    }


def _historical_var(samples: np.ndarray, alpha: float) -> float:
    return -_sorted_quantile(np.sort(samples), alpha)


def _expected_shortfall(samples: np.ndarray, alpha: float) -> float:
    threshold = _sorted_quantile(np.sort(samples), alpha)
    tail = samples[samples <= threshold]
    if tail.size == 0:
        return -threshold
    return -_mean(tail)


def _cornish_fisher_var(samples: np.ndarray, alpha: float) -> float:
    z = inv_norm_cdf(alpha)
    s = _skewness(samples)
    k = _kurtosis_excess(samples)
    z_adj = (
        z
        + (1 / 6) * (z * z - 1) * s
        + (1 / 24) * (z * z * z - 3 * z) * k
        - (1 / 36) * (2 * z * z * z - 5 * z) * s * s
    )
    return -(_mean(samples) + z_adj * _stddev(samples))
