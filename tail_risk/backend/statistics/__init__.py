"""Descriptive statistics used by the risk estimators."""

from .moments import kurtosis_excess, mean, skewness, stddev
from .normal import inv_norm_cdf
from .quantile import quantile

__all__ = ["mean", "stddev", "skewness", "kurtosis_excess", "quantile", "inv_norm_cdf"]
