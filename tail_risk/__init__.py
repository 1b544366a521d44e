"""
Tail Risk - statistical risk engine for price and return series.

Converts price histories into returns and estimates tail losses:
1. Historical VaR and Expected Shortfall (empirical quantiles)
2. Cornish-Fisher VaR (skew/kurtosis adjusted normal quantile)
3. Bootstrap confidence intervals and portfolio aggregation
"""

import logging

from .analyzer import RiskAnalyzer, RiskReport
from .backend.risk import (
    BootstrapResult,
    ConfidenceInterval,
    bootstrap_var_es,
    cornish_fisher_var,
    expected_shortfall,
    historical_var,
    summarize_tail_risk,
    to_monetary,
)
from .backend.statistics import inv_norm_cdf, kurtosis_excess, mean, quantile, skewness, stddev
from .config import load_risk_config, parse_risk_config
from .data_models import BootstrapConfig, RiskConfig
from .errors import FinancialModelError
from .returns import calculate_returns, portfolio_returns, scale_to_horizon, trailing_window

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Statistics
    "mean",
    "stddev",
    "skewness",
    "kurtosis_excess",
    "quantile",
    "inv_norm_cdf",
    # Returns
    "calculate_returns",
    "portfolio_returns",
    "trailing_window",
    "scale_to_horizon",
    # Risk estimators
    "historical_var",
    "expected_shortfall",
    "cornish_fisher_var",
    "summarize_tail_risk",
    "to_monetary",
    "bootstrap_var_es",
    "BootstrapResult",
    "ConfidenceInterval",
    # Orchestration & configuration
    "RiskAnalyzer",
    "RiskReport",
    "BootstrapConfig",
    "RiskConfig",
    "load_risk_config",
    "parse_risk_config",
    "FinancialModelError",
]

__version__ = "0.1.0"
