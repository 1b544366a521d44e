"""Risk analysis utilities."""

from .bootstrap import BootstrapResult, ConfidenceInterval, bootstrap_var_es
from .risk_metrics import (
    cornish_fisher_var,
    expected_shortfall,
    historical_var,
    summarize_tail_risk,
    to_monetary,
)

__all__ = [
    "historical_var",
    "expected_shortfall",
    "cornish_fisher_var",
    "summarize_tail_risk",
    "to_monetary",
    "bootstrap_var_es",
    "BootstrapResult",
    "ConfidenceInterval",
]
