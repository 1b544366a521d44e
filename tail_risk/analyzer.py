from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Union

import numpy as np
import pandas as pd

from .backend.risk.bootstrap import METRICS, BootstrapResult, RandomSource, bootstrap_var_es
from .backend.risk.risk_metrics import summarize_tail_risk, to_monetary
from .data_models import RiskConfig
from .returns import calculate_returns, portfolio_returns, scale_to_horizon, trailing_window

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RiskReport:
    """Tail-risk figures for one return series."""

    returns: np.ndarray = field(repr=False)  # windowed and horizon-scaled
    metrics: dict[str, float]
    config: RiskConfig
    bootstrap: Optional[BootstrapResult] = None

    def risk_metrics(self) -> dict[str, Any]:
        """Point estimates, intervals when bootstrapped, and monetary losses when a notional is set."""

        result: dict[str, Any] = dict(self.metrics)
        if self.bootstrap is not None:
            result["ci"] = {name: tuple(self.bootstrap.ci[name]) for name in METRICS}
        if self.config.notional is not None:
            result["monetary"] = {
                name: to_monetary(value, self.config.notional) for name, value in self.metrics.items()
            }
        return result

    def summary(self) -> pd.DataFrame:
        """Table indexed by metric, with interval and monetary columns when available."""

        if self.bootstrap is not None:
            df = self.bootstrap.summary()
        else:
            df = pd.DataFrame({"point": pd.Series(self.metrics)}).loc[list(METRICS)]
        if self.config.notional is not None:
            df["monetary"] = df["point"] * self.config.notional
        return df


class RiskAnalyzer:
    """Runs the full pipeline: returns, trailing window, horizon scaling, estimators and bootstrap."""

    def __init__(
        self,
        config: Optional[RiskConfig] = None,
        *,
        seed: Optional[int] = None,
        rng: RandomSource = None,
    ) -> None:
        self.config = config or RiskConfig()
        self.rng = np.random.default_rng(rng if rng is not None else seed)

    def run(self, prices: Any) -> RiskReport:
        """Risk report for a single price series."""

        returns = calculate_returns(prices, self.config.method)
        return self._analyze(returns)

    def run_portfolio(
        self,
        price_series_by_symbol: Union[Mapping[str, Any], pd.DataFrame],
        weights: Optional[Mapping[str, float]] = None,
    ) -> RiskReport:
        """Risk report for a weighted portfolio; weights default to the configured ones."""

        returns = portfolio_returns(
            price_series_by_symbol,
            weights if weights is not None else self.config.weights,
            self.config.method,
        )
        return self._analyze(returns)

    def _analyze(self, returns: np.ndarray) -> RiskReport:
        windowed = trailing_window(returns, self.config.window)
        scaled = scale_to_horizon(windowed, self.config.horizon_days)
        logger.debug(
            "analyzing %d returns (window=%d, horizon=%d, confidence=%.4f)",
            scaled.size,
            self.config.window,
            self.config.horizon_days,
            self.config.confidence,
        )

        bootstrap = None
        if self.config.bootstrap is not None:
            bootstrap = bootstrap_var_es(
                scaled, self.config.confidence, self.config.bootstrap, rng=self.rng
            )
            metrics = bootstrap.point_estimates()
        else:
            metrics = summarize_tail_risk(scaled, self.config.confidence)

        return RiskReport(returns=scaled, metrics=metrics, config=self.config, bootstrap=bootstrap)
