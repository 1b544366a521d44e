"""Synthetic price series built by compounding generated returns."""
from __future__ import annotations

import numpy as np
import pandas as pd

from ...errors import FinancialModelError
from ..input_modeling.distributions import generate_returns


def generate_price_series(
    n_periods: int = 300,
    start_price: float = 100.0,
    dist_name: str = "normal",
    dist_params: dict | None = None,
    *,
    rng: np.random.Generator,
    start_date: str = "2020-01-01",
    name: str = "price",
) -> pd.Series:
    """Generate a price path of ``n_periods`` business days.

    Returns are drawn first and compounded from ``start_price``, so the
    resulting prices stay positive as long as every simple return is above -1.

    Example:
        >>> rng = np.random.default_rng(7)
        >>> prices = generate_price_series(100, rng=rng, dist_params={"mean": 0.001, "vol": 0.02})
        >>> len(prices)
        100
    """
    if n_periods < 1:
        raise FinancialModelError("n_periods must be at least 1", code="too_short")
    if not start_price > 0:
        raise FinancialModelError("start_price must be positive", code="invalid_params")
    if dist_params is None:
        dist_params = {"mean": 0.0005, "vol": 0.02}

    dates = pd.bdate_range(start=start_date, periods=n_periods)
    returns = generate_returns(dist_name=dist_name, size=n_periods, params=dist_params, rng=rng)
    prices = start_price * np.cumprod(1 + returns)
    return pd.Series(prices, index=dates, name=name)


def generate_price_frame(
    symbols: list[str],
    n_periods: int = 300,
    *,
    rng: np.random.Generator,
    dist_params: dict[str, dict] | None = None,
    start_price: float = 100.0,
) -> pd.DataFrame:
    """Independent synthetic price columns, one per symbol, on a shared index."""
    dist_params = dist_params or {}
    columns = {
        symbol: generate_price_series(
            n_periods,
            start_price,
            dist_params=dist_params.get(symbol),
            rng=rng,
            name=symbol,
        )
        for symbol in symbols
    }
    return pd.DataFrame(columns)
