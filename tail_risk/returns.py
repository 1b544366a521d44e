from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Union

import numpy as np
import pandas as pd

from .data_models import ReturnMethod
from .errors import FinancialModelError
from .validation import ensure_finite_array, ensure_min_length

_METHODS = ("simple", "log")


def calculate_returns(prices: Any, method: ReturnMethod = "log") -> np.ndarray:
    """Compute period-over-period returns of an ordered price series.

    Args:
        prices: At least two positive, finite prices in time order.
        method: ``"simple"`` for ``(P_t - P_{t-1}) / P_{t-1}``, ``"log"`` for
            ``ln(P_t / P_{t-1})``.

    Returns:
        Array of ``len(prices) - 1`` returns.

    Raises:
        FinancialModelError: On fewer than two prices, non-finite values or a
            zero/negative price. A zero price is reported with its index
            rather than patched over.
    """
    if method not in _METHODS:
        raise FinancialModelError(
            f"unsupported return method: {method!r}, expected 'simple' or 'log'",
            code="invalid_method",
        )
    values = ensure_finite_array(prices, "values")
    ensure_min_length(values, 2, "Need at least 2 values to calculate returns")

    non_positive = np.flatnonzero(values <= 0)
    if non_positive.size:
        index = int(non_positive[0])
        if values[index] == 0:
            raise FinancialModelError(f"zero price at index {index}", code="zero_price")
        raise FinancialModelError(
            f"negative price at index {index}: {values[index]}", code="negative_price"
        )

    previous = values[:-1]
    current = values[1:]
    if method == "simple":
        return (current - previous) / previous
    return np.log(current / previous)


def portfolio_returns(
    price_series_by_symbol: Union[Mapping[str, Any], pd.DataFrame],
    weights_by_symbol: Mapping[str, float],
    method: ReturnMethod = "log",
) -> np.ndarray:
    """Weighted return series of a portfolio.

    ``price_series_by_symbol`` maps each symbol to its price series, or is a
    DataFrame with one price column per symbol. Symbols without a weight
    count as zero; weights are normalised to sum to one.
    """
    if not isinstance(weights_by_symbol, Mapping):
        raise FinancialModelError(
            "weights must be a mapping of symbol to weight", code="invalid_weights"
        )
    if isinstance(price_series_by_symbol, pd.DataFrame):
        series = {column: values.to_numpy() for column, values in price_series_by_symbol.items()}
    elif isinstance(price_series_by_symbol, Mapping):
        series = dict(price_series_by_symbol)
    else:
        raise FinancialModelError(
            "price series must be a mapping of symbol to prices or a DataFrame", code="not_array"
        )
    if not series:
        raise FinancialModelError("No assets provided", code="empty")

    symbols = list(series)
    prices = {symbol: ensure_finite_array(series[symbol], f"prices[{symbol}]") for symbol in symbols}
    lengths = [prices[symbol].size for symbol in symbols]
    if any(length != lengths[0] for length in lengths):
        raise FinancialModelError("All price series must have the same length", code="length_mismatch")

    weights = np.array([_weight(weights_by_symbol, symbol) for symbol in symbols], dtype=float)
    weight_sum = float(np.sum(weights))
    if not math.isfinite(weight_sum) or abs(weight_sum) < 1e-12:
        raise FinancialModelError("Weights must sum to non-zero", code="invalid_weights")
    normalized = weights / weight_sum

    asset_returns = np.vstack([calculate_returns(prices[symbol], method) for symbol in symbols])
    return normalized @ asset_returns


def trailing_window(returns: Any, window: int) -> np.ndarray:
    """Keep the last ``window`` returns; ``window <= 0`` keeps the whole series."""
    values = ensure_finite_array(returns, "returns", allow_empty=True)
    if window > 0 and values.size > window:
        return values[-window:]
    return values


def scale_to_horizon(returns: Any, horizon_days: float) -> np.ndarray:
    """Scale one-period returns to a multi-day horizon by ``sqrt(horizon_days)``."""
    values = ensure_finite_array(returns, "returns", allow_empty=True)
    return values * math.sqrt(max(1.0, float(horizon_days)))


def _weight(weights_by_symbol: Mapping[str, float], symbol: str) -> float:
    raw = weights_by_symbol.get(symbol, 0.0)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise FinancialModelError(
            f"weight for {symbol} must be a number, got: {raw!r}", code="invalid_weights"
        ) from exc
