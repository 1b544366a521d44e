"""Seeded return generators.

Synthetic return series with a known shape for optimisation harnesses and
tests. All draws come from the caller's generator.
"""
from __future__ import annotations

from typing import Callable

import numpy as np

from ...errors import FinancialModelError
from ...validation import ensure_finite_array

Shape = tuple[int, ...]


def _normal(params: dict, shape: Shape, rng: np.random.Generator) -> np.ndarray:
    missing = {"mean", "vol"} - set(params)
    if missing:
        raise FinancialModelError(
            f"normal distribution is missing {sorted(missing)}", code="invalid_params"
        )
    vol = float(params["vol"])
    if vol < 0:
        raise FinancialModelError("normal vol must be non-negative", code="invalid_params")
    return rng.normal(loc=float(params["mean"]), scale=vol, size=shape)


def _student_t(params: dict, shape: Shape, rng: np.random.Generator) -> np.ndarray:
    """Location-scale Student-t; ``vol`` is accepted as an alias of ``scale``."""
    df = float(params.get("df", 5.0))
    if df <= 0:
        raise FinancialModelError("student_t df must be positive", code="invalid_params")
    scale = float(params.get("scale", params.get("vol", 0.02)))
    return float(params.get("mean", 0.0)) + scale * rng.standard_t(df, size=shape)


def _empirical(params: dict, shape: Shape, rng: np.random.Generator) -> np.ndarray:
    if "historical_returns" not in params:
        raise FinancialModelError(
            'empirical_bootstrap requires "historical_returns"', code="invalid_params"
        )
    history = ensure_finite_array(params["historical_returns"], "historical_returns")
    return rng.choice(history, size=shape, replace=True)


_SAMPLERS: dict[str, Callable[[dict, Shape, np.random.Generator], np.ndarray]] = {
    "normal": _normal,
    "student_t": _student_t,
    "empirical_bootstrap": _empirical,
}


def generate_returns(
    dist_name: str,
    size: int | Shape,
    params: dict,
    rng: np.random.Generator,
) -> np.ndarray:
    """Draw returns from the named distribution.

    Args:
        dist_name: ``"normal"`` (``mean``, ``vol``), ``"student_t"`` (``df``,
            ``scale`` or ``vol``, ``mean``) or ``"empirical_bootstrap"``
            (``historical_returns``, resampled with replacement).
        size: Number of draws, or an output shape such as ``(trials, periods)``.
        params: Distribution parameters.
        rng: Random generator owning the draws.

    Raises:
        FinancialModelError: Unknown distribution or missing/invalid parameters.
    """
    sampler = _SAMPLERS.get(dist_name)
    if sampler is None:
        raise FinancialModelError(
            f"unsupported distribution: {dist_name}, expected one of {sorted(_SAMPLERS)}",
            code="invalid_params",
        )
    shape = size if isinstance(size, tuple) else (int(size),)
    return sampler(params, shape, rng)
