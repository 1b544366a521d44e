"""Bootstrap confidence intervals for the VaR/ES estimators."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from functools import partial
from typing import Any, NamedTuple, Union

import numpy as np
import pandas as pd
from pydantic import ValidationError

from ...data_models import BootstrapConfig
from ...errors import FinancialModelError
from ...validation import ensure_finite_array, ensure_min_length
from ..statistics.quantile import _sorted_quantile
from .risk_metrics import _cornish_fisher_var, _expected_shortfall, _historical_var, tail_probability

logger = logging.getLogger(__name__)

METRICS = ("var_hist", "es_hist", "var_cf")
MIN_SAMPLES = 100
MIN_SAMPLE_SIZE = 20

RandomSource = Union[np.random.Generator, np.random.SeedSequence, int, None]


class ConfidenceInterval(NamedTuple):
    lower: float
    upper: float


@dataclass(frozen=True)
class BootstrapResult:
    """Point estimates on the full series plus percentile intervals from the resamples."""

    var_hist: float
    es_hist: float
    var_cf: float
    ci: dict[str, ConfidenceInterval]
    samples: int
    sample_size: int
    draws: np.ndarray = field(repr=False)  # shape: (samples, 3), columns follow METRICS

    def point_estimates(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in METRICS}

    def summary(self) -> pd.DataFrame:
        """One row per metric with the point estimate and interval bounds."""
        rows = {
            name: {
                "point": getattr(self, name),
                "lower": self.ci[name].lower,
                "upper": self.ci[name].upper,
            }
            for name in METRICS
        }
        return pd.DataFrame.from_dict(rows, orient="index")

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.point_estimates(),
            "ci": {name: tuple(self.ci[name]) for name in METRICS},
        }


def resolve_bootstrap_config(config: Union[BootstrapConfig, Mapping[str, Any], None]) -> BootstrapConfig:
    """Accept a ``BootstrapConfig``, a plain mapping (``samples``, ``sampleSize``, ``ci``) or ``None``."""
    if config is None:
        return BootstrapConfig()
    if isinstance(config, BootstrapConfig):
        return config
    if not isinstance(config, Mapping):
        raise FinancialModelError("bootstrap options must be a mapping", code="invalid_config")
    try:
        return BootstrapConfig.model_validate(dict(config))
    except ValidationError as exc:
        raise FinancialModelError(f"invalid bootstrap options: {exc}", code="invalid_config") from exc


def bootstrap_var_es(
    returns: Any,
    confidence: float,
    config: Union[BootstrapConfig, Mapping[str, Any], None] = None,
    *,
    rng: RandomSource = None,
) -> BootstrapResult:
    """Resample ``returns`` with replacement and score every resample.

    Each resample is scored with historical VaR, Expected Shortfall and
    Cornish-Fisher VaR; the ``ci`` percentiles of those draws form the
    confidence intervals. Point estimates come from the full series.

    Args:
        returns: Return series.
        confidence: VaR/ES confidence level, e.g. 0.95.
        config: Bootstrap settings. ``samples`` is raised to at least 100 and
            ``sample_size`` is clamped to ``[20, n]``.
        rng: ``numpy.random.Generator`` or seed. The draws are split into
            fixed-size chunks, each with its own child stream spawned from
            this generator, so a given seed yields the same result for any
            number of workers. With ``workers > 1`` the chunks are scored
            in a process pool.

    Returns:
        ``BootstrapResult``; every value is ``nan`` when fewer than two
        returns are supplied.
    """
    settings = resolve_bootstrap_config(config)
    series = ensure_finite_array(returns, "returns", allow_empty=True)
    alpha = tail_probability(confidence)

    n = series.size
    num_samples = max(MIN_SAMPLES, int(settings.samples))
    requested_size = n if settings.sample_size is None else int(settings.sample_size)
    sample_size = max(MIN_SAMPLE_SIZE, min(n, requested_size))

    if n < 2:
        return _nan_result(num_samples, sample_size)

    ensure_min_length(series, 4, "Kurtosis calculation requires at least 4 data points")

    generator = np.random.default_rng(rng)
    chunk_sizes = _partition(num_samples, settings.chunk_size)
    streams = generator.spawn(len(chunk_sizes))
    logger.debug(
        "bootstrap: %d resamples of size %d from %d returns in %d chunks (workers=%d)",
        num_samples,
        sample_size,
        n,
        len(chunk_sizes),
        settings.workers,
    )

    score = partial(_score_chunk, series, alpha, sample_size)
    if settings.workers > 1 and len(chunk_sizes) > 1:
        with ProcessPoolExecutor(max_workers=settings.workers) as executor:
            parts = list(executor.map(score, chunk_sizes, streams))
    else:
        parts = [score(count, stream) for count, stream in zip(chunk_sizes, streams)]
    draws = np.vstack(parts)

    ci_lo, ci_hi = settings.ci
    ci: dict[str, ConfidenceInterval] = {}
    for column, name in enumerate(METRICS):
        ordered = np.sort(draws[:, column])
        ci[name] = ConfidenceInterval(
            _sorted_quantile(ordered, ci_lo), _sorted_quantile(ordered, ci_hi)
        )

    return BootstrapResult(
        var_hist=_historical_var(series, alpha),
        es_hist=_expected_shortfall(series, alpha),
        var_cf=_cornish_fisher_var(series, alpha),
        ci=ci,
        samples=num_samples,
        sample_size=sample_size,
        draws=draws,
    )


def _partition(total: int, chunk_size: int) -> list[int]:
    full, remainder = divmod(total, chunk_size)
    sizes = [chunk_size] * full
    if remainder:
        sizes.append(remainder)
    return sizes


def _score_chunk(
    series: np.ndarray,
    alpha: float,
    sample_size: int,
    count: int,
    rng: np.random.Generator,
) -> np.ndarray:
    scores = np.empty((count, len(METRICS)), dtype=float)
    for row in range(count):
        resample = series[rng.integers(0, series.size, size=sample_size)]
        scores[row] = (
            _historical_var(resample, alpha),
            _expected_shortfall(resample, alpha),
            _cornish_fisher_var(resample, alpha),
        )
    return scores


def _nan_result(num_samples: int, sample_size: int) -> BootstrapResult:
    nan_ci = ConfidenceInterval(math.nan, math.nan)
    return BootstrapResult(
        var_hist=math.nan,
        es_hist=math.nan,
        var_cf=math.nan,
        ci={name: nan_ci for name in METRICS},
        samples=num_samples,
        sample_size=sample_size,
        draws=np.empty((0, len(METRICS)), dtype=float),
    )
