from __future__ import annotations

import math
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

ReturnMethod = Literal["simple", "log"]


class BootstrapConfig(BaseModel):
    """Bootstrap resampling settings.

    ``samples`` and ``sample_size`` are clamped when the resampler runs
    (at least 100 draws, sample size within ``[20, n]``), so out-of-range
    values are accepted here.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    samples: int = Field(1000, description="Number of bootstrap resamples")
    sample_size: Optional[int] = Field(
        None, alias="sampleSize", description="Draws per resample, defaults to the series length"
    )
    ci: tuple[float, float] = Field(
        (0.05, 0.95), description="Lower and upper percentile of the confidence interval"
    )
    chunk_size: int = Field(
        250, gt=0, description="Resamples per independent random stream"
    )
    workers: int = Field(1, gt=0, description="Worker processes for the sampling loop")

    @field_validator("ci")
    @classmethod
    def _check_ci(cls, ci: tuple[float, float]) -> tuple[float, float]:
        lo, hi = ci
        if not (math.isfinite(lo) and math.isfinite(hi)):
            raise ValueError("ci bounds must be finite")
        if not 0.0 <= lo <= hi <= 1.0:
            raise ValueError("ci bounds must satisfy 0 <= lo <= hi <= 1")
        return ci


class RiskConfig(BaseModel):
    """Settings for a full risk report over one asset or a weighted portfolio."""

    confidence: float = Field(0.95, ge=0.5, le=0.999, description="VaR/ES confidence level")
    method: ReturnMethod = Field("log", description="Return calculation method")
    window: int = Field(
        252, ge=0, le=2000, description="Trailing window of returns to keep, 0 keeps all"
    )
    horizon_days: int = Field(1, ge=1, description="Holding period for square-root-of-time scaling")
    notional: Optional[float] = Field(
        None, gt=0, description="Position size used to express losses in currency"
    )
    bootstrap: Optional[BootstrapConfig] = None
    weights: dict[str, float] = Field(
        default_factory=dict, description="Portfolio weights by symbol, normalised when used"
    )

    @field_validator("window")
    @classmethod
    def _check_window(cls, window: int) -> int:
        if 0 < window < 20:
            raise ValueError("window must be 0 (disabled) or at least 20 returns")
        return window

    @field_validator("weights")
    @classmethod
    def _check_weights(cls, weights: dict[str, float]) -> dict[str, float]:
        for symbol, weight in weights.items():
            if not math.isfinite(weight):
                raise ValueError(f"weight for {symbol} must be finite")
        return weights
