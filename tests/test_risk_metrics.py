import numpy as np
import pytest

from tail_risk import (
    FinancialModelError,
    calculate_returns,
    cornish_fisher_var,
    expected_shortfall,
    historical_var,
    inv_norm_cdf,
    mean,
    quantile,
    stddev,
    summarize_tail_risk,
    to_monetary,
)
from tail_risk.backend.risk import risk_metrics


@pytest.fixture()
def normal_returns() -> np.ndarray:
    rng = np.random.default_rng(2024)
    return rng.normal(loc=0.0005, scale=0.015, size=750)


def test_historical_var_of_reference_prices() -> None:
    returns = calculate_returns([100, 102, 101, 105, 103], "log")
    assert historical_var(returns, 0.95) == -quantile(returns, 0.05)
    assert historical_var(returns, 0.95) > 0


def test_historical_var_is_monotone_in_confidence(normal_returns: np.ndarray) -> None:
    levels = [0.5, 0.8, 0.9, 0.95, 0.975, 0.99, 0.999]
    values = [historical_var(normal_returns, c) for c in levels]
    assert all(a <= b for a, b in zip(values, values[1:]))


def test_confidence_is_clamped() -> None:
    returns = [-0.03, 0.01, 0.02, -0.01]
    assert historical_var(returns, 1.5) == 0.03
    assert historical_var(returns, -1.0) == -0.02


def test_expected_shortfall_is_at_least_var(normal_returns: np.ndarray) -> None:
    for c in (0.9, 0.95, 0.99):
        assert expected_shortfall(normal_returns, c) >= historical_var(normal_returns, c)


def test_expected_shortfall_averages_the_tail() -> None:
    returns = [-0.05, -0.04, 0.0, 0.01, 0.02]
    # q = quantile at 0.25 -> rank 1 -> -0.04, tail = [-0.05, -0.04]
    assert expected_shortfall(returns, 0.75) == pytest.approx(0.045)


def test_cornish_fisher_reduces_to_normal_var_without_higher_moments(
    normal_returns: np.ndarray, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(risk_metrics, "_skewness", lambda _: 0.0)
    monkeypatch.setattr(risk_metrics, "_kurtosis_excess", lambda _: 0.0)
    expected = -(mean(normal_returns) + inv_norm_cdf(1 - 0.99) * stddev(normal_returns))
    assert cornish_fisher_var(normal_returns, 0.99) == expected


def test_cornish_fisher_of_flat_series_is_negative_mean() -> None:
    assert cornish_fisher_var([0.01] * 8, 0.95) == pytest.approx(-0.01)


def test_cornish_fisher_close_to_normal_var_for_gaussian_sample(normal_returns: np.ndarray) -> None:
    normal_var = -(mean(normal_returns) + inv_norm_cdf(0.05) * stddev(normal_returns))
    assert cornish_fisher_var(normal_returns, 0.95) == pytest.approx(normal_var, rel=0.1)


def test_cornish_fisher_penalises_negative_skew() -> None:
    rng = np.random.default_rng(5)
    base = rng.normal(0.0, 0.01, size=500)
    crashes = np.where(rng.random(500) < 0.03, -0.06, 0.0)
    skewed = base + crashes
    normal_var = -(mean(skewed) + inv_norm_cdf(0.01) * stddev(skewed))
    assert cornish_fisher_var(skewed, 0.99) > normal_var


def test_cornish_fisher_requires_four_returns() -> None:
    with pytest.raises(FinancialModelError, match="at least 4"):
        cornish_fisher_var([0.01, -0.02, 0.03], 0.95)


def test_estimators_reject_invalid_returns() -> None:
    with pytest.raises(FinancialModelError, match="cannot be empty"):
        historical_var([], 0.95)
    with pytest.raises(FinancialModelError, match=r"returns\[0\]"):
        expected_shortfall([np.nan, 0.01], 0.95)
    with pytest.raises(FinancialModelError):
        historical_var([0.01, 0.02], np.nan)


def test_summarize_tail_risk(normal_returns: np.ndarray) -> None:
    summary = summarize_tail_risk(normal_returns, 0.95)
    assert set(summary) == {"var_hist", "es_hist", "var_cf"}
    assert summary["var_hist"] == historical_var(normal_returns, 0.95)
    assert summary["es_hist"] == expected_shortfall(normal_returns, 0.95)
    assert summary["var_cf"] == cornish_fisher_var(normal_returns, 0.95)


def test_to_monetary() -> None:
    assert to_monetary(0.025, 1_000_000) == pytest.approx(25_000)
    with pytest.raises(FinancialModelError):
        to_monetary(0.02, float("inf"))
