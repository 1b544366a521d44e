import math

import numpy as np
import pytest
from scipy import stats

from tail_risk import FinancialModelError, inv_norm_cdf
from tail_risk.backend.statistics.normal import P_HIGH, P_LOW


def test_central_value_is_zero() -> None:
    assert inv_norm_cdf(0.5) == 0.0


@pytest.mark.parametrize(
    "p",
    [1e-10, 1e-6, 0.001, 0.01, 0.02, P_LOW, 0.05, 0.25, 0.5, 0.75, 0.95, P_HIGH, 0.98, 0.999, 1 - 1e-8],
)
def test_matches_reference_quantile_function(p: float) -> None:
    assert inv_norm_cdf(p) == pytest.approx(stats.norm.ppf(p), rel=1e-8, abs=1e-9)


def test_branch_cutoffs() -> None:
    assert P_LOW == 0.02425
    assert P_HIGH == pytest.approx(0.97575)


def test_well_known_z_scores() -> None:
    assert inv_norm_cdf(0.05) == pytest.approx(-1.6448536269514722, abs=1e-8)
    assert inv_norm_cdf(0.01) == pytest.approx(-2.3263478740408408, abs=1e-8)
    assert inv_norm_cdf(0.975) == pytest.approx(1.959963984540054, abs=1e-8)


def test_symmetry_and_monotonicity() -> None:
    grid = np.linspace(0.001, 0.999, 199)
    values = [inv_norm_cdf(float(p)) for p in grid]
    assert all(a < b for a, b in zip(values, values[1:]))
    for p in (0.001, 0.01, 0.1, 0.3):
        assert inv_norm_cdf(p) == pytest.approx(-inv_norm_cdf(1 - p), rel=1e-8)


def test_domain_edges() -> None:
    assert inv_norm_cdf(0.0) == -math.inf
    assert inv_norm_cdf(1.0) == math.inf
    with pytest.raises(FinancialModelError):
        inv_norm_cdf(1.5)
    with pytest.raises(FinancialModelError):
        inv_norm_cdf(math.nan)


@pytest.mark.parametrize("p", ["0.5", b"0.5", None, [0.5]])
def test_non_numeric_probability_is_rejected(p: object) -> None:
    with pytest.raises(FinancialModelError, match="p must be a number"):
        inv_norm_cdf(p)
