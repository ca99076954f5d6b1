"""
Residual diagnostics.

Numeric counterparts of the usual regression diagnostic plots: leverage,
standardized and externally studentized residuals, Cook's distance, and
the Breusch-Pagan test for heteroscedasticity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray
from scipy import stats

from olstoolkit.core.exceptions import DegenerateModelError

if TYPE_CHECKING:
    from olstoolkit.regression.solution import FittedModel


@dataclass(frozen=True)
class Influence:
    """
    Per-observation influence measures.

    Attributes:
        hat: Leverage hᵢ, the diagonal of X(X'X)⁻¹X'
        standardized_residuals: eᵢ / (σ̂ sqrt(1 - hᵢ))
        studentized_residuals: eᵢ / (σ̂₍ᵢ₎ sqrt(1 - hᵢ)), σ̂₍ᵢ₎ leaving row i out
        cooks_distance: rᵢ² hᵢ / (p (1 - hᵢ))
    """
    hat: NDArray[np.floating[Any]]
    standardized_residuals: NDArray[np.floating[Any]]
    studentized_residuals: NDArray[np.floating[Any]]
    cooks_distance: NDArray[np.floating[Any]]


@dataclass(frozen=True)
class BreuschPaganResult:
    """Studentized (Koenker) Breusch-Pagan test: n·R² of e² on X."""
    statistic: float
    df: int
    p_value: float


def leverage(model: 'FittedModel') -> NDArray[np.floating[Any]]:
    """Diagonal of the hat matrix; sums to p."""
    X = model.design.X
    return np.einsum('ij,jk,ik->i', X, model.cov_unscaled, X)


def influence(model: 'FittedModel') -> Influence:
    """
    Compute leverage, scaled residuals and Cook's distance.

    Rows with leverage 1 get NaN scaled residuals and distances.

    Raises:
        DegenerateModelError: If n - p < 2 (no leave-one-out variance)
    """
    n, p = model.n, model.p
    if n - p < 2:
        raise DegenerateModelError(
            f"Influence measures need at least 2 residual degrees of freedom "
            f"(n={n}, p={p})",
            n=n,
            p=p,
        )

    h = leverage(model)
    e = model.residuals
    sigma = model.residual_std_error

    with np.errstate(divide='ignore', invalid='ignore'):
        one_minus_h = 1.0 - h
        standardized = e / (sigma * np.sqrt(one_minus_h))

        # Leave-one-out variance: (RSS - eᵢ²/(1 - hᵢ)) / (n - p - 1)
        s_loo_sq = (model.rss - e ** 2 / one_minus_h) / (n - p - 1)
        studentized = e / np.sqrt(s_loo_sq * one_minus_h)

        cooks = standardized ** 2 * h / (p * one_minus_h)

    nonfinite = ~np.isfinite(one_minus_h) | (one_minus_h <= 0)
    for arr in (standardized, studentized, cooks):
        arr[nonfinite] = np.nan

    return Influence(
        hat=h,
        standardized_residuals=standardized,
        studentized_residuals=studentized,
        cooks_distance=cooks,
    )


def breusch_pagan(model: 'FittedModel') -> BreuschPaganResult:
    """
    Breusch-Pagan test of constant residual variance.

    Regresses the squared residuals on the model's design columns (plus
    an intercept if no design column is constant); LM = n·R², chi-squared on the
    number of non-constant regressors.

    Raises:
        DegenerateModelError: If the model has no non-constant regressor
            or the squared residuals are constant
    """
    from olstoolkit.regression.solvers import fit

    X = model.design.X
    n = model.n
    has_constant = model.has_intercept or bool(np.any(np.ptp(X, axis=0) == 0))
    if not has_constant:
        X = np.column_stack([np.ones(n), X])
    df = X.shape[1] - 1
    if df < 1:
        raise DegenerateModelError(
            "Breusch-Pagan test needs at least one regressor besides the intercept",
            n=n,
            p=model.p,
        )

    e_sq = model.residuals ** 2
    tss = float(np.sum((e_sq - e_sq.mean()) ** 2))
    if tss == 0.0:
        raise DegenerateModelError(
            "Breusch-Pagan test is undefined: squared residuals are constant",
            n=n,
            p=model.p,
        )

    auxiliary = fit(X, e_sq)
    r_squared = 1.0 - auxiliary.rss / tss
    statistic = float(n * r_squared)
    return BreuschPaganResult(
        statistic=statistic,
        df=df,
        p_value=float(stats.chi2.sf(statistic, df)),
    )
