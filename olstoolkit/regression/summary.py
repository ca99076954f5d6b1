"""
Model summary: goodness of fit and coefficient inference.

    SST = Σ(yᵢ - ȳ)²          (Σyᵢ² for models without an intercept)
    SSE = Σeᵢ²
    R²  = 1 - SSE/SST
    R̄²  = 1 - (1 - R²)(n - 1)/(n - p)          (n in place of n - 1 without intercept)
    F   = ((SST - SSE)/(p - 1)) / (SSE/(n - p))  on (p - 1, n - p)

Information criteria share one constant so that comparisons between
models fitted here are valid. Both are built from the Gaussian log
likelihood evaluated at the MLE σ̂² = SSE/n:

    ℓ   = -n/2 · (ln(2π) + ln(SSE/n) + 1)
    AIC = -2ℓ + 2p  = n·ln(SSE/n) + 2p     + n(1 + ln 2π)
    BIC = -2ℓ + p·ln(n) = n·ln(SSE/n) + p·ln(n) + n(1 + ln 2π)

p counts the regression coefficients only (σ² is not counted), which
matches statsmodels' OLS results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray
from scipy import stats

from olstoolkit.core.exceptions import DegenerateModelError
from olstoolkit.core.validation import check_level

if TYPE_CHECKING:
    from olstoolkit.regression.solution import FittedModel


@dataclass(frozen=True)
class ModelSummary:
    """
    Read-only statistics derived from a FittedModel.

    f_statistic, f_df and f_p_value are None for an intercept-only model,
    where there is no regression to test.
    """
    n: int
    p: int
    column_names: tuple[str, ...]
    coefficients: NDArray[np.floating[Any]]
    standard_errors: NDArray[np.floating[Any]]
    t_statistics: NDArray[np.floating[Any]]
    p_values: NDArray[np.floating[Any]]
    rss: float
    tss: float
    df_residual: int
    residual_std_error: float
    r_squared: float
    adjusted_r_squared: float
    f_statistic: float | None
    f_df: tuple[int, int] | None
    f_p_value: float | None
    log_likelihood: float
    aic: float
    bic: float

    def conf_int(self, level: float = 0.95) -> NDArray[np.floating[Any]]:
        """
        Coefficient confidence intervals.

        Returns:
            (p, 2) array of lower and upper bounds
        """
        level = check_level(level)
        q = stats.t.ppf((1.0 + level) / 2.0, self.df_residual)
        half = q * self.standard_errors
        return np.column_stack([self.coefficients - half, self.coefficients + half])

    def __repr__(self) -> str:
        return (
            f"ModelSummary(n={self.n}, p={self.p}, r_squared={self.r_squared:.4f}, "
            f"adjusted_r_squared={self.adjusted_r_squared:.4f}, aic={self.aic:.4f})"
        )


def summarize(model: 'FittedModel') -> ModelSummary:
    """
    Compute the model summary.

    Args:
        model: A fitted model; its stored response is the original y

    Returns:
        ModelSummary

    Raises:
        DegenerateModelError: If p >= n (no residual degrees of freedom),
            or if the response has zero variance
    """
    n, p = model.n, model.p
    if p >= n:
        raise DegenerateModelError(
            f"Summary statistics are undefined when p >= n (n={n}, p={p})",
            n=n,
            p=p,
        )

    y = model.y
    if model.has_intercept:
        tss = float(np.sum((y - np.mean(y)) ** 2))
        df_model = p - 1
        n_adj = n - 1
    else:
        tss = float(y @ y)
        df_model = p
        n_adj = n

    if tss == 0.0:
        raise DegenerateModelError(
            "R-squared is undefined: the response has zero variance",
            n=n,
            p=p,
        )

    rss = model.rss
    df_resid = n - p
    sigma_sq = rss / df_resid

    r_squared = 1.0 - rss / tss
    adjusted_r_squared = 1.0 - (1.0 - r_squared) * n_adj / df_resid

    with np.errstate(divide='ignore', invalid='ignore'):
        if df_model > 0:
            f_statistic = float(((tss - rss) / df_model) / sigma_sq)
            f_df = (df_model, df_resid)
            f_p_value = float(stats.f.sf(f_statistic, df_model, df_resid))
        else:
            f_statistic = None
            f_df = None
            f_p_value = None

        standard_errors = np.sqrt(sigma_sq * np.diag(model.cov_unscaled))
        t_statistics = model.coefficients / standard_errors
        p_values = 2.0 * stats.t.sf(np.abs(t_statistics), df_resid)

        log_likelihood = float(-0.5 * n * (np.log(2.0 * np.pi) + np.log(rss / n) + 1.0))

    aic = -2.0 * log_likelihood + 2.0 * p
    bic = -2.0 * log_likelihood + p * np.log(n)

    return ModelSummary(
        n=n,
        p=p,
        column_names=model.column_names,
        coefficients=model.coefficients,
        standard_errors=standard_errors,
        t_statistics=t_statistics,
        p_values=p_values,
        rss=rss,
        tss=tss,
        df_residual=df_resid,
        residual_std_error=float(np.sqrt(sigma_sq)),
        r_squared=float(r_squared),
        adjusted_r_squared=float(adjusted_r_squared),
        f_statistic=f_statistic,
        f_df=f_df,
        f_p_value=f_p_value,
        log_likelihood=log_likelihood,
        aic=float(aic),
        bic=float(bic),
    )
