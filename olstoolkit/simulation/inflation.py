"""
R-squared inflation under irrelevant covariates.

Fits nested models y ~ 1 + x₁ + ... + xₖ on data where no xⱼ is related
to y. R² can only grow as columns are added; adjusted R² pays for each
column and hovers around zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence
import numpy as np
from numpy.typing import NDArray

from olstoolkit.core.exceptions import ValidationError
from olstoolkit.core.validation import check_positive_int
from olstoolkit.regression.design import Design
from olstoolkit.regression.solvers import fit
from olstoolkit.regression.summary import summarize
from olstoolkit.simulation.generators import generate_irrelevant_covariates


@dataclass(frozen=True)
class InflationStudy:
    """
    R² and adjusted R² for each number of irrelevant predictors.

    Attributes:
        n_predictors: Predictor counts k (intercept not counted)
        r_squared: R² of the model with the first k predictors
        adjusted_r_squared: Adjusted R² of the same models
        n: Sample size
        seed: Seed of the simulated data
    """
    n_predictors: NDArray[np.int_]
    r_squared: NDArray[np.floating[Any]]
    adjusted_r_squared: NDArray[np.floating[Any]]
    n: int
    seed: int | None

    def at(self, k: int) -> tuple[float, float]:
        """(R², adjusted R²) for k predictors."""
        idx = np.flatnonzero(self.n_predictors == k)
        if len(idx) == 0:
            raise KeyError(k)
        i = int(idx[0])
        return float(self.r_squared[i]), float(self.adjusted_r_squared[i])


def r_squared_inflation(
    n: int = 1000,
    max_predictors: int = 300,
    *,
    step: int = 1,
    counts: Sequence[int] | None = None,
    seed: int | None = None,
) -> InflationStudy:
    """
    Run the inflation experiment on one simulated dataset.

    Args:
        n: Sample size
        max_predictors: Number of irrelevant predictors simulated
        step: Spacing of predictor counts (1, 1 + step, ..., always ending
            at max_predictors); ignored when counts is given
        counts: Explicit predictor counts to fit
        seed: Seed for the simulated data

    Returns:
        InflationStudy

    Raises:
        ValidationError: If the largest model would have p >= n
    """
    n = check_positive_int(n, 'n')
    max_predictors = check_positive_int(max_predictors, 'max_predictors')
    step = check_positive_int(step, 'step')
    if max_predictors + 1 >= n:
        raise ValidationError(
            f"max_predictors: need max_predictors + 1 < n, got {max_predictors} with n={n}"
        )

    if counts is None:
        ks = list(range(1, max_predictors + 1, step))
        if ks[-1] != max_predictors:
            ks.append(max_predictors)
    else:
        ks = sorted({check_positive_int(k, 'counts') for k in counts})
        if not ks:
            raise ValidationError("counts: expected at least one predictor count, got none")
        if ks[-1] > max_predictors:
            raise ValidationError(
                f"counts: {ks[-1]} exceeds max_predictors={max_predictors}"
            )

    data = generate_irrelevant_covariates(n, max_predictors, seed=seed)
    names = tuple(f"x{j + 1}" for j in range(max_predictors))

    r2 = np.empty(len(ks))
    adj = np.empty(len(ks))
    for i, k in enumerate(ks):
        design = Design.from_arrays(
            data.X[:, :k], data.y, column_names=names[:k], add_intercept=True,
        )
        summary = summarize(fit(design))
        r2[i] = summary.r_squared
        adj[i] = summary.adjusted_r_squared

    return InflationStudy(
        n_predictors=np.asarray(ks),
        r_squared=r2,
        adjusted_r_squared=adj,
        n=n,
        seed=seed,
    )
