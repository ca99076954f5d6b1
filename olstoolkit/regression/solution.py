"""
Regression solution types.

Contains the parameter payload computed by backends and the user-facing
FittedModel wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from olstoolkit.core.exceptions import DegenerateModelError
from olstoolkit.core.result import Result

if TYPE_CHECKING:
    from olstoolkit.regression.design import Design, EncodingSchema
    from olstoolkit.regression.summary import ModelSummary
    from olstoolkit.regression.prediction import Prediction


@dataclass(frozen=True)
class LinearParams:
    """
    Parameter payload for linear regression.

    This is the immutable data computed by backends.
    """
    coefficients: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    rss: float
    rank: int
    df_residual: int
    cov_unscaled: NDArray[np.floating[Any]]


@dataclass(frozen=True)
class FittedModel:
    """
    User-facing result of an OLS fit.

    Wraps the backend Result together with the Design it was fitted on, so
    that summaries, predictions and diagnostics can reuse the same columns
    and encoding. Never mutated after creation.
    """
    _result: Result[LinearParams]
    _design: 'Design'

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        return self._result.params.coefficients

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.fitted_values

    @property
    def rss(self) -> float:
        """Residual sum of squares."""
        return self._result.params.rss

    @property
    def rank(self) -> int:
        return self._result.params.rank

    @property
    def df_residual(self) -> int:
        return self._result.params.df_residual

    @property
    def residual_std_error(self) -> float:
        """
        sqrt(RSS / (n - p)).

        Raises:
            DegenerateModelError: If there are no residual degrees of freedom
        """
        df = self.df_residual
        if df <= 0:
            raise DegenerateModelError(
                f"Residual standard error is undefined with {df} residual "
                f"degrees of freedom (n={self.n}, p={self.p})",
                n=self.n,
                p=self.p,
            )
        return float(np.sqrt(self.rss / df))

    @property
    def cov_unscaled(self) -> NDArray[np.floating[Any]]:
        """(X'X)⁻¹, formed from the QR factor."""
        return self._result.params.cov_unscaled

    @property
    def design(self) -> 'Design':
        return self._design

    @property
    def schema(self) -> 'EncodingSchema':
        return self._design.schema

    @property
    def column_names(self) -> tuple[str, ...]:
        return self._design.column_names

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """The response the model was fitted to."""
        return self._design.y

    @property
    def n(self) -> int:
        return self._design.n

    @property
    def p(self) -> int:
        return self._design.p

    @property
    def has_intercept(self) -> bool:
        return self._design.has_intercept

    @property
    def params(self) -> dict[str, float]:
        """Coefficients keyed by design column name."""
        return dict(zip(self.column_names, (float(b) for b in self.coefficients)))

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> 'ModelSummary':
        """Goodness-of-fit and coefficient inference; see summarize()."""
        from olstoolkit.regression.summary import summarize
        return summarize(self)

    def predict(self, new_data: Any, **kwargs: Any) -> 'Prediction':
        """Predict for new rows; see predict()."""
        from olstoolkit.regression.prediction import predict
        return predict(self, new_data, **kwargs)

    def __repr__(self) -> str:
        return (
            f"FittedModel(n={self.n}, p={self.p}, rank={self.rank}, "
            f"backend={self.backend_name!r})"
        )
