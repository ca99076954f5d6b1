"""
Prediction from a fitted model.

New rows are re-encoded through the model's EncodingSchema (same centering
offsets, same categorical reference levels) before the coefficients are
applied. Interval bounds use Student's t with the model's residual degrees
of freedom:

    confidence:  ŷ₀ ± t · sqrt(σ̂² x₀'(X'X)⁻¹x₀)
    prediction:  ŷ₀ ± t · sqrt(σ̂² (1 + x₀'(X'X)⁻¹x₀))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray
from scipy import stats

from olstoolkit.core.exceptions import SchemaMismatchError, ValidationError
from olstoolkit.core.validation import check_level

if TYPE_CHECKING:
    from olstoolkit.regression.solution import FittedModel


IntervalKind = Literal['confidence', 'prediction']


@dataclass(frozen=True)
class Prediction:
    """
    Point predictions with optional interval bounds.

    lower, upper, level and interval are None unless a level was requested.
    standard_errors are those of the interval kind requested (of the mean
    response by default).
    """
    fitted: NDArray[np.floating[Any]]
    standard_errors: NDArray[np.floating[Any]] | None = None
    lower: NDArray[np.floating[Any]] | None = None
    upper: NDArray[np.floating[Any]] | None = None
    level: float | None = None
    interval: str | None = None

    def __len__(self) -> int:
        return len(self.fitted)


def predict(
    model: 'FittedModel',
    new_data: Any,
    *,
    level: float | None = None,
    interval: IntervalKind = 'confidence',
) -> Prediction:
    """
    Predict the response for new rows.

    Args:
        model: Fitted model
        new_data: Rows to predict for, in any form EncodingSchema.encode
            accepts (ObservationTable, mapping of columns, sequence of row
            mappings, DataFrame, or a 2D array for array-built designs)
        level: Confidence level in (0, 1); None for point predictions only
        interval: 'confidence' (mean response) or 'prediction' (new observation)

    Returns:
        Prediction

    Raises:
        SchemaMismatchError: If new_data cannot be encoded with the model's schema
        DegenerateModelError: If intervals are requested for a model with
            no residual degrees of freedom
    """
    if interval not in ('confidence', 'prediction'):
        raise ValidationError(
            f"interval: expected 'confidence' or 'prediction', got {interval!r}"
        )

    X_new = model.schema.encode(new_data)
    if X_new.shape[1] != len(model.coefficients):
        raise SchemaMismatchError(
            f"Encoded {X_new.shape[1]} columns but the model has "
            f"{len(model.coefficients)} coefficients"
        )

    fitted = X_new @ model.coefficients
    if level is None:
        return Prediction(fitted=fitted)

    level = check_level(level)
    sigma = model.residual_std_error
    leverage = np.einsum('ij,jk,ik->i', X_new, model.cov_unscaled, X_new)
    if interval == 'prediction':
        leverage = 1.0 + leverage
    se = sigma * np.sqrt(leverage)

    q = stats.t.ppf((1.0 + level) / 2.0, model.df_residual)
    return Prediction(
        fitted=fitted,
        standard_errors=se,
        lower=fitted - q * se,
        upper=fitted + q * se,
        level=level,
        interval=interval,
    )
