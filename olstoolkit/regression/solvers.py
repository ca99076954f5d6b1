"""
Solver dispatch for regression.

This module provides the fit() function (public API) and backend selection.
"""

from typing import Any, Literal
import warnings

from olstoolkit.core.table import ObservationTable
from olstoolkit.core.exceptions import MissingDataWarning, ValidationError
from olstoolkit.regression.design import Design
from olstoolkit.regression.specification import ModelSpec
from olstoolkit.regression.solution import FittedModel
from olstoolkit.regression.backends.cpu import CPUQRBackend


BackendChoice = Literal['auto', 'cpu', 'cpu_qr']


def fit(
    X: Design | ObservationTable | Any,
    y: ModelSpec | Any = None,
    *,
    backend: BackendChoice = 'auto',
) -> FittedModel:
    """
    Fit a linear regression model by ordinary least squares.

    Solves:
        min_β ||y - Xβ||²

    Accepted call forms:
        fit(design)            # a Design built with Design.from_table/from_arrays
        fit(table, spec)       # ObservationTable + ModelSpec
        fit(X, y)              # numeric arrays, X used as-is (no intercept added)

    Args:
        X: Design, ObservationTable, or design matrix (n x p)
        y: ModelSpec (with a table) or response vector (with arrays)
        backend: 'auto', 'cpu' or 'cpu_qr' (all select the CPU QR backend)

    Returns:
        FittedModel with coefficients, residuals, fitted values and the
        design they came from

    Raises:
        SchemaError: If the spec names columns the table lacks
        InsufficientDataError: If fewer complete rows remain than columns
        RankDeficiencyError: If the design columns are linearly dependent

    Example:
        >>> import numpy as np
        >>> from olstoolkit import ObservationTable, ModelSpec, Term, fit
        >>> table = ObservationTable.from_columns({'y': [3, 5, 7, 9], 'x': [1, 2, 3, 4]})
        >>> model = fit(table, ModelSpec('y', [Term('x')]))
        >>> np.round(model.coefficients, 6)
        array([1., 2.])
    """
    design = _as_design(X, y)
    if isinstance(X, ObservationTable):
        # Warn at the caller of fit()
        for message in design.warnings:
            warnings.warn(message, MissingDataWarning, stacklevel=2)

    backend_impl = _get_backend(backend)
    result = backend_impl.solve(design)
    return FittedModel(_result=result, _design=design)


def _as_design(X: Any, y: Any) -> Design:
    if isinstance(X, Design):
        if y is not None:
            raise ValidationError("y must be omitted when fitting a Design")
        return X
    if isinstance(X, ObservationTable):
        if not isinstance(y, ModelSpec):
            raise ValidationError(
                f"fitting a table requires a ModelSpec, got {type(y).__name__}"
            )
        return Design._build(X, y)
    if y is None:
        raise ValueError("y required when X is an array")
    return Design.from_arrays(X, y)


def _get_backend(choice: BackendChoice) -> CPUQRBackend:
    """
    Select and instantiate the backend.

    Raises:
        ValueError: If unknown backend specified
    """
    if choice in ('auto', 'cpu', 'cpu_qr'):
        return CPUQRBackend()
    raise ValueError(f"Unknown backend: {choice!r}")
