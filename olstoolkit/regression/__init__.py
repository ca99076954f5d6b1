"""
Ordinary least-squares linear regression.

Public API:
    Design.from_table(table, spec) -> Design
    fit(design) / fit(table, spec) / fit(X, y) -> FittedModel
    summarize(model) -> ModelSummary
    predict(model, new_data, level=None) -> Prediction
    influence(model) -> Influence
    breusch_pagan(model) -> BreuschPaganResult

Example:
    >>> from olstoolkit.regression import ModelSpec, Term, fit
    >>> spec = ModelSpec('wage', [Term('educ', center=True), Term.categorical('race')])
    >>> model = fit(table, spec)
    >>> model.summary().adjusted_r_squared
    >>> model.predict({'educ': [12, 16], 'race': ['White', 'Black']}, level=0.95)
"""

from olstoolkit.regression.specification import Term, ModelSpec
from olstoolkit.regression.design import Design, EncodingSchema, TermEncoding, INTERCEPT
from olstoolkit.regression.solution import FittedModel, LinearParams
from olstoolkit.regression.solvers import fit
from olstoolkit.regression.summary import ModelSummary, summarize
from olstoolkit.regression.prediction import Prediction, predict
from olstoolkit.regression.diagnostics import (
    Influence,
    BreuschPaganResult,
    leverage,
    influence,
    breusch_pagan,
)

__all__ = [
    "Term",
    "ModelSpec",
    "Design",
    "EncodingSchema",
    "TermEncoding",
    "INTERCEPT",
    "FittedModel",
    "LinearParams",
    "fit",
    "ModelSummary",
    "summarize",
    "Prediction",
    "predict",
    "Influence",
    "BreuschPaganResult",
    "leverage",
    "influence",
    "breusch_pagan",
]
