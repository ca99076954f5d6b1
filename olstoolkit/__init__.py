"""
OLS Toolkit: ordinary least-squares regression for Python.

Build a design matrix from a table of observations, fit it by pivoted QR,
and get structured summaries, predictions with intervals, and residual
diagnostics. Includes reproducible synthetic-data generators for testing
and for demonstrating R-squared inflation.

Submodules:
    core: Observation table, exceptions, validation, linear algebra
    regression: Design, fit, summary, prediction, diagnostics
    simulation: Synthetic data and the R-squared inflation study
"""

__version__ = "0.1.0"

from olstoolkit import core
from olstoolkit import regression
from olstoolkit import simulation

from olstoolkit.core.table import ObservationTable
from olstoolkit.regression import (
    Term,
    ModelSpec,
    Design,
    fit,
    summarize,
    predict,
    influence,
    breusch_pagan,
)

__all__ = [
    "__version__",
    "core",
    "regression",
    "simulation",
    "ObservationTable",
    "Term",
    "ModelSpec",
    "Design",
    "fit",
    "summarize",
    "predict",
    "influence",
    "breusch_pagan",
]
