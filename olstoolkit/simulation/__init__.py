"""
Synthetic data and simulation experiments.

Public API:
    generate_linear(n, intercept, slope, noise=..., seed=...) -> SyntheticDataset
    generate_irrelevant_covariates(n, k, seed=...) -> IrrelevantCovariates
    r_squared_inflation(n, max_predictors, step=..., seed=...) -> InflationStudy
"""

from olstoolkit.simulation.generators import (
    NOISE_MODELS,
    SyntheticDataset,
    IrrelevantCovariates,
    generate_linear,
    generate_irrelevant_covariates,
)
from olstoolkit.simulation.inflation import InflationStudy, r_squared_inflation

__all__ = [
    "NOISE_MODELS",
    "SyntheticDataset",
    "IrrelevantCovariates",
    "generate_linear",
    "generate_irrelevant_covariates",
    "InflationStudy",
    "r_squared_inflation",
]
