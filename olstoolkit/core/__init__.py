"""
Core infrastructure for the OLS Toolkit.

Shared abstractions and utilities used by the regression and simulation
submodules.

Key components:
    table: ObservationTable
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, tolerances, linear algebra kernels
"""

from olstoolkit.core.table import ObservationTable, NUMERIC, CATEGORICAL
from olstoolkit.core.result import Result
from olstoolkit.core.exceptions import (
    OLSToolkitError,
    ValidationError,
    DimensionError,
    SchemaError,
    SchemaMismatchError,
    InsufficientDataError,
    NumericalError,
    RankDeficiencyError,
    DegenerateModelError,
    MissingDataWarning,
)

__all__ = [
    # Data
    "ObservationTable",
    "NUMERIC",
    "CATEGORICAL",
    # Result
    "Result",
    # Exceptions
    "OLSToolkitError",
    "ValidationError",
    "DimensionError",
    "SchemaError",
    "SchemaMismatchError",
    "InsufficientDataError",
    "NumericalError",
    "RankDeficiencyError",
    "DegenerateModelError",
    "MissingDataWarning",
]
