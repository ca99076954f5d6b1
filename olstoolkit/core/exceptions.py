"""
Exception hierarchy for the OLS Toolkit.

All exceptions inherit from OLSToolkitError so that any library-specific
error can be caught in one place. Input problems derive from
ValidationError; problems that only show up once the numbers are crunched
derive from NumericalError.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class OLSToolkitError(Exception):
    """Base exception for all OLS Toolkit errors."""
    pass


class ValidationError(OLSToolkitError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class SchemaError(ValidationError):
    """
    A requested column is absent from the observation table or has the
    wrong kind for the way it is used.

    Attributes:
        column: The offending column name
        available: Column names that were available, if known
    """

    def __init__(
        self,
        message: str,
        column: str | None = None,
        available: tuple[str, ...] | None = None,
    ):
        super().__init__(message)
        self.column = column
        self.available = available


class SchemaMismatchError(SchemaError):
    """
    New data cannot be encoded with the schema a model was fitted under.

    Raised by prediction when a column is absent, a cell is missing,
    a categorical level was never seen during fitting, or the number of
    encoded columns differs from the number of coefficients.

    Attributes:
        column: The offending column name, if the problem is column-specific
        row: Index of the offending row, if the problem is row-specific
    """

    def __init__(
        self,
        message: str,
        column: str | None = None,
        row: int | None = None,
    ):
        super().__init__(message, column=column)
        self.row = row


class InsufficientDataError(ValidationError):
    """
    Too few complete observations remain to build the design.

    Attributes:
        n_complete: Number of complete rows after missing-row removal
        n_required: Number of rows needed (the number of design columns)
        n_dropped: Number of rows removed because of missing values
    """

    def __init__(
        self,
        message: str,
        n_complete: int,
        n_required: int,
        n_dropped: int = 0,
    ):
        super().__init__(message)
        self.n_complete = n_complete
        self.n_required = n_required
        self.n_dropped = n_dropped


class NumericalError(OLSToolkitError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class RankDeficiencyError(NumericalError):
    """
    Design matrix columns are linearly dependent.

    Raised when the coefficients are not identifiable, or when the
    decomposition produced non-finite coefficients.

    Attributes:
        rank: Numerical rank of the design matrix
        expected_rank: Number of design columns
        dependent_columns: Indices of the columns found to be linearly
            dependent on the others (pivoted out by the QR decomposition)
        dependent_names: Names of those columns, when the design knows them
        condition_number: Estimated condition number of X, if available
    """

    def __init__(
        self,
        message: str,
        rank: int | None = None,
        expected_rank: int | None = None,
        dependent_columns: tuple[int, ...] = (),
        dependent_names: tuple[str, ...] = (),
        condition_number: float | None = None,
    ):
        super().__init__(message)
        self.rank = rank
        self.expected_rank = expected_rank
        self.dependent_columns = dependent_columns
        self.dependent_names = dependent_names
        self.condition_number = condition_number


class DegenerateModelError(NumericalError):
    """
    A statistic is undefined for this model.

    Raised when the model has no residual degrees of freedom (p >= n),
    or when the response has zero variance so that R-squared is undefined.
    These quantities are undefined, not zero.

    Attributes:
        n: Number of observations
        p: Number of design columns
    """

    def __init__(self, message: str, n: int | None = None, p: int | None = None):
        super().__init__(message)
        self.n = n
        self.p = p


class MissingDataWarning(UserWarning):
    """Rows were excluded from a design because of missing values."""
    pass
