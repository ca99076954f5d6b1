"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from olstoolkit import ObservationTable


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def simple_regression_data(rng):
    """Intercept plus two predictors, low noise."""
    n = 100
    X = np.column_stack([np.ones(n), rng.standard_normal((n, 2))])
    beta_true = np.array([1.0, -2.0, 0.5])
    y = X @ beta_true + rng.standard_normal(n) * 0.1
    return X, y, beta_true


@pytest.fixture
def collinear_data(rng):
    """Dataset with perfect collinearity (x3 = x1 + x2)."""
    n = 100
    x1 = rng.standard_normal(n)
    x2 = rng.standard_normal(n)
    x3 = x1 + x2
    X = np.column_stack([x1, x2, x3])
    y = rng.standard_normal(n)
    return X, y


@pytest.fixture
def wage_table(rng):
    """
    Wage data with a numeric and a categorical predictor.

    Two rows carry missing cells: row 3 lacks educ, row 7 lacks race.
    """
    n = 60
    races = np.array(["White", "Black", "Hispanic", "Other"])[np.arange(n) % 4]
    educ = rng.integers(8, 21, size=n).astype(float)
    effect = {"Black": 0.0, "Hispanic": 1.5, "Other": -1.0, "White": 3.0}
    wage = (
        5.0 + 1.2 * educ
        + np.array([effect[r] for r in races])
        + rng.standard_normal(n)
    )

    educ_col = list(educ)
    race_col = list(races)
    educ_col[3] = None
    race_col[7] = None
    return ObservationTable.from_columns(
        {"wage": list(wage), "educ": educ_col, "race": race_col},
        kinds={"wage": "numeric", "educ": "numeric", "race": "categorical"},
    )
