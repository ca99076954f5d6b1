"""
Tests for residual diagnostics: leverage, influence, Breusch-Pagan.
"""

import numpy as np
import pytest

from olstoolkit import ObservationTable
from olstoolkit.core.exceptions import DegenerateModelError
from olstoolkit.regression import breusch_pagan, fit, influence, leverage
from olstoolkit.regression import Design, ModelSpec
from olstoolkit.simulation import generate_linear


@pytest.fixture
def model(simple_regression_data):
    X, y, _ = simple_regression_data
    return fit(X, y)


class TestLeverage:

    def test_sums_to_p(self, model):
        assert leverage(model).sum() == pytest.approx(model.p)

    def test_matches_explicit_hat_matrix(self, model):
        X = model.design.X
        H = X @ np.linalg.inv(X.T @ X) @ X.T
        np.testing.assert_allclose(leverage(model), np.diag(H), rtol=1e-8)

    def test_bounded(self, model):
        h = leverage(model)
        assert np.all(h > 0) and np.all(h < 1)


class TestInfluence:

    def test_formulas(self, model):
        inf = influence(model)
        n, p = model.n, model.p
        e = model.residuals
        h = inf.hat
        sigma = np.sqrt(model.rss / (n - p))

        r = e / (sigma * np.sqrt(1 - h))
        np.testing.assert_allclose(inf.standardized_residuals, r, rtol=1e-10)
        np.testing.assert_allclose(inf.cooks_distance, r ** 2 * h / (p * (1 - h)), rtol=1e-10)

    def test_studentized_matches_leave_one_out(self, model):
        inf = influence(model)
        X, y = model.design.X, model.y
        i = 7
        keep = np.arange(model.n) != i
        loo = fit(X[keep], y[keep])
        sigma_i = loo.residual_std_error
        expected = model.residuals[i] / (sigma_i * np.sqrt(1 - inf.hat[i]))
        assert inf.studentized_residuals[i] == pytest.approx(expected, rel=1e-8)

    def test_outlier_stands_out(self, rng):
        x = rng.uniform(0, 10, size=40)
        y = 1.0 + 2.0 * x + rng.standard_normal(40) * 0.5
        y[5] += 10.0
        inf = influence(fit(Design.from_arrays(x, y, add_intercept=True)))
        assert int(np.argmax(np.abs(inf.studentized_residuals))) == 5
        assert int(np.argmax(inf.cooks_distance)) == 5

    def test_needs_two_residual_df(self):
        X = np.array([[1.0, 0.0], [1.0, 1.0], [1.0, 2.0]])
        model = fit(X, np.array([1.0, 2.5, 3.0]))
        with pytest.raises(DegenerateModelError, match="2 residual degrees"):
            influence(model)


class TestBreuschPagan:

    def test_detects_heteroscedasticity(self):
        data = generate_linear(1000, 1.0, 2.0, noise="heteroscedastic", seed=11)
        result = breusch_pagan(fit(Design.from_arrays(data.x, data.y, add_intercept=True)))
        assert result.df == 1
        assert result.p_value < 1e-3

    def test_heteroscedastic_statistic_larger(self):
        hetero = generate_linear(1000, 1.0, 2.0, noise="heteroscedastic", seed=3)
        const = generate_linear(1000, 1.0, 2.0, noise="constant", seed=3)
        bp_hetero = breusch_pagan(fit(Design.from_arrays(hetero.x, hetero.y, add_intercept=True)))
        bp_const = breusch_pagan(fit(Design.from_arrays(const.x, const.y, add_intercept=True)))
        assert bp_hetero.statistic > bp_const.statistic

    def test_statistic_is_n_r_squared(self, rng):
        x = rng.uniform(0, 5, size=200)
        y = x + rng.standard_normal(200) * (0.5 + x)
        model = fit(Design.from_arrays(x, y, add_intercept=True))
        e_sq = model.residuals ** 2
        Z = np.column_stack([np.ones(200), x])
        gamma, *_ = np.linalg.lstsq(Z, e_sq, rcond=None)
        r2 = 1 - np.sum((e_sq - Z @ gamma) ** 2) / np.sum((e_sq - e_sq.mean()) ** 2)
        assert breusch_pagan(model).statistic == pytest.approx(200 * r2, rel=1e-8)

    def test_intercept_only_model_rejected(self, rng):
        table = ObservationTable.from_columns({"y": rng.standard_normal(10)})
        model = fit(table, ModelSpec("y", []))
        with pytest.raises(DegenerateModelError, match="at least one regressor"):
            breusch_pagan(model)

    def test_explicit_ones_column_not_duplicated(self, model):
        result = breusch_pagan(model)
        assert result.df == 2
        assert 0.0 <= result.p_value <= 1.0
