"""
CPU reference backend for linear regression.

Uses column-pivoted QR decomposition via LAPACK (through SciPy) to solve
the least-squares problem. X'X is never formed or inverted.
"""

from typing import Any
import numpy as np

from olstoolkit.core.result import Result
from olstoolkit.core.compute.timing import Timer
from olstoolkit.core.compute.tolerances import CONDITION_WARNING_THRESHOLD
from olstoolkit.core.compute.linalg.qr import (
    check_full_rank,
    qr_cpu,
    qr_solve_cpu,
    unscaled_covariance_cpu,
)
from olstoolkit.core.exceptions import RankDeficiencyError
from olstoolkit.regression.design import Design
from olstoolkit.regression.solution import LinearParams


class CPUQRBackend:
    """
    CPU backend using pivoted QR decomposition.

    Stateless: every solve() is a pure function of the design, so
    independent fits may run concurrently.
    """

    @property
    def name(self) -> str:
        return 'cpu_qr'

    def solve(self, design: Design) -> Result[LinearParams]:
        """
        Solve OLS via QR decomposition.

        Algorithm:
            1. Pivoted QR: X P = Q R, numerical rank from diag(R)
            2. Refuse rank-deficient X, naming the dependent columns
            3. Solve: β[P] = R⁻¹ Q'y
            4. Fitted values, residuals, (X'X)⁻¹ = P R⁻¹ R⁻ᵀ Pᵀ

        Raises:
            RankDeficiencyError: If X is rank-deficient or the solve
                produced non-finite coefficients
        """
        timer = Timer()
        timer.start()

        X = design.X
        y = design.y
        n, p = design.n, design.p

        with timer.section('qr_decomposition'):
            qr_result = qr_cpu(X)

        check_full_rank(qr_result, p, design.column_names)

        with timer.section('solve'):
            coefficients = qr_solve_cpu(qr_result, y)

        if not np.all(np.isfinite(coefficients)):
            raise RankDeficiencyError(
                "QR solve produced non-finite coefficients; the design is "
                "numerically singular",
                rank=qr_result.rank,
                expected_rank=p,
                condition_number=qr_result.condition_estimate,
            )

        with timer.section('residuals'):
            fitted_values = X @ coefficients
            residuals = y - fitted_values
            rss = float(residuals @ residuals)

        with timer.section('covariance'):
            cov_unscaled = unscaled_covariance_cpu(qr_result)

        timer.stop()

        warnings = design.warnings
        condition = qr_result.condition_estimate
        if condition > CONDITION_WARNING_THRESHOLD:
            warnings = warnings + (
                f"Design matrix is ill-conditioned (condition estimate {condition:.3g}); "
                f"coefficients may be inaccurate",
            )

        params = LinearParams(
            coefficients=coefficients,
            residuals=residuals,
            fitted_values=fitted_values,
            rss=rss,
            rank=qr_result.rank,
            df_residual=n - p,
            cov_unscaled=cov_unscaled,
        )

        info: dict[str, Any] = {
            'method': 'qr',
            'rank': qr_result.rank,
            'pivot': qr_result.pivot.tolist(),
            'condition_estimate': condition,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=warnings,
        )
