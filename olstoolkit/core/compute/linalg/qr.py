"""
QR decomposition kernels.

Column-pivoted Householder QR via LAPACK (through SciPy). Pivoting orders
the columns so that |diag(R)| is non-increasing, which makes the numerical
rank readable from R and identifies which columns are linearly dependent
on the rest: they are the ones pivoted to the end.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import qr, solve_triangular

from olstoolkit.core.compute.tolerances import RANK_TOLERANCE_FACTOR
from olstoolkit.core.exceptions import RankDeficiencyError


@dataclass(frozen=True)
class QRResult:
    """
    Result of a column-pivoted QR decomposition X[:, pivot] = Q R.

    Attributes:
        Q: Orthonormal columns (n x k where k = min(n, p))
        R: Upper triangular factor (k x p)
        pivot: Column permutation (p,)
        rank: Numerical rank determined from the R diagonal
    """
    Q: NDArray[np.floating[Any]]
    R: NDArray[np.floating[Any]]
    pivot: NDArray[np.intp]
    rank: int

    @property
    def dependent_columns(self) -> tuple[int, ...]:
        """Original indices of the columns beyond the numerical rank."""
        return tuple(sorted(int(j) for j in self.pivot[self.rank:]))

    @property
    def condition_estimate(self) -> float:
        """Ratio of the largest to smallest |diag(R)|; a cheap cond(X) estimate."""
        diag_R = np.abs(np.diag(self.R))
        if len(diag_R) == 0 or diag_R[-1] == 0:
            return float('inf')
        return float(diag_R[0] / diag_R[-1])


def qr_cpu(X: NDArray[np.floating[Any]]) -> QRResult:
    """
    Pivoted economy QR decomposition using LAPACK.

    Args:
        X: Matrix to decompose (n x p)

    Returns:
        QRResult with Q, R, pivot and numerical rank
    """
    Q, R, pivot = qr(X, mode='economic', pivoting=True)

    diag_R = np.abs(np.diag(R))
    if len(diag_R) > 0 and diag_R[0] > 0:
        tol = RANK_TOLERANCE_FACTOR * max(X.shape) * np.finfo(X.dtype).eps * diag_R[0]
        rank = int(np.sum(diag_R > tol))
    else:
        rank = 0

    return QRResult(Q=Q, R=R, pivot=pivot, rank=rank)


def check_full_rank(
    qr_result: QRResult,
    p: int,
    column_names: tuple[str, ...] | None = None,
) -> None:
    """
    Raise RankDeficiencyError unless the decomposition has rank p.

    The error names the dependent columns so the caller can drop them.
    """
    if qr_result.rank >= p:
        return

    dependent = qr_result.dependent_columns
    names = tuple(column_names[j] for j in dependent) if column_names else ()
    shown = list(names) if names else list(dependent)
    raise RankDeficiencyError(
        f"Design matrix is rank-deficient: rank={qr_result.rank}, expected={p}. "
        f"Linearly dependent columns: {shown}",
        rank=qr_result.rank,
        expected_rank=p,
        dependent_columns=dependent,
        dependent_names=names,
        condition_number=qr_result.condition_estimate,
    )


def qr_solve_cpu(
    qr_result: QRResult,
    y: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """
    Solve least squares from a full-rank pivoted QR decomposition.

        X P = Q R
        β[P] = R⁻¹ Q'y

    Args:
        qr_result: Decomposition of X, assumed full column rank
        y: Response vector (n,)

    Returns:
        Coefficient vector β (p,) in the original column order
    """
    p = qr_result.R.shape[1]
    Qty = qr_result.Q.T @ y
    beta_pivoted = solve_triangular(qr_result.R[:p, :p], Qty[:p], lower=False)

    beta = np.empty(p, dtype=np.float64)
    beta[qr_result.pivot] = beta_pivoted
    return beta


def unscaled_covariance_cpu(qr_result: QRResult) -> NDArray[np.floating[Any]]:
    """
    (X'X)⁻¹ from the triangular factor, in the original column order.

    With X P = Q R, (X'X)⁻¹ = P R⁻¹ R⁻ᵀ Pᵀ. R⁻¹ comes from a triangular
    solve against the identity; X'X itself is never formed or inverted.
    """
    p = qr_result.R.shape[1]
    R_inv = solve_triangular(qr_result.R[:p, :p], np.eye(p), lower=False)
    cov_pivoted = R_inv @ R_inv.T

    cov = np.empty((p, p), dtype=np.float64)
    cov[np.ix_(qr_result.pivot, qr_result.pivot)] = cov_pivoted
    return cov
