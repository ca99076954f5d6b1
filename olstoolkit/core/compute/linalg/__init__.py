"""
Linear algebra kernels for the OLS Toolkit.

All functions use NumPy/SciPy (LAPACK under the hood), return structured
results, and raise immediately with clear messages.
"""

from olstoolkit.core.compute.linalg.qr import (
    QRResult,
    check_full_rank,
    qr_cpu,
    qr_solve_cpu,
    unscaled_covariance_cpu,
)

__all__ = [
    "QRResult",
    "check_full_rank",
    "qr_cpu",
    "qr_solve_cpu",
    "unscaled_covariance_cpu",
]
