"""
Tolerance tiers for numerical validation.

Defines precision expectations for the CPU double-precision path:
- CPU FP64 (reference): machine-precision agreement

Used by the test suite for reference comparisons. Also holds the
rank-detection factor used by the QR kernel and the condition estimate
above which a fit carries a warning. These are the package's numerical
configuration; there are no config files.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Reference comparisons (round trips, closed forms, orthogonality)
CPU_FP64 = ToleranceTier(
    rtol=1e-9,
    atol=1e-10,
    name='cpu_fp64',
    description='CPU double precision',
)

# A column is treated as dependent when |R[j, j]| falls below
# RANK_TOLERANCE_FACTOR * max(n, p) * eps * |R[0, 0]|.
RANK_TOLERANCE_FACTOR = 1.0

# Full-rank fits above this condition estimate lose roughly half the
# significant digits of their coefficients.
CONDITION_WARNING_THRESHOLD = 1e8
