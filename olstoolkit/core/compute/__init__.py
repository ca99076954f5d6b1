"""
Shared compute infrastructure for the OLS Toolkit.

Timing utilities, tolerance tiers, and linear algebra kernels shared by
the regression backends and the simulation module.

Submodules:
    timing: Execution timing utilities
    tolerances: Numerical tolerance tiers and rank tolerance
    linalg: Linear algebra kernels (pivoted QR, triangular solves)
"""

from olstoolkit.core.compute.timing import Timer

__all__ = [
    "Timer",
]
