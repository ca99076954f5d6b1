"""
Regression backends.

Available backends:
    CPUQRBackend: CPU reference implementation using pivoted QR decomposition
"""

from olstoolkit.regression.backends.cpu import CPUQRBackend

__all__ = [
    "CPUQRBackend",
]
