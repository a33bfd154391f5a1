"""
Shared compute infrastructure for PyTreatReg.

This module provides timing utilities, tolerance tiers and linear algebra
kernels shared by the regression backends.

Submodules:
    timing: Wall-clock timing for fits and CLI runs
    tolerances: Numerical tolerance tiers
    linalg: Linear algebra kernels (matrix inversion, Cholesky solve)
"""

from pytreatreg.core.compute.timing import Timer

__all__ = [
    "Timer",
]
