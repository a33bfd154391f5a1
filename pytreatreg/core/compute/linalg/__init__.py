"""
Linear algebra kernels for PyTreatReg.

All functions follow these conventions:
    - NumPy/SciPy (LAPACK under the hood)
    - Each operation returns a structured result dataclass
    - Errors are raised immediately with clear messages

Submodules:
    inverse: Gram matrix inversion (explicit and Cholesky)
"""

from pytreatreg.core.compute.linalg.inverse import (
    InverseResult,
    check_invertible,
    invert_cpu,
    cholesky_solve_cpu,
)

__all__ = [
    "InverseResult",
    "check_invertible",
    "invert_cpu",
    "cholesky_solve_cpu",
]
