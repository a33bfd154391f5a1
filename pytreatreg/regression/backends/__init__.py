"""
Regression backends.

Available backends:
    CPUInverseBackend: explicit (X'X)⁻¹ normal-equations solve
    CPUCholeskyBackend: Cholesky-factor normal-equations solve
"""

from pytreatreg.regression.backends.cpu import CPUInverseBackend, CPUCholeskyBackend

__all__ = [
    "CPUInverseBackend",
    "CPUCholeskyBackend",
]
