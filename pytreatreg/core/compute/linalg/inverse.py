"""
Gram matrix inversion.

Provides the two ways PyTreatReg turns X'X into (X'X)⁻¹:

    invert_cpu:     explicit inverse via LAPACK getrf/getri (NumPy)
    cholesky_solve_cpu: Cholesky factor X'X = LLᵀ (SciPy), then solve

Both refuse matrices whose reciprocal condition number falls below
SINGULAR_RCOND, since LAPACK only reports exact zero pivots and a
collinear design in floating point rarely produces one.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pytreatreg.core.exceptions import SingularMatrixError
from pytreatreg.core.compute.tolerances import SINGULAR_RCOND


@dataclass(frozen=True)
class InverseResult:
    """
    Result of inverting a symmetric positive (semi)definite matrix.
    
    Attributes:
        inverse: The inverse matrix (p x p)
        condition_number: 2-norm condition number of the input
        rank: Numerical rank of the input
    """
    inverse: NDArray[np.floating[Any]]
    condition_number: float
    rank: int


def check_invertible(A: NDArray[np.floating[Any]], name: str) -> tuple[float, int]:
    """
    Verify a square matrix is numerically invertible.
    
    Args:
        A: Square matrix
        name: Matrix name for error messages
        
    Returns:
        (condition_number, rank)
        
    Raises:
        SingularMatrixError: If A is rank-deficient or 1/cond(A) < SINGULAR_RCOND
    """
    p = A.shape[0]
    rank = int(np.linalg.matrix_rank(A))
    with np.errstate(divide='ignore', invalid='ignore'):
        cond = float(np.linalg.cond(A))
    
    if rank < p:
        reason = "rank-deficient; the predictors are perfectly collinear"
    elif not np.isfinite(cond) or 1.0 / cond < SINGULAR_RCOND:
        reason = (
            f"numerically singular; condition number exceeds {1.0 / SINGULAR_RCOND:.0e}"
        )
    else:
        return cond, rank

    raise SingularMatrixError(
        f"{name} is singular: rank={rank}, expected={p}, "
        f"condition number={cond:.3e} ({reason})",
        matrix_name=name,
        condition_number=cond,
        rank=rank,
        expected_rank=p,
    )


def invert_cpu(A: NDArray[np.floating[Any]], name: str = "X'X") -> InverseResult:
    """
    Explicit matrix inverse using LAPACK (via NumPy).
    
    Args:
        A: Square matrix to invert
        name: Matrix name for error messages
        
    Returns:
        InverseResult with the inverse and conditioning diagnostics
        
    Raises:
        SingularMatrixError: If A is singular or numerically singular
    """
    cond, rank = check_invertible(A, name)
    try:
        inverse = np.linalg.inv(A)
    except np.linalg.LinAlgError as e:
        raise SingularMatrixError(
            f"{name} is singular: {e}",
            matrix_name=name,
            condition_number=cond,
            rank=rank,
            expected_rank=A.shape[0],
        ) from e
    return InverseResult(inverse=inverse, condition_number=cond, rank=rank)


def cholesky_solve_cpu(
    A: NDArray[np.floating[Any]],
    b: NDArray[np.floating[Any]],
    name: str = "X'X",
) -> tuple[NDArray[np.floating[Any]], InverseResult]:
    """
    Solve A x = b through the Cholesky factor of A (SciPy).
    
    The inverse is formed from the same factor by solving against the
    identity, so the solution and the inverse share one factorization.
    
    Args:
        A: Symmetric positive definite matrix (p x p)
        b: Right-hand side (p,)
        name: Matrix name for error messages
        
    Returns:
        (x, InverseResult)
        
    Raises:
        SingularMatrixError: If A is singular or not positive definite
    """
    from scipy.linalg import cho_factor, cho_solve
    
    cond, rank = check_invertible(A, name)
    p = A.shape[0]
    try:
        factor = cho_factor(A, lower=True)
    except np.linalg.LinAlgError as e:
        raise SingularMatrixError(
            f"{name} is not positive definite: {e}",
            matrix_name=name,
            condition_number=cond,
            rank=rank,
            expected_rank=p,
        ) from e
    
    x = cho_solve(factor, b)
    inverse = cho_solve(factor, np.eye(p))
    return x, InverseResult(inverse=inverse, condition_number=cond, rank=rank)
