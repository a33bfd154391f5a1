"""
CPU backends for the treatment regression.

Both backends solve the normal equations (X'X) β = X'y and return the
same FitParams payload; they differ only in how X'X is handled.

    CPUInverseBackend:  β = (X'X)⁻¹ X'y with an explicit inverse.
                        Reference behavior, reproduces prior outputs.
    CPUCholeskyBackend: X'X = LLᵀ, β from two triangular solves.
"""

import logging
from typing import Any

from pytreatreg.core.result import Result
from pytreatreg.core.compute.timing import Timer
from pytreatreg.core.compute.tolerances import ILL_CONDITIONED_THRESHOLD, select_tolerance
from pytreatreg.core.compute.linalg.inverse import InverseResult, invert_cpu, cholesky_solve_cpu
from pytreatreg.regression.design import Design
from pytreatreg.regression.solution import FitParams

logger = logging.getLogger(__name__)


class CPUInverseBackend:
    """
    CPU backend using the explicit Gram inverse.
    
    Implements the Backend protocol for Design -> FitParams.
    """
    
    @property
    def name(self) -> str:
        return 'cpu_inverse'
    
    def solve(self, design: Design) -> Result[FitParams]:
        """
        Solve OLS through the inverted normal equations.
        
        Algorithm:
            1. Form X'X and invert it
            2. β = (X'X)⁻¹ X'y, reusing the inverse
            3. Fitted values and residuals
            
        Raises:
            SingularMatrixError: If X'X is not invertible
        """
        X = design.X
        y = design.y
        
        with Timer() as timer:
            with timer.section('gram'):
                XtX = design.XtX()
                Xty = design.Xty()
            with timer.section('inverse'):
                inv = invert_cpu(XtX, name="X'X")
            with timer.section('solve'):
                coefficients = inv.inverse @ Xty
            with timer.section('residuals'):
                fitted_values = X @ coefficients
                residuals = y - fitted_values
        
        return _wrap(self.name, 'inverse', design, coefficients, inv,
                     fitted_values, residuals, timer)


class CPUCholeskyBackend:
    """
    CPU backend using a Cholesky factorization of X'X.
    
    Better behaved than the explicit inverse when X'X is ill-conditioned.
    The inverse needed for standard errors comes from the same factor.
    """
    
    @property
    def name(self) -> str:
        return 'cpu_cholesky'
    
    def solve(self, design: Design) -> Result[FitParams]:
        """
        Solve OLS through the Cholesky factor of X'X.
        
        Raises:
            SingularMatrixError: If X'X is singular or not positive definite
        """
        X = design.X
        y = design.y
        
        with Timer() as timer:
            with timer.section('gram'):
                XtX = design.XtX()
                Xty = design.Xty()
            with timer.section('factorization'):
                coefficients, inv = cholesky_solve_cpu(XtX, Xty, name="X'X")
            with timer.section('residuals'):
                fitted_values = X @ coefficients
                residuals = y - fitted_values
        
        return _wrap(self.name, 'cholesky', design, coefficients, inv,
                     fitted_values, residuals, timer)


def _wrap(backend_name, method, design, coefficients, inv: InverseResult,
          fitted_values, residuals, timer: Timer) -> Result[FitParams]:
    """Package backend output into the Result envelope."""
    ill_conditioned = inv.condition_number > ILL_CONDITIONED_THRESHOLD
    warnings: tuple[str, ...] = ()
    if ill_conditioned:
        warnings = (
            f"X'X is ill-conditioned (condition number {inv.condition_number:.3e}); "
            f"coefficients may be inaccurate",
        )
    
    logger.debug(
        "%s fit: n=%d, cond(X'X)=%.3e", backend_name, design.n, inv.condition_number
    )
    
    params = FitParams(
        coefficients=coefficients,
        gram_inverse=inv.inverse,
        fitted_values=fitted_values,
        residuals=residuals,
        df_residual=design.n - design.p,
    )
    
    info: dict[str, Any] = {
        'method': method,
        'rank': inv.rank,
        'condition_number': inv.condition_number,
        'tolerance': select_tolerance(ill_conditioned).name,
    }
    
    return Result(
        params=params,
        info=info,
        timing=timer.result(),
        backend_name=backend_name,
        warnings=warnings,
    )
