"""
Solver dispatch for the treatment regression.

This module provides the fit() function (public API) and backend selection.
"""

import logging
from typing import Literal
from numpy.typing import ArrayLike

from pytreatreg.core.protocols import Backend
from pytreatreg.regression.design import Design
from pytreatreg.regression.solution import FitParams, FitSolution
from pytreatreg.regression.backends.cpu import CPUInverseBackend, CPUCholeskyBackend

logger = logging.getLogger(__name__)

# Type alias for solver selection
SolverChoice = Literal['inverse', 'cholesky']


def fit(
    treatment: ArrayLike | Design,
    outcome: ArrayLike | None = None,
    covariate: ArrayLike | None = None,
    *,
    solver: SolverChoice = 'inverse',
) -> FitSolution:
    """
    Fit outcome ~ 1 + treatment + covariate by ordinary least squares.
    
    Solves the normal equations:
        (X'X) β = X'y,   X = [1, treatment, covariate]
    
    This is the primary public API for fitting. All input validation,
    design construction and backend selection happens here.
    
    Args:
        treatment: Treatment values (n,), or a prebuilt Design
        outcome: Outcome values (n,). Required unless a Design is given.
        covariate: Covariate values (n,). Required unless a Design is given.
        solver: How to solve the normal equations:
            - 'inverse': explicit (X'X)⁻¹ then β = (X'X)⁻¹ X'y. Default;
              reproduces previously published outputs.
            - 'cholesky': Cholesky factor of X'X. More stable for
              ill-conditioned designs.
            
    Returns:
        FitSolution with coefficients, (X'X)⁻¹ and residuals; call
        .analyze() for the statistics report.
        
    Raises:
        ValidationError: If inputs are non-numeric or non-finite
        DimensionError: If lengths differ or there are fewer than 4 rows
        SingularMatrixError: If X'X is not invertible (collinear predictors)
        
    Example:
        >>> import numpy as np
        >>> from pytreatreg.regression import fit
        >>> 
        >>> rng = np.random.default_rng(0)
        >>> t = rng.integers(0, 2, 100)
        >>> c = rng.standard_normal(100)
        >>> y = 2 + 3 * t + 0.5 * c + rng.standard_normal(100)
        >>> 
        >>> result = fit(t, y, c)
        >>> print(result.coefficients)
        >>> print(result.analyze().summary())
    """
    # === Construct Design ===
    # This is the boundary - validate here, trust everywhere else
    if isinstance(treatment, Design):
        design = treatment
    else:
        if outcome is None or covariate is None:
            raise ValueError("outcome and covariate required when treatment is an array")
        design = Design.build(treatment, outcome, covariate)
    
    # === Select Backend ===
    backend_impl = _get_backend(solver)
    logger.debug("fitting n=%d observations with %s", design.n, backend_impl.name)
    
    # === Solve ===
    result = backend_impl.solve(design)
    
    # === Wrap and Return ===
    return FitSolution(_result=result, _design=design)


def _get_backend(choice: SolverChoice) -> Backend[Design, FitParams]:
    """
    Instantiate the backend for a solver choice.
    
    Raises:
        ValueError: If unknown solver specified
    """
    if choice == 'inverse':
        return CPUInverseBackend()
    elif choice == 'cholesky':
        return CPUCholeskyBackend()
    else:
        raise ValueError(f"Unknown solver: {choice!r}")
