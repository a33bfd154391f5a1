"""
Tolerance tiers for numerical validation.

Defines precision expectations for the CPU compute paths. Used by the
test suite, by the perfect-fit check in inference, and by the
singularity check on the Gram matrix.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# CPU reference: well-conditioned designs
CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision, well-conditioned',
)

# CPU reference, ill-conditioned problems (cond > 1e4)
CPU_FP64_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='cpu_fp64_ill_conditioned',
    description='CPU double precision, ill-conditioned (cond > 1e4)',
)

# Condition number above which cond(X'X) is treated as ill-conditioned.
ILL_CONDITIONED_THRESHOLD = 1e4

# Reciprocal condition number of X'X below which it counts as singular.
# Same cutoff as a condition number of 1e16, where LU inversion stops
# returning meaningful digits.
SINGULAR_RCOND = 1e-16

# Residuals smaller than this fraction of max|y| count as an exact fit.
PERFECT_FIT_RTOL = 1e-10


def select_tolerance(is_ill_conditioned: bool = False) -> ToleranceTier:
    """Select the tolerance tier for a fit with the given conditioning."""
    if is_ill_conditioned:
        return CPU_FP64_ILL_CONDITIONED
    return CPU_FP64
