"""
Distribution functions used by the inference engine.

The F CDF is evaluated through the regularized incomplete beta function
rather than scipy.stats.f so that the p-value follows the same relation
as previously published results:

    CDF_F(x; d1, d2) = I_{d1·x / (d1·x + d2)}(d1/2, d2/2)
"""

import numpy as np
from scipy import stats as sp_stats


def f_cdf(x: float, dfn: float, dfd: float) -> float:
    """Cumulative distribution function of F(dfn, dfd) at x."""
    if np.isnan(x):
        return float('nan')
    if x <= 0.0:
        return 0.0
    if np.isposinf(x):
        return 1.0
    u = dfn * x / (dfn * x + dfd)
    return float(sp_stats.beta.cdf(u, dfn / 2.0, dfd / 2.0))


def t_cdf(x: float, df: float) -> float:
    """Cumulative distribution function of Student's t with df degrees of freedom."""
    return float(sp_stats.t.cdf(x, df))
