"""
Inference for the treatment regression.

Turns a fitted model (coefficients, (X'X)⁻¹, residuals) into standard
errors, t and p-values, R-squared, the overall F test and counterfactual
mean outcomes.

Two RSS formulas are available:

    'reference': var(r², ddof=1) · n
        The sample variance of the squared residuals, scaled by n. This is
        what previously published results used and it is the default, so
        outputs stay comparable. It is NOT the textbook residual sum of
        squares.
    'direct': Σ r²
        The textbook residual sum of squares.

Everything downstream of the RSS (residual standard error, R-squared,
F, standard errors, p-values) follows from whichever formula is chosen.
"""

import logging
from typing import Any, Literal
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pytreatreg.core.exceptions import DegenerateInputError
from pytreatreg.core.compute.tolerances import PERFECT_FIT_RTOL
from pytreatreg.core.validation import (
    as_numeric,
    check_residual_df,
    check_same_length,
    check_shape,
)
from pytreatreg.regression.design import N_PARAMS
from pytreatreg.regression.report import StatisticsReport
from pytreatreg.regression._distributions import f_cdf, t_cdf

logger = logging.getLogger(__name__)

RSSMethod = Literal['reference', 'direct']
RSS_METHODS = ('reference', 'direct')

# Predictors besides the intercept: treatment, covariate
DF_MODEL = N_PARAMS - 1


def mean(values: ArrayLike) -> float:
    """Arithmetic mean."""
    return float(np.mean(np.asarray(values, dtype=np.float64)))


def predict_counterfactual(
    coefficients: ArrayLike,
    covariate: ArrayLike,
    treatment: float,
) -> NDArray[np.floating[Any]]:
    """
    Predicted outcomes with every observation assigned the same treatment.
    
    ŷ_cf(i) = β₀ + β₁·treatment + β₂·covariate[i]
    
    Example:
        >>> predict_counterfactual([1, 2, 3], [1, 2, 3], 1)
        array([ 6.,  9., 12.])
    """
    beta = np.asarray(coefficients, dtype=np.float64)
    c = np.asarray(covariate, dtype=np.float64)
    return beta[0] + beta[1] * treatment + beta[2] * c


def residual_sum_of_squares(
    residuals: NDArray[np.floating[Any]],
    method: RSSMethod = 'reference',
) -> float:
    """RSS under the chosen formula (see module docstring)."""
    if method == 'reference':
        squared = residuals * residuals
        return float(np.var(squared, ddof=1) * residuals.shape[0])
    elif method == 'direct':
        return float(residuals @ residuals)
    else:
        raise ValueError(f"Unknown rss_method: {method!r}. Expected one of {RSS_METHODS}")


def analyze(
    X: ArrayLike,
    y: ArrayLike,
    coefficients: ArrayLike,
    gram_inverse: ArrayLike,
    residuals: ArrayLike,
    covariate: ArrayLike,
    *,
    rss_method: RSSMethod = 'reference',
) -> StatisticsReport:
    """
    Compute the full set of inferential statistics for a fitted model.
    
    Args:
        X: Design matrix (n x 3) with columns [1, treatment, covariate]
        y: Outcome (n,)
        coefficients: Fitted β (3,)
        gram_inverse: (X'X)⁻¹ (3 x 3)
        residuals: y - Xβ (n,)
        covariate: Covariate column (n,), used for counterfactuals
        rss_method: 'reference' (default) or 'direct'
        
    Returns:
        StatisticsReport
        
    Raises:
        ValueError: If rss_method is unknown
        DimensionError: If shapes are inconsistent or n < 4
        DegenerateInputError: If the outcome is constant (zero total variance)
    """
    if rss_method not in RSS_METHODS:
        raise ValueError(f"Unknown rss_method: {rss_method!r}. Expected one of {RSS_METHODS}")
    
    X = as_numeric(X, 'X')
    y = as_numeric(y, 'y')
    beta = as_numeric(coefficients, 'coefficients')
    gram_inv = as_numeric(gram_inverse, 'gram_inverse')
    r = as_numeric(residuals, 'residuals')
    c = as_numeric(covariate, 'covariate')

    check_shape(X, (None, N_PARAMS), 'X')
    check_shape(beta, (N_PARAMS,), 'coefficients')
    check_shape(gram_inv, (N_PARAMS, N_PARAMS), 'gram_inverse')
    for name, arr in (('y', y), ('residuals', r), ('covariate', c)):
        check_shape(arr, (None,), name)
    n = check_same_length(X=X, y=y, residuals=r, covariate=c)
    check_residual_df(n, N_PARAMS)

    df_residual = n - N_PARAMS
    warnings: list[str] = []
    
    # === Residual analysis ===
    rss = residual_sum_of_squares(r, rss_method)
    residual_se = float(np.sqrt(rss / df_residual))
    
    # A constant outcome can leave tss at rounding noise (mean(0.1, ...) != 0.1)
    if np.ptp(y) == 0.0:
        raise DegenerateInputError(
            f"outcome is constant (every value {float(y[0])!r}); total variance is zero "
            f"and R-squared is undefined",
            quantity='tss',
            value=0.0,
        )
    y_mean = mean(y)
    tss = float(np.sum((y - y_mean) ** 2))
    
    # === Goodness of fit ===
    r_squared = 1.0 - rss / tss
    adj_r_squared = 1.0 - (1.0 - r_squared) * (n / df_residual)
    
    with np.errstate(divide='ignore', invalid='ignore'):
        f_statistic = float(np.divide(r_squared / DF_MODEL, (1.0 - r_squared) / DF_MODEL))
    f_p_value = 1.0 - f_cdf(f_statistic, DF_MODEL, df_residual)
    
    # === Coefficient tests ===
    standard_errors = np.sqrt(np.diag(gram_inv)) * residual_se
    with np.errstate(divide='ignore', invalid='ignore'):
        t_values = beta / standard_errors
    p_values = np.array([
        2.0 * (1.0 - t_cdf(abs(t), df_residual)) for t in t_values
    ])
    
    scale = max(1.0, float(np.max(np.abs(y))))
    if float(np.max(np.abs(r))) <= PERFECT_FIT_RTOL * scale:
        warnings.append(
            "perfect fit: residuals are zero to machine precision, so standard "
            "errors vanish and t-statistics are infinite or undefined"
        )
    
    # === Counterfactuals ===
    mean_cf1 = mean(predict_counterfactual(beta, c, 1.0))
    mean_cf0 = mean(predict_counterfactual(beta, c, 0.0))
    
    logger.debug(
        "analyze: n=%d, rss_method=%s, rss=%.6g, r_squared=%.6f",
        n, rss_method, rss, r_squared,
    )
    
    return StatisticsReport(
        coefficients=_frozen(beta),
        standard_errors=_frozen(standard_errors),
        t_values=_frozen(t_values),
        p_values=_frozen(p_values),
        residual_std_error=residual_se,
        r_squared=float(r_squared),
        adjusted_r_squared=float(adj_r_squared),
        f_statistic=f_statistic,
        f_p_value=float(f_p_value),
        mean_observed=y_mean,
        mean_cf_treatment1=mean_cf1,
        mean_cf_treatment0=mean_cf0,
        n=n,
        df_residual=df_residual,
        df_model=DF_MODEL,
        rss=rss,
        tss=tss,
        rss_method=rss_method,
        warnings=tuple(warnings),
    )


def _frozen(arr: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    out = np.array(arr, dtype=np.float64)
    out.setflags(write=False)
    return out
