"""
Treatment regression: OLS with an intercept, one treatment and one covariate.

Public API:
    fit(treatment, outcome, covariate, ...) -> FitSolution
    analyze(X, y, coefficients, gram_inverse, residuals, covariate, ...)
        -> StatisticsReport

fit() handles input validation, design construction and backend
selection. FitSolution.analyze() runs the inference engine on the fit.

Example:
    >>> from pytreatreg.regression import fit
    >>> solution = fit(treatment, outcome, covariate)
    >>> report = solution.analyze()
    >>> print(report.summary())
"""

from pytreatreg.regression.design import Design
from pytreatreg.regression.solution import FitSolution, FitParams
from pytreatreg.regression.solvers import fit
from pytreatreg.regression.report import StatisticsReport
from pytreatreg.regression.inference import (
    analyze,
    mean,
    predict_counterfactual,
    residual_sum_of_squares,
)

__all__ = [
    "fit",
    "analyze",
    "mean",
    "predict_counterfactual",
    "residual_sum_of_squares",
    "Design",
    "FitSolution",
    "FitParams",
    "StatisticsReport",
]
