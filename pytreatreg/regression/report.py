"""
Statistics report for the treatment regression.

StatisticsReport is the end product of a fit: every inferential statistic
plus the counterfactual means, frozen once created. summary() renders the
R-style results block written by the command-line driver.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pytreatreg.regression.design import TERM_NAMES


@dataclass(frozen=True)
class StatisticsReport:
    """
    Immutable inference results for outcome ~ 1 + treatment + covariate.

    Attributes
    ----------
    coefficients : ndarray, shape (3,)
        Estimates for intercept, treatment, covariate.
    standard_errors : ndarray, shape (3,)
        Coefficient standard errors.
    t_values : ndarray, shape (3,)
        Coefficient / standard error. Infinite for an exact fit.
    p_values : ndarray, shape (3,)
        Two-sided p-values from Student's t with df_residual.
    residual_std_error : float
        sqrt(rss / df_residual).
    r_squared, adjusted_r_squared : float
        Goodness of fit.
    f_statistic, f_p_value : float
        Overall F test on df_model and df_residual degrees of freedom.
    mean_observed : float
        Mean of the observed outcome.
    mean_cf_treatment1, mean_cf_treatment0 : float
        Mean predicted outcome with treatment fixed at 1 and at 0.
    n, df_residual, df_model : int
        Sample size and degrees of freedom.
    rss, tss : float
        Residual and total sums of squares.
    rss_method : str
        Which RSS formula produced `rss` ('reference' or 'direct').
    warnings : tuple of str
        Non-fatal conditions (exact fit, ill-conditioning).
    """
    coefficients: NDArray[np.floating[Any]]
    standard_errors: NDArray[np.floating[Any]]
    t_values: NDArray[np.floating[Any]]
    p_values: NDArray[np.floating[Any]]
    residual_std_error: float
    r_squared: float
    adjusted_r_squared: float
    f_statistic: float
    f_p_value: float
    mean_observed: float
    mean_cf_treatment1: float
    mean_cf_treatment0: float
    n: int
    df_residual: int
    df_model: int
    rss: float
    tss: float
    rss_method: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def term_names(self) -> tuple[str, ...]:
        return TERM_NAMES

    @property
    def treatment_effect(self) -> float:
        """Difference between the two counterfactual means (equals β₁)."""
        return self.mean_cf_treatment1 - self.mean_cf_treatment0

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)

    def to_dict(self) -> dict[str, Any]:
        """Plain-Python representation (lists instead of arrays)."""
        out = asdict(self)
        for key in ('coefficients', 'standard_errors', 't_values', 'p_values'):
            out[key] = [float(v) for v in out[key]]
        out['warnings'] = list(self.warnings)
        return out

    def summary(self) -> str:
        """Generate the R-style results block."""
        lines = [
            "",
            f"Mean Observed Outcome: {self.mean_observed:.5f}",
            f"Mean Counterfactual Outcome (Treatment = 1): {self.mean_cf_treatment1:.5f}",
            f"Mean Counterfactual Outcome (Treatment = 0): {self.mean_cf_treatment0:.5f}",
            "Coefficients:",
            "             Estimate Std. Error t value Pr(>|t|)",
        ]
        for name, coef, se, t, p in zip(
            TERM_NAMES, self.coefficients, self.standard_errors,
            self.t_values, self.p_values,
        ):
            lines.append(f"{name:<13}{coef:8.4f} {se:10.4f} {t:7.4f} {p:8.4f}")

        lines.extend([
            "",
            f"Residual standard error: {self.residual_std_error:.4f} "
            f"on {self.df_residual} degrees of freedom",
            f"Multiple R-squared: {self.r_squared:.6f}, "
            f"Adjusted R-squared: {self.adjusted_r_squared:.6f}",
            f"F-statistic: {self.f_statistic:.4f} on {self.df_model} and "
            f"{self.df_residual} DF,  p-value: {self.f_p_value:.5f}",
        ])
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        return (
            f"StatisticsReport(n={self.n}, treatment={self.coefficients[1]:.4f}, "
            f"r_squared={self.r_squared:.4f}, rss_method={self.rss_method!r})"
        )
