"""
Regression solution types.

Contains the parameter payload produced by backends and the user-facing
solution wrapper that hands the fit to the inference engine.
"""

from dataclasses import dataclass, replace
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pytreatreg.core.result import Result

if TYPE_CHECKING:
    from pytreatreg.regression.design import Design
    from pytreatreg.regression.inference import RSSMethod
    from pytreatreg.regression.report import StatisticsReport


@dataclass(frozen=True)
class FitParams:
    """
    Parameter payload for the treatment regression.
    
    This is the immutable data computed by backends.
    """
    coefficients: NDArray[np.floating[Any]]
    gram_inverse: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    df_residual: int


@dataclass
class FitSolution:
    """
    User-facing fit results.
    
    Wraps the backend Result and the Design. Inferential statistics are
    not computed here; call analyze() to get a StatisticsReport.
    """
    _result: Result[FitParams]
    _design: 'Design'
    
    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        """[β₀ (intercept), β₁ (treatment), β₂ (covariate)]."""
        return self._result.params.coefficients
    
    @property
    def gram_inverse(self) -> NDArray[np.floating[Any]]:
        """(X'X)⁻¹, 3 x 3."""
        return self._result.params.gram_inverse
    
    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.fitted_values
    
    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals
    
    @property
    def df_residual(self) -> int:
        return self._result.params.df_residual
    
    @property
    def design(self) -> 'Design':
        return self._design
    
    @property
    def info(self) -> dict[str, Any]:
        return self._result.info
    
    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing
    
    @property
    def backend_name(self) -> str:
        return self._result.backend_name
    
    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings
    
    def analyze(self, *, rss_method: 'RSSMethod' = 'reference') -> 'StatisticsReport':
        """
        Run the inference engine on this fit.
        
        Warnings raised during fitting (ill-conditioning) are carried
        onto the report ahead of any inference warnings.
        """
        from pytreatreg.regression.inference import analyze
        
        report = analyze(
            self._design.X,
            self._design.y,
            self.coefficients,
            self.gram_inverse,
            self.residuals,
            self._design.covariate,
            rss_method=rss_method,
        )
        if self.warnings:
            report = replace(report, warnings=self.warnings + report.warnings)
        return report
    
    def summary(self, *, rss_method: 'RSSMethod' = 'reference') -> str:
        """R-style results block (see StatisticsReport.summary)."""
        return self.analyze(rss_method=rss_method).summary()
    
    def __repr__(self) -> str:
        b = self.coefficients
        return (
            f"FitSolution(n={self._design.n}, backend={self.backend_name!r}, "
            f"coefficients=[{b[0]:.4f}, {b[1]:.4f}, {b[2]:.4f}])"
        )
