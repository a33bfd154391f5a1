"""
PyTreatReg: treatment-effect regression with full OLS inference.

Fits outcome ~ 1 + treatment + covariate by ordinary least squares,
reports coefficient standard errors, t and p-values, R-squared, the
overall F test, and counterfactual mean outcomes under fixed treatment.

Submodules:
    regression: Design, fit(), inference engine, statistics report
    core: Exceptions, validation, data sources, compute kernels
    cli: Command-line driver (python -m pytreatreg)
"""

__version__ = "0.1.0"

from pytreatreg import regression
from pytreatreg.core.datasource import DataSource
from pytreatreg.regression import fit, analyze, StatisticsReport

__all__ = [
    "__version__",
    "regression",
    "DataSource",
    "fit",
    "analyze",
    "StatisticsReport",
]
