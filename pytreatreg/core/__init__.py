"""
Core infrastructure for PyTreatReg.

This module provides shared abstractions and utilities used by the
regression and inference code.

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    datasource: Named-column data container
    compute: Timing, tolerances, linear algebra kernels
"""

from pytreatreg.core.protocols import Backend
from pytreatreg.core.result import Result
from pytreatreg.core.datasource import DataSource
from pytreatreg.core.exceptions import (
    PyTreatRegError,
    ValidationError,
    DimensionError,
    NumericalError,
    SingularMatrixError,
    DegenerateInputError,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Data
    "DataSource",
    # Exceptions
    "PyTreatRegError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "SingularMatrixError",
    "DegenerateInputError",
]
