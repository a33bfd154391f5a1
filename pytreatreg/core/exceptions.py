"""
Exception hierarchy for PyTreatReg.

All exceptions inherit from PyTreatRegError so callers can catch any
library-specific failure in one place. Every error here is terminal for
the current fit: they describe structurally unfittable data, not
transient faults, so nothing is retried.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyTreatRegError(Exception):
    """Base exception for all PyTreatReg errors."""
    pass


class ValidationError(PyTreatRegError):
    """
    Input validation failed.
    
    Raised when user-provided inputs fail validation checks
    (non-numeric data, non-finite values, too few observations).
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.
    
    Raised when the treatment, outcome and covariate columns have
    different lengths, when there are fewer observations than the
    model needs, or when an array has the wrong number of dimensions.
    """
    pass


class NumericalError(PyTreatRegError):
    """
    Numerical computation failed.
    
    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.
    
    Raised when the Gram matrix X'X cannot be inverted, which happens when
    treatment and covariate are perfectly collinear or when either column
    duplicates the intercept.
    
    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (3 for the treatment model)
    """
    
    def __init__(
        self, 
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank


class DegenerateInputError(NumericalError):
    """
    A statistic is undefined for the supplied data.
    
    Raised when the data is fittable but a summary statistic has no
    meaning, e.g. R-squared for an outcome with zero total variance.
    
    Attributes:
        quantity: Name of the quantity that triggered the failure
        value: Offending value of that quantity
    """
    
    def __init__(
        self,
        message: str,
        quantity: str | None = None,
        value: float | None = None
    ):
        super().__init__(message)
        self.quantity = quantity
        self.value = value
