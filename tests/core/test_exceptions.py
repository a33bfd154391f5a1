"""
Tests for PyTreatReg exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyTreatRegError)
    - Diagnostic attributes on SingularMatrixError and DegenerateInputError
    - Default attribute values (None for optional attributes)
"""

import pytest

from pytreatreg.core.exceptions import (
    DegenerateInputError,
    DimensionError,
    NumericalError,
    PyTreatRegError,
    SingularMatrixError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyTreatRegError."""

    def test_validation_error_is_base_error(self):
        with pytest.raises(PyTreatRegError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    def test_singular_matrix_error_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise SingularMatrixError("singular")

    def test_degenerate_input_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise DegenerateInputError("tss is zero")

    def test_degenerate_input_is_not_validation_error(self):
        err = DegenerateInputError("tss is zero")
        assert not isinstance(err, ValidationError)


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestSingularMatrixError:
    """SingularMatrixError carries matrix diagnostic attributes."""

    def test_all_attributes(self):
        err = SingularMatrixError(
            "X'X is singular",
            matrix_name="X'X",
            condition_number=1e18,
            rank=2,
            expected_rank=3,
        )
        assert str(err) == "X'X is singular"
        assert err.matrix_name == "X'X"
        assert err.condition_number == 1e18
        assert err.rank == 2
        assert err.expected_rank == 3

    def test_defaults_are_none(self):
        err = SingularMatrixError("singular")
        assert err.matrix_name is None
        assert err.condition_number is None
        assert err.rank is None
        assert err.expected_rank is None


class TestDegenerateInputError:
    """DegenerateInputError names the offending quantity."""

    def test_attributes(self):
        err = DegenerateInputError("zero variance", quantity="tss", value=0.0)
        assert err.quantity == "tss"
        assert err.value == 0.0

    def test_defaults_are_none(self):
        err = DegenerateInputError("zero variance")
        assert err.quantity is None
        assert err.value is None
