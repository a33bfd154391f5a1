"""
Tests for regression fit().

Tests the fitting pipeline: Design construction, backend selection,
the normal-equations solve and FitSolution properties.
"""

import numpy as np
import pytest

from pytreatreg.core.compute.tolerances import select_tolerance
from pytreatreg.core.protocols import Backend
from pytreatreg.core.exceptions import DimensionError, SingularMatrixError
from pytreatreg.regression import Design, FitSolution, fit
from pytreatreg.regression.backends import CPUCholeskyBackend, CPUInverseBackend


class TestFitBasic:
    """Basic fit() functionality tests."""

    def test_fit_from_arrays(self, treatment_data):
        result = fit(*treatment_data)
        assert isinstance(result, FitSolution)
        assert result.coefficients.shape == (3,)
        assert result.gram_inverse.shape == (3, 3)
        assert result.df_residual == 97

    def test_fit_from_design(self, treatment_data):
        design = Design.build(*treatment_data)
        result = fit(design)
        assert result.design is design

    def test_fit_requires_outcome_and_covariate(self, treatment_data):
        treatment, _, _ = treatment_data
        with pytest.raises(ValueError, match="outcome and covariate required"):
            fit(treatment)

    def test_fitted_plus_residuals_equals_y(self, treatment_data):
        _, outcome, _ = treatment_data
        result = fit(*treatment_data)
        np.testing.assert_allclose(
            result.fitted_values + result.residuals, outcome, rtol=1e-9
        )

    def test_matches_lstsq(self, treatment_data):
        treatment, outcome, covariate = treatment_data
        X = np.column_stack([np.ones_like(outcome), treatment, covariate])
        expected, *_ = np.linalg.lstsq(X, outcome, rcond=None)
        result = fit(*treatment_data)
        np.testing.assert_allclose(result.coefficients, expected, rtol=1e-8)

    def test_gram_inverse_is_inverse(self, treatment_data):
        result = fit(*treatment_data)
        XtX = result.design.XtX()
        np.testing.assert_allclose(result.gram_inverse @ XtX, np.eye(3), atol=1e-10)

    def test_residuals_sum_to_near_zero_with_intercept(self, treatment_data):
        result = fit(*treatment_data)
        assert abs(result.residuals.sum()) < 1e-9

    def test_lists_accepted(self):
        result = fit([0, 1, 0, 1, 1], [1.0, 3.1, 1.2, 2.9, 3.3], [0.5, 0.1, -0.4, 0.2, 0.9])
        assert np.all(np.isfinite(result.coefficients))


class TestFitErrors:

    def test_collinear_raises(self, collinear_data):
        with pytest.raises(SingularMatrixError) as exc_info:
            fit(*collinear_data)
        assert exc_info.value.matrix_name == "X'X"
        assert exc_info.value.expected_rank == 3

    def test_zero_covariate_raises(self, treatment_data):
        treatment, outcome, covariate = treatment_data
        with pytest.raises(SingularMatrixError, match="rank-deficient"):
            fit(treatment, outcome, covariate * 0.0)

    def test_constant_treatment_duplicates_intercept(self, treatment_data):
        _, outcome, covariate = treatment_data
        with pytest.raises(SingularMatrixError):
            fit(np.ones_like(outcome), outcome, covariate)

    def test_mismatched_lengths(self, treatment_data):
        treatment, outcome, covariate = treatment_data
        with pytest.raises(DimensionError):
            fit(treatment, outcome[:-1], covariate)

    def test_too_few_rows(self):
        with pytest.raises(DimensionError):
            fit([0, 1, 0], [1.0, 2.0, 3.0], [1.0, 0.0, 2.0])


class TestBackendSelection:
    """Test backend dispatch logic."""

    def test_default_backend_is_inverse(self, treatment_data):
        result = fit(*treatment_data)
        assert result.backend_name == 'cpu_inverse'
        assert result.info['method'] == 'inverse'

    def test_cholesky_backend(self, treatment_data):
        result = fit(*treatment_data, solver='cholesky')
        assert result.backend_name == 'cpu_cholesky'
        assert result.info['method'] == 'cholesky'

    def test_backends_agree(self, treatment_data):
        inv = fit(*treatment_data, solver='inverse')
        chol = fit(*treatment_data, solver='cholesky')
        tol = select_tolerance(is_ill_conditioned=False)
        np.testing.assert_allclose(
            inv.coefficients, chol.coefficients, rtol=tol.rtol, atol=tol.atol
        )
        np.testing.assert_allclose(
            inv.gram_inverse, chol.gram_inverse, rtol=tol.rtol, atol=tol.atol
        )

    def test_cholesky_rejects_collinear(self, collinear_data):
        with pytest.raises(SingularMatrixError):
            fit(*collinear_data, solver='cholesky')

    def test_unknown_solver(self, treatment_data):
        with pytest.raises(ValueError, match="Unknown solver"):
            fit(*treatment_data, solver='qr')

    def test_timing_sections(self, treatment_data):
        result = fit(*treatment_data)
        assert {'total_seconds', 'gram', 'inverse', 'solve', 'residuals'} <= set(result.timing)

    def test_condition_number_reported(self, treatment_data):
        result = fit(*treatment_data)
        assert result.info['condition_number'] >= 1.0
        assert result.info['tolerance'] == 'cpu_fp64'
        assert result.warnings == ()

    def test_ill_conditioned_warning(self, rng):
        n = 50
        treatment = rng.integers(0, 2, n).astype(np.float64)
        covariate = 1e4 + rng.standard_normal(n)
        outcome = treatment + rng.standard_normal(n)
        result = fit(treatment, outcome, covariate)
        assert any("ill-conditioned" in w for w in result.warnings)
        assert result.info['tolerance'] == 'cpu_fp64_ill_conditioned'

    def test_full_rank_above_1e14_still_fits(self, rng):
        n = 100
        treatment = rng.integers(0, 2, n).astype(np.float64)
        covariate = 3000.0 + rng.standard_normal(n)
        outcome = treatment + rng.standard_normal(n)
        result = fit(treatment, outcome, covariate)
        assert result.info['rank'] == 3
        assert result.info['condition_number'] > 1e13
        assert np.all(np.isfinite(result.coefficients))
        assert result.warnings

    def test_repr(self, treatment_data):
        assert "cpu_inverse" in repr(fit(*treatment_data))

    @pytest.mark.parametrize("backend", [CPUInverseBackend(), CPUCholeskyBackend()])
    def test_backends_satisfy_protocol(self, backend):
        assert isinstance(backend, Backend)

    def test_backend_solve_directly(self, treatment_data):
        design = Design.build(*treatment_data)
        result = CPUInverseBackend().solve(design)
        assert result.backend_name == 'cpu_inverse'
        assert result.params.df_residual == 97
