"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


TRUE_COEFFICIENTS = np.array([2.0, 3.0, 0.5])


@pytest.fixture
def true_coefficients():
    """Generating coefficients for treatment_data."""
    return TRUE_COEFFICIENTS.copy()


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def treatment_data(rng):
    """
    100 rows from outcome = 2 + 3·treatment + 0.5·covariate + N(0, 1).
    
    Treatment is a 0/1 assignment, covariate has standard deviation 2.
    """
    n = 100
    treatment = rng.integers(0, 2, n).astype(np.float64)
    covariate = rng.normal(0.0, 2.0, n)
    noise = rng.standard_normal(n)
    outcome = TRUE_COEFFICIENTS[0] + TRUE_COEFFICIENTS[1] * treatment \
        + TRUE_COEFFICIENTS[2] * covariate + noise
    return treatment, outcome, covariate


@pytest.fixture
def collinear_data(rng):
    """Covariate is exactly twice the treatment (should fail)."""
    n = 50
    treatment = rng.standard_normal(n)
    covariate = 2.0 * treatment
    outcome = rng.standard_normal(n)
    return treatment, outcome, covariate


@pytest.fixture
def perfect_fit_data(rng):
    """Outcome is an exact linear function of the predictors."""
    n = 30
    treatment = rng.integers(0, 2, n).astype(np.float64)
    covariate = rng.standard_normal(n)
    outcome = 1.0 + 2.0 * treatment + 3.0 * covariate
    return treatment, outcome, covariate
