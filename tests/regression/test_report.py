"""
Tests for StatisticsReport rendering and immutability.
"""

from dataclasses import FrozenInstanceError

import numpy as np
import pytest

from pytreatreg.regression import fit


@pytest.fixture
def report(treatment_data):
    return fit(*treatment_data).analyze()


class TestSummary:

    def test_sections_present(self, report):
        s = report.summary()
        assert "Mean Observed Outcome:" in s
        assert "Mean Counterfactual Outcome (Treatment = 1):" in s
        assert "Mean Counterfactual Outcome (Treatment = 0):" in s
        assert "Estimate Std. Error t value Pr(>|t|)" in s
        assert "on 97 degrees of freedom" in s
        assert "F-statistic:" in s
        assert "on 2 and 97 DF" in s

    def test_coefficient_rows(self, report):
        lines = report.summary().splitlines()
        rows = [line for line in lines if line.startswith(("(Intercept)", "treatment", "covariate"))]
        assert len(rows) == 3
        assert rows[1] == (
            f"treatment    {report.coefficients[1]:8.4f} {report.standard_errors[1]:10.4f} "
            f"{report.t_values[1]:7.4f} {report.p_values[1]:8.4f}"
        )

    def test_means_five_decimals(self, report):
        assert f"Mean Observed Outcome: {report.mean_observed:.5f}" in report.summary()

    def test_warnings_rendered(self, perfect_fit_data):
        s = fit(*perfect_fit_data).analyze().summary()
        assert "Warning: perfect fit" in s


class TestReportObject:

    def test_frozen(self, report):
        with pytest.raises(FrozenInstanceError):
            report.r_squared = 0.0

    def test_arrays_read_only(self, report):
        with pytest.raises(ValueError):
            report.coefficients[0] = 0.0

    def test_to_dict(self, report):
        d = report.to_dict()
        assert d["n"] == 100
        assert d["rss_method"] == "reference"
        assert isinstance(d["coefficients"], list)
        assert d["coefficients"][1] == pytest.approx(float(report.coefficients[1]))

    def test_term_names(self, report):
        assert report.term_names == ("(Intercept)", "treatment", "covariate")

    def test_fit_warnings_carried_to_report(self, rng):
        n = 50
        treatment = rng.integers(0, 2, n).astype(np.float64)
        covariate = 1e4 + rng.standard_normal(n)
        outcome = treatment + rng.standard_normal(n)
        report = fit(treatment, outcome, covariate).analyze()
        assert report.has_warning("ill-conditioned")

    def test_repr(self, report):
        assert "StatisticsReport(n=100" in repr(report)

    def test_solution_summary_delegates(self, treatment_data, report):
        assert fit(*treatment_data).summary() == report.summary()
