from __future__ import annotations

from math import isclose

import pytest

from compound_backend.core.projection import (
    CompoundingFrequency,
    FinancialParameters,
    project,
    timeline,
)


@pytest.mark.parametrize("rate", [0.0, 7.0, -50.0, 250.0])
@pytest.mark.parametrize("monthly", [0.0, 500.0, -200.0])
def test_zero_years_returns_principal_untouched(rate, monthly):
    """
    With no time elapsed there is no growth and no deposit, whatever the rate.
    """
    params = FinancialParameters(
        initial_principal=10000,
        monthly_contribution=monthly,
        annual_rate_percent=rate,
        compounds_per_year=12,
        years=0,
    )
    result = project(params)

    assert result.future_value == 10000.0
    assert result.total_contributions == 10000.0
    assert result.total_interest == 0.0


def test_zero_rate_accumulates_contributions_only():
    """
    With zero interest, the balance is principal plus deposits and nothing is earned.
    """
    params = FinancialParameters(
        initial_principal=2500,
        monthly_contribution=100,
        annual_rate_percent=0,
        compounds_per_year=12,
        years=5,
    )
    result = project(params)

    assert isclose(result.future_value, 2500 + 6000, abs_tol=1e-9)
    assert isclose(result.total_interest, 0.0, abs_tol=1e-9)

    yearly = timeline(params)
    expected_totals = [2500.0 + 1200.0 * year for year in range(6)]
    for point, expected_total in zip(yearly, expected_totals):
        assert isclose(point.balance, expected_total, abs_tol=1e-9)
        assert isclose(point.interest, 0.0, abs_tol=1e-9)


@pytest.mark.parametrize("frequency", list(CompoundingFrequency))
def test_zero_rate_deposits_once_per_compounding_period(frequency):
    params = FinancialParameters(
        initial_principal=1000,
        monthly_contribution=50,
        annual_rate_percent=0,
        compounds_per_year=int(frequency),
        years=3,
    )
    result = project(params)

    assert isclose(result.future_value, 1000 + 50 * int(frequency) * 3, abs_tol=1e-9)
    assert isclose(result.total_contributions, 1000 + 50 * 12 * 3, abs_tol=1e-9)
    assert isclose(
        result.total_interest,
        result.future_value - result.total_contributions,
        abs_tol=0.0,
    )


def test_all_zeroes_stay_zero():
    params = FinancialParameters(
        initial_principal=0,
        monthly_contribution=0,
        annual_rate_percent=0,
        compounds_per_year=365,
        years=4,
    )
    for point in timeline(params):
        assert point.balance == 0.0
        assert point.contributions == 0.0
        assert point.interest == 0.0
