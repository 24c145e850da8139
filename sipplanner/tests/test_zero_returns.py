from __future__ import annotations

from math import isclose

from sipplanner.core.annuity import calculate_sip, yearly_growth
from sipplanner.core.projection import sample_projection


def test_zero_returns_accumulates_contributions_only():
    """
    With a 0% return the maturity value is exactly what was paid in, with no growth boost
    """
    result = calculate_sip(1000, 1, 0)

    assert result.months == 12
    assert result.monthlyRate == 0.0
    assert result.totalInvested == 12000
    assert result.maturityValue == 12000
    assert result.returns == 0.0
    assert result.returnPercentage == 0.0


def test_zero_returns_yearly_rows_are_flat():
    rows = yearly_growth(2500, 3, 0)

    expected_totals = [30000.0, 60000.0, 90000.0]
    for row, expected_total in zip(rows, expected_totals):
        assert isclose(row.totalInvested, expected_total, abs_tol=0.0)
        assert isclose(row.currentValue, expected_total, abs_tol=0.0)
        assert isclose(row.returns, 0.0, abs_tol=0.0)


def test_zero_returns_projection_has_no_gain():
    series = sample_projection(500, 2, 0, interval=6)

    #just check every sample, don't need to go point by point
    for point in series.points:
        assert point.value == point.invested
        assert point.returns == 0.0


def test_zero_period_is_worth_nothing():
    """
    No months means nothing paid in and nothing earned; the percentage must not divide by zero
    """
    result = calculate_sip(1000, 0, 12)

    assert result.months == 0
    assert result.totalInvested == 0.0
    assert result.maturityValue == 0.0
    assert result.returnPercentage == 0.0


def test_zero_period_projection_is_empty():
    series = sample_projection(1000, 0, 12)
    assert series.totalMonths == 0
    assert series.points == []
