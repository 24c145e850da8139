from __future__ import annotations

import pytest

from sipplanner.core.lumpsum import (
    calculate_lump_sum,
    compare_sip_vs_lump_sum,
    compound_interest,
    simple_interest,
)
from sipplanner.domain.errors import InputValidationError


def test_lump_sum_compounds_annually():
    result = calculate_lump_sum(100000, 5, 10)

    assert result.maturityValue == pytest.approx(161051.00, abs=0.01)
    assert result.returns == pytest.approx(61051.00, abs=0.01)
    assert result.returnPercentage == pytest.approx(61.05, abs=0.01)


def test_lump_sum_zero_years_returns_principal():
    result = calculate_lump_sum(25000, 0, 9)
    assert result.maturityValue == 25000
    assert result.returnPercentage == 0.0


def test_zero_principal_grows_to_nothing():
    result = calculate_lump_sum(0, 5, 10)

    assert result.maturityValue == 0.0
    assert result.returns == 0.0
    assert result.returnPercentage == 0.0


def test_lump_sum_rejects_negative_principal():
    with pytest.raises(InputValidationError) as excinfo:
        calculate_lump_sum(-1, 5, 10)
    assert excinfo.value.field == "principal"


def test_overflowing_lump_sum_is_a_field_error():
    with pytest.raises(InputValidationError) as excinfo:
        calculate_lump_sum(1e300, 100, 1e6)
    assert excinfo.value.field == "principal"


def test_reported_values_round_half_to_even():
    """
    0.125 is exact in binary, so builtin round() keeps the even digit.
    """
    assert calculate_lump_sum(0.125, 0, 0).principal == 0.12


def test_sip_wins_an_exact_tie():
    # both strategies put 12,000 to work at 0% for a year
    result = compare_sip_vs_lump_sum(1000, 12000, 1, 0)

    assert result.comparison.sipMaturity == result.comparison.lumpSumMaturity
    assert result.comparison.difference == 0.0
    assert result.comparison.winner == "SIP"


def test_difference_is_sip_minus_lump_sum():
    result = compare_sip_vs_lump_sum(1000, 12000, 10, 12)

    assert result.sipTotalInvested == 120000
    assert result.comparison.winner == "SIP"
    assert result.comparison.difference == pytest.approx(
        result.sip.maturityValue - result.lumpSum.maturityValue, abs=0.01
    )


def test_bigger_lump_sum_beats_small_sip():
    result = compare_sip_vs_lump_sum(100, 1000000, 5, 8)
    assert result.comparison.winner == "Lump Sum"
    assert result.comparison.difference < 0


def test_compound_and_simple_interest():
    assert compound_interest(1000, 12, 1, periods_per_year=12) == pytest.approx(1126.825, abs=0.001)
    assert compound_interest(1000, 10, 2, periods_per_year=1) == pytest.approx(1210.0)
    assert simple_interest(1000, 10, 2) == pytest.approx(200.0)


def test_zero_year_comparison_keeps_the_lump_sum():
    result = compare_sip_vs_lump_sum(1000, 5000, 0, 12)

    assert result.sip.maturityValue == 0.0
    assert result.lumpSum.maturityValue == 5000
    assert result.comparison.winner == "Lump Sum"
