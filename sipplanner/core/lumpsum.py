"""Single-principal compounding and the SIP vs lump-sum comparison.

Lump sums compound ANNUALLY: FV = P * (1 + annual% / 100) ^ years. This is
deliberately a different convention from the monthly SIP path.
"""

from __future__ import annotations

import math
from typing import Literal

from pydantic import BaseModel, ConfigDict

from sipplanner.core.annuity import (
    CURRENCY_DECIMALS,
    PERCENT_DECIMALS,
    SIPResult,
    calculate_sip,
    return_percentage,
    years_to_months,
)
from sipplanner.domain.errors import ensure_finite, require_non_negative, require_positive


class LumpSumResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    principal: float
    years: float
    annualReturns: float
    maturityValue: float
    returns: float
    returnPercentage: float


class ComparisonSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    sipMaturity: float
    lumpSumMaturity: float
    difference: float
    winner: Literal["SIP", "Lump Sum"]


class SIPvsLumpSum(BaseModel):
    model_config = ConfigDict(frozen=True)

    sip: SIPResult
    lumpSum: LumpSumResult
    sipTotalInvested: float
    comparison: ComparisonSummary


def lump_sum_future_value(principal: float, years: float, annual_returns: float) -> float:
    require_non_negative("principal", principal)
    require_non_negative("years", years)
    require_non_negative("annualReturns", annual_returns)
    try:
        value = principal * (1 + annual_returns / 100) ** years
    except OverflowError:
        value = math.inf
    return ensure_finite("principal", value)


def calculate_lump_sum(principal: float, years: float, annual_returns: float) -> LumpSumResult:
    maturity = lump_sum_future_value(principal, years, annual_returns)
    gain = maturity - principal
    return LumpSumResult(
        principal=round(principal, CURRENCY_DECIMALS),
        years=years,
        annualReturns=round(annual_returns, PERCENT_DECIMALS),
        maturityValue=round(maturity, CURRENCY_DECIMALS),
        returns=round(gain, CURRENCY_DECIMALS),
        returnPercentage=round(return_percentage(gain, principal), PERCENT_DECIMALS),
    )


def compare_sip_vs_lump_sum(
    monthly_sip: float,
    lump_sum_amount: float,
    years: float,
    annual_returns: float,
) -> SIPvsLumpSum:
    """Run both strategies over the same horizon and rate.

    An exact tie in maturity value goes to the SIP.
    """
    sip = calculate_sip(monthly_sip, years, annual_returns)
    lump = calculate_lump_sum(lump_sum_amount, years, annual_returns)

    winner = "SIP" if sip.maturityValue >= lump.maturityValue else "Lump Sum"
    return SIPvsLumpSum(
        sip=sip,
        lumpSum=lump,
        sipTotalInvested=round(monthly_sip * years_to_months(years), CURRENCY_DECIMALS),
        comparison=ComparisonSummary(
            sipMaturity=sip.maturityValue,
            lumpSumMaturity=lump.maturityValue,
            difference=round(sip.maturityValue - lump.maturityValue, CURRENCY_DECIMALS),
            winner=winner,
        ),
    )


def compound_interest(principal: float, annual_percent: float, years: float, periods_per_year: int = 12) -> float:
    """A = P * (1 + r/n) ^ (n * t)."""
    require_non_negative("principal", principal)
    require_non_negative("annualPercent", annual_percent)
    require_non_negative("years", years)
    require_positive("periodsPerYear", periods_per_year)
    rate = annual_percent / 100
    return principal * (1 + rate / periods_per_year) ** (periods_per_year * years)


def simple_interest(principal: float, annual_percent: float, years: float) -> float:
    """I = P * r * t (interest only, principal not included)."""
    require_non_negative("principal", principal)
    require_non_negative("annualPercent", annual_percent)
    require_non_negative("years", years)
    return principal * (annual_percent / 100) * years


__all__ = [
    "LumpSumResult",
    "ComparisonSummary",
    "SIPvsLumpSum",
    "lump_sum_future_value",
    "calculate_lump_sum",
    "compare_sip_vs_lump_sum",
    "compound_interest",
    "simple_interest",
]
