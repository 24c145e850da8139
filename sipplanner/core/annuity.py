"""SIP (monthly annuity) maturity math and its inverses.

Conventions used throughout:

  - Contributions are made at the START of every month, so the future value
    carries one extra period of growth (annuity-due factor):

        FV = P * [((1 + r)^n - 1) / r] * (1 + r)

  - ``r`` is the monthly rate, derived as annual percent / 12 / 100.
  - At r == 0 the closed form is the limit FV = P * n; no division happens.
  - Intermediate values stay unrounded; only the reported fields are
    rounded (2 decimals currency, 6 decimals rates, 2 decimals percentages).
"""

from __future__ import annotations

import math
from typing import List

from pydantic import BaseModel, ConfigDict

from sipplanner.domain.errors import (
    InputValidationError,
    ensure_finite,
    require_non_negative,
    require_positive,
)

CURRENCY_DECIMALS = 2
RATE_DECIMALS = 6
PERCENT_DECIMALS = 2


class SIPResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    monthlyAmount: float
    years: float
    months: int
    annualReturns: float
    monthlyRate: float
    totalInvested: float
    maturityValue: float
    returns: float
    returnPercentage: float


class YearlyGrowthRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    invested: float
    totalInvested: float
    currentValue: float
    returns: float
    returnPercentage: float


class DurationEstimate(BaseModel):
    """Months/years needed to reach a target.

    ``approximate`` is True when the closed-form inverse lands between two
    whole months; the value is NOT rounded up to the next contribution.
    """

    model_config = ConfigDict(frozen=True)

    months: float
    years: float
    approximate: bool


def annual_to_monthly_rate(annual_percent: float) -> float:
    return annual_percent / 100 / 12


def years_to_months(years: float) -> int:
    """Whole months in ``years``; fractional years must land on a month."""
    months = years * 12
    whole = int(round(months))
    if not math.isclose(months, whole, abs_tol=1e-9):
        raise InputValidationError("years", "must be a whole number of months")
    return whole


def return_percentage(gain: float, contributed: float) -> float:
    """Gain as a percent of contributions, 0 when nothing was contributed."""
    if contributed == 0:
        return 0.0
    return gain / contributed * 100


def annuity_factor(months: int, monthly_rate: float) -> float:
    """FV of contributing 1 per month for ``months`` months."""
    if monthly_rate > 0:
        growth = (1 + monthly_rate) ** months
        return (growth - 1) / monthly_rate * (1 + monthly_rate)
    return float(months)


def sip_future_value(monthly_contribution: float, months: int, monthly_rate: float) -> float:
    """Unrounded maturity value of a monthly contribution series."""
    require_positive("monthlyContribution", monthly_contribution)
    require_non_negative("periodMonths", months)
    require_non_negative("monthlyRate", monthly_rate)
    if months != int(months):
        raise InputValidationError("periodMonths", "must be a whole number")

    try:
        value = monthly_contribution * annuity_factor(int(months), monthly_rate)
    except OverflowError:
        value = math.inf
    return ensure_finite("monthlyContribution", value)


def calculate_sip(monthly_amount: float, years: float, annual_returns: float) -> SIPResult:
    """Invested amount, maturity value and gain for a monthly SIP."""
    require_positive("monthlyAmount", monthly_amount)
    require_non_negative("years", years)
    require_non_negative("annualReturns", annual_returns)

    months = years_to_months(years)
    monthly_rate = annual_to_monthly_rate(annual_returns)
    total_invested = monthly_amount * months
    maturity = sip_future_value(monthly_amount, months, monthly_rate)
    gain = maturity - total_invested

    return SIPResult(
        monthlyAmount=round(monthly_amount, CURRENCY_DECIMALS),
        years=years,
        months=months,
        annualReturns=round(annual_returns, PERCENT_DECIMALS),
        monthlyRate=round(monthly_rate, RATE_DECIMALS),
        totalInvested=round(total_invested, CURRENCY_DECIMALS),
        maturityValue=round(maturity, CURRENCY_DECIMALS),
        returns=round(gain, CURRENCY_DECIMALS),
        returnPercentage=round(return_percentage(gain, total_invested), PERCENT_DECIMALS),
    )


def yearly_growth(monthly_amount: float, years: int, annual_returns: float) -> List[YearlyGrowthRow]:
    """One row per completed year; ``invested`` is that single year's outlay."""
    require_positive("monthlyAmount", monthly_amount)
    require_non_negative("years", years)
    require_non_negative("annualReturns", annual_returns)

    monthly_rate = annual_to_monthly_rate(annual_returns)
    rows: List[YearlyGrowthRow] = []
    for year in range(1, int(years) + 1):
        months = year * 12
        total_invested = monthly_amount * months
        value = sip_future_value(monthly_amount, months, monthly_rate)
        gain = value - total_invested
        rows.append(
            YearlyGrowthRow(
                year=year,
                invested=round(monthly_amount * 12, CURRENCY_DECIMALS),
                totalInvested=round(total_invested, CURRENCY_DECIMALS),
                currentValue=round(value, CURRENCY_DECIMALS),
                returns=round(gain, CURRENCY_DECIMALS),
                returnPercentage=round(return_percentage(gain, total_invested), PERCENT_DECIMALS),
            )
        )
    return rows


def required_contribution(target_amount: float, years: float, annual_returns: float) -> float:
    """Monthly contribution that grows to ``target_amount`` in ``years``."""
    require_positive("targetAmount", target_amount)
    require_positive("years", years)
    require_non_negative("annualReturns", annual_returns)

    months = years_to_months(years)
    monthly_rate = annual_to_monthly_rate(annual_returns)
    return round(target_amount / annuity_factor(months, monthly_rate), CURRENCY_DECIMALS)


def required_duration(monthly_amount: float, target_amount: float, annual_returns: float) -> DurationEstimate:
    """Time needed for ``monthly_amount`` to grow to ``target_amount``.

    Solves the future-value formula for n in closed form:

        n = ln(FV * r / (P * (1 + r)) + 1) / ln(1 + r)

    which is the exact continuous root. It is not refined to whole months,
    so callers must accept fractional output.
    """
    require_positive("monthlyAmount", monthly_amount)
    require_positive("targetAmount", target_amount)
    require_non_negative("annualReturns", annual_returns)

    monthly_rate = annual_to_monthly_rate(annual_returns)
    if monthly_rate > 0:
        ratio = target_amount * monthly_rate / (monthly_amount * (1 + monthly_rate)) + 1
        months = math.log(ratio) / math.log(1 + monthly_rate)
    else:
        months = target_amount / monthly_amount

    return DurationEstimate(
        months=round(months, CURRENCY_DECIMALS),
        years=round(months / 12, CURRENCY_DECIMALS),
        approximate=not math.isclose(months, round(months), abs_tol=1e-9),
    )


__all__ = [
    "SIPResult",
    "YearlyGrowthRow",
    "DurationEstimate",
    "annual_to_monthly_rate",
    "years_to_months",
    "return_percentage",
    "annuity_factor",
    "sip_future_value",
    "calculate_sip",
    "yearly_growth",
    "required_contribution",
    "required_duration",
]
