from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict

from sipplanner.core.annuity import (
    CURRENCY_DECIMALS,
    annual_to_monthly_rate,
    sip_future_value,
    years_to_months,
)
from sipplanner.domain.errors import InputValidationError, require_non_negative, require_positive

DEFAULT_INTERVAL_MONTHS = 6


class ProjectionPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    month: int
    invested: float
    value: float
    returns: float


class ProjectionSeries(BaseModel):
    model_config = ConfigDict(frozen=True)

    intervalMonths: int
    totalMonths: int
    points: List[ProjectionPoint]

    # parallel lists in the shape chart datasets expect
    @property
    def labels(self) -> List[str]:
        return [p.label for p in self.points]

    @property
    def invested(self) -> List[float]:
        return [p.invested for p in self.points]

    @property
    def maturity(self) -> List[float]:
        return [p.value for p in self.points]

    @property
    def returns(self) -> List[float]:
        return [p.returns for p in self.points]

    def chart_data(self) -> dict:
        return {
            "labels": self.labels,
            "invested": self.invested,
            "maturity": self.maturity,
            "returns": self.returns,
        }


def month_checkpoints(total_months: int, interval: int) -> List[int]:
    """Multiples of ``interval`` up to ``total_months``, plus ``total_months``
    itself when it is not already one of them."""
    if interval <= 0 or interval != int(interval):
        raise InputValidationError("interval", "must be a positive whole number of months")
    interval = int(interval)

    checkpoints = list(range(interval, total_months + 1, interval))
    if total_months % interval != 0:
        checkpoints.append(total_months)
    return checkpoints


def sample_projection(
    monthly_amount: float,
    years: float,
    annual_returns: float,
    interval: int = DEFAULT_INTERVAL_MONTHS,
) -> ProjectionSeries:
    """
    Evenly spaced valuations of a SIP for charting.

    Every sample is evaluated directly from the closed form at its own month
    count (not accumulated from the previous sample), so any single point can
    be recomputed in isolation and always matches.
    """
    require_positive("monthlyAmount", monthly_amount)
    require_non_negative("years", years)
    require_non_negative("annualReturns", annual_returns)

    total_months = years_to_months(years)
    monthly_rate = annual_to_monthly_rate(annual_returns)

    points: List[ProjectionPoint] = []
    for month in month_checkpoints(total_months, interval):
        invested = monthly_amount * month
        value = sip_future_value(monthly_amount, month, monthly_rate)
        points.append(
            ProjectionPoint(
                label=f"Year {month / 12:.1f}",
                month=month,
                invested=round(invested, CURRENCY_DECIMALS),
                value=round(value, CURRENCY_DECIMALS),
                returns=round(value - invested, CURRENCY_DECIMALS),
            )
        )

    return ProjectionSeries(intervalMonths=int(interval), totalMonths=total_months, points=points)


__all__ = [
    "DEFAULT_INTERVAL_MONTHS",
    "ProjectionPoint",
    "ProjectionSeries",
    "month_checkpoints",
    "sample_projection",
]
