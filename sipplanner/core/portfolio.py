"""Per-portfolio aggregation: invested, projected value, ROI, risk, goal progress."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict

from sipplanner.core.annuity import CURRENCY_DECIMALS, PERCENT_DECIMALS, calculate_sip, return_percentage
from sipplanner.core.lumpsum import lump_sum_future_value
from sipplanner.models import Asset, Portfolio

SIP_ASSET = "sip"
DEFAULT_RISK_SCORE = 5.0
ALLOCATION_TOLERANCE = 0.01

# 1 = lowest risk, 10 = highest
ASSET_RISK: Mapping[str, int] = MappingProxyType(
    {
        "sip": 5,
        "stocks": 8,
        "bonds": 3,
        "realestate": 4,
        "gold": 4,
        "emergency": 1,
    }
)


class AllocationCheck(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid: bool
    totalAllocation: float
    message: Optional[str] = None


class GoalProgress(BaseModel):
    model_config = ConfigDict(frozen=True)

    currentValue: float
    targetAmount: float
    progress: float
    remaining: float
    isAchieved: bool


class PortfolioMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    totalInvested: float
    currentValue: float
    returns: float
    roi: float
    weightedAverageReturn: float
    riskScore: float
    goalProgress: Optional[GoalProgress] = None


def _asset_invested(asset_type: str, asset: Asset, horizon: Optional[int]) -> float:
    # a SIP amount is paid every month of the horizon
    if asset_type == SIP_ASSET and horizon:
        return asset.amount * horizon * 12
    return asset.amount


def total_invested(portfolio: Portfolio) -> float:
    return round(
        sum(_asset_invested(kind, asset, portfolio.timeHorizon) for kind, asset in portfolio.assets.items()),
        CURRENCY_DECIMALS,
    )


def projected_value(portfolio: Portfolio) -> float:
    """Value of every asset at the end of ``timeHorizon`` years.

    The SIP asset grows as a monthly annuity; everything else is a lump sum
    compounding annually. Returns 0 when there is no horizon.
    """
    if not portfolio.assets or not portfolio.timeHorizon:
        return 0.0

    years = portfolio.timeHorizon
    value = 0.0
    for kind, asset in portfolio.assets.items():
        if asset.amount <= 0:
            continue
        if kind == SIP_ASSET:
            value += calculate_sip(asset.amount, years, asset.returns).maturityValue
        else:
            value += lump_sum_future_value(asset.amount, years, asset.returns)
    return round(value, CURRENCY_DECIMALS)


def weighted_average_return(portfolio: Portfolio) -> float:
    total_allocation = sum(asset.allocation for asset in portfolio.assets.values())
    if total_allocation == 0:
        return 0.0
    weighted = sum(asset.allocation / 100 * asset.returns for asset in portfolio.assets.values())
    return round(weighted, PERCENT_DECIMALS)


def portfolio_risk(portfolio: Portfolio, risk_table: Mapping[str, int] = ASSET_RISK) -> float:
    """Allocation-weighted risk on a 1-10 scale; 5 when nothing is allocated."""
    total_allocation = sum(asset.allocation for asset in portfolio.assets.values())
    if total_allocation == 0:
        return DEFAULT_RISK_SCORE

    weighted = sum(
        asset.allocation / 100 * risk_table.get(kind, DEFAULT_RISK_SCORE)
        for kind, asset in portfolio.assets.items()
    )
    return round(weighted, 1)


def validate_allocation(portfolio: Portfolio) -> AllocationCheck:
    if not portfolio.assets:
        return AllocationCheck(valid=False, totalAllocation=0.0, message="Portfolio has no assets")

    total = sum(asset.allocation for asset in portfolio.assets.values())
    if abs(total - 100) > ALLOCATION_TOLERANCE:
        return AllocationCheck(
            valid=False,
            totalAllocation=round(total, PERCENT_DECIMALS),
            message=f"Total allocation is {total:.2f}%. It should be 100%.",
        )
    return AllocationCheck(valid=True, totalAllocation=100.0)


def goal_progress(portfolio: Portfolio) -> Optional[GoalProgress]:
    target = portfolio.targetAmount
    if not target or target <= 0:
        return None

    current = projected_value(portfolio)
    return GoalProgress(
        currentValue=round(current, CURRENCY_DECIMALS),
        targetAmount=round(target, CURRENCY_DECIMALS),
        progress=round(current / target * 100, PERCENT_DECIMALS),
        remaining=round(max(0.0, target - current), CURRENCY_DECIMALS),
        isAchieved=current >= target,
    )


def portfolio_metrics(portfolio: Portfolio) -> PortfolioMetrics:
    invested = total_invested(portfolio)
    current = projected_value(portfolio)
    gain = current - invested
    return PortfolioMetrics(
        totalInvested=invested,
        currentValue=current,
        returns=round(gain, CURRENCY_DECIMALS),
        roi=round(return_percentage(gain, invested), PERCENT_DECIMALS),
        weightedAverageReturn=weighted_average_return(portfolio),
        riskScore=portfolio_risk(portfolio),
        goalProgress=goal_progress(portfolio),
    )


__all__ = [
    "ASSET_RISK",
    "AllocationCheck",
    "GoalProgress",
    "PortfolioMetrics",
    "total_invested",
    "projected_value",
    "weighted_average_return",
    "portfolio_risk",
    "validate_allocation",
    "goal_progress",
    "portfolio_metrics",
]
