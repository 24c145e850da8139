"""Static recommendation tables and the allocation optimizer.

The tables are read-only; every function returns fresh data built from them,
so callers may mutate what they get back without affecting later calls.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from sipplanner.core.risk import RiskProfile
from sipplanner.models import InvestmentGoals

SHORT_HORIZON_YEARS = 5
LONG_HORIZON_YEARS = 15


class LevelAdvice(BaseModel):
    model_config = ConfigDict(frozen=True)

    summary: str
    allocation: Tuple[str, ...]
    recommendations: Tuple[str, ...]
    expectedReturns: str
    riskLevel: str


class GoalAdvice(BaseModel):
    model_config = ConfigDict(frozen=True)

    recommendations: Tuple[str, ...]
    timeline: str
    corpus: str


class Recommendations(BaseModel):
    summary: str
    allocation: List[str]
    recommendations: List[str]
    expectedReturns: str
    riskLevel: str
    goalSpecific: Optional[GoalAdvice] = None
    timeHorizonAdjustments: List[str] = Field(default_factory=list)
    riskProfile: Optional[RiskProfile] = None


LEVEL_ADVICE: Mapping[str, LevelAdvice] = MappingProxyType(
    {
        "conservative": LevelAdvice(
            summary=(
                "Based on your conservative risk profile, we recommend a balanced approach "
                "focusing on capital preservation with steady growth."
            ),
            allocation=(
                "Allocate 40-50% to SIP/Mutual Funds (Large Cap & Balanced Funds)",
                "Invest 20-30% in Bonds and Fixed Income instruments",
                "Keep 15-20% in Stocks (Blue-chip only)",
                "Allocate 5-10% to Gold and Real Estate for diversification",
                "Maintain 5-10% as emergency fund",
            ),
            recommendations=(
                "Start with large-cap mutual funds for stability",
                "Consider Systematic Transfer Plans (STP) for gradual equity exposure",
                "Diversify across 3-5 different fund houses",
                "Review portfolio quarterly and rebalance if needed",
                "Consider tax-saving ELSS funds for additional benefits",
                "Avoid high-risk instruments like derivatives or penny stocks",
            ),
            expectedReturns="8-12% annually",
            riskLevel="Low to Moderate",
        ),
        "moderate": LevelAdvice(
            summary=(
                "Your moderate risk profile suggests a balanced growth strategy with a mix "
                "of equity and debt instruments."
            ),
            allocation=(
                "Allocate 40-50% to SIP/Mutual Funds (Mix of Large, Mid, and Small Cap)",
                "Invest 25-35% in Stocks and Equities",
                "Allocate 15-20% to Bonds and Fixed Income",
                "Keep 5-10% in Gold and Commodities",
                "Consider 5-10% in Real Estate or REITs",
            ),
            recommendations=(
                "Build a diversified portfolio across market caps",
                "Use SIPs for disciplined investing in equity funds",
                "Consider balanced/hybrid funds for automatic rebalancing",
                "Invest in index funds for lower costs",
                "Rebalance portfolio annually or when allocation drifts by 5%",
                "Consider sector-specific funds for tactical allocation",
                "Maintain 3-6 months expenses as emergency fund",
            ),
            expectedReturns="12-15% annually",
            riskLevel="Moderate",
        ),
        "aggressive": LevelAdvice(
            summary=(
                "Your aggressive risk profile indicates you can handle market volatility. "
                "We recommend a growth-oriented portfolio with higher equity exposure."
            ),
            allocation=(
                "Allocate 30-40% to SIP/Mutual Funds (Focus on Mid and Small Cap)",
                "Invest 45-55% in Stocks and Equities",
                "Keep 10-15% in Bonds for stability",
                "Allocate 5-10% in Gold for hedging",
                "Consider 5% in alternative investments (Real Estate, etc.)",
            ),
            recommendations=(
                "Focus on growth-oriented equity funds and direct stocks",
                "Consider small-cap and mid-cap funds for higher returns",
                "Use sector rotation strategy for tactical gains",
                "Consider international funds for global diversification",
                "Monitor portfolio more frequently (monthly)",
                "Be prepared for higher volatility and short-term losses",
                "Maintain 3-6 months expenses as emergency fund",
                "Consider systematic profit booking at regular intervals",
            ),
            expectedReturns="15-18%+ annually",
            riskLevel="High",
        ),
    }
)

DEFAULT_ADVICE = LevelAdvice(
    summary="Please complete the risk assessment to get personalized recommendations.",
    allocation=(),
    recommendations=(
        "Complete the risk assessment questionnaire",
        "Define your investment goals",
        "Determine your time horizon",
        "Start with SIPs for disciplined investing",
    ),
    expectedReturns="Varies based on risk profile",
    riskLevel="Not Assessed",
)

GOAL_ADVICE: Mapping[str, GoalAdvice] = MappingProxyType(
    {
        "retirement": GoalAdvice(
            recommendations=(
                "Start early with long-term SIPs in equity funds",
                "Increase allocation to debt instruments as retirement approaches",
                "Consider retirement-focused mutual funds",
                "Plan for 25-30x annual expenses as retirement corpus",
                "Review and adjust strategy every 5 years",
            ),
            timeline="15-30 years",
            corpus="Large corpus needed",
        ),
        "education": GoalAdvice(
            recommendations=(
                "Use child education plans or SIPs in equity funds",
                "Consider education-focused savings schemes",
                "Start early to benefit from compounding",
                "Plan for inflation in education costs (6-8% annually)",
                "Consider international education funds if planning abroad",
            ),
            timeline="10-18 years",
            corpus="Moderate to large corpus",
        ),
        "house": GoalAdvice(
            recommendations=(
                "Use balanced funds for medium-term growth",
                "Consider debt funds as down payment approaches",
                "Plan for 20-30% down payment plus additional costs",
                "Account for real estate price appreciation",
                "Consider home loan prepayment strategy",
            ),
            timeline="5-10 years",
            corpus="Moderate corpus",
        ),
        "vacation": GoalAdvice(
            recommendations=(
                "Use short to medium-term debt or balanced funds",
                "Consider liquid funds for short-term goals",
                "Avoid high-risk investments for near-term goals",
                "Plan for currency fluctuations if traveling abroad",
            ),
            timeline="1-3 years",
            corpus="Small to moderate corpus",
        ),
        "emergency": GoalAdvice(
            recommendations=(
                "Use liquid funds or high-yield savings accounts",
                "Maintain 6-12 months of expenses",
                "Keep funds easily accessible",
                "Avoid locking in for long periods",
                "Consider arbitrage funds for slightly higher returns",
            ),
            timeline="Immediate access needed",
            corpus="Small corpus",
        ),
        "wealth-building": GoalAdvice(
            recommendations=(
                "Focus on equity funds and direct stocks",
                "Use SIPs for disciplined wealth creation",
                "Consider international diversification",
                "Reinvest dividends and returns for compounding",
                "Review and rebalance quarterly",
            ),
            timeline="10+ years",
            corpus="Large corpus target",
        ),
    }
)

ALLOCATIONS: Mapping[str, Mapping[str, int]] = MappingProxyType(
    {
        "conservative": MappingProxyType({"sip": 40, "stocks": 20, "bonds": 30, "realestate": 5, "gold": 5}),
        "moderate": MappingProxyType({"sip": 40, "stocks": 30, "bonds": 20, "realestate": 5, "gold": 5}),
        "aggressive": MappingProxyType({"sip": 30, "stocks": 50, "bonds": 10, "realestate": 5, "gold": 5}),
    }
)

MARKET_INSIGHTS: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "equityMarket": MappingProxyType(
            {
                "status": "Moderate",
                "recommendation": "Good time to continue SIP investments",
                "note": "Market volatility presents opportunities for long-term investors",
            }
        ),
        "debtMarket": MappingProxyType(
            {
                "status": "Stable",
                "recommendation": "Consider debt funds for stability",
                "note": "Interest rates are relatively stable",
            }
        ),
        "gold": MappingProxyType(
            {
                "status": "Stable",
                "recommendation": "Maintain 5-10% allocation",
                "note": "Gold serves as a hedge against inflation",
            }
        ),
    }
)


def goal_advice(goal: str) -> GoalAdvice:
    return GOAL_ADVICE.get(goal, GOAL_ADVICE["wealth-building"])


def time_horizon_adjustments(time_horizon: int) -> List[str]:
    if time_horizon < SHORT_HORIZON_YEARS:
        return [
            "Short-term: Reduce equity allocation by 10-15%",
            "Focus on debt funds and liquid instruments",
            "Avoid high-volatility investments",
        ]
    if time_horizon >= LONG_HORIZON_YEARS:
        return [
            "Long-term: Can increase equity allocation by 10-15%",
            "Benefit from market cycles and compounding",
            "Consider aggressive growth funds",
        ]
    return [
        "Medium-term: Maintain balanced allocation",
        "Regular monitoring and rebalancing recommended",
    ]


def summarize(risk_level: Optional[str], goals: InvestmentGoals) -> str:
    summary = f"Based on your {risk_level or 'Moderate'} risk profile"
    if goals.goal:
        summary += f" and {goals.goal} goal"
    if goals.timeHorizon:
        summary += f" with a {goals.timeHorizon}-year time horizon"
    return summary + (
        ", we recommend a diversified investment strategy that balances growth "
        "potential with risk management."
    )


def _from_advice(advice: LevelAdvice) -> Recommendations:
    return Recommendations(
        summary=advice.summary,
        allocation=list(advice.allocation),
        recommendations=list(advice.recommendations),
        expectedReturns=advice.expectedReturns,
        riskLevel=advice.riskLevel,
    )


def get_recommendations(
    profile: Optional[RiskProfile],
    goals: Optional[InvestmentGoals] = None,
) -> Recommendations:
    """Level advice for ``profile``, customised by goal and horizon.

    Without a profile the "complete the questionnaire" defaults come back.
    """
    if profile is None:
        return _from_advice(DEFAULT_ADVICE)

    goals = goals or InvestmentGoals()
    level = profile.riskLevel.lower()
    result = _from_advice(LEVEL_ADVICE.get(level, LEVEL_ADVICE["moderate"]))

    if goals.goal:
        result.goalSpecific = goal_advice(goals.goal)
    if goals.timeHorizon:
        result.timeHorizonAdjustments = time_horizon_adjustments(goals.timeHorizon)

    result.riskProfile = profile
    result.summary = summarize(profile.riskLevel, goals)
    return result


def personalized_tips(profile: RiskProfile, goals: Optional[InvestmentGoals] = None) -> List[str]:
    goals = goals or InvestmentGoals()
    tips: List[str] = []

    if profile.riskLevel == "Conservative":
        tips += [
            "Focus on capital preservation while aiming for steady growth",
            "Consider increasing SIP amounts gradually as you get comfortable",
            "Avoid making emotional decisions during market volatility",
        ]
    elif profile.riskLevel == "Aggressive":
        tips += [
            "Monitor your portfolio more frequently",
            "Be prepared for short-term volatility",
            "Consider systematic profit booking at regular intervals",
        ]

    if goals.timeHorizon and goals.timeHorizon < SHORT_HORIZON_YEARS:
        tips.append("For short-term goals, prioritize capital preservation")
    if goals.timeHorizon and goals.timeHorizon > LONG_HORIZON_YEARS:
        tips.append("Long-term horizon allows you to take advantage of market cycles")
        tips.append("Focus on wealth creation through equity investments")

    return tips or ["Stay disciplined with your SIPs", "Review your portfolio periodically"]


def market_insights() -> Dict[str, Dict[str, str]]:
    return {market: dict(view) for market, view in MARKET_INSIGHTS.items()}


def recommended_allocation(risk_level: Optional[str]) -> Dict[str, int]:
    """Percent per asset class for a risk level; unknown levels get moderate."""
    level = (risk_level or "moderate").lower()
    return dict(ALLOCATIONS.get(level, ALLOCATIONS["moderate"]))


def optimize_allocation(risk_tolerance: Optional[str] = None, time_horizon: Optional[int] = None) -> Dict[str, int]:
    """Tilt the recommended allocation by horizon and return a NEW mapping.

    Short horizons move 10 points from stocks to bonds, long horizons the
    other way, within fixed floors/caps. If the tilt leaves the total off 100
    every class is rescaled and rounded to whole percents.
    """
    allocation = recommended_allocation(risk_tolerance)

    if time_horizon:
        if time_horizon < SHORT_HORIZON_YEARS:
            allocation["stocks"] = max(10, allocation["stocks"] - 10)
            allocation["bonds"] = min(40, allocation["bonds"] + 10)
        elif time_horizon > LONG_HORIZON_YEARS:
            allocation["stocks"] = min(60, allocation["stocks"] + 10)
            allocation["bonds"] = max(10, allocation["bonds"] - 10)

    total = sum(allocation.values())
    if total != 100:
        allocation = {asset: round(pct / total * 100) for asset, pct in allocation.items()}
    return allocation


__all__ = [
    "LevelAdvice",
    "GoalAdvice",
    "Recommendations",
    "LEVEL_ADVICE",
    "DEFAULT_ADVICE",
    "GOAL_ADVICE",
    "ALLOCATIONS",
    "MARKET_INSIGHTS",
    "goal_advice",
    "time_horizon_adjustments",
    "summarize",
    "get_recommendations",
    "personalized_tips",
    "market_insights",
    "recommended_allocation",
    "optimize_allocation",
]
