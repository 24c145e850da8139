"""Reductions across saved portfolios and SIP scenarios.

Every portfolio and scenario is evaluated on its own; the totals and
statistics are plain reductions over those independent results.
"""

from __future__ import annotations

from typing import List, Literal, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from sipplanner.core.annuity import CURRENCY_DECIMALS, PERCENT_DECIMALS, SIPResult, calculate_sip, return_percentage
from sipplanner.core.portfolio import PortfolioMetrics, portfolio_metrics, portfolio_risk, projected_value
from sipplanner.models import Portfolio, SIPScenario

# ROI buckets for the distribution chart
LOW_ROI_BELOW = 8
MEDIUM_ROI_BELOW = 15
SIP_RISK_SCORE = 5


class PortfolioEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    portfolio: Portfolio
    metrics: PortfolioMetrics


class SIPEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    scenario: SIPScenario
    result: SIPResult


class AnalyticsSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    totalInvested: float
    totalValue: float
    totalReturns: float
    averageROI: float
    portfolioCount: int
    sipCount: int


class Analytics(BaseModel):
    model_config = ConfigDict(frozen=True)

    portfolios: List[PortfolioEntry]
    sips: List[SIPEntry]
    summary: AnalyticsSummary


class Performer(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: Literal["portfolio", "sip"]
    roi: float


class RiskDistribution(BaseModel):
    low: int = 0
    medium: int = 0
    high: int = 0


class AggregateStats(BaseModel):
    totalInvestments: int
    bestPerformer: Optional[Performer] = None
    worstPerformer: Optional[Performer] = None
    averageReturns: float = 0.0
    riskDistribution: RiskDistribution = Field(default_factory=RiskDistribution)


class RiskReturnPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    label: str
    type: Literal["portfolio", "sip"]
    id: Optional[str] = None


class TimeSeriesDataset(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    data: List[float]


class TimeSeries(BaseModel):
    model_config = ConfigDict(frozen=True)

    labels: List[str]
    datasets: List[TimeSeriesDataset]


def _evaluate(scenario: SIPScenario) -> SIPResult:
    return calculate_sip(scenario.monthlyAmount, scenario.period, scenario.expectedReturns)


def process_analytics(portfolios: Sequence[Portfolio], scenarios: Sequence[SIPScenario]) -> Analytics:
    portfolio_entries = [PortfolioEntry(portfolio=p, metrics=portfolio_metrics(p)) for p in portfolios]
    sip_entries = [SIPEntry(scenario=s, result=_evaluate(s)) for s in scenarios]

    invested = sum(e.metrics.totalInvested for e in portfolio_entries) + sum(
        e.result.totalInvested for e in sip_entries
    )
    value = sum(e.metrics.currentValue for e in portfolio_entries) + sum(
        e.result.maturityValue for e in sip_entries
    )
    gains = sum(e.metrics.returns for e in portfolio_entries) + sum(e.result.returns for e in sip_entries)

    return Analytics(
        portfolios=portfolio_entries,
        sips=sip_entries,
        summary=AnalyticsSummary(
            totalInvested=round(invested, CURRENCY_DECIMALS),
            totalValue=round(value, CURRENCY_DECIMALS),
            totalReturns=round(gains, CURRENCY_DECIMALS),
            averageROI=round(return_percentage(gains, invested), PERCENT_DECIMALS),
            portfolioCount=len(portfolio_entries),
            sipCount=len(sip_entries),
        ),
    )


def _performers(analytics: Analytics) -> List[Performer]:
    performers = [
        Performer(name=e.portfolio.name, type="portfolio", roi=e.metrics.roi) for e in analytics.portfolios
    ]
    performers += [
        Performer(name=e.scenario.name or "SIP", type="sip", roi=e.result.returnPercentage)
        for e in analytics.sips
    ]
    return performers


def aggregate_stats(analytics: Analytics) -> AggregateStats:
    """Best/worst by ROI (earliest wins a tie), mean ROI and ROI buckets."""
    performers = _performers(analytics)
    stats = AggregateStats(totalInvestments=len(performers))
    if not performers:
        return stats

    best = worst = performers[0]
    for performer in performers[1:]:
        if performer.roi > best.roi:
            best = performer
        if performer.roi < worst.roi:
            worst = performer

    distribution = RiskDistribution()
    for performer in performers:
        if performer.roi < LOW_ROI_BELOW:
            distribution.low += 1
        elif performer.roi < MEDIUM_ROI_BELOW:
            distribution.medium += 1
        else:
            distribution.high += 1

    stats.bestPerformer = best
    stats.worstPerformer = worst
    stats.averageReturns = round(sum(p.roi for p in performers) / len(performers), PERCENT_DECIMALS)
    stats.riskDistribution = distribution
    return stats


def risk_return_points(portfolios: Sequence[Portfolio], scenarios: Sequence[SIPScenario]) -> List[RiskReturnPoint]:
    points = [
        RiskReturnPoint(
            x=portfolio_risk(p),
            y=portfolio_metrics(p).roi,
            label=p.name or "Portfolio",
            type="portfolio",
            id=p.id,
        )
        for p in portfolios
    ]
    points += [
        RiskReturnPoint(x=SIP_RISK_SCORE, y=_evaluate(s).returnPercentage, label=s.name or "SIP", type="sip")
        for s in scenarios
    ]
    return points


def time_series(
    scenarios: Sequence[SIPScenario],
    portfolios: Sequence[Portfolio] = (),
    years: int = 10,
) -> TimeSeries:
    """Year-end value of each scenario/portfolio for years 1..``years``."""
    labels = [f"Year {year}" for year in range(1, years + 1)]
    datasets: List[TimeSeriesDataset] = []

    for index, scenario in enumerate(scenarios):
        data = [
            calculate_sip(scenario.monthlyAmount, year, scenario.expectedReturns).maturityValue
            for year in range(1, years + 1)
        ]
        datasets.append(TimeSeriesDataset(label=scenario.name or f"SIP {index + 1}", data=data))

    for portfolio in portfolios:
        data = [
            projected_value(portfolio.model_copy(update={"timeHorizon": year}))
            for year in range(1, years + 1)
        ]
        datasets.append(TimeSeriesDataset(label=portfolio.name, data=data))

    return TimeSeries(labels=labels, datasets=datasets)


__all__ = [
    "Analytics",
    "AnalyticsSummary",
    "AggregateStats",
    "Performer",
    "PortfolioEntry",
    "RiskDistribution",
    "RiskReturnPoint",
    "SIPEntry",
    "TimeSeries",
    "TimeSeriesDataset",
    "process_analytics",
    "aggregate_stats",
    "risk_return_points",
    "time_series",
]
