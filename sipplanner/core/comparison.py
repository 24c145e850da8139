"""Side-by-side evaluation of several SIP scenarios."""

from __future__ import annotations

from typing import List, Sequence

from pydantic import BaseModel, ConfigDict

from sipplanner.core.annuity import SIPResult, calculate_sip
from sipplanner.models import SIPScenario


class NamedSIPResult(SIPResult):
    model_config = ConfigDict(frozen=True)

    name: str


class SIPComparisonRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    monthlyAmount: float
    period: float
    expectedReturns: float
    totalInvested: float
    maturityValue: float
    returns: float
    roi: float


def calculate_multiple_sips(scenarios: Sequence[SIPScenario]) -> List[NamedSIPResult]:
    """Evaluate each scenario independently, preserving input order."""
    results: List[NamedSIPResult] = []
    for index, scenario in enumerate(scenarios):
        result = calculate_sip(scenario.monthlyAmount, scenario.period, scenario.expectedReturns)
        results.append(
            NamedSIPResult(name=scenario.name or f"SIP {index + 1}", **result.model_dump())
        )
    return results


def sip_comparison_table(scenarios: Sequence[SIPScenario]) -> List[SIPComparisonRow]:
    """Flattened rows for the comparison table/export."""
    rows: List[SIPComparisonRow] = []
    for scenario in scenarios:
        result = calculate_sip(scenario.monthlyAmount, scenario.period, scenario.expectedReturns)
        rows.append(
            SIPComparisonRow(
                name=scenario.name or "Unnamed SIP",
                monthlyAmount=scenario.monthlyAmount,
                period=scenario.period,
                expectedReturns=scenario.expectedReturns,
                totalInvested=result.totalInvested,
                maturityValue=result.maturityValue,
                returns=result.returns,
                roi=result.returnPercentage,
            )
        )
    return rows


__all__ = [
    "NamedSIPResult",
    "SIPComparisonRow",
    "calculate_multiple_sips",
    "sip_comparison_table",
]
