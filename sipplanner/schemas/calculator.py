"""Data contracts for the calculator endpoints.

Range checks that map onto a single field live here; anything the math
modules must enforce themselves (e.g. whole months) is re-checked there.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from sipplanner.models import MAX_AMOUNT, InvestmentGoals, Portfolio, RiskAnswers, SIPScenario


class SIPRequest(BaseModel):
    """Inputs for a monthly SIP."""

    model_config = ConfigDict(extra="forbid")

    monthlyAmount: float = Field(
        ..., gt=0, le=MAX_AMOUNT, description="Contribution made at the start of each month."
    )
    years: float = Field(..., ge=0, le=100, description="Investment period in years.")
    annualReturns: float = Field(
        ...,
        ge=0,
        le=100,
        description="Expected annual return in percent (e.g. 12 for 12%).",
    )


class YearlyGrowthRequest(SIPRequest):
    years: int = Field(..., ge=1, le=100)


class ProjectionRequest(SIPRequest):
    interval: Optional[int] = Field(
        None,
        ge=1,
        description="Months between samples; the app default is used when omitted.",
    )


class RequiredContributionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    targetAmount: float = Field(..., gt=0, le=MAX_AMOUNT)
    years: float = Field(..., gt=0, le=100)
    annualReturns: float = Field(..., ge=0, le=100)


class RequiredDurationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    monthlyAmount: float = Field(..., gt=0, le=MAX_AMOUNT)
    targetAmount: float = Field(..., gt=0, le=MAX_AMOUNT)
    annualReturns: float = Field(..., ge=0, le=100)


class LumpSumRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    principal: float = Field(..., ge=0, le=MAX_AMOUNT)
    years: float = Field(..., ge=0, le=100)
    annualReturns: float = Field(..., ge=0, le=100)


class CompareRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    monthlySIP: float = Field(..., gt=0, le=MAX_AMOUNT)
    lumpSumAmount: float = Field(..., ge=0, le=MAX_AMOUNT)
    years: float = Field(..., ge=0, le=100)
    annualReturns: float = Field(..., ge=0, le=100)


class ScenarioListRequest(BaseModel):
    scenarios: List[SIPScenario] = Field(default_factory=list)


class RecommendationRequest(BaseModel):
    answers: Optional[RiskAnswers] = Field(
        None,
        description="Questionnaire answers; omit to get the not-assessed defaults.",
    )
    goals: InvestmentGoals = Field(default_factory=InvestmentGoals)


class OptimizeAllocationRequest(BaseModel):
    riskTolerance: Optional[str] = None
    timeHorizon: Optional[int] = Field(None, ge=0, le=100)


class AnalyticsRequest(BaseModel):
    portfolios: List[Portfolio] = Field(default_factory=list)
    scenarios: List[SIPScenario] = Field(default_factory=list)
    years: int = Field(10, ge=1, le=100, description="Length of the yearly time series.")
