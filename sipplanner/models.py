from __future__ import annotations

from typing import Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# Upper bound on any single currency input (one lakh crore rupees).
MAX_AMOUNT = 1e12


class SIPScenario(BaseModel):
    """A saved or compared SIP. Older clients send ``amount``/``years``/``returns``."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    monthlyAmount: float = Field(gt=0, le=MAX_AMOUNT, validation_alias=AliasChoices("monthlyAmount", "amount"))
    period: float = Field(ge=0, le=100, validation_alias=AliasChoices("period", "years"))
    expectedReturns: float = Field(ge=0, validation_alias=AliasChoices("expectedReturns", "returns"))


class Asset(BaseModel):
    model_config = ConfigDict(extra="ignore")

    amount: float = Field(default=0.0, ge=0, le=MAX_AMOUNT)
    allocation: float = Field(default=0.0, ge=0, le=100)
    returns: float = Field(default=0.0, ge=0)


class Portfolio(BaseModel):
    """A user portfolio keyed by asset class (sip, stocks, bonds, ...).

    The ``sip`` asset's amount is a monthly contribution; every other asset
    amount is a one-off principal.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    name: str = "Portfolio"
    assets: Dict[str, Asset] = Field(default_factory=dict)
    timeHorizon: Optional[int] = Field(default=None, ge=0, le=100)
    targetAmount: Optional[float] = None


class RiskAnswers(BaseModel):
    """Questionnaire answers. Missing or unknown answers score as the default."""

    model_config = ConfigDict(extra="ignore")

    timeHorizon: Optional[str] = None
    riskTolerance: Optional[str] = None
    investmentGoal: Optional[str] = None
    lossTolerance: Optional[str] = None
    knowledgeLevel: Optional[str] = None
    experience: Optional[str] = None
    incomeStability: Optional[str] = None


class InvestmentGoals(BaseModel):
    model_config = ConfigDict(extra="ignore")

    goal: Optional[str] = None
    timeHorizon: Optional[int] = Field(default=None, ge=0)


__all__ = [
    "MAX_AMOUNT",
    "SIPScenario",
    "Asset",
    "Portfolio",
    "RiskAnswers",
    "InvestmentGoals",
]
