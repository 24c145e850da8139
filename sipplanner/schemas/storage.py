"""Shape of an exported/imported storage bundle."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from sipplanner.core.risk import RiskProfile
from sipplanner.models import Portfolio, SIPScenario


class StorageBundle(BaseModel):
    """Every key is optional; ``exportDate`` and unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    sipScenarios: List[SIPScenario] = Field(default_factory=list)
    portfolios: List[Portfolio] = Field(default_factory=list)
    riskProfile: Optional[RiskProfile] = None
    comparisonSIPs: List[SIPScenario] = Field(default_factory=list)
