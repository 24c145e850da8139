"""Risk-profile questionnaire scoring.

Each answer is looked up in its score table, multiplied by the question's
weight and summed. The sum is normalised against the score every question
would get at 8 points, then banded:

    score < 35  -> Conservative
    score > 65  -> Aggressive
    otherwise   -> Moderate
"""

from __future__ import annotations

from datetime import datetime, timezone
from types import MappingProxyType
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from sipplanner.models import RiskAnswers

RiskLevel = Literal["Conservative", "Moderate", "Aggressive"]

MAX_ANSWER_SCORE = 8
CONSERVATIVE_BELOW = 35
AGGRESSIVE_ABOVE = 65


class ScoreTable(BaseModel):
    """Immutable answer -> points mapping with a fallback for unknown answers."""

    model_config = ConfigDict(frozen=True)

    scores: Mapping[str, int]
    default: int

    @field_validator("scores", mode="after")
    @classmethod
    def _read_only(cls, scores: Mapping[str, int]) -> Mapping[str, int]:
        return MappingProxyType(dict(scores))

    def score(self, answer: Optional[str]) -> int:
        if answer is None:
            return self.default
        return self.scores.get(answer, self.default)


WEIGHTS: Mapping[str, int] = MappingProxyType(
    {
        "timeHorizon": 2,
        "riskTolerance": 3,
        "investmentGoal": 2,
        "lossTolerance": 3,
        "knowledgeLevel": 1,
        "experience": 1,
        "incomeStability": 1,
    }
)

SCORE_TABLES: Mapping[str, ScoreTable] = MappingProxyType(
    {
        "timeHorizon": ScoreTable(scores={"short": 1, "medium": 3, "long": 5, "very-long": 7}, default=3),
        "riskTolerance": ScoreTable(scores={"panic": 1, "concern": 3, "hold": 5, "buy": 7}, default=3),
        "investmentGoal": ScoreTable(
            scores={
                "capital-preservation": 1,
                "balanced-growth": 4,
                "aggressive-growth": 6,
                "max-returns": 8,
            },
            default=4,
        ),
        "lossTolerance": ScoreTable(scores={"low": 1, "moderate": 4, "high": 6, "very-high": 8}, default=4),
        "knowledgeLevel": ScoreTable(
            scores={"beginner": 2, "intermediate": 4, "advanced": 6, "expert": 7}, default=4
        ),
        "experience": ScoreTable(scores={"none": 2, "limited": 4, "moderate": 5, "extensive": 6}, default=4),
        "incomeStability": ScoreTable(scores={"unstable": 3, "stable": 5, "very-stable": 6}, default=5),
    }
)


class RiskProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    riskScore: float
    riskLevel: RiskLevel
    answers: RiskAnswers
    assessedAt: str


def weighted_score(
    answers: RiskAnswers,
    weights: Mapping[str, int] = WEIGHTS,
    tables: Mapping[str, ScoreTable] = SCORE_TABLES,
) -> int:
    return sum(tables[question].score(getattr(answers, question)) * weight for question, weight in weights.items())


def normalized_score(
    answers: RiskAnswers,
    weights: Mapping[str, int] = WEIGHTS,
    tables: Mapping[str, ScoreTable] = SCORE_TABLES,
) -> float:
    max_possible = sum(weight * MAX_ANSWER_SCORE for weight in weights.values())
    return weighted_score(answers, weights, tables) / max_possible * 100


def risk_level_for(score: float) -> RiskLevel:
    if score < CONSERVATIVE_BELOW:
        return "Conservative"
    if score > AGGRESSIVE_ABOVE:
        return "Aggressive"
    return "Moderate"


def assess_risk_profile(answers: RiskAnswers, now: Optional[datetime] = None) -> RiskProfile:
    score = normalized_score(answers)
    assessed_at = (now or datetime.now(timezone.utc)).isoformat()
    return RiskProfile(
        riskScore=round(score, 1),
        riskLevel=risk_level_for(score),
        answers=answers,
        assessedAt=assessed_at,
    )


__all__ = [
    "RiskLevel",
    "RiskProfile",
    "ScoreTable",
    "WEIGHTS",
    "SCORE_TABLES",
    "weighted_score",
    "normalized_score",
    "risk_level_for",
    "assess_risk_profile",
]
