from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from sipplanner.core.risk import (
    SCORE_TABLES,
    ScoreTable,
    WEIGHTS,
    assess_risk_profile,
    risk_level_for,
    weighted_score,
)
from sipplanner.models import RiskAnswers

CAUTIOUS = RiskAnswers(
    timeHorizon="short",
    riskTolerance="panic",
    investmentGoal="capital-preservation",
    lossTolerance="low",
    knowledgeLevel="beginner",
    experience="none",
    incomeStability="unstable",
)

BOLD = RiskAnswers(
    timeHorizon="very-long",
    riskTolerance="buy",
    investmentGoal="max-returns",
    lossTolerance="very-high",
    knowledgeLevel="expert",
    experience="extensive",
    incomeStability="very-stable",
)


def test_unanswered_questionnaire_is_moderate():
    profile = assess_risk_profile(RiskAnswers())

    # 48 of a possible 104 weighted points
    assert weighted_score(RiskAnswers()) == 48
    assert profile.riskScore == 46.2
    assert profile.riskLevel == "Moderate"


def test_cautious_answers_are_conservative():
    profile = assess_risk_profile(CAUTIOUS)
    assert weighted_score(CAUTIOUS) == 17
    assert profile.riskScore == 16.3
    assert profile.riskLevel == "Conservative"


def test_bold_answers_are_aggressive():
    profile = assess_risk_profile(BOLD)
    assert weighted_score(BOLD) == 94
    assert profile.riskScore == 90.4
    assert profile.riskLevel == "Aggressive"


def test_unknown_answer_scores_as_default():
    assert weighted_score(RiskAnswers(timeHorizon="forever")) == weighted_score(RiskAnswers())


@pytest.mark.parametrize(
    "score, level",
    [(0, "Conservative"), (34.99, "Conservative"), (35, "Moderate"), (65, "Moderate"), (65.01, "Aggressive")],
)
def test_band_edges(score, level):
    assert risk_level_for(score) == level


def test_assessed_at_uses_supplied_clock():
    now = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    profile = assess_risk_profile(RiskAnswers(), now=now)
    assert profile.assessedAt == "2024-01-02T03:04:05+00:00"


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        WEIGHTS["timeHorizon"] = 10  # type: ignore[index]
    with pytest.raises(TypeError):
        SCORE_TABLES["timeHorizon"].scores["short"] = 9  # type: ignore[index]
    with pytest.raises(ValidationError):
        SCORE_TABLES["timeHorizon"].default = 9  # type: ignore[misc]


def test_score_table_falls_back_for_unknown_answers():
    table = ScoreTable(scores={"yes": 7}, default=2)

    assert table.score("yes") == 7
    assert table.score("maybe") == 2
    assert table.score(None) == 2
