from __future__ import annotations

import pytest

from sipplanner.core.annuity import calculate_sip
from sipplanner.core.portfolio import (
    portfolio_metrics,
    portfolio_risk,
    projected_value,
    total_invested,
    validate_allocation,
    weighted_average_return,
)
from sipplanner.models import Portfolio


def balanced(**overrides) -> Portfolio:
    data = {
        "name": "Balanced",
        "assets": {
            "stocks": {"amount": 10000, "allocation": 60, "returns": 10},
            "bonds": {"amount": 10000, "allocation": 40, "returns": 5},
        },
        "timeHorizon": 2,
    }
    data.update(overrides)
    return Portfolio.model_validate(data)


def test_lump_sum_assets_compound_annually():
    portfolio = balanced()

    assert total_invested(portfolio) == 20000
    # 10000 * 1.1^2 + 10000 * 1.05^2
    assert projected_value(portfolio) == pytest.approx(23125.0, abs=0.01)


def test_sip_asset_uses_monthly_annuity():
    portfolio = Portfolio.model_validate(
        {"assets": {"sip": {"amount": 1000, "allocation": 100, "returns": 12}}, "timeHorizon": 1}
    )

    assert total_invested(portfolio) == 12000
    assert projected_value(portfolio) == calculate_sip(1000, 1, 12).maturityValue


def test_no_horizon_means_no_projection():
    assert projected_value(balanced(timeHorizon=None)) == 0.0


def test_zero_return_asset_still_counts():
    portfolio = Portfolio.model_validate(
        {"assets": {"emergency": {"amount": 5000, "allocation": 100, "returns": 0}}, "timeHorizon": 3}
    )
    assert projected_value(portfolio) == 5000


def test_weighted_return_and_risk():
    portfolio = balanced()
    assert weighted_average_return(portfolio) == pytest.approx(8.0)
    # 0.6 * 8 (stocks) + 0.4 * 3 (bonds)
    assert portfolio_risk(portfolio) == pytest.approx(6.0)


def test_risk_defaults_without_allocation():
    assert portfolio_risk(Portfolio()) == 5.0
    unknown = Portfolio.model_validate({"assets": {"crypto": {"allocation": 100}}})
    assert portfolio_risk(unknown) == 5.0


def test_allocation_must_total_100():
    assert validate_allocation(balanced()).valid is True

    lopsided = balanced(assets={"stocks": {"amount": 1, "allocation": 70}})
    check = validate_allocation(lopsided)
    assert check.valid is False
    assert check.totalAllocation == 70
    assert "70.00%" in check.message

    assert validate_allocation(Portfolio()).message == "Portfolio has no assets"


def test_metrics_and_goal_progress():
    metrics = portfolio_metrics(balanced(targetAmount=30000))

    assert metrics.totalInvested == 20000
    assert metrics.returns == pytest.approx(3125.0, abs=0.01)
    assert metrics.roi == pytest.approx(15.625, abs=0.01)
    assert metrics.goalProgress is not None
    assert metrics.goalProgress.isAchieved is False
    assert metrics.goalProgress.remaining == pytest.approx(6875.0, abs=0.01)


def test_goal_reached():
    progress = portfolio_metrics(balanced(targetAmount=20000)).goalProgress
    assert progress.isAchieved is True
    assert progress.remaining == 0.0
    assert progress.progress > 100


def test_no_target_no_goal_progress():
    assert portfolio_metrics(balanced()).goalProgress is None
