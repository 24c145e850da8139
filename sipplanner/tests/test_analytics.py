from __future__ import annotations

import pytest

from sipplanner.core.analytics import aggregate_stats, process_analytics, risk_return_points, time_series
from sipplanner.core.comparison import calculate_multiple_sips, sip_comparison_table
from sipplanner.models import Portfolio, SIPScenario

GROWTH = SIPScenario(name="Growth", monthlyAmount=5000, period=10, expectedReturns=12)
PIGGY = SIPScenario(name="Piggy bank", monthlyAmount=1000, period=1, expectedReturns=0)
BOND_LADDER = Portfolio.model_validate(
    {
        "id": "p1",
        "name": "Bond ladder",
        "assets": {"bonds": {"amount": 10000, "allocation": 100, "returns": 5}},
        "timeHorizon": 2,
    }
)


def test_scenarios_are_named_in_order():
    results = calculate_multiple_sips([GROWTH, SIPScenario(monthlyAmount=100, period=1, expectedReturns=8)])

    assert [r.name for r in results] == ["Growth", "SIP 2"]
    assert results[0].maturityValue == pytest.approx(1161695.38, abs=0.5)


def test_legacy_field_names_are_accepted():
    scenario = SIPScenario.model_validate({"amount": 2000, "years": 5, "returns": 10})
    assert (scenario.monthlyAmount, scenario.period, scenario.expectedReturns) == (2000, 5, 10)


def test_comparison_table_rows():
    rows = sip_comparison_table([PIGGY])
    assert rows[0].roi == 0.0
    assert rows[0].totalInvested == 12000


def test_summary_totals():
    analytics = process_analytics([BOND_LADDER], [GROWTH, PIGGY])
    summary = analytics.summary

    assert summary.portfolioCount == 1
    assert summary.sipCount == 2
    assert summary.totalInvested == 10000 + 600000 + 12000
    assert summary.totalValue == pytest.approx(11025 + 1161695.38 + 12000, abs=0.5)
    assert summary.averageROI == pytest.approx(summary.totalReturns / summary.totalInvested * 100, abs=0.01)


def test_empty_analytics():
    analytics = process_analytics([], [])
    assert analytics.summary.averageROI == 0.0

    stats = aggregate_stats(analytics)
    assert stats.totalInvestments == 0
    assert stats.bestPerformer is None
    assert stats.averageReturns == 0.0


def test_best_worst_and_buckets():
    stats = aggregate_stats(process_analytics([BOND_LADDER], [GROWTH, PIGGY]))

    assert stats.totalInvestments == 3
    assert stats.bestPerformer.name == "Growth"
    assert stats.worstPerformer.name == "Piggy bank"
    # bond ladder 10.25%, growth 93.62%, piggy 0%
    assert stats.riskDistribution.model_dump() == {"low": 1, "medium": 1, "high": 1}


def test_first_performer_wins_a_tie():
    twin = PIGGY.model_copy(update={"name": "Twin"})
    stats = aggregate_stats(process_analytics([], [PIGGY, twin]))
    assert stats.bestPerformer.name == "Piggy bank"
    assert stats.worstPerformer.name == "Piggy bank"


def test_risk_return_points():
    points = risk_return_points([BOND_LADDER], [GROWTH])

    assert points[0].type == "portfolio"
    assert points[0].x == 3.0
    assert points[0].id == "p1"
    assert points[1].x == 5
    assert points[1].y == pytest.approx(93.62, abs=0.01)


def test_time_series_covers_each_year():
    series = time_series([GROWTH], [BOND_LADDER], years=3)

    assert series.labels == ["Year 1", "Year 2", "Year 3"]
    assert [d.label for d in series.datasets] == ["Growth", "Bond ladder"]
    assert series.datasets[1].data == pytest.approx([10500.0, 11025.0, 11576.25], abs=0.01)
    assert series.datasets[0].data == sorted(series.datasets[0].data)
