from __future__ import annotations

import pytest

from sipplanner.core.annuity import calculate_sip
from sipplanner.core.projection import month_checkpoints, sample_projection
from sipplanner.domain.errors import InputValidationError


def test_tail_sample_added_when_total_is_not_a_multiple():
    assert month_checkpoints(10, 6) == [6, 10]


def test_tail_sample_not_duplicated_when_total_is_a_multiple():
    assert month_checkpoints(12, 6) == [6, 12]
    assert month_checkpoints(6, 6) == [6]


def test_interval_longer_than_total_yields_single_sample():
    assert month_checkpoints(4, 6) == [4]


def test_ten_month_series():
    series = sample_projection(1000, 10 / 12, 12, interval=6)

    assert [point.month for point in series.points] == [6, 10]
    assert series.labels == ["Year 0.5", "Year 0.8"]
    assert series.totalMonths == 10


def test_series_is_strictly_increasing_and_ends_at_maturity():
    series = sample_projection(5000, 10, 12)

    months = [point.month for point in series.points]
    assert months == sorted(set(months))
    assert len(series.points) == 20
    assert series.labels[-1] == "Year 10.0"
    assert series.maturity[-1] == calculate_sip(5000, 10, 12).maturityValue
    assert series.invested[-1] == 600000


def test_each_sample_matches_an_independent_evaluation():
    series = sample_projection(5000, 10, 12, interval=12)

    for point in series.points:
        alone = calculate_sip(5000, point.month / 12, 12)
        assert point.value == alone.maturityValue
        assert point.returns == pytest.approx(alone.returns, abs=0.01)


def test_chart_data_lists_are_parallel():
    chart = sample_projection(2000, 3, 8, interval=6).chart_data()
    lengths = {len(chart[key]) for key in ("labels", "invested", "maturity", "returns")}
    assert lengths == {6}


@pytest.mark.parametrize("interval", [0, -6, 2.5])
def test_rejects_bad_interval(interval):
    with pytest.raises(InputValidationError) as excinfo:
        sample_projection(1000, 1, 12, interval=interval)
    assert excinfo.value.field == "interval"
