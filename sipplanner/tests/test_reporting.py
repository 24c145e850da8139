from __future__ import annotations

import csv
import io
import json
from datetime import datetime

from sipplanner.core.analytics import process_analytics
from sipplanner.core.reporting import (
    analytics_report_csv,
    format_currency,
    format_large_number,
    format_percentage,
    rows_to_csv,
    to_json,
    write_csv,
)
from sipplanner.models import Portfolio, SIPScenario


def test_currency_uses_lakh_grouping():
    assert format_currency(1234567) == "₹12,34,567"
    assert format_currency(999) == "₹999"
    assert format_currency(100000) == "₹1,00,000"
    assert format_currency(1234.5, decimals=2) == "₹1,234.50"
    assert format_currency(-2500) == "-₹2,500"


def test_missing_values_format_as_zero():
    assert format_currency(None) == "₹0"
    assert format_currency(float("nan"), decimals=2) == "₹0.00"
    assert format_percentage(None) == "0%"
    assert format_percentage(12.3456) == "12.35%"


def test_large_number_suffixes():
    assert format_large_number(1500000) == "1.50M"
    assert format_large_number(2500) == "2.50K"
    assert format_large_number(3200000000) == "3.20B"
    assert format_large_number(12) == "12.00"


def test_rows_to_csv_quotes_commas_and_quotes():
    text = rows_to_csv([{"name": "Growth, long", "note": 'say "hi"', "value": 1}, {"name": "Plain", "value": 2}])

    assert text.splitlines() == [
        "name,note,value",
        '"Growth, long","say ""hi""",1',
        "Plain,,2",
    ]
    assert rows_to_csv([]) == ""


def test_write_csv(tmp_path):
    path = tmp_path / "out.csv"
    write_csv(str(path), [{"a": 1, "b": 2}])
    assert path.read_text(encoding="utf-8") == "a,b\n1,2\n"


def test_to_json_is_indented():
    assert json.loads(to_json({"a": [1, 2]})) == {"a": [1, 2]}
    assert "\n  " in to_json({"a": 1})


def test_analytics_report_sections():
    analytics = process_analytics(
        [
            Portfolio.model_validate(
                {"name": "Bonds", "assets": {"bonds": {"amount": 10000, "allocation": 100, "returns": 5}}, "timeHorizon": 2}
            )
        ],
        [SIPScenario(name="Growth", monthlyAmount=5000, period=10, expectedReturns=12)],
    )

    report = analytics_report_csv(analytics, generated_at=datetime(2024, 5, 1, 9, 30))
    rows = list(csv.reader(io.StringIO(report)))

    assert rows[0] == ["Investment Analytics Report"]
    assert rows[1] == ["Generated: 2024-05-01 09:30:00"]
    assert ["Total Invested", "₹6,10,000"] in rows
    assert ["Bonds", "10000.0", "11025.0", "1025.0", "10.25%"] in rows
    assert ["Growth", "5000.0", "10 years", "12%", "600000.0", "1161695.38"] in rows
