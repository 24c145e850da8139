"""Formatting and CSV/JSON export helpers."""

from __future__ import annotations

import csv
import io
import json
import math
import numbers
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional, Sequence

from sipplanner.core.analytics import Analytics

RUPEE = "₹"


def _group_indian(digits: str) -> str:
    """12345678 -> 1,23,45,678 (last three digits, then pairs)."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


def format_currency(amount: Optional[float], decimals: int = 0) -> str:
    """Rupee amount with lakh/crore grouping, e.g. 1234567 -> ₹12,34,567."""
    if amount is None or not _is_number(amount):
        return RUPEE + ("0" if decimals == 0 else "0." + "0" * decimals)

    sign = "-" if amount < 0 else ""
    text = f"{abs(amount):.{decimals}f}"
    integer, _, fraction = text.partition(".")
    grouped = _group_indian(integer)
    return f"{sign}{RUPEE}{grouped}" + (f".{fraction}" if fraction else "")


def format_percentage(value: Optional[float], decimals: int = 2) -> str:
    if value is None or not _is_number(value):
        return "0%"
    return f"{value:.{decimals}f}%"


def format_large_number(value: float) -> str:
    for threshold, suffix in ((1e9, "B"), (1e6, "M"), (1e3, "K")):
        if value >= threshold:
            return f"{value / threshold:.2f}{suffix}"
    return f"{value:.2f}"


def rows_to_csv(rows: Sequence[Mapping[str, Any]]) -> str:
    """CSV text with a header taken from the first row's keys."""
    if not rows:
        return ""

    header = list(rows[0].keys())
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(header)
    for row in rows:
        writer.writerow([row.get(column, "") for column in header])
    return buffer.getvalue()


def write_csv(path: str, rows: Sequence[Mapping[str, Any]]) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        f.write(rows_to_csv(rows))


def to_json(data: Any) -> str:
    return json.dumps(data, indent=2, default=str)


def _report_lines(analytics: Analytics, generated_at: datetime) -> Iterable[Sequence[Any]]:
    summary = analytics.summary
    yield ["Investment Analytics Report"]
    yield [f"Generated: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}"]
    yield []
    yield ["Summary", ""]
    yield ["Total Invested", format_currency(summary.totalInvested)]
    yield ["Total Value", format_currency(summary.totalValue)]
    yield ["Total Returns", format_currency(summary.totalReturns)]
    yield ["Average ROI", f"{summary.averageROI}%"]
    yield []
    yield ["Portfolios", ""]
    yield ["Name", "Invested", "Value", "Returns", "ROI%"]
    for entry in analytics.portfolios:
        m = entry.metrics
        yield [entry.portfolio.name, m.totalInvested, m.currentValue, m.returns, f"{m.roi}%"]
    yield []
    yield ["SIP Investments", ""]
    yield ["Name", "Monthly Amount", "Period", "Returns%", "Total Invested", "Maturity Value"]
    for entry in analytics.sips:
        s, r = entry.scenario, entry.result
        yield [
            s.name or "SIP",
            s.monthlyAmount,
            f"{s.period:g} years",
            f"{s.expectedReturns:g}%",
            r.totalInvested,
            r.maturityValue,
        ]


def analytics_report_csv(analytics: Analytics, generated_at: Optional[datetime] = None) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    for line in _report_lines(analytics, generated_at or datetime.now()):
        writer.writerow(line)
    return buffer.getvalue()


__all__ = [
    "format_currency",
    "format_percentage",
    "format_large_number",
    "rows_to_csv",
    "write_csv",
    "to_json",
    "analytics_report_csv",
]
