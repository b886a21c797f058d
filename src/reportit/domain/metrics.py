"""Metric and summary calculations."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence, Union

from reportit.domain.entities import MetricType
from reportit.domain.results import AggregatedDataPoint, ReportSummary

CENT = Decimal("0.01")
ZERO = Decimal("0")


def round_money(value: Union[Decimal, int]) -> Decimal:
    """Round to 2 decimal places, halves away from zero."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_metric_value(
    total: Decimal, count: int, metric: MetricType
) -> Union[Decimal, int]:
    """Turn a group's raw sum and count into the requested metric.

    Args:
        total: Sum of absolute, converted amounts in the group
        count: Number of units in the group
        metric: Requested metric

    Returns:
        Integer count for COUNT, otherwise a rounded Decimal
    """
    if metric == MetricType.COUNT:
        return count
    if metric == MetricType.AVERAGE:
        return round_money(total / count) if count > 0 else ZERO
    return round_money(total)


def calculate_percentage(part: Decimal, whole: Decimal) -> Decimal:
    """Share of ``whole`` in percent, 0 when ``whole`` is 0."""
    if whole <= 0:
        return ZERO
    return round_money(part / whole * 100)


def calculate_summary(data: Sequence[AggregatedDataPoint]) -> ReportSummary:
    """Total, count and average across data points.

    Points without a count (row listings) count as one.
    """
    total = sum((Decimal(point.value) for point in data), ZERO)
    count = sum(point.count or 1 for point in data)
    average = total / count if count > 0 else ZERO

    return ReportSummary(
        total=round_money(total),
        count=count,
        average=round_money(average),
    )
