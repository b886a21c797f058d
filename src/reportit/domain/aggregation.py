"""Grouping of expanded units into report data points."""

from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Callable, Mapping, Optional, Sequence

from reportit.domain.currency import CurrencyNormalizer
from reportit.domain.entities import Category, GroupByType, MetricType, Payee
from reportit.domain.expansion import ExpandedUnit
from reportit.domain.metrics import (
    ZERO,
    calculate_metric_value,
    calculate_percentage,
    round_money,
)
from reportit.domain.results import AggregatedDataPoint

UNCATEGORIZED_KEY = "uncategorized"
UNCATEGORIZED_LABEL = "Uncategorized"
UNKNOWN_PAYEE_KEY = "unknown"
UNKNOWN_PAYEE_LABEL = "Unknown"
TOTAL_KEY = "total"


class GroupingStrategy:
    """Derives group keys, labels and colors for one grouping dimension."""

    chronological = False

    def key(self, unit: ExpandedUnit) -> str:
        raise NotImplementedError

    def label(self, key: str, units: Sequence[ExpandedUnit]) -> str:
        raise NotImplementedError

    def color(self, key: str) -> Optional[str]:
        return None


class CategoryGrouping(GroupingStrategy):
    """Groups by category; missing or unknown categories share one group."""

    def __init__(self, categories: Mapping[str, Category]):
        self.categories = categories

    def key(self, unit: ExpandedUnit) -> str:
        category_id = unit.category_id
        if category_id is None or category_id not in self.categories:
            return UNCATEGORIZED_KEY
        return category_id

    def label(self, key: str, units: Sequence[ExpandedUnit]) -> str:
        category = self.categories.get(key)
        return category.name if category is not None else UNCATEGORIZED_LABEL

    def color(self, key: str) -> Optional[str]:
        category = self.categories.get(key)
        return category.color if category is not None else None


class PayeeGrouping(GroupingStrategy):
    """Groups by linked payee."""

    def __init__(self, payees: Mapping[str, Payee]):
        self.payees = payees

    def key(self, unit: ExpandedUnit) -> str:
        return unit.payee_id or UNKNOWN_PAYEE_KEY

    def label(self, key: str, units: Sequence[ExpandedUnit]) -> str:
        payee = self.payees.get(key)
        if payee is not None and payee.name:
            return payee.name
        for unit in units:
            if unit.payee_name:
                return unit.payee_name
        return UNKNOWN_PAYEE_LABEL


class TimeBucketGrouping(GroupingStrategy):
    """Groups by calendar day, week (starting Monday), month or year."""

    chronological = True

    def __init__(self, period: GroupByType):
        self.period = period

    def bucket_start(self, day: date) -> date:
        if self.period == GroupByType.WEEK:
            return day - timedelta(days=day.weekday())
        if self.period == GroupByType.MONTH:
            return day.replace(day=1)
        if self.period == GroupByType.YEAR:
            return day.replace(month=1, day=1)
        return day

    def key(self, unit: ExpandedUnit) -> str:
        start = self.bucket_start(unit.date)
        if self.period == GroupByType.MONTH:
            return start.strftime("%Y-%m")
        if self.period == GroupByType.YEAR:
            return start.strftime("%Y")
        return start.isoformat()

    def label(self, key: str, units: Sequence[ExpandedUnit]) -> str:
        if self.period == GroupByType.YEAR:
            return key
        if self.period == GroupByType.MONTH:
            year, month = key.split("-")
            return date(int(year), int(month), 1).strftime("%b %Y")
        start = date.fromisoformat(key)
        if self.period == GroupByType.WEEK:
            return f"Week of {start:%b} {start.day}"
        return f"{start:%b} {start.day}, {start.year}"


StrategyFactory = Callable[[Mapping[str, Category], Mapping[str, Payee]], GroupingStrategy]

GROUPING_STRATEGIES: dict[GroupByType, StrategyFactory] = {
    GroupByType.CATEGORY: lambda categories, payees: CategoryGrouping(categories),
    GroupByType.PAYEE: lambda categories, payees: PayeeGrouping(payees),
    GroupByType.DAY: lambda categories, payees: TimeBucketGrouping(GroupByType.DAY),
    GroupByType.WEEK: lambda categories, payees: TimeBucketGrouping(GroupByType.WEEK),
    GroupByType.MONTH: lambda categories, payees: TimeBucketGrouping(GroupByType.MONTH),
    GroupByType.YEAR: lambda categories, payees: TimeBucketGrouping(GroupByType.YEAR),
}


@dataclass
class _Bucket:
    total: Decimal = ZERO
    count: int = 0
    units: list[ExpandedUnit] = field(default_factory=list)

    def add(self, unit: ExpandedUnit, amount: Decimal) -> None:
        self.total += amount
        self.count += 1
        self.units.append(unit)


def aggregate(
    units: Sequence[ExpandedUnit],
    group_by: GroupByType,
    metric: MetricType,
    normalizer: CurrencyNormalizer,
    categories: Optional[Mapping[str, Category]] = None,
    payees: Optional[Mapping[str, Payee]] = None,
) -> list[AggregatedDataPoint]:
    """Reduce expanded units into data points.

    Args:
        units: Expanded units in ledger order
        group_by: Grouping dimension
        metric: Metric computed per group
        normalizer: Converts unit amounts into the reporting currency
        categories: Category directory keyed by ID (CATEGORY grouping)
        payees: Payee directory keyed by ID (PAYEE grouping)

    Returns:
        Data points in default order: chronological for time buckets,
        otherwise descending by value
    """
    factory = GROUPING_STRATEGIES.get(group_by)
    if factory is None:
        if metric == MetricType.NONE:
            return list_transactions(units, normalizer)
        return aggregate_total(units, metric, normalizer)

    strategy = factory(categories or {}, payees or {})
    return aggregate_groups(units, strategy, metric, normalizer)


def aggregate_groups(
    units: Sequence[ExpandedUnit],
    strategy: GroupingStrategy,
    metric: MetricType,
    normalizer: CurrencyNormalizer,
) -> list[AggregatedDataPoint]:
    """Bucket units by strategy key and compute one point per bucket."""
    buckets: dict[str, _Bucket] = {}
    for unit in units:
        key = strategy.key(unit)
        buckets.setdefault(key, _Bucket()).add(unit, normalizer.normalize(unit))

    grand_total = sum((bucket.total for bucket in buckets.values()), ZERO)

    points = [
        AggregatedDataPoint(
            id=key,
            label=strategy.label(key, bucket.units),
            value=calculate_metric_value(bucket.total, bucket.count, metric),
            color=strategy.color(key),
            percentage=calculate_percentage(bucket.total, grand_total),
            count=bucket.count,
        )
        for key, bucket in buckets.items()
    ]

    if strategy.chronological:
        return sorted(points, key=lambda point: point.id)
    return sorted(points, key=lambda point: Decimal(point.value), reverse=True)


def aggregate_total(
    units: Sequence[ExpandedUnit],
    metric: MetricType,
    normalizer: CurrencyNormalizer,
) -> list[AggregatedDataPoint]:
    """Reduce all units into a single total point."""
    if not units:
        return []

    total = sum((normalizer.normalize(unit) for unit in units), ZERO)
    count = len(units)
    return [
        AggregatedDataPoint(
            id=TOTAL_KEY,
            label="Total",
            value=calculate_metric_value(total, count, metric),
            percentage=Decimal(100),
            count=count,
        )
    ]


def list_transactions(
    units: Sequence[ExpandedUnit], normalizer: CurrencyNormalizer
) -> list[AggregatedDataPoint]:
    """One row per unit, carrying its transaction fields."""
    return [
        AggregatedDataPoint(
            id=unit.unit_id,
            label=transaction_label(unit),
            value=round_money(normalizer.normalize(unit)),
            count=1,
            date=unit.date,
            payee=unit.payee_name or unit.payee_record_name,
            description=unit.description,
            memo=unit.memo,
            category=unit.category_name,
            account=unit.account_name,
        )
        for unit in units
    ]


def transaction_label(unit: ExpandedUnit) -> str:
    """Row label: split memo, then payee name, then description."""
    return unit.memo or unit.payee_name or unit.description or "Transaction"
