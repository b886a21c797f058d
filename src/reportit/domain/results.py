"""Result types produced by report execution."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Optional, Union

from reportit.domain.entities import GroupByType, ReportViewType, TableColumn

Number = Union[Decimal, int]


def _number(value: Optional[Number]) -> Optional[Union[float, int]]:
    if value is None or isinstance(value, int):
        return value
    return float(value)


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


@dataclass(frozen=True)
class Timeframe:
    """Resolved concrete date range with its display label."""

    start_date: date
    end_date: date
    label: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "label": self.label,
        }


@dataclass(frozen=True)
class AggregatedDataPoint:
    """One row of report output.

    The row-listing fields (``date`` through ``account``) are only populated
    when a report lists individual transactions.
    """

    label: str
    value: Number
    id: Optional[str] = None
    color: Optional[str] = None
    percentage: Optional[Decimal] = None
    count: Optional[int] = None
    date: Optional[date] = None
    payee: Optional[str] = None
    description: Optional[str] = None
    memo: Optional[str] = None
    category: Optional[str] = None
    account: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none(
            {
                "id": self.id,
                "label": self.label,
                "value": _number(self.value),
                "color": self.color,
                "percentage": _number(self.percentage),
                "count": self.count,
                "date": self.date.isoformat() if self.date else None,
                "payee": self.payee,
                "description": self.description,
                "memo": self.memo,
                "category": self.category,
                "account": self.account,
            }
        )


@dataclass(frozen=True)
class ReportSummary:
    """Totals across all data points of a report."""

    total: Decimal
    count: int
    average: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": float(self.total),
            "count": self.count,
            "average": float(self.average),
        }


@dataclass(frozen=True)
class ReportResult:
    """Outcome of executing a report definition."""

    report_id: str
    name: str
    view_type: ReportViewType
    group_by: GroupByType
    timeframe: Timeframe
    data: tuple[AggregatedDataPoint, ...]
    summary: ReportSummary
    table_columns: Optional[tuple[TableColumn, ...]] = None

    def to_dict(self) -> dict[str, Any]:
        """Render the result in its JSON wire shape."""
        result = {
            "reportId": self.report_id,
            "name": self.name,
            "viewType": self.view_type.value,
            "groupBy": self.group_by.value,
            "timeframe": self.timeframe.to_dict(),
            "data": [point.to_dict() for point in self.data],
            "summary": self.summary.to_dict(),
        }
        if self.table_columns is not None:
            result["tableColumns"] = [column.value for column in self.table_columns]
        return result


@dataclass(frozen=True)
class CategorySpendingItem:
    """Spending total for one (rolled-up) category."""

    category_id: Optional[str]
    category_name: str
    color: Optional[str]
    total: Decimal


@dataclass(frozen=True)
class SpendingByCategory:
    data: tuple[CategorySpendingItem, ...]
    total_spending: Decimal


@dataclass(frozen=True)
class PayeeSpendingItem:
    """Spending total for one payee."""

    payee_id: Optional[str]
    payee_name: str
    total: Decimal


@dataclass(frozen=True)
class SpendingByPayee:
    data: tuple[PayeeSpendingItem, ...]
    total_spending: Decimal


@dataclass(frozen=True)
class MonthlySpendingItem:
    """Per-category spending for one calendar month."""

    month: str
    categories: tuple[CategorySpendingItem, ...]
    total_spending: Decimal


@dataclass(frozen=True)
class MonthlySpendingTrend:
    data: tuple[MonthlySpendingItem, ...]
