"""Column sorting for report output."""

import unicodedata
from decimal import Decimal
from typing import Any, Callable, Optional, Sequence

from reportit.domain.entities import SortDirection, TableColumn
from reportit.domain.results import AggregatedDataPoint


def collation_key(value: Optional[str]) -> tuple[str, str]:
    """Case-insensitive, accent-aware ordering key for display strings."""
    text = value or ""
    return (unicodedata.normalize("NFKD", text).casefold(), text)


def _numeric(value: Any) -> Decimal:
    return Decimal(value) if value is not None else Decimal(0)


COLUMN_ACCESSORS: dict[TableColumn, Callable[[AggregatedDataPoint], Any]] = {
    TableColumn.LABEL: lambda p: collation_key(p.label),
    TableColumn.VALUE: lambda p: _numeric(p.value),
    TableColumn.COUNT: lambda p: _numeric(p.count),
    TableColumn.PERCENTAGE: lambda p: _numeric(p.percentage),
    TableColumn.DATE: lambda p: p.date.isoformat() if p.date else "",
    TableColumn.PAYEE: lambda p: collation_key(p.payee),
    TableColumn.DESCRIPTION: lambda p: collation_key(p.description),
    TableColumn.MEMO: lambda p: collation_key(p.memo),
    TableColumn.CATEGORY: lambda p: collation_key(p.category),
    TableColumn.ACCOUNT: lambda p: collation_key(p.account),
}


def sort_data(
    data: Sequence[AggregatedDataPoint],
    sort_by: TableColumn,
    sort_direction: Optional[SortDirection] = None,
) -> list[AggregatedDataPoint]:
    """Sort data points by one column.

    Sorting is stable in both directions: points with equal keys keep their
    incoming order.

    Args:
        data: Data points in aggregation order
        sort_by: Column to sort by
        sort_direction: Direction, descending when not given

    Returns:
        New sorted list
    """
    accessor = COLUMN_ACCESSORS.get(sort_by)
    if accessor is None:
        return list(data)
    descending = (sort_direction or SortDirection.DESC) == SortDirection.DESC
    return sorted(data, key=accessor, reverse=descending)
