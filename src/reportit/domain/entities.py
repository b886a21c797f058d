"""Domain model entities for reportit.

These are pure data classes representing ledger data and stored report
definitions, independent of the database schema. The engine only ever sees
these types, so the persistence layer can change without touching the
aggregation logic.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class ReportViewType(str, Enum):
    """How a report is meant to be rendered."""

    TABLE = "TABLE"
    LINE_CHART = "LINE_CHART"
    BAR_CHART = "BAR_CHART"
    PIE_CHART = "PIE_CHART"


class TimeframeType(str, Enum):
    """Symbolic report windows."""

    LAST_7_DAYS = "LAST_7_DAYS"
    LAST_30_DAYS = "LAST_30_DAYS"
    LAST_MONTH = "LAST_MONTH"
    LAST_3_MONTHS = "LAST_3_MONTHS"
    LAST_6_MONTHS = "LAST_6_MONTHS"
    LAST_12_MONTHS = "LAST_12_MONTHS"
    LAST_YEAR = "LAST_YEAR"
    YEAR_TO_DATE = "YEAR_TO_DATE"
    CUSTOM = "CUSTOM"


class GroupByType(str, Enum):
    """Grouping dimension for aggregation."""

    NONE = "NONE"
    CATEGORY = "CATEGORY"
    PAYEE = "PAYEE"
    DAY = "DAY"
    WEEK = "WEEK"
    MONTH = "MONTH"
    YEAR = "YEAR"


class MetricType(str, Enum):
    """Scalar computed per group."""

    NONE = "NONE"
    TOTAL_AMOUNT = "TOTAL_AMOUNT"
    COUNT = "COUNT"
    AVERAGE = "AVERAGE"


class DirectionFilter(str, Enum):
    """Which side of the ledger a report looks at."""

    INCOME_ONLY = "INCOME_ONLY"
    EXPENSES_ONLY = "EXPENSES_ONLY"
    BOTH = "BOTH"


class TableColumn(str, Enum):
    """Columns a report table can show and sort by."""

    # Aggregation columns
    LABEL = "LABEL"
    VALUE = "VALUE"
    COUNT = "COUNT"
    PERCENTAGE = "PERCENTAGE"
    # Row-listing columns
    DATE = "DATE"
    PAYEE = "PAYEE"
    DESCRIPTION = "DESCRIPTION"
    MEMO = "MEMO"
    CATEGORY = "CATEGORY"
    ACCOUNT = "ACCOUNT"


class SortDirection(str, Enum):
    """Sort order."""

    ASC = "ASC"
    DESC = "DESC"


class FilterField(str, Enum):
    """Fields a filter-group condition can match on."""

    ACCOUNT = "account"
    CATEGORY = "category"
    PAYEE = "payee"
    TEXT = "text"


class TransactionStatus(str, Enum):
    """Reconciliation status of a ledger entry."""

    UNRECONCILED = "UNRECONCILED"
    CLEARED = "CLEARED"
    RECONCILED = "RECONCILED"
    VOID = "VOID"


@dataclass(frozen=True)
class Account:
    """Ledger account domain entity."""

    id: str
    owner_id: str
    name: str
    currency_code: str


@dataclass(frozen=True)
class Category:
    """Category domain entity with optional parent and display color."""

    id: str
    owner_id: str
    name: str
    parent_id: Optional[str] = None
    color: Optional[str] = None


@dataclass(frozen=True)
class Payee:
    """Payee domain entity."""

    id: str
    owner_id: str
    name: str


@dataclass(frozen=True)
class SplitAllocation:
    """One allocation of a split ledger entry."""

    id: str
    amount: Decimal
    category_id: Optional[str] = None
    category_name: Optional[str] = None
    memo: Optional[str] = None


@dataclass(frozen=True)
class LedgerEntry:
    """Ledger entry domain entity.

    ``payee_name`` is the free-text payee stored on the entry itself;
    ``payee_record_name`` is the name of the linked payee record, if any.
    """

    id: str
    owner_id: str
    account_id: str
    date: date
    amount: Decimal
    currency_code: str
    account_name: Optional[str] = None
    category_id: Optional[str] = None
    category_name: Optional[str] = None
    payee_id: Optional[str] = None
    payee_name: Optional[str] = None
    payee_record_name: Optional[str] = None
    description: Optional[str] = None
    is_transfer: bool = False
    status: TransactionStatus = TransactionStatus.UNRECONCILED
    is_split: bool = False
    splits: tuple[SplitAllocation, ...] = ()


@dataclass(frozen=True)
class ExchangeRate:
    """Exchange rate between two currencies."""

    from_currency: str
    to_currency: str
    rate: Decimal
    rate_date: Optional[date] = None


@dataclass(frozen=True)
class FilterCondition:
    """Single condition inside a filter group."""

    field: FilterField
    value: str


@dataclass(frozen=True)
class FilterGroup:
    """Conditions combined with OR."""

    conditions: tuple[FilterCondition, ...] = ()


@dataclass(frozen=True)
class LegacyFilters:
    """Flat filters: every non-empty field narrows the result."""

    account_ids: tuple[str, ...] = ()
    category_ids: tuple[str, ...] = ()
    payee_ids: tuple[str, ...] = ()
    search_text: Optional[str] = None


@dataclass(frozen=True)
class GroupedFilters:
    """Filter groups combined with AND."""

    groups: tuple[FilterGroup, ...] = ()


ReportFilters = Union[LegacyFilters, GroupedFilters]


@dataclass(frozen=True)
class ReportConfig:
    """Metric, direction and presentation settings of a report."""

    metric: MetricType = MetricType.TOTAL_AMOUNT
    include_transfers: bool = False
    direction: DirectionFilter = DirectionFilter.EXPENSES_ONLY
    custom_start_date: Optional[date] = None
    custom_end_date: Optional[date] = None
    table_columns: Optional[tuple[TableColumn, ...]] = None
    sort_by: Optional[TableColumn] = None
    sort_direction: Optional[SortDirection] = None


@dataclass(frozen=True)
class ReportDefinition:
    """Stored custom report definition."""

    id: str
    owner_id: str
    name: str
    view_type: ReportViewType = ReportViewType.BAR_CHART
    timeframe_type: TimeframeType = TimeframeType.LAST_3_MONTHS
    group_by: GroupByType = GroupByType.CATEGORY
    filters: ReportFilters = field(default_factory=LegacyFilters)
    config: ReportConfig = field(default_factory=ReportConfig)
    description: Optional[str] = None


@dataclass(frozen=True)
class ExecuteReportOverrides:
    """Runtime overrides supplied when executing a report."""

    timeframe_type: Optional[TimeframeType] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
