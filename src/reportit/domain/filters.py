"""Compilation of report filters into a ledger query predicate.

The compiler produces a small predicate tree that is independent of any
storage engine. The database layer translates it into a query; nothing here
knows about SQL.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from reportit.domain.entities import (
    DirectionFilter,
    FilterCondition,
    FilterField,
    FilterGroup,
    GroupedFilters,
    LegacyFilters,
    ReportConfig,
    ReportFilters,
)
from reportit.domain.errors import ValidationError, unknown_filter_field
from reportit.domain.results import Timeframe


@dataclass(frozen=True)
class OwnerIs:
    owner_id: str


@dataclass(frozen=True)
class DateBetween:
    """Inclusive date range; a missing bound is open."""

    start: Optional[date]
    end: Optional[date]


@dataclass(frozen=True)
class NotVoid:
    pass


@dataclass(frozen=True)
class AccountIn:
    account_ids: tuple[str, ...]


@dataclass(frozen=True)
class CategoryIn:
    """Entry category or any split category is one of ``category_ids``."""

    category_ids: tuple[str, ...]


@dataclass(frozen=True)
class PayeeIn:
    payee_ids: tuple[str, ...]


@dataclass(frozen=True)
class TextContains:
    """Case-insensitive substring of payee name or description."""

    text: str


@dataclass(frozen=True)
class AmountSign:
    """``amount > 0`` when positive, otherwise ``amount < 0``."""

    positive: bool


@dataclass(frozen=True)
class NotTransfer:
    pass


@dataclass(frozen=True)
class AnyOf:
    clauses: tuple["Predicate", ...]


@dataclass(frozen=True)
class AllOf:
    clauses: tuple["Predicate", ...]


Predicate = Union[
    OwnerIs,
    DateBetween,
    NotVoid,
    AccountIn,
    CategoryIn,
    PayeeIn,
    TextContains,
    AmountSign,
    NotTransfer,
    AnyOf,
    AllOf,
]


class FilterCompiler:
    """Builds the ledger predicate for a report."""

    def compile(
        self,
        owner_id: str,
        timeframe: Timeframe,
        filters: ReportFilters,
        config: ReportConfig,
    ) -> AllOf:
        """Compile a report's filters and config into one predicate.

        Args:
            owner_id: Owner of the ledger entries
            timeframe: Resolved report timeframe
            filters: Legacy or grouped filters
            config: Report config (direction, transfer handling)

        Returns:
            Conjunction of all clauses
        """
        clauses: list[Predicate] = self.base_clauses(
            owner_id, timeframe.start_date, timeframe.end_date
        )

        if isinstance(filters, GroupedFilters):
            clauses.extend(self.group_clauses(filters.groups))
        else:
            clauses.extend(self.legacy_clauses(filters))

        direction_clause = self.direction_clause(config.direction)
        if direction_clause is not None:
            clauses.append(direction_clause)

        if not config.include_transfers:
            clauses.append(NotTransfer())

        return AllOf(tuple(clauses))

    def spending(
        self, owner_id: str, start_date: Optional[date], end_date: date
    ) -> AllOf:
        """Predicate for built-in spending reports.

        Expense selection happens per expanded unit, so no direction clause
        is added here.
        """
        clauses = self.base_clauses(owner_id, start_date, end_date)
        clauses.append(NotTransfer())
        return AllOf(tuple(clauses))

    def base_clauses(
        self, owner_id: str, start_date: Optional[date], end_date: Optional[date]
    ) -> list[Predicate]:
        """Owner, date range and non-void status."""
        return [OwnerIs(owner_id), DateBetween(start_date, end_date), NotVoid()]

    def legacy_clauses(self, filters: LegacyFilters) -> list[Predicate]:
        """Clauses for flat filters. Empty fields add nothing."""
        clauses: list[Predicate] = []
        if filters.account_ids:
            clauses.append(AccountIn(tuple(filters.account_ids)))
        if filters.category_ids:
            clauses.append(CategoryIn(tuple(filters.category_ids)))
        if filters.payee_ids:
            clauses.append(PayeeIn(tuple(filters.payee_ids)))
        if filters.search_text and filters.search_text.strip():
            clauses.append(TextContains(filters.search_text.strip().lower()))
        return clauses

    def group_clauses(self, groups: tuple[FilterGroup, ...]) -> list[Predicate]:
        """One OR clause per non-empty group."""
        clauses: list[Predicate] = []
        for group in groups:
            if not group.conditions:
                continue
            clauses.append(
                AnyOf(tuple(self.condition_clause(c) for c in group.conditions))
            )
        return clauses

    def condition_clause(self, condition: FilterCondition) -> Predicate:
        """Clause for a single filter-group condition."""
        if condition.field == FilterField.ACCOUNT:
            return AccountIn((condition.value,))
        if condition.field == FilterField.CATEGORY:
            return CategoryIn((condition.value,))
        if condition.field == FilterField.PAYEE:
            return PayeeIn((condition.value,))
        if condition.field == FilterField.TEXT:
            return TextContains(condition.value.strip().lower())
        raise ValidationError(unknown_filter_field(str(condition.field)))

    def direction_clause(self, direction: DirectionFilter) -> Optional[AmountSign]:
        if direction == DirectionFilter.INCOME_ONLY:
            return AmountSign(positive=True)
        if direction == DirectionFilter.EXPENSES_ONLY:
            return AmountSign(positive=False)
        return None
