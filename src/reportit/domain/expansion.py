"""Expansion of ledger entries into the units aggregation works on.

A split entry is never aggregated as a whole: each allocation becomes its own
unit carrying the allocation's category, amount and memo while inheriting
everything else from the parent entry.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Union

from reportit.domain.entities import LedgerEntry, SplitAllocation


@dataclass(frozen=True)
class _UnitBase:
    entry: LedgerEntry

    @property
    def entry_id(self) -> str:
        return self.entry.id

    @property
    def date(self) -> date:
        return self.entry.date

    @property
    def currency_code(self) -> str:
        return self.entry.currency_code

    @property
    def payee_id(self) -> Optional[str]:
        return self.entry.payee_id

    @property
    def payee_name(self) -> Optional[str]:
        return self.entry.payee_name

    @property
    def payee_record_name(self) -> Optional[str]:
        return self.entry.payee_record_name

    @property
    def description(self) -> Optional[str]:
        return self.entry.description

    @property
    def account_name(self) -> Optional[str]:
        return self.entry.account_name


@dataclass(frozen=True)
class SimpleUnit(_UnitBase):
    """A ledger entry taken as a whole."""

    @property
    def unit_id(self) -> str:
        return self.entry.id

    @property
    def amount(self) -> Decimal:
        return self.entry.amount

    @property
    def category_id(self) -> Optional[str]:
        return self.entry.category_id

    @property
    def category_name(self) -> Optional[str]:
        return self.entry.category_name

    @property
    def memo(self) -> Optional[str]:
        return None


@dataclass(frozen=True)
class AllocationUnit(_UnitBase):
    """One allocation of a split ledger entry."""

    split: SplitAllocation

    @property
    def unit_id(self) -> str:
        return self.split.id

    @property
    def amount(self) -> Decimal:
        return self.split.amount

    @property
    def category_id(self) -> Optional[str]:
        return self.split.category_id

    @property
    def category_name(self) -> Optional[str]:
        return self.split.category_name

    @property
    def memo(self) -> Optional[str]:
        return self.split.memo


ExpandedUnit = Union[SimpleUnit, AllocationUnit]


def expand_entry(entry: LedgerEntry) -> list[ExpandedUnit]:
    """Expand one entry into its units.

    A split entry without allocations falls back to the entry itself.
    """
    if entry.is_split and entry.splits:
        return [AllocationUnit(entry=entry, split=split) for split in entry.splits]
    return [SimpleUnit(entry=entry)]


def expand_entries(entries: Iterable[LedgerEntry]) -> list[ExpandedUnit]:
    """Expand entries, preserving entry order and allocation order."""
    units: list[ExpandedUnit] = []
    for entry in entries:
        units.extend(expand_entry(entry))
    return units
