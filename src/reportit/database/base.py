"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence
from datetime import date
from decimal import Decimal

# Import domain modules directly; reportit.domain.__init__ resolves services lazily
from reportit.domain.entities import (
    Category,
    ExchangeRate,
    GroupByType,
    LedgerEntry,
    Payee,
    ReportConfig,
    ReportDefinition,
    ReportFilters,
    ReportViewType,
    TimeframeType,
    TransactionStatus,
)
from reportit.domain.filters import Predicate


class Database(ABC):
    """Abstract database interface for reportit.

    Covers the stores the report engine consumes: the ledger, the category
    and payee directories, exchange rates, user preferences and report
    definitions. The ``create_*`` methods exist to seed data.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(self, owner_id: str, name: str, currency_code: str = "USD") -> str:
        """Create an account. Returns account ID."""
        pass

    # Category directory
    @abstractmethod
    def create_category(
        self,
        owner_id: str,
        name: str,
        parent_id: Optional[str] = None,
        color: Optional[str] = None,
    ) -> str:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def list_categories(self, owner_id: str) -> list[Category]:
        """List all categories of an owner."""
        pass

    # Payee directory
    @abstractmethod
    def create_payee(self, owner_id: str, name: str) -> str:
        """Create a payee. Returns payee ID."""
        pass

    @abstractmethod
    def list_payees(self, owner_id: str) -> list[Payee]:
        """List all payees of an owner."""
        pass

    # Ledger operations
    @abstractmethod
    def create_transaction(
        self,
        owner_id: str,
        account_id: str,
        date: date,
        amount: Decimal,
        currency_code: Optional[str] = None,
        category_id: Optional[str] = None,
        payee_id: Optional[str] = None,
        payee_name: Optional[str] = None,
        description: Optional[str] = None,
        is_transfer: bool = False,
        status: TransactionStatus = TransactionStatus.UNRECONCILED,
        splits: Optional[Sequence[dict[str, Any]]] = None,
    ) -> str:
        """Create a ledger entry. Returns entry ID.

        Args:
            currency_code: Entry currency, defaults to the account's currency
            splits: Optional allocations, each a dict with ``amount`` and
                optional ``category_id`` and ``memo``. A non-empty list marks
                the entry as split.
        """
        pass

    @abstractmethod
    def find_ledger_entries(self, predicate: Predicate) -> list[LedgerEntry]:
        """Find ledger entries matching a predicate.

        Entries come back ordered ascending by date with their splits
        attached.
        """
        pass

    # Exchange rates
    @abstractmethod
    def add_exchange_rate(
        self,
        from_currency: str,
        to_currency: str,
        rate: Decimal,
        rate_date: Optional[date] = None,
    ) -> None:
        """Record an exchange rate."""
        pass

    @abstractmethod
    def get_latest_exchange_rates(self) -> list[ExchangeRate]:
        """Most recent rate for every currency pair."""
        pass

    # User preferences
    @abstractmethod
    def get_default_currency(self, owner_id: str) -> Optional[str]:
        """Owner's preferred reporting currency, if set."""
        pass

    @abstractmethod
    def set_default_currency(self, owner_id: str, currency_code: str) -> None:
        """Set the owner's preferred reporting currency."""
        pass

    # Report definitions
    @abstractmethod
    def create_report(
        self,
        owner_id: str,
        name: str,
        view_type: ReportViewType = ReportViewType.BAR_CHART,
        timeframe_type: TimeframeType = TimeframeType.LAST_3_MONTHS,
        group_by: GroupByType = GroupByType.CATEGORY,
        filters: Optional[ReportFilters] = None,
        config: Optional[ReportConfig] = None,
        description: Optional[str] = None,
    ) -> str:
        """Create a report definition. Returns report ID."""
        pass

    @abstractmethod
    def get_report(self, report_id: str) -> Optional[ReportDefinition]:
        """Get report definition by ID, regardless of owner."""
        pass

    @abstractmethod
    def replace_report_settings(
        self,
        report_id: str,
        filters: Optional[ReportFilters] = None,
        config: Optional[ReportConfig] = None,
    ) -> None:
        """Replace a report's filters and/or config as a whole."""
        pass
