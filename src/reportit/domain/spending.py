"""Built-in spending reports domain service."""

from datetime import date
from decimal import Decimal
from typing import Mapping, Optional

from reportit.database.base import Database
from reportit.domain.aggregation import (
    UNCATEGORIZED_KEY,
    UNCATEGORIZED_LABEL,
    UNKNOWN_PAYEE_KEY,
    UNKNOWN_PAYEE_LABEL,
)
from reportit.domain.currency import CurrencyNormalizer, ReportCurrencyService
from reportit.domain.entities import Category, LedgerEntry
from reportit.domain.expansion import ExpandedUnit, expand_entries
from reportit.domain.filters import FilterCompiler
from reportit.domain.metrics import ZERO, round_money
from reportit.domain.results import (
    CategorySpendingItem,
    MonthlySpendingItem,
    MonthlySpendingTrend,
    PayeeSpendingItem,
    SpendingByCategory,
    SpendingByPayee,
)
from reportit.utils.logging_config import get_logger

logger = get_logger(__name__)

CATEGORY_LIMIT = 15
PAYEE_LIMIT = 20
TREND_CATEGORY_LIMIT = 10


class SpendingReportsService:
    """Service for the built-in spending breakdowns.

    All three reports look at expenses only: negative allocations for the
    category views and negative entries for the payee view. Transfers and
    void entries are never included.
    """

    def __init__(self, db: Database):
        """Initialize spending reports service.

        Args:
            db: Database instance
        """
        self.db = db
        self.filter_compiler = FilterCompiler()
        self.currency_service = ReportCurrencyService(db)

    def spending_by_category(
        self, owner_id: str, start_date: Optional[date], end_date: date
    ) -> SpendingByCategory:
        """Spending per top-level category, largest first.

        Args:
            owner_id: Owner of the ledger
            start_date: Optional inclusive start date
            end_date: Inclusive end date

        Returns:
            At most 15 categories and the sum of their totals
        """
        entries = self._find_entries(owner_id, start_date, end_date)
        units = self._expense_units(entries)
        categories = self._category_map(owner_id)
        normalizer = self.currency_service.normalizer_for(owner_id, units)

        totals: dict[str, Decimal] = {}
        for unit in units:
            key = rollup_category_key(unit.category_id, categories)
            totals[key] = totals.get(key, ZERO) + normalizer.normalize(unit)

        items = sorted(
            (
                category_item(key, round_money(total), categories)
                for key, total in totals.items()
            ),
            key=lambda item: item.total,
            reverse=True,
        )[:CATEGORY_LIMIT]

        return SpendingByCategory(
            data=tuple(items),
            total_spending=round_money(sum((item.total for item in items), ZERO)),
        )

    def spending_by_payee(
        self, owner_id: str, start_date: Optional[date], end_date: date
    ) -> SpendingByPayee:
        """Spending per payee, largest first.

        Entries without a linked payee are grouped by their free-text payee
        name.

        Returns:
            At most 20 payees and the sum of their totals
        """
        entries = [
            entry
            for entry in self._find_entries(owner_id, start_date, end_date)
            if entry.amount < 0
        ]
        payees = {payee.id: payee for payee in self.db.list_payees(owner_id)}
        normalizer = CurrencyNormalizer(
            self.currency_service.get_default_currency(owner_id),
            self.currency_service.build_rate_map(),
        )

        rows: dict[str, dict] = {}
        for entry in entries:
            key = entry.payee_id or entry.payee_name or UNKNOWN_PAYEE_KEY
            amount = abs(normalizer.convert(entry.amount, entry.currency_code))
            row = rows.get(key)
            if row is None:
                payee = payees.get(entry.payee_id) if entry.payee_id else None
                rows[key] = {
                    "payee_id": entry.payee_id,
                    "payee_name": (payee.name if payee else None)
                    or entry.payee_name
                    or UNKNOWN_PAYEE_LABEL,
                    "total": amount,
                }
            else:
                row["total"] += amount

        items = sorted(
            (
                PayeeSpendingItem(
                    payee_id=row["payee_id"],
                    payee_name=row["payee_name"],
                    total=round_money(row["total"]),
                )
                for row in rows.values()
            ),
            key=lambda item: item.total,
            reverse=True,
        )[:PAYEE_LIMIT]

        return SpendingByPayee(
            data=tuple(items),
            total_spending=round_money(sum((item.total for item in items), ZERO)),
        )

    def monthly_spending_trend(
        self, owner_id: str, start_date: Optional[date], end_date: date
    ) -> MonthlySpendingTrend:
        """Monthly spending for the overall top 10 categories.

        Every month lists the same categories in the same order, with 0 where
        a category had no spending that month.
        """
        entries = self._find_entries(owner_id, start_date, end_date)
        units = self._expense_units(entries)
        categories = self._category_map(owner_id)
        normalizer = self.currency_service.normalizer_for(owner_id, units)

        monthly: dict[str, dict[str, Decimal]] = {}
        overall: dict[str, Decimal] = {}
        for unit in units:
            month = unit.date.strftime("%Y-%m")
            key = rollup_category_key(unit.category_id, categories)
            amount = normalizer.normalize(unit)
            month_totals = monthly.setdefault(month, {})
            month_totals[key] = month_totals.get(key, ZERO) + amount
            overall[key] = overall.get(key, ZERO) + amount

        top_keys = [
            key
            for key, _ in sorted(
                overall.items(), key=lambda pair: pair[1], reverse=True
            )[:TREND_CATEGORY_LIMIT]
        ]

        data = []
        for month in sorted(monthly):
            month_items = tuple(
                category_item(key, round_money(monthly[month].get(key, ZERO)), categories)
                for key in top_keys
            )
            data.append(
                MonthlySpendingItem(
                    month=month,
                    categories=month_items,
                    total_spending=round_money(
                        sum((item.total for item in month_items), ZERO)
                    ),
                )
            )

        logger.debug("Spending trend for %s covers %d months", owner_id, len(data))
        return MonthlySpendingTrend(data=tuple(data))

    def _find_entries(
        self, owner_id: str, start_date: Optional[date], end_date: date
    ) -> list[LedgerEntry]:
        predicate = self.filter_compiler.spending(owner_id, start_date, end_date)
        return self.db.find_ledger_entries(predicate)

    def _expense_units(self, entries: list[LedgerEntry]) -> list[ExpandedUnit]:
        return [unit for unit in expand_entries(entries) if unit.amount < 0]

    def _category_map(self, owner_id: str) -> dict[str, Category]:
        return {category.id: category for category in self.db.list_categories(owner_id)}


def rollup_category_key(
    category_id: Optional[str], categories: Mapping[str, Category]
) -> str:
    """Key of the category to report under: its parent if known, else itself.

    Missing and unknown categories map to the uncategorized key.
    """
    if category_id is None:
        return UNCATEGORIZED_KEY
    category = categories.get(category_id)
    if category is None:
        return UNCATEGORIZED_KEY
    if category.parent_id and category.parent_id in categories:
        return category.parent_id
    return category.id


def category_item(
    key: str, total: Decimal, categories: Mapping[str, Category]
) -> CategorySpendingItem:
    category = categories.get(key)
    if category is None:
        return CategorySpendingItem(
            category_id=None,
            category_name=UNCATEGORIZED_LABEL,
            color=None,
            total=total,
        )
    return CategorySpendingItem(
        category_id=category.id,
        category_name=category.name,
        color=category.color,
        total=total,
    )
