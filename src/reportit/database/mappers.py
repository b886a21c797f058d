"""Mapper functions between domain models, SQLAlchemy models and stored JSON.

Report filters and config are stored as JSON using the camelCase wire
format. A non-empty ``filterGroups`` array always wins over the legacy flat
fields, so a stored definition maps to exactly one filter mode.
"""

from typing import Any, Optional

from reportit.domain import entities as domain
from reportit.domain.errors import ValidationError, unknown_filter_field
from reportit.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    CustomReport as ORMCustomReport,
    ExchangeRate as ORMExchangeRate,
    Payee as ORMPayee,
    Transaction as ORMTransaction,
    TransactionSplit as ORMTransactionSplit,
)
from reportit.utils.date_parser import coerce_date


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        owner_id=orm_account.user_id,
        name=orm_account.name,
        currency_code=orm_account.currency_code,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        owner_id=orm_category.user_id,
        name=orm_category.name,
        parent_id=orm_category.parent_id,
        color=orm_category.color,
    )


def payee_to_domain(orm_payee: ORMPayee) -> domain.Payee:
    """Convert SQLAlchemy Payee model to domain Payee entity."""
    return domain.Payee(
        id=orm_payee.id,
        owner_id=orm_payee.user_id,
        name=orm_payee.name,
    )


def split_to_domain(orm_split: ORMTransactionSplit) -> domain.SplitAllocation:
    """Convert SQLAlchemy TransactionSplit model to domain SplitAllocation."""
    return domain.SplitAllocation(
        id=orm_split.id,
        amount=orm_split.amount,
        category_id=orm_split.category_id,
        category_name=orm_split.category.name if orm_split.category else None,
        memo=orm_split.memo,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.LedgerEntry:
    """Convert SQLAlchemy Transaction model to domain LedgerEntry entity."""
    return domain.LedgerEntry(
        id=orm_transaction.id,
        owner_id=orm_transaction.user_id,
        account_id=orm_transaction.account_id,
        date=orm_transaction.transaction_date,
        amount=orm_transaction.amount,
        currency_code=orm_transaction.currency_code,
        account_name=orm_transaction.account.name if orm_transaction.account else None,
        category_id=orm_transaction.category_id,
        category_name=orm_transaction.category.name if orm_transaction.category else None,
        payee_id=orm_transaction.payee_id,
        payee_name=orm_transaction.payee_name,
        payee_record_name=orm_transaction.payee.name if orm_transaction.payee else None,
        description=orm_transaction.description,
        is_transfer=orm_transaction.is_transfer,
        status=domain.TransactionStatus(orm_transaction.status),
        is_split=orm_transaction.is_split,
        splits=tuple(split_to_domain(split) for split in orm_transaction.splits),
    )


def exchange_rate_to_domain(orm_rate: ORMExchangeRate) -> domain.ExchangeRate:
    """Convert SQLAlchemy ExchangeRate model to domain ExchangeRate entity."""
    return domain.ExchangeRate(
        from_currency=orm_rate.from_currency,
        to_currency=orm_rate.to_currency,
        rate=orm_rate.rate,
        rate_date=orm_rate.rate_date,
    )


def report_to_domain(orm_report: ORMCustomReport) -> domain.ReportDefinition:
    """Convert SQLAlchemy CustomReport model to domain ReportDefinition."""
    return domain.ReportDefinition(
        id=orm_report.id,
        owner_id=orm_report.user_id,
        name=orm_report.name,
        description=orm_report.description,
        view_type=domain.ReportViewType(orm_report.view_type),
        timeframe_type=domain.TimeframeType(orm_report.timeframe_type),
        group_by=domain.GroupByType(orm_report.group_by),
        filters=filters_from_dict(orm_report.filters),
        config=config_from_dict(orm_report.config),
    )


def _condition_from_dict(data: dict[str, Any]) -> domain.FilterCondition:
    field = data.get("field")
    try:
        filter_field = domain.FilterField(field)
    except ValueError:
        raise ValidationError(unknown_filter_field(str(field)))
    return domain.FilterCondition(field=filter_field, value=str(data.get("value", "")))


def filters_from_dict(data: Optional[dict[str, Any]]) -> domain.ReportFilters:
    """Parse stored filters into legacy or grouped filters."""
    data = data or {}

    filter_groups = data.get("filterGroups") or []
    if filter_groups:
        return domain.GroupedFilters(
            groups=tuple(
                domain.FilterGroup(
                    conditions=tuple(
                        _condition_from_dict(condition)
                        for condition in group.get("conditions") or []
                    )
                )
                for group in filter_groups
            )
        )

    return domain.LegacyFilters(
        account_ids=tuple(data.get("accountIds") or ()),
        category_ids=tuple(data.get("categoryIds") or ()),
        payee_ids=tuple(data.get("payeeIds") or ()),
        search_text=data.get("searchText") or None,
    )


def filters_to_dict(filters: Optional[domain.ReportFilters]) -> dict[str, Any]:
    """Serialize filters to the stored JSON format."""
    if isinstance(filters, domain.GroupedFilters):
        return {
            "filterGroups": [
                {
                    "conditions": [
                        {"field": condition.field.value, "value": condition.value}
                        for condition in group.conditions
                    ]
                }
                for group in filters.groups
            ]
        }

    if filters is None:
        return {}

    result: dict[str, Any] = {}
    if filters.account_ids:
        result["accountIds"] = list(filters.account_ids)
    if filters.category_ids:
        result["categoryIds"] = list(filters.category_ids)
    if filters.payee_ids:
        result["payeeIds"] = list(filters.payee_ids)
    if filters.search_text:
        result["searchText"] = filters.search_text
    return result


def config_from_dict(data: Optional[dict[str, Any]]) -> domain.ReportConfig:
    """Parse stored config, applying defaults for missing fields."""
    data = data or {}

    table_columns = data.get("tableColumns")
    sort_by = data.get("sortBy")
    sort_direction = data.get("sortDirection")

    return domain.ReportConfig(
        metric=domain.MetricType(data.get("metric") or domain.MetricType.TOTAL_AMOUNT),
        include_transfers=bool(data.get("includeTransfers", False)),
        direction=domain.DirectionFilter(
            data.get("direction") or domain.DirectionFilter.EXPENSES_ONLY
        ),
        custom_start_date=coerce_date(data.get("customStartDate")),
        custom_end_date=coerce_date(data.get("customEndDate")),
        table_columns=(
            tuple(domain.TableColumn(column) for column in table_columns)
            if table_columns is not None
            else None
        ),
        sort_by=domain.TableColumn(sort_by) if sort_by else None,
        sort_direction=domain.SortDirection(sort_direction) if sort_direction else None,
    )


def config_to_dict(config: Optional[domain.ReportConfig]) -> dict[str, Any]:
    """Serialize config to the stored JSON format."""
    if config is None:
        config = domain.ReportConfig()

    result: dict[str, Any] = {
        "metric": config.metric.value,
        "includeTransfers": config.include_transfers,
        "direction": config.direction.value,
    }
    if config.custom_start_date is not None:
        result["customStartDate"] = config.custom_start_date.isoformat()
    if config.custom_end_date is not None:
        result["customEndDate"] = config.custom_end_date.isoformat()
    if config.table_columns is not None:
        result["tableColumns"] = [column.value for column in config.table_columns]
    if config.sort_by is not None:
        result["sortBy"] = config.sort_by.value
    if config.sort_direction is not None:
        result["sortDirection"] = config.sort_direction.value
    return result
