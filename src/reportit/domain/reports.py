"""Custom report execution domain service."""

from datetime import date
from typing import Callable, Optional

from reportit.database.base import Database
from reportit.domain.aggregation import aggregate
from reportit.domain.currency import ReportCurrencyService
from reportit.domain.entities import (
    ExecuteReportOverrides,
    GroupByType,
    ReportDefinition,
)
from reportit.domain.errors import (
    ForbiddenError,
    NotFoundError,
    report_forbidden,
    report_not_found,
)
from reportit.domain.expansion import expand_entries
from reportit.domain.filters import FilterCompiler
from reportit.domain.metrics import calculate_summary
from reportit.domain.results import ReportResult
from reportit.domain.sorting import sort_data
from reportit.domain.timeframe import TimeframeResolver, resolve_effective_bounds
from reportit.utils.logging_config import get_logger

logger = get_logger(__name__)


class ReportsService:
    """Service for executing stored custom reports."""

    def __init__(self, db: Database, today: Callable[[], date] = date.today):
        """Initialize reports service.

        Args:
            db: Database instance
            today: Callable returning the reference date for timeframes
        """
        self.db = db
        self.timeframes = TimeframeResolver(today)
        self.filter_compiler = FilterCompiler()
        self.currency_service = ReportCurrencyService(db)

    def find_one(self, owner_id: str, report_id: str) -> ReportDefinition:
        """Load a report definition owned by ``owner_id``.

        Raises:
            NotFoundError: If no report has this ID
            ForbiddenError: If the report belongs to someone else
        """
        report = self.db.get_report(report_id)
        if report is None:
            raise NotFoundError(report_not_found(report_id))
        if report.owner_id != owner_id:
            raise ForbiddenError(report_forbidden())
        return report

    def execute(
        self,
        owner_id: str,
        report_id: str,
        overrides: Optional[ExecuteReportOverrides] = None,
    ) -> ReportResult:
        """Execute a report.

        Args:
            owner_id: Requesting owner
            report_id: Report definition ID
            overrides: Optional runtime timeframe and date overrides

        Returns:
            ReportResult with data points and summary

        Raises:
            NotFoundError: If the report does not exist
            ForbiddenError: If the report belongs to someone else
            InvalidTimeframeError: If a CUSTOM timeframe has no bounds
        """
        report = self.find_one(owner_id, report_id)
        overrides = overrides or ExecuteReportOverrides()
        config = report.config

        timeframe_type = overrides.timeframe_type or report.timeframe_type
        timeframe = self.timeframes.resolve(
            timeframe_type,
            resolve_effective_bounds(overrides.start_date, config.custom_start_date),
            resolve_effective_bounds(overrides.end_date, config.custom_end_date),
        )
        logger.debug(
            "Executing report %s over %s..%s (%s)",
            report.id,
            timeframe.start_date,
            timeframe.end_date,
            timeframe.label,
        )

        predicate = self.filter_compiler.compile(
            owner_id, timeframe, report.filters, config
        )
        entries = self.db.find_ledger_entries(predicate)
        units = expand_entries(entries)
        logger.debug("Expanded %d entries into %d units", len(entries), len(units))

        categories = None
        payees = None
        if report.group_by == GroupByType.CATEGORY:
            categories = {c.id: c for c in self.db.list_categories(owner_id)}
        elif report.group_by == GroupByType.PAYEE:
            payees = {p.id: p for p in self.db.list_payees(owner_id)}

        normalizer = self.currency_service.normalizer_for(owner_id, units)
        data = aggregate(
            units,
            report.group_by,
            config.metric,
            normalizer,
            categories=categories,
            payees=payees,
        )

        if config.sort_by is not None:
            data = sort_data(data, config.sort_by, config.sort_direction)

        return ReportResult(
            report_id=report.id,
            name=report.name,
            view_type=report.view_type,
            group_by=report.group_by,
            timeframe=timeframe,
            data=tuple(data),
            summary=calculate_summary(data),
            table_columns=config.table_columns,
        )
