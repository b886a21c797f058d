"""Timeframe resolution for report execution."""

from datetime import date, timedelta
from typing import Callable, Optional, Union

from dateutil.relativedelta import relativedelta

from reportit.domain.entities import TimeframeType
from reportit.domain.errors import InvalidTimeframeError, custom_timeframe_requires_bounds
from reportit.domain.results import Timeframe
from reportit.utils.date_parser import coerce_date

# Windows that end today and start a fixed distance back
_TRAILING_WINDOWS: dict[TimeframeType, tuple[relativedelta, str]] = {
    TimeframeType.LAST_7_DAYS: (relativedelta(days=7), "Last 7 Days"),
    TimeframeType.LAST_30_DAYS: (relativedelta(days=30), "Last 30 Days"),
    TimeframeType.LAST_3_MONTHS: (relativedelta(months=3), "Last 3 Months"),
    TimeframeType.LAST_6_MONTHS: (relativedelta(months=6), "Last 6 Months"),
    TimeframeType.LAST_12_MONTHS: (relativedelta(months=12), "Last 12 Months"),
}


class TimeframeResolver:
    """Turns a symbolic timeframe into a concrete date range and label."""

    def __init__(self, today: Callable[[], date] = date.today):
        """Initialize resolver.

        Args:
            today: Callable returning the reference date
        """
        self.today = today

    def resolve(
        self,
        timeframe_type: TimeframeType,
        custom_start: Union[date, str, None] = None,
        custom_end: Union[date, str, None] = None,
    ) -> Timeframe:
        """Resolve a timeframe.

        Args:
            timeframe_type: Symbolic timeframe
            custom_start: Start date for CUSTOM (override already applied)
            custom_end: End date for CUSTOM (override already applied)

        Returns:
            Timeframe with inclusive start and end dates

        Raises:
            InvalidTimeframeError: If CUSTOM is missing either bound
        """
        today = self.today()

        if timeframe_type == TimeframeType.CUSTOM:
            start = coerce_date(custom_start)
            end = coerce_date(custom_end)
            if start is None or end is None:
                raise InvalidTimeframeError(custom_timeframe_requires_bounds())
            return Timeframe(start_date=start, end_date=end, label="Custom Range")

        if timeframe_type == TimeframeType.LAST_MONTH:
            first_of_this_month = today.replace(day=1)
            end = first_of_this_month - timedelta(days=1)
            start = end.replace(day=1)
            return Timeframe(start_date=start, end_date=end, label=start.strftime("%B %Y"))

        if timeframe_type == TimeframeType.LAST_YEAR:
            start = date(today.year - 1, 1, 1)
            end = date(today.year - 1, 12, 31)
            return Timeframe(start_date=start, end_date=end, label=str(start.year))

        if timeframe_type == TimeframeType.YEAR_TO_DATE:
            return Timeframe(
                start_date=today.replace(month=1, day=1),
                end_date=today,
                label="Year to Date",
            )

        delta, label = _TRAILING_WINDOWS.get(
            timeframe_type, _TRAILING_WINDOWS[TimeframeType.LAST_3_MONTHS]
        )
        return Timeframe(start_date=today - delta, end_date=today, label=label)


def resolve_effective_bounds(
    override: Optional[date], saved: Optional[date]
) -> Optional[date]:
    """Pick the runtime override if present, otherwise the saved value."""
    return override if override is not None else saved
