"""Domain layer for reportit application."""

__all__ = [
    "ReportsService",
    "SpendingReportsService",
    "ReportCurrencyService",
]


# Services import the database layer, which imports domain entities, so they
# are resolved lazily
def __getattr__(name):
    if name == "ReportsService":
        from reportit.domain.reports import ReportsService
        return ReportsService
    if name == "SpendingReportsService":
        from reportit.domain.spending import SpendingReportsService
        return SpendingReportsService
    if name == "ReportCurrencyService":
        from reportit.domain.currency import ReportCurrencyService
        return ReportCurrencyService
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
