"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ForbiddenError(DomainError):
    """Requested domain entity exists but belongs to another owner."""


class InvalidTimeframeError(ValidationError):
    """Timeframe cannot be resolved to a concrete date range."""


def report_not_found(report_id: str) -> str:
    """Return message for missing report definition."""
    return f"Report with ID {report_id} not found"


def report_forbidden() -> str:
    """Return message for a report owned by someone else."""
    return "You do not have access to this report"


def custom_timeframe_requires_bounds() -> str:
    """Return message for a custom timeframe without start or end."""
    return "Custom timeframe requires start and end dates"


def unknown_filter_field(field: str) -> str:
    """Return message for an unsupported filter condition field."""
    return f"Unknown filter field '{field}'. Supported fields: account, category, payee, text"
