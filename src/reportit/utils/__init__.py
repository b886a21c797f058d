"""Utility functions for reportit."""

from reportit.utils.date_parser import parse_date, coerce_date
from reportit.utils.logging_config import get_logger, setup_logging

__all__ = ["parse_date", "coerce_date", "get_logger", "setup_logging"]
