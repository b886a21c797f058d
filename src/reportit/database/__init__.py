"""Database layer for reportit application."""

from reportit.database.base import Database
from reportit.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
