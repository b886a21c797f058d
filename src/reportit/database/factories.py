"""Database factory functions."""

import os
from pathlib import Path
from typing import Optional

from reportit.database.sqlalchemy_db import SQLAlchemyDatabase
from reportit.utils.logging_config import get_logger

logger = get_logger(__name__)

DB_PATH_ENV = "REPORTIT_DB_PATH"
DEFAULT_DB_DIR = ".reportit"
DEFAULT_DB_NAME = "reportit.db"


def default_database_path() -> Path:
    """Location used when neither an explicit path nor REPORTIT_DB_PATH is set."""
    return Path.home() / DEFAULT_DB_DIR / DEFAULT_DB_NAME


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite-backed report store.

    Args:
        database_path: Path to the SQLite file. Falls back to REPORTIT_DB_PATH,
            then to ~/.reportit/reportit.db. Missing parent directories are
            created.

    Returns:
        SQLAlchemyDatabase bound to the file
    """
    path = Path(database_path or os.environ.get(DB_PATH_ENV) or default_database_path())
    path.expanduser().parent.mkdir(parents=True, exist_ok=True)

    logger.debug("Opening report store at %s", path)
    return SQLAlchemyDatabase(f"sqlite:///{path.expanduser()}")
