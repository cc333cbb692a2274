"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from taxpj.database.sqlalchemy_db import SQLAlchemyDatabase


DB_PATH_ENV = "TAXPJ_DB_PATH"
DEFAULT_DB_DIR = ".taxpj"
DEFAULT_DB_FILE = "taxpj.db"


def default_database_path() -> Path:
    """Location of the profile store when no path is configured."""
    return Path.home() / DEFAULT_DB_DIR / DEFAULT_DB_FILE


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create the SQLite-backed profile store.

    Args:
        database_path: SQLite file. Falls back to the TAXPJ_DB_PATH
            environment variable, then to ~/.taxpj/taxpj.db

    Returns:
        SQLAlchemyDatabase bound to the file; missing parent folders are created
    """
    path = Path(database_path or os.environ.get(DB_PATH_ENV) or default_database_path())
    path.parent.mkdir(parents=True, exist_ok=True)
    return SQLAlchemyDatabase(f"sqlite:///{path}")
