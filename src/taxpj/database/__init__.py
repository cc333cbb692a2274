"""Database layer for taxpj application."""

from taxpj.database.base import Database
from taxpj.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
