"""Database layer for accountbook application."""

from accountbook.database.base import Database
from accountbook.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
