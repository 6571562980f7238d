"""Database factory functions for creating database instances."""

import os
from typing import Optional

from accountbook.config import default_database_path
from accountbook.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks ACCOUNTBOOK_DB_PATH
            environment variable, then defaults to ~/.accountbook/accountbook.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("ACCOUNTBOOK_DB_PATH")

    if database_path is None:
        database_path = default_database_path()

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)


def create_database(database_url: str) -> SQLAlchemyDatabase:
    """Create a database instance for any SQLAlchemy URL (e.g. PostgreSQL)."""
    return SQLAlchemyDatabase(database_url)
