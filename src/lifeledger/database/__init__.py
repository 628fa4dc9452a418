"""Database layer for lifeledger application."""

from lifeledger.database.base import Database
from lifeledger.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
