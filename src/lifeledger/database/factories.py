"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from lifeledger.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV_VAR = "LIFELEDGER_DB_PATH"
DEFAULT_DB_DIR = ".lifeledger"
DEFAULT_DB_NAME = "lifeledger.db"


def default_database_path() -> Path:
    """Location of the ledger when neither an option nor the environment names one."""
    return Path.home() / DEFAULT_DB_DIR / DEFAULT_DB_NAME


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks LIFELEDGER_DB_PATH
            environment variable, then defaults to ~/.lifeledger/lifeledger.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get(DB_PATH_ENV_VAR)

    if database_path is None:
        database_path = str(default_database_path())

    # The ledger file may live in a directory that does not exist yet
    Path(database_path).expanduser().parent.mkdir(parents=True, exist_ok=True)

    database_url = f"sqlite:///{Path(database_path).expanduser()}"
    return SQLAlchemyDatabase(database_url)
