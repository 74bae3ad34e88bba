"""Factory functions for creating document store instances."""

import os
from pathlib import Path
from typing import Optional

from lifeos_finance.database.sqlalchemy_db import SQLAlchemyDocumentStore

DATABASE_URL_ENV = "LIFEOS_DATABASE_URL"
DB_PATH_ENV = "LIFEOS_DB_PATH"


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemyDocumentStore:
    """Create a SQLite backed document store.

    Args:
        database_path: Path to SQLite database file. If None, checks LIFEOS_DB_PATH
            environment variable, then defaults to ~/.lifeos/finance.db

    Returns:
        SQLAlchemyDocumentStore instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV)

    if database_path is None:
        db_dir = Path.home() / ".lifeos"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "finance.db")

    return SQLAlchemyDocumentStore(f"sqlite:///{database_path}")


def create_store(database_url: Optional[str] = None) -> SQLAlchemyDocumentStore:
    """Create a document store from a SQLAlchemy URL.

    Args:
        database_url: SQLAlchemy URL. If None, checks LIFEOS_DATABASE_URL, then
            falls back to the SQLite store of create_sqlite_store()
    """
    if database_url is None:
        database_url = os.environ.get(DATABASE_URL_ENV)

    if database_url is None:
        return create_sqlite_store()

    return SQLAlchemyDocumentStore(database_url)
