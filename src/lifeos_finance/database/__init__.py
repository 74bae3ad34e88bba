"""Document store layer for lifeos_finance."""

from lifeos_finance.database.base import DocumentStore
from lifeos_finance.database.factories import create_sqlite_store, create_store
from lifeos_finance.database.models import Collections
from lifeos_finance.database.query import DocumentQuery

__all__ = ["DocumentStore", "DocumentQuery", "Collections", "create_sqlite_store", "create_store"]
