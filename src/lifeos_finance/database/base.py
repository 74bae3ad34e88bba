"""Abstract document store interface."""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Optional

from lifeos_finance.database.query import DocumentQuery

# System fields returned with every document; never part of the stored body
KEY_FIELD = "_key"
REVISION_FIELD = "_rev"
SYSTEM_FIELDS = (KEY_FIELD, REVISION_FIELD, "_id")


def strip_system_fields(document: dict[str, Any]) -> dict[str, Any]:
    """Return the document body without system fields."""
    return {name: value for name, value in document.items() if name not in SYSTEM_FIELDS}


class DocumentStore(ABC):
    """Abstract document store holding named collections of JSON documents.

    Documents are addressed by collection name and a string key. Reads return
    plain dicts that carry the key under ``_key`` and the revision counter
    under ``_rev``; the revision grows by one on every write.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Create the storage for the collections if missing."""
        pass

    @abstractmethod
    def get(self, collection: str, key: str) -> Optional[dict[str, Any]]:
        """Get a document by key, or None if it does not exist."""
        pass

    @abstractmethod
    def upsert(self, collection: str, key: str, body: dict[str, Any]) -> None:
        """Replace the document with this key, inserting it if absent."""
        pass

    @abstractmethod
    def insert(self, collection: str, key: str, body: dict[str, Any]) -> None:
        """Insert a new document.

        Raises:
            DocumentConflictError: If the key is already taken
        """
        pass

    @abstractmethod
    def replace(
        self,
        collection: str,
        key: str,
        body: dict[str, Any],
        expected_revision: Optional[int] = None,
    ) -> None:
        """Replace an existing document.

        Args:
            expected_revision: When given, only replace if the stored revision
                still matches

        Raises:
            DocumentNotFoundError: If the document does not exist
            RevisionConflictError: If expected_revision no longer matches
        """
        pass

    @abstractmethod
    def delete(self, collection: str, key: str) -> bool:
        """Delete a document. Returns False if there was nothing to delete."""
        pass

    @abstractmethod
    def query(self, query: DocumentQuery) -> list[dict[str, Any]]:
        """Run a filtered, sorted, paginated query."""
        pass

    @abstractmethod
    def count(self, collection: str) -> int:
        """Count the documents in a collection."""
        pass

    @abstractmethod
    def increment(
        self,
        collection: str,
        key: str,
        field: str,
        delta: Decimal,
        touched: Optional[dict[str, Any]] = None,
    ) -> bool:
        """Atomically add delta to a numeric field and set the touched fields.

        No concurrent increment of the same document may be lost. Returns
        False if the document does not exist.
        """
        pass
