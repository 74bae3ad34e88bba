"""Shared plumbing for the document repositories."""

from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

from lifeos_finance.database.base import DocumentStore
from lifeos_finance.database.mappers import QueryResult, map_documents, to_domain
from lifeos_finance.database.query import DocumentQuery
from lifeos_finance.domain.errors import InvalidDocumentError, require_value
from lifeos_finance.logging_setup import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class DocumentRepository(Generic[T]):
    """Base class for repositories over one collection.

    Subclasses set ``collection`` and the two mappers as staticmethods.
    Single reads return None for missing or corrupt documents; list reads
    skip corrupt documents and report them in QueryResult.skipped. Every
    skip is logged.
    """

    collection: str
    _to_document: Callable[[T], dict[str, Any]]
    _from_document: Callable[[dict[str, Any]], T]

    def __init__(self, store: DocumentStore):
        """Initialize repository.

        Args:
            store: Document store shared by all repositories
        """
        self.store = store

    def _query(self) -> DocumentQuery:
        return DocumentQuery(self.collection)

    def _get(self, key: str, name: str = "id") -> Optional[T]:
        require_value(key, name)
        return to_domain(self._from_document, self.store.get(self.collection, key), self._log_invalid)

    def _log_invalid(self, error: InvalidDocumentError) -> None:
        logger.warning(
            "Invalid document %s in %s read as missing: %s",
            error.key or "<no key>",
            self.collection,
            error.reason,
        )

    def _list(self, query: DocumentQuery) -> QueryResult:
        result = map_documents(self._from_document, self.store.query(query))
        for skipped in result.skipped:
            logger.warning(
                "Skipped invalid document %s in %s: %s",
                skipped.key or "<no key>",
                self.collection,
                skipped.reason,
            )
        return result

    def _first(self, query: DocumentQuery) -> Optional[T]:
        """Return the first document of query that maps to a valid entity.

        The query is not limited to one row, so a corrupt document ahead of
        a valid match is skipped instead of hiding it.
        """
        matches = self._list(query)
        return matches[0] if matches else None

    def get_by_id(self, entity_id: str) -> Optional[T]:
        """Get an entity by its id.

        Returns:
            The entity, or None if no valid document has this id

        Raises:
            ValidationError: If entity_id is missing or blank
        """
        return self._get(entity_id)

    def save(self, entity: T) -> T:
        """Insert or fully replace an entity.

        Returns:
            The saved entity

        Raises:
            ValidationError: If entity is None or has no id
        """
        require_value(entity, "entity")
        key = require_value(entity.id, "entity id")
        self.store.upsert(self.collection, key, self._to_document(entity))
        logger.debug("Saved %s/%s", self.collection, key)
        return entity

    def save_many(self, entities: Iterable[T]) -> list[T]:
        """Save entities one after another.

        Not atomic: a failure stops the loop and earlier saves stay committed.
        """
        require_value(entities, "entities")
        return [self.save(entity) for entity in entities]

    def audit(self) -> QueryResult:
        """Map every document in the collection, reporting the corrupt ones."""
        return self._list(self._query())
