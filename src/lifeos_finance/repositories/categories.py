"""Category repository."""

from lifeos_finance.database.mappers import QueryResult, category_from_document, category_to_document
from lifeos_finance.database.models import Collections
from lifeos_finance.database.query import EQ
from lifeos_finance.domain.entities import Category
from lifeos_finance.domain.errors import require_value
from lifeos_finance.domain.types import CategoryType
from lifeos_finance.repositories.base import DocumentRepository


class CategoryRepository(DocumentRepository[Category]):
    """Repository for transaction categories.

    Categories form a tree through parent_id. Cycles are not checked here.
    """

    collection = Collections.CATEGORIES
    _to_document = staticmethod(category_to_document)
    _from_document = staticmethod(category_from_document)

    def get_all(self) -> QueryResult:
        """List all categories sorted by name."""
        return self._list(self._query().order_by("name"))

    def get_by_type(self, category_type: CategoryType) -> QueryResult:
        """List categories of one type sorted by name."""
        category_type = CategoryType.from_string(require_value(category_type, "category type"))
        return self._list(self._query().where("type", EQ, category_type.value).order_by("name"))

    def get_children(self, parent_id: str) -> QueryResult:
        """List the direct children of a category sorted by name."""
        require_value(parent_id, "parent id")
        return self._list(self._query().where("parentKey", EQ, parent_id).order_by("name"))
