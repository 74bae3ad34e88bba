"""Merchant repository."""

from lifeos_finance.database.mappers import QueryResult, merchant_from_document, merchant_to_document
from lifeos_finance.database.models import Collections
from lifeos_finance.database.query import CONTAINS_CI
from lifeos_finance.domain.entities import Merchant
from lifeos_finance.domain.errors import require_value
from lifeos_finance.logging_setup import get_logger
from lifeos_finance.repositories.base import DocumentRepository

logger = get_logger(__name__)


class MerchantRepository(DocumentRepository[Merchant]):
    """Repository for merchants."""

    collection = Collections.MERCHANTS
    _to_document = staticmethod(merchant_to_document)
    _from_document = staticmethod(merchant_from_document)

    def get_all(self) -> QueryResult:
        """List all merchants sorted by name."""
        return self._list(self._query().order_by("name"))

    def search(self, text: str) -> QueryResult:
        """Find merchants whose name contains text, ignoring case.

        Args:
            text: Substring to look for; wildcard characters match literally

        Raises:
            ValidationError: If text is missing or blank
        """
        require_value(text, "search text")
        return self._list(self._query().where("name", CONTAINS_CI, text.strip()).order_by("name"))

    def delete(self, merchant_id: str) -> bool:
        """Delete a merchant.

        Returns:
            True if a merchant was deleted, False if none had this id
        """
        require_value(merchant_id, "merchant id")
        deleted = self.store.delete(self.collection, merchant_id)
        if deleted:
            logger.debug("Deleted merchant %s", merchant_id)
        return deleted
