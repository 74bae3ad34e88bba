"""Receipt repository."""

from lifeos_finance.database.mappers import QueryResult, receipt_from_document, receipt_to_document
from lifeos_finance.database.models import Collections
from lifeos_finance.database.query import EQ
from lifeos_finance.domain.entities import Receipt
from lifeos_finance.domain.errors import ValidationError, require_value
from lifeos_finance.repositories.base import DocumentRepository


class ReceiptRepository(DocumentRepository[Receipt]):
    """Repository for receipt metadata.

    storage_key points at the file in object storage; it is stored as given
    and never resolved here.
    """

    collection = Collections.RECEIPTS
    _to_document = staticmethod(receipt_to_document)
    _from_document = staticmethod(receipt_from_document)

    def get_by_transaction(self, transaction_id: str) -> QueryResult:
        """List a transaction's receipts, newest first."""
        require_value(transaction_id, "transaction id")
        return self._list(
            self._query()
            .where("transactionKey", EQ, transaction_id)
            .order_by("createdAt", descending=True)
        )

    def get_all(self, limit: int) -> QueryResult:
        """List the newest receipts.

        Raises:
            ValidationError: If limit is negative
        """
        require_value(limit, "limit")
        if limit < 0:
            raise ValidationError("Limit must be non-negative")
        return self._list(self._query().order_by("createdAt", descending=True).paginate(limit))
