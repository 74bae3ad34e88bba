"""Journal entry repository."""

from lifeos_finance.database.mappers import (
    QueryResult,
    journal_entry_from_document,
    journal_entry_to_document,
)
from lifeos_finance.database.models import Collections
from lifeos_finance.database.query import EQ
from lifeos_finance.domain.entities import JournalEntry
from lifeos_finance.domain.errors import require_value
from lifeos_finance.repositories.base import DocumentRepository


class JournalEntryRepository(DocumentRepository[JournalEntry]):
    """Repository for double-entry journal legs.

    Entries are stored as given; whether debits and credits balance is up to
    the caller.
    """

    collection = Collections.JOURNAL_ENTRIES
    _to_document = staticmethod(journal_entry_to_document)
    _from_document = staticmethod(journal_entry_from_document)

    def get_by_transaction(self, transaction_id: str) -> QueryResult:
        """List the legs of a transaction in creation order."""
        require_value(transaction_id, "transaction id")
        return self._list(
            self._query().where("transactionKey", EQ, transaction_id).order_by("createdAt")
        )

    def get_by_account(self, account_id: str) -> QueryResult:
        """List an account's legs by entry date."""
        require_value(account_id, "account id")
        return self._list(self._query().where("accountKey", EQ, account_id).order_by("entryDate"))
