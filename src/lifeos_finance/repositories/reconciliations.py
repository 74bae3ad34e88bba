"""Reconciliation repository."""

from typing import Optional

from lifeos_finance.database.mappers import (
    QueryResult,
    reconciliation_from_document,
    reconciliation_to_document,
)
from lifeos_finance.database.models import Collections
from lifeos_finance.database.query import EQ
from lifeos_finance.domain.entities import Reconciliation
from lifeos_finance.domain.errors import require_value
from lifeos_finance.domain.types import ReconciliationStatus
from lifeos_finance.repositories.base import DocumentRepository


class ReconciliationRepository(DocumentRepository[Reconciliation]):
    """Repository for statement reconciliations."""

    collection = Collections.RECONCILIATIONS
    _to_document = staticmethod(reconciliation_to_document)
    _from_document = staticmethod(reconciliation_from_document)

    def get_by_account(self, account_id: str) -> QueryResult:
        """List an account's reconciliations, latest statement first."""
        require_value(account_id, "account id")
        return self._list(
            self._query()
            .where("accountKey", EQ, account_id)
            .order_by("statementDate", descending=True)
        )

    def get_in_progress(self, account_id: str) -> Optional[Reconciliation]:
        """Get the account's open reconciliation.

        Only one is expected per account; nothing enforces it, so the one
        with the latest statement date wins.
        """
        require_value(account_id, "account id")
        q = (
            self._query()
            .where("accountKey", EQ, account_id)
            .where("status", EQ, ReconciliationStatus.IN_PROGRESS.value)
            .order_by("statementDate", descending=True)
        )
        return self._first(q)
