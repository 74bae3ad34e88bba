"""Account repository."""

from datetime import datetime, timezone
from decimal import Decimal

from lifeos_finance.database.mappers import (
    QueryResult,
    account_from_document,
    account_to_document,
    format_timestamp,
)
from lifeos_finance.database.models import Collections
from lifeos_finance.database.query import EQ
from lifeos_finance.domain.entities import Account
from lifeos_finance.domain.errors import require_value
from lifeos_finance.domain.types import to_money
from lifeos_finance.logging_setup import get_logger
from lifeos_finance.repositories.base import DocumentRepository

logger = get_logger(__name__)


class AccountRepository(DocumentRepository[Account]):
    """Repository for financial accounts."""

    collection = Collections.ACCOUNTS
    _to_document = staticmethod(account_to_document)
    _from_document = staticmethod(account_from_document)

    def get_all(self) -> QueryResult:
        """List all accounts sorted by name."""
        return self._list(self._query().order_by("name"))

    def get_active(self) -> QueryResult:
        """List active accounts sorted by name."""
        return self._list(self._query().where("isActive", EQ, True).order_by("name"))

    def update_balance(self, account_id: str, delta: Decimal) -> bool:
        """Add delta to the account's current balance.

        The addition happens inside the store in one atomic step, so
        concurrent updates of the same account are never lost. updatedAt is
        set to the time of the call.

        Args:
            account_id: Account to update
            delta: Signed amount to add (negative for withdrawals)

        Returns:
            True if the account exists and was updated, False otherwise

        Raises:
            ValidationError: If account_id or delta is missing, or delta is
                not a monetary amount
        """
        require_value(account_id, "account id")
        amount = to_money(require_value(delta, "delta"))
        updated = self.store.increment(
            self.collection,
            account_id,
            "currentBalance",
            amount,
            touched={"updatedAt": format_timestamp(datetime.now(timezone.utc))},
        )
        if updated:
            logger.debug("Balance of account %s changed by %s", account_id, amount)
        return updated
