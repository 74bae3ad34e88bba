"""Transaction repository."""

from datetime import date, datetime, time, timezone
from typing import Optional, Union

from lifeos_finance.database.mappers import (
    QueryResult,
    format_timestamp,
    transaction_from_document,
    transaction_to_document,
)
from lifeos_finance.database.models import Collections
from lifeos_finance.database.query import EQ, GTE, LTE, DocumentQuery
from lifeos_finance.domain.entities import Transaction
from lifeos_finance.domain.errors import ValidationError, require_value
from lifeos_finance.domain.types import TransactionStatus
from lifeos_finance.repositories.base import DocumentRepository

DEFAULT_PAGE_SIZE = 100

DateBound = Union[date, datetime]


def _lower_bound(value: DateBound) -> str:
    """Timestamp string for the start of a range; a date means its first instant."""
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min, tzinfo=timezone.utc)
    return format_timestamp(value)


def _upper_bound(value: DateBound) -> str:
    """Timestamp string for the end of a range; a date means its last instant."""
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.max, tzinfo=timezone.utc)
    return format_timestamp(value)


class TransactionRepository(DocumentRepository[Transaction]):
    """Repository for transactions.

    Every list is sorted by postedAt, newest first. Date bounds are
    inclusive; a plain date covers the whole UTC day.
    """

    collection = Collections.TRANSACTIONS
    _to_document = staticmethod(transaction_to_document)
    _from_document = staticmethod(transaction_from_document)

    def _newest_first(self, query: DocumentQuery, limit: Optional[int], offset: int) -> QueryResult:
        return self._list(query.order_by("postedAt", descending=True).paginate(limit, offset))

    def query(
        self,
        account_id: Optional[str] = None,
        category_id: Optional[str] = None,
        start: Optional[DateBound] = None,
        end: Optional[DateBound] = None,
        status: Optional[TransactionStatus] = None,
        limit: Optional[int] = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> QueryResult:
        """List transactions matching all the given filters.

        Args:
            account_id: Only transactions of this account
            category_id: Only transactions in this category
            start: Earliest postedAt (inclusive)
            end: Latest postedAt (inclusive)
            status: Only transactions with this status
            limit: Page size, None for no limit
            offset: Number of transactions to skip

        Raises:
            ValidationError: If end is before start or paging is negative
        """
        q = self._query()
        if account_id is not None:
            q = q.where("accountKey", EQ, require_value(account_id, "account id"))
        if category_id is not None:
            q = q.where("categoryKey", EQ, require_value(category_id, "category id"))
        if start is not None and end is not None and _upper_bound(end) < _lower_bound(start):
            raise ValidationError("End date must not be before start date")
        if start is not None:
            q = q.where("postedAt", GTE, _lower_bound(start))
        if end is not None:
            q = q.where("postedAt", LTE, _upper_bound(end))
        if status is not None:
            q = q.where("status", EQ, TransactionStatus.from_string(status).value)
        return self._newest_first(q, limit, offset)

    def get_by_account(
        self, account_id: str, limit: Optional[int] = DEFAULT_PAGE_SIZE, offset: int = 0
    ) -> QueryResult:
        """List an account's transactions, newest first."""
        require_value(account_id, "account id")
        return self.query(account_id=account_id, limit=limit, offset=offset)

    def get_by_category(
        self, category_id: str, limit: Optional[int] = DEFAULT_PAGE_SIZE, offset: int = 0
    ) -> QueryResult:
        """List a category's transactions, newest first."""
        require_value(category_id, "category id")
        return self.query(category_id=category_id, limit=limit, offset=offset)

    def get_by_date_range(
        self,
        start: DateBound,
        end: DateBound,
        limit: Optional[int] = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> QueryResult:
        """List transactions posted between start and end (inclusive)."""
        require_value(start, "start")
        require_value(end, "end")
        return self.query(start=start, end=end, limit=limit, offset=offset)

    def get_by_category_and_date_range(
        self,
        category_id: str,
        start: DateBound,
        end: DateBound,
        limit: Optional[int] = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> QueryResult:
        """List a category's transactions posted between start and end."""
        require_value(category_id, "category id")
        require_value(start, "start")
        require_value(end, "end")
        return self.query(category_id=category_id, start=start, end=end, limit=limit, offset=offset)

    def get_by_external_id(self, account_id: str, external_id: str) -> Optional[Transaction]:
        """Find an imported transaction by its bank-assigned id.

        Returns:
            The newest matching transaction, or None
        """
        require_value(account_id, "account id")
        require_value(external_id, "external id")
        q = self._query().where("accountKey", EQ, account_id).where("externalId", EQ, external_id)
        return self._first(q.order_by("postedAt", descending=True))
