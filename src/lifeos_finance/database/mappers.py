"""Mapper functions to convert between domain entities and stored documents.

This layer isolates the document layout from the domain model. Documents use
camelCase field names and store references as ``...Key`` fields. Reading is
strict: a document that cannot become a valid entity raises
InvalidDocumentError, and the list helpers turn that into a skipped entry
instead of failing the whole read.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Iterable, Optional, TypeVar

from dateutil import parser as dateutil_parser

from lifeos_finance.database.base import KEY_FIELD
from lifeos_finance.domain import entities as domain
from lifeos_finance.domain.errors import InvalidDocumentError, ValidationError
from lifeos_finance.domain.periods import create_period, make_pay_period_config, month_period
from lifeos_finance.domain.types import (
    AccountType,
    BudgetPeriodType,
    CategoryType,
    Currency,
    ReconciliationStatus,
    TransactionStatus,
    USD,
    to_money,
)

T = TypeVar("T")

_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def format_timestamp(value: datetime) -> str:
    """Format a datetime as a fixed-width UTC string.

    Naive datetimes are taken to be UTC. The fixed width keeps string order
    equal to chronological order.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(_TIMESTAMP_FORMAT)


def parse_timestamp(value: str) -> datetime:
    """Parse any ISO-8601 timestamp into an aware UTC datetime."""
    parsed = dateutil_parser.isoparse(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_date(value: date) -> str:
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def parse_date(value: str) -> date:
    """Parse a calendar date; a full timestamp is cut down to its date."""
    return dateutil_parser.isoparse(value).date()


def money_to_document(amount: Optional[Decimal]) -> Optional[float]:
    """Store money as a JSON number rounded to two places.

    Cents are exact up to about 9e13; larger amounts lose precision in the
    float.
    """
    if amount is None:
        return None
    return float(to_money(amount))


def _optional_timestamp(value: Optional[datetime]) -> Optional[str]:
    return format_timestamp(value) if value is not None else None


class _DocumentReader:
    """Typed field access on one document, raising InvalidDocumentError."""

    def __init__(self, document: dict[str, Any]):
        self.document = document
        key = document.get(KEY_FIELD)
        self.key = key if isinstance(key, str) and key.strip() else None

    def invalid(self, reason: str) -> InvalidDocumentError:
        return InvalidDocumentError(reason, self.key)

    def id(self) -> str:
        if self.key is None:
            raise self.invalid(f"missing {KEY_FIELD}")
        return self.key

    def text(self, field: str) -> str:
        value = self.optional_text(field)
        if value is None:
            raise self.invalid(f"missing {field}")
        return value

    def optional_text(self, field: str) -> Optional[str]:
        value = self.document.get(field)
        if value is None:
            return None
        if not isinstance(value, str):
            raise self.invalid(f"{field} must be a string")
        if not value.strip():
            return None
        return value

    def money(self, field: str, default: Optional[Decimal] = None) -> Decimal:
        value = self.optional_money(field)
        if value is None:
            if default is None:
                raise self.invalid(f"missing {field}")
            return default
        return value

    def optional_money(self, field: str) -> Optional[Decimal]:
        value = self.document.get(field)
        if value is None:
            return None
        try:
            return to_money(value)
        except ValidationError as e:
            raise self.invalid(f"{field}: {e}") from e

    def integer(self, field: str, default: Optional[int] = None) -> int:
        value = self.document.get(field)
        if value is None:
            if default is None:
                raise self.invalid(f"missing {field}")
            return default
        if isinstance(value, bool) or not isinstance(value, int):
            raise self.invalid(f"{field} must be an integer")
        return value

    def boolean(self, field: str, default: bool) -> bool:
        value = self.document.get(field)
        if value is None:
            return default
        if not isinstance(value, bool):
            raise self.invalid(f"{field} must be true or false")
        return value

    def timestamp(self, field: str) -> datetime:
        value = self.optional_timestamp(field)
        if value is None:
            raise self.invalid(f"missing {field}")
        return value

    def optional_timestamp(self, field: str) -> Optional[datetime]:
        value = self.optional_text(field)
        if value is None:
            return None
        try:
            return parse_timestamp(value)
        except (ValueError, OverflowError) as e:
            raise self.invalid(f"{field} is not a valid timestamp: {value!r}") from e

    def optional_date(self, field: str) -> Optional[date]:
        value = self.optional_text(field)
        if value is None:
            return None
        try:
            return parse_date(value)
        except (ValueError, OverflowError) as e:
            raise self.invalid(f"{field} is not a valid date: {value!r}") from e

    def calendar_date(self, field: str) -> date:
        value = self.optional_date(field)
        if value is None:
            raise self.invalid(f"missing {field}")
        return value

    def enum(self, field: str, enum_type, default=None):
        value = self.optional_text(field)
        if value is None:
            if default is None:
                raise self.invalid(f"missing {field}")
            return default
        try:
            return enum_type.from_string(value)
        except ValidationError as e:
            raise self.invalid(str(e)) from e

    def currency(self, field: str) -> Currency:
        value = self.optional_text(field)
        if value is None:
            return USD
        try:
            return Currency(value)
        except ValidationError as e:
            raise self.invalid(f"{field}: {e}") from e

    def string_list(self, field: str) -> tuple[str, ...]:
        value = self.document.get(field)
        if value is None:
            return ()
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise self.invalid(f"{field} must be a list of strings")
        return tuple(value)


# Accounts


def account_to_document(account: domain.Account) -> dict[str, Any]:
    """Convert domain Account entity to its document."""
    return {
        KEY_FIELD: account.id,
        "name": account.name,
        "type": account.account_type.value,
        "institution": account.institution,
        "accountNumber": account.account_number,
        "currency": account.currency.code,
        "openingBalance": money_to_document(account.opening_balance),
        "currentBalance": money_to_document(account.current_balance),
        "isActive": account.is_active,
        "createdAt": format_timestamp(account.created_at),
        "updatedAt": format_timestamp(account.updated_at),
    }


def account_from_document(document: dict[str, Any]) -> domain.Account:
    """Convert an account document to domain Account entity."""
    r = _DocumentReader(document)
    return domain.Account(
        id=r.id(),
        name=r.text("name"),
        account_type=r.enum("type", AccountType),
        currency=r.currency("currency"),
        opening_balance=r.money("openingBalance", default=Decimal("0.00")),
        current_balance=r.money("currentBalance", default=Decimal("0.00")),
        created_at=r.timestamp("createdAt"),
        updated_at=r.timestamp("updatedAt"),
        institution=r.optional_text("institution"),
        account_number=r.optional_text("accountNumber"),
        is_active=r.boolean("isActive", default=True),
    )


# Transactions


def transaction_to_document(transaction: domain.Transaction) -> dict[str, Any]:
    """Convert domain Transaction entity to its document."""
    return {
        KEY_FIELD: transaction.id,
        "accountKey": transaction.account_id,
        "merchantKey": transaction.merchant_id,
        "categoryKey": transaction.category_id,
        "amount": money_to_document(transaction.amount),
        "description": transaction.description,
        "memo": transaction.memo,
        "postedAt": format_timestamp(transaction.posted_at),
        "authorizedAt": _optional_timestamp(transaction.authorized_at),
        "status": transaction.status.value,
        "externalId": transaction.external_id,
        "checkNumber": transaction.check_number,
        "tags": list(transaction.tags),
        "receiptKey": transaction.receipt_id,
        "reconciliationKey": transaction.reconciliation_id,
        "createdAt": format_timestamp(transaction.created_at),
        "updatedAt": format_timestamp(transaction.updated_at),
    }


def transaction_from_document(document: dict[str, Any]) -> domain.Transaction:
    """Convert a transaction document to domain Transaction entity."""
    r = _DocumentReader(document)
    return domain.Transaction(
        id=r.id(),
        account_id=r.text("accountKey"),
        amount=r.money("amount"),
        description=r.optional_text("description") or "",
        posted_at=r.timestamp("postedAt"),
        status=r.enum("status", TransactionStatus, default=TransactionStatus.POSTED),
        created_at=r.timestamp("createdAt"),
        updated_at=r.timestamp("updatedAt"),
        merchant_id=r.optional_text("merchantKey"),
        category_id=r.optional_text("categoryKey"),
        memo=r.optional_text("memo"),
        authorized_at=r.optional_timestamp("authorizedAt"),
        external_id=r.optional_text("externalId"),
        check_number=r.optional_text("checkNumber"),
        tags=r.string_list("tags"),
        receipt_id=r.optional_text("receiptKey"),
        reconciliation_id=r.optional_text("reconciliationKey"),
    )


# Categories


def category_to_document(category: domain.Category) -> dict[str, Any]:
    """Convert domain Category entity to its document."""
    return {
        KEY_FIELD: category.id,
        "name": category.name,
        "type": category.category_type.value,
        "parentKey": category.parent_id,
        "icon": category.icon,
        "color": category.color,
        "isActive": category.is_active,
        "createdAt": format_timestamp(category.created_at),
        "updatedAt": format_timestamp(category.updated_at),
    }


def category_from_document(document: dict[str, Any]) -> domain.Category:
    """Convert a category document to domain Category entity."""
    r = _DocumentReader(document)
    return domain.Category(
        id=r.id(),
        name=r.text("name"),
        category_type=r.enum("type", CategoryType),
        created_at=r.timestamp("createdAt"),
        updated_at=r.timestamp("updatedAt"),
        parent_id=r.optional_text("parentKey"),
        icon=r.optional_text("icon"),
        color=r.optional_text("color"),
        is_active=r.boolean("isActive", default=True),
    )


# Merchants


def merchant_to_document(merchant: domain.Merchant) -> dict[str, Any]:
    """Convert domain Merchant entity to its document."""
    return {
        KEY_FIELD: merchant.id,
        "name": merchant.name,
        "defaultCategoryKey": merchant.default_category_id,
        "address": merchant.address,
        "city": merchant.city,
        "state": merchant.state,
        "postalCode": merchant.postal_code,
        "phone": merchant.phone,
        "website": merchant.website,
        "notes": merchant.notes,
        "createdAt": format_timestamp(merchant.created_at),
        "updatedAt": format_timestamp(merchant.updated_at),
    }


def merchant_from_document(document: dict[str, Any]) -> domain.Merchant:
    """Convert a merchant document to domain Merchant entity."""
    r = _DocumentReader(document)
    return domain.Merchant(
        id=r.id(),
        name=r.text("name"),
        created_at=r.timestamp("createdAt"),
        updated_at=r.timestamp("updatedAt"),
        default_category_id=r.optional_text("defaultCategoryKey"),
        address=r.optional_text("address"),
        city=r.optional_text("city"),
        state=r.optional_text("state"),
        postal_code=r.optional_text("postalCode"),
        phone=r.optional_text("phone"),
        website=r.optional_text("website"),
        notes=r.optional_text("notes"),
    )


# Budgets


def budget_to_document(budget: domain.Budget) -> dict[str, Any]:
    """Convert domain Budget entity to its document.

    year and month are kept for readers that predate period types.
    """
    period = budget.period
    return {
        KEY_FIELD: budget.id,
        "year": period.start_date.year,
        "month": period.start_date.month,
        "periodType": period.period_type.value,
        "startDate": format_date(period.start_date),
        "endDate": format_date(period.end_date),
        "periodKey": period.period_key,
        "categoryKey": budget.category_id,
        "budgetedAmount": money_to_document(budget.budgeted_amount),
        "spentAmount": money_to_document(budget.spent_amount),
        "rolloverAmount": money_to_document(budget.rollover_amount),
        "notes": budget.notes,
        "createdAt": format_timestamp(budget.created_at),
        "updatedAt": format_timestamp(budget.updated_at),
    }


def _budget_period(r: _DocumentReader) -> domain.BudgetPeriod:
    start = r.optional_date("startDate")
    end = r.optional_date("endDate")
    key = r.optional_text("periodKey")

    if start is None or end is None or key is None:
        # Documents written before period types only know their month
        year = r.integer("year")
        month = r.integer("month")
        try:
            return month_period(year, month)
        except ValidationError as e:
            raise r.invalid(str(e)) from e

    period_type = r.enum("periodType", BudgetPeriodType, default=BudgetPeriodType.MONTHLY)
    if end < start:
        raise r.invalid("endDate is before startDate")
    period = create_period(period_type, start, end)
    # The stored key wins so custom keys survive a round trip
    return domain.BudgetPeriod(
        period_type=period.period_type,
        start_date=period.start_date,
        end_date=period.end_date,
        period_key=key,
    )


def budget_from_document(document: dict[str, Any]) -> domain.Budget:
    """Convert a budget document to domain Budget entity."""
    r = _DocumentReader(document)
    zero = Decimal("0.00")
    return domain.Budget(
        id=r.id(),
        period=_budget_period(r),
        category_id=r.text("categoryKey"),
        budgeted_amount=r.money("budgetedAmount", default=zero),
        spent_amount=r.money("spentAmount", default=zero),
        rollover_amount=r.money("rolloverAmount", default=zero),
        created_at=r.timestamp("createdAt"),
        updated_at=r.timestamp("updatedAt"),
        notes=r.optional_text("notes"),
    )


# Journal entries


def journal_entry_to_document(entry: domain.JournalEntry) -> dict[str, Any]:
    """Convert domain JournalEntry entity to its document."""
    return {
        KEY_FIELD: entry.id,
        "transactionKey": entry.transaction_id,
        "accountKey": entry.account_id,
        "debit": money_to_document(entry.debit),
        "credit": money_to_document(entry.credit),
        "entryDate": format_timestamp(entry.entry_date),
        "memo": entry.memo,
        "createdAt": format_timestamp(entry.created_at),
    }


def journal_entry_from_document(document: dict[str, Any]) -> domain.JournalEntry:
    """Convert a journal entry document to domain JournalEntry entity."""
    r = _DocumentReader(document)
    zero = Decimal("0.00")
    return domain.JournalEntry(
        id=r.id(),
        transaction_id=r.text("transactionKey"),
        account_id=r.text("accountKey"),
        debit=r.money("debit", default=zero),
        credit=r.money("credit", default=zero),
        entry_date=r.timestamp("entryDate"),
        created_at=r.timestamp("createdAt"),
        memo=r.optional_text("memo"),
    )


# Receipts


def receipt_to_document(receipt: domain.Receipt) -> dict[str, Any]:
    """Convert domain Receipt entity to its document."""
    return {
        KEY_FIELD: receipt.id,
        "transactionKey": receipt.transaction_id,
        "merchantKey": receipt.merchant_id,
        "fileName": receipt.file_name,
        "contentType": receipt.content_type,
        "fileSize": receipt.file_size,
        "storageKey": receipt.storage_key,
        "receiptDate": _optional_timestamp(receipt.receipt_date),
        "totalAmount": money_to_document(receipt.total_amount),
        "taxAmount": money_to_document(receipt.tax_amount),
        "notes": receipt.notes,
        "ocrText": receipt.ocr_text,
        "uploadedAt": format_timestamp(receipt.uploaded_at),
        "createdAt": format_timestamp(receipt.created_at),
        "updatedAt": format_timestamp(receipt.updated_at),
    }


def receipt_from_document(document: dict[str, Any]) -> domain.Receipt:
    """Convert a receipt document to domain Receipt entity."""
    r = _DocumentReader(document)
    file_size = r.integer("fileSize", default=0)
    if file_size < 0:
        raise r.invalid("fileSize cannot be negative")
    return domain.Receipt(
        id=r.id(),
        file_name=r.text("fileName"),
        content_type=r.text("contentType"),
        file_size=file_size,
        storage_key=r.text("storageKey"),
        uploaded_at=r.timestamp("uploadedAt"),
        created_at=r.timestamp("createdAt"),
        updated_at=r.timestamp("updatedAt"),
        transaction_id=r.optional_text("transactionKey"),
        merchant_id=r.optional_text("merchantKey"),
        receipt_date=r.optional_timestamp("receiptDate"),
        total_amount=r.optional_money("totalAmount"),
        tax_amount=r.optional_money("taxAmount"),
        notes=r.optional_text("notes"),
        ocr_text=r.optional_text("ocrText"),
    )


# Reconciliations


def reconciliation_to_document(reconciliation: domain.Reconciliation) -> dict[str, Any]:
    """Convert domain Reconciliation entity to its document."""
    return {
        KEY_FIELD: reconciliation.id,
        "accountKey": reconciliation.account_id,
        "statementDate": format_timestamp(reconciliation.statement_date),
        "statementBalance": money_to_document(reconciliation.statement_balance),
        "clearedBalance": money_to_document(reconciliation.cleared_balance),
        "difference": money_to_document(reconciliation.difference),
        "status": reconciliation.status.value,
        "matchedTransactionKeys": list(reconciliation.matched_transaction_ids),
        "notes": reconciliation.notes,
        "completedAt": _optional_timestamp(reconciliation.completed_at),
        "createdAt": format_timestamp(reconciliation.created_at),
        "updatedAt": format_timestamp(reconciliation.updated_at),
    }


def reconciliation_from_document(document: dict[str, Any]) -> domain.Reconciliation:
    """Convert a reconciliation document to domain Reconciliation entity."""
    r = _DocumentReader(document)
    zero = Decimal("0.00")
    return domain.Reconciliation(
        id=r.id(),
        account_id=r.text("accountKey"),
        statement_date=r.timestamp("statementDate"),
        statement_balance=r.money("statementBalance"),
        cleared_balance=r.money("clearedBalance", default=zero),
        difference=r.money("difference", default=zero),
        status=r.enum("status", ReconciliationStatus, default=ReconciliationStatus.IN_PROGRESS),
        created_at=r.timestamp("createdAt"),
        updated_at=r.timestamp("updatedAt"),
        matched_transaction_ids=r.string_list("matchedTransactionKeys"),
        notes=r.optional_text("notes"),
        completed_at=r.optional_timestamp("completedAt"),
    )


# Pay period configuration


def pay_period_config_to_document(
    config: domain.PayPeriodConfig,
    key: str,
    created_at: datetime,
    updated_at: datetime,
) -> dict[str, Any]:
    """Convert PayPeriodConfig to its document.

    The entity has no identity or timestamps of its own, so the repository
    passes them in.
    """
    return {
        KEY_FIELD: key,
        "anchorDate": format_date(config.anchor_date),
        "periodLengthDays": config.period_length_days,
        "createdAt": format_timestamp(created_at),
        "updatedAt": format_timestamp(updated_at),
    }


def pay_period_config_from_document(document: dict[str, Any]) -> domain.PayPeriodConfig:
    """Convert a pay period document to domain PayPeriodConfig."""
    r = _DocumentReader(document)
    anchor_date = r.calendar_date("anchorDate")
    length = r.integer("periodLengthDays", default=14)
    try:
        return make_pay_period_config(anchor_date, length)
    except ValidationError as e:
        raise r.invalid(f"periodLengthDays: {e}") from e


# Reading many documents


@dataclass(frozen=True)
class SkippedDocument:
    """A stored document that could not be mapped, and why."""

    key: Optional[str]
    reason: str


class QueryResult(list):
    """Entities read by a list operation.

    Behaves as a plain list of entities. Documents that failed to map are
    reported in ``skipped`` rather than silently dropped.
    """

    def __init__(self, entities: Iterable = (), skipped: Iterable[SkippedDocument] = ()):
        super().__init__(entities)
        self.skipped = tuple(skipped)


def to_domain(
    parser: Callable[[dict[str, Any]], T],
    document: Optional[dict[str, Any]],
    on_invalid: Optional[Callable[[InvalidDocumentError], None]] = None,
) -> Optional[T]:
    """Map a single document.

    Returns None when there is no document or it is not a valid entity, so a
    corrupt document reads the same as a missing one. on_invalid, if given,
    is called with the error before returning None.
    """
    if document is None:
        return None
    try:
        return parser(document)
    except InvalidDocumentError as e:
        if on_invalid is not None:
            on_invalid(e)
        return None


def map_documents(
    parser: Callable[[dict[str, Any]], T], documents: Iterable[dict[str, Any]]
) -> QueryResult:
    """Map documents in order, collecting the ones that fail instead of raising."""
    entities = []
    skipped = []
    for document in documents:
        try:
            entities.append(parser(document))
        except InvalidDocumentError as e:
            skipped.append(SkippedDocument(key=e.key, reason=e.reason))
    return QueryResult(entities, skipped)
