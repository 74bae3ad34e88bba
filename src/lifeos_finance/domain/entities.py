"""Domain model entities for the finance ledger.

These are pure data classes representing business concepts, independent of
the document layout used for persistence. References to other entities are
plain identifiers; nothing at this level checks that the referenced entity
exists.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

from lifeos_finance.domain.types import (
    AccountId,
    AccountType,
    BudgetId,
    BudgetPeriodType,
    CategoryId,
    CategoryType,
    Currency,
    JournalEntryId,
    MerchantId,
    ReceiptId,
    ReconciliationId,
    ReconciliationStatus,
    TransactionId,
    TransactionStatus,
    to_money,
)


def _utc(value: Optional[datetime]) -> Optional[datetime]:
    """Return value in UTC; naive datetimes are taken to be UTC already."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _normalize(entity, money=(), optional_money=(), timestamps=(), sequences=()):
    """Bring fields to the form storage gives them, so a stored entity reads back equal."""
    for name in money:
        object.__setattr__(entity, name, to_money(getattr(entity, name)))
    for name in optional_money:
        value = getattr(entity, name)
        if value is not None:
            object.__setattr__(entity, name, to_money(value))
    for name in timestamps:
        object.__setattr__(entity, name, _utc(getattr(entity, name)))
    for name in sequences:
        object.__setattr__(entity, name, tuple(getattr(entity, name)))


@dataclass(frozen=True)
class Account:
    """Financial account aggregate root."""

    id: AccountId
    name: str
    account_type: AccountType
    currency: Currency
    opening_balance: Decimal
    current_balance: Decimal
    created_at: datetime
    updated_at: datetime
    institution: Optional[str] = None
    account_number: Optional[str] = None  # last 4 digits only
    is_active: bool = True

    def __post_init__(self):
        _normalize(
            self,
            money=("opening_balance", "current_balance"),
            timestamps=("created_at", "updated_at"),
        )


@dataclass(frozen=True)
class Transaction:
    """Financial transaction aggregate root.

    Positive amounts are deposits, negative amounts are withdrawals.
    """

    id: TransactionId
    account_id: AccountId
    amount: Decimal
    description: str
    posted_at: datetime
    status: TransactionStatus
    created_at: datetime
    updated_at: datetime
    merchant_id: Optional[MerchantId] = None
    category_id: Optional[CategoryId] = None
    memo: Optional[str] = None
    authorized_at: Optional[datetime] = None
    external_id: Optional[str] = None  # bank import de-duplication
    check_number: Optional[str] = None
    tags: tuple[str, ...] = ()
    receipt_id: Optional[ReceiptId] = None
    reconciliation_id: Optional[ReconciliationId] = None

    def __post_init__(self):
        _normalize(
            self,
            money=("amount",),
            timestamps=("posted_at", "authorized_at", "created_at", "updated_at"),
            sequences=("tags",),
        )


@dataclass(frozen=True)
class Category:
    """Category for transaction classification."""

    id: CategoryId
    name: str
    category_type: CategoryType
    created_at: datetime
    updated_at: datetime
    parent_id: Optional[CategoryId] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    is_active: bool = True

    def __post_init__(self):
        _normalize(self, timestamps=("created_at", "updated_at"))


@dataclass(frozen=True)
class Merchant:
    """Merchant entity."""

    id: MerchantId
    name: str
    created_at: datetime
    updated_at: datetime
    default_category_id: Optional[CategoryId] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    notes: Optional[str] = None

    def __post_init__(self):
        _normalize(self, timestamps=("created_at", "updated_at"))


@dataclass(frozen=True)
class BudgetPeriod:
    """A budget window; period_key identifies the window uniquely."""

    period_type: BudgetPeriodType
    start_date: date
    end_date: date
    period_key: str


@dataclass(frozen=True)
class Budget:
    """Budgeted amount for one category in one period."""

    id: BudgetId
    period: BudgetPeriod
    category_id: CategoryId
    budgeted_amount: Decimal
    spent_amount: Decimal
    rollover_amount: Decimal
    created_at: datetime
    updated_at: datetime
    notes: Optional[str] = None

    def __post_init__(self):
        _normalize(
            self,
            money=("budgeted_amount", "spent_amount", "rollover_amount"),
            timestamps=("created_at", "updated_at"),
        )

    @property
    def remaining_amount(self) -> Decimal:
        """Budgeted plus rollover, minus what has been spent."""
        return self.budgeted_amount + self.rollover_amount - self.spent_amount

    @property
    def percent_spent(self) -> Decimal:
        total = self.budgeted_amount + self.rollover_amount
        if total == 0:
            return Decimal(0)
        return self.spent_amount / total * 100

    @property
    def is_over_budget(self) -> bool:
        return self.remaining_amount < 0


@dataclass(frozen=True)
class JournalEntry:
    """One leg of a double-entry journal.

    Balancing debits against credits is the caller's job.
    """

    id: JournalEntryId
    transaction_id: TransactionId
    account_id: AccountId
    debit: Decimal
    credit: Decimal
    entry_date: datetime
    created_at: datetime
    memo: Optional[str] = None

    def __post_init__(self):
        _normalize(
            self,
            money=("debit", "credit"),
            timestamps=("entry_date", "created_at"),
        )

    @property
    def is_debit(self) -> bool:
        return self.debit > 0


@dataclass(frozen=True)
class Receipt:
    """Receipt metadata; the file itself lives in object storage under storage_key."""

    id: ReceiptId
    file_name: str
    content_type: str
    file_size: int
    storage_key: str
    uploaded_at: datetime
    created_at: datetime
    updated_at: datetime
    transaction_id: Optional[TransactionId] = None
    merchant_id: Optional[MerchantId] = None
    receipt_date: Optional[datetime] = None
    total_amount: Optional[Decimal] = None
    tax_amount: Optional[Decimal] = None
    notes: Optional[str] = None
    ocr_text: Optional[str] = None

    def __post_init__(self):
        _normalize(
            self,
            optional_money=("total_amount", "tax_amount"),
            timestamps=("receipt_date", "uploaded_at", "created_at", "updated_at"),
        )


@dataclass(frozen=True)
class Reconciliation:
    """Statement reconciliation for one account."""

    id: ReconciliationId
    account_id: AccountId
    statement_date: datetime
    statement_balance: Decimal
    cleared_balance: Decimal
    difference: Decimal
    status: ReconciliationStatus
    created_at: datetime
    updated_at: datetime
    matched_transaction_ids: tuple[TransactionId, ...] = ()
    notes: Optional[str] = None
    completed_at: Optional[datetime] = None

    def __post_init__(self):
        _normalize(
            self,
            money=("statement_balance", "cleared_balance", "difference"),
            timestamps=("statement_date", "completed_at", "created_at", "updated_at"),
            sequences=("matched_transaction_ids",),
        )

    @property
    def is_balanced(self) -> bool:
        return self.difference == 0


@dataclass(frozen=True)
class PayPeriodConfig:
    """Pay-period anchor (a known pay date) and period length in days."""

    anchor_date: date
    period_length_days: int = 14
