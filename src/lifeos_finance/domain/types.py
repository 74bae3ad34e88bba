"""Value objects, identifiers and enumerations for the finance domain."""

import uuid
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import NewType, Union

from lifeos_finance.domain.errors import ValidationError, invalid_enum_value

AccountId = NewType("AccountId", str)
TransactionId = NewType("TransactionId", str)
CategoryId = NewType("CategoryId", str)
MerchantId = NewType("MerchantId", str)
BudgetId = NewType("BudgetId", str)
JournalEntryId = NewType("JournalEntryId", str)
ReceiptId = NewType("ReceiptId", str)
ReconciliationId = NewType("ReconciliationId", str)

MONEY_PLACES = 2
_MONEY_QUANTUM = Decimal(1).scaleb(-MONEY_PLACES)


def new_id() -> str:
    """Return a new 12 character identifier."""
    return uuid.uuid4().hex[:12]


def to_money(value: Union[Decimal, int, float, str]) -> Decimal:
    """Convert a number to a monetary Decimal with two decimal places.

    Floats go through their shortest string form so 74.5 becomes 74.50
    rather than a binary approximation.

    Raises:
        ValidationError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise ValidationError(f"Not a monetary amount: {value!r}")
    if isinstance(value, float):
        value = repr(value)
    try:
        amount = Decimal(value)
    except (ArithmeticError, ValueError, TypeError) as e:
        raise ValidationError(f"Not a monetary amount: {value!r}") from e
    if not amount.is_finite():
        raise ValidationError(f"Not a monetary amount: {value!r}")
    return amount.quantize(_MONEY_QUANTUM, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Currency:
    """ISO 4217 currency code."""

    code: str

    def __post_init__(self):
        code = (self.code or "").strip()
        if not code:
            raise ValidationError("Currency code cannot be empty")
        if len(code) != 3 or not code.isalpha():
            raise ValidationError("Currency code must be 3 letters (ISO 4217)")
        object.__setattr__(self, "code", code.upper())

    def __str__(self) -> str:
        return self.code


USD = Currency("USD")


class _LookupEnum(str, Enum):
    """String enum parsed case-insensitively, with optional aliases."""

    @classmethod
    def from_string(cls, value: str):
        """Parse a stored or user supplied value.

        Raises:
            ValidationError: If the value is not a known member
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValidationError(invalid_enum_value(cls._kind(), value))
        wanted = value.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        alias = cls._alias_table().get(wanted)
        if alias is not None:
            return cls(alias)
        raise ValidationError(invalid_enum_value(cls._kind(), value))

    @classmethod
    def _alias_table(cls) -> dict[str, str]:
        return {}

    @classmethod
    def _kind(cls) -> str:
        return cls.__name__

    def __str__(self) -> str:
        return self.value


class AccountType(_LookupEnum):
    """Account types following standard accounting."""

    CHECKING = "Checking"
    SAVINGS = "Savings"
    CREDIT_CARD = "CreditCard"
    CASH = "Cash"
    LOAN = "Loan"
    INVESTMENT = "Investment"
    ASSET = "Asset"
    LIABILITY = "Liability"

    @classmethod
    def _alias_table(cls) -> dict[str, str]:
        return {"credit_card": "CreditCard"}

    @classmethod
    def _kind(cls) -> str:
        return "account type"

    @property
    def is_debt(self) -> bool:
        """Credit cards, loans and liabilities carry inverted balances."""
        return self in (AccountType.CREDIT_CARD, AccountType.LOAN, AccountType.LIABILITY)


class TransactionStatus(_LookupEnum):
    """Transaction lifecycle status."""

    PENDING = "Pending"
    POSTED = "Posted"
    CLEARED = "Cleared"
    RECONCILED = "Reconciled"
    VOID = "Void"

    @classmethod
    def _kind(cls) -> str:
        return "transaction status"

    def can_transition_to(self, next_status: "TransactionStatus") -> bool:
        """Return True if moving to next_status is a legal lifecycle step."""
        return next_status in _TRANSACTION_TRANSITIONS.get(self, ())


_TRANSACTION_TRANSITIONS = {
    TransactionStatus.PENDING: (TransactionStatus.POSTED, TransactionStatus.VOID),
    TransactionStatus.POSTED: (TransactionStatus.CLEARED, TransactionStatus.VOID),
    TransactionStatus.CLEARED: (TransactionStatus.RECONCILED, TransactionStatus.VOID),
}


class CategoryType(_LookupEnum):
    """Income/expense classification of a category."""

    INCOME = "Income"
    EXPENSE = "Expense"
    TRANSFER = "Transfer"

    @classmethod
    def _kind(cls) -> str:
        return "category type"


class BudgetPeriodType(_LookupEnum):
    """Length and alignment of a budget period."""

    MONTHLY = "Monthly"
    WEEKLY = "Weekly"
    BI_WEEKLY = "BiWeekly"
    SEMI_MONTHLY = "SemiMonthly"
    CUSTOM = "Custom"
    PAY_PERIOD = "PayPeriod"

    @classmethod
    def _alias_table(cls) -> dict[str, str]:
        return {
            "bi-weekly": "BiWeekly",
            "semi-monthly": "SemiMonthly",
            "pay-period": "PayPeriod",
        }

    @classmethod
    def _kind(cls) -> str:
        return "budget period type"


class ReconciliationStatus(_LookupEnum):
    """Status of a statement reconciliation."""

    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    ABANDONED = "Abandoned"

    @classmethod
    def _alias_table(cls) -> dict[str, str]:
        return {"in_progress": "InProgress"}

    @classmethod
    def _kind(cls) -> str:
        return "reconciliation status"
