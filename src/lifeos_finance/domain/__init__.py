"""Domain layer for lifeos_finance."""

from lifeos_finance.domain.entities import (
    Account,
    Budget,
    BudgetPeriod,
    Category,
    JournalEntry,
    Merchant,
    PayPeriodConfig,
    Receipt,
    Reconciliation,
    Transaction,
)
from lifeos_finance.domain.types import (
    AccountType,
    BudgetPeriodType,
    CategoryType,
    Currency,
    ReconciliationStatus,
    TransactionStatus,
    new_id,
    to_money,
)

__all__ = [
    "Account",
    "Budget",
    "BudgetPeriod",
    "Category",
    "JournalEntry",
    "Merchant",
    "PayPeriodConfig",
    "Receipt",
    "Reconciliation",
    "Transaction",
    "AccountType",
    "BudgetPeriodType",
    "CategoryType",
    "Currency",
    "ReconciliationStatus",
    "TransactionStatus",
    "new_id",
    "to_money",
]
