"""Repositories over the finance document collections."""

from lifeos_finance.repositories.accounts import AccountRepository
from lifeos_finance.repositories.budgets import BudgetRepository
from lifeos_finance.repositories.categories import CategoryRepository
from lifeos_finance.repositories.journal_entries import JournalEntryRepository
from lifeos_finance.repositories.merchants import MerchantRepository
from lifeos_finance.repositories.pay_period_config import PayPeriodConfigRepository
from lifeos_finance.repositories.receipts import ReceiptRepository
from lifeos_finance.repositories.reconciliations import ReconciliationRepository
from lifeos_finance.repositories.transactions import TransactionRepository
from lifeos_finance.repositories.unit_of_work import FinanceUnitOfWork

__all__ = [
    "AccountRepository",
    "BudgetRepository",
    "CategoryRepository",
    "JournalEntryRepository",
    "MerchantRepository",
    "PayPeriodConfigRepository",
    "ReceiptRepository",
    "ReconciliationRepository",
    "TransactionRepository",
    "FinanceUnitOfWork",
]
