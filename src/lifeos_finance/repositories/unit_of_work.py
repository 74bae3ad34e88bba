"""Unit of work grouping the finance repositories."""

from lifeos_finance.database.base import DocumentStore
from lifeos_finance.repositories.accounts import AccountRepository
from lifeos_finance.repositories.budgets import BudgetRepository
from lifeos_finance.repositories.categories import CategoryRepository
from lifeos_finance.repositories.journal_entries import JournalEntryRepository
from lifeos_finance.repositories.merchants import MerchantRepository
from lifeos_finance.repositories.pay_period_config import PayPeriodConfigRepository
from lifeos_finance.repositories.receipts import ReceiptRepository
from lifeos_finance.repositories.reconciliations import ReconciliationRepository
from lifeos_finance.repositories.transactions import TransactionRepository


class FinanceUnitOfWork:
    """One repository per finance entity behind a single object.

    There is no transaction spanning repositories: every save is durable as
    soon as it returns, and commit() does nothing. Leaving a ``with`` block
    never rolls anything back.
    """

    def __init__(
        self,
        accounts: AccountRepository,
        merchants: MerchantRepository,
        categories: CategoryRepository,
        transactions: TransactionRepository,
        journal_entries: JournalEntryRepository,
        receipts: ReceiptRepository,
        budgets: BudgetRepository,
        reconciliations: ReconciliationRepository,
        pay_period_config: PayPeriodConfigRepository,
    ):
        self.accounts = accounts
        self.merchants = merchants
        self.categories = categories
        self.transactions = transactions
        self.journal_entries = journal_entries
        self.receipts = receipts
        self.budgets = budgets
        self.reconciliations = reconciliations
        self.pay_period_config = pay_period_config

    @classmethod
    def from_store(cls, store: DocumentStore) -> "FinanceUnitOfWork":
        """Build every repository on one shared store."""
        return cls(
            accounts=AccountRepository(store),
            merchants=MerchantRepository(store),
            categories=CategoryRepository(store),
            transactions=TransactionRepository(store),
            journal_entries=JournalEntryRepository(store),
            receipts=ReceiptRepository(store),
            budgets=BudgetRepository(store),
            reconciliations=ReconciliationRepository(store),
            pay_period_config=PayPeriodConfigRepository(store),
        )

    def commit(self) -> None:
        """No-op; each repository call is already committed."""
        pass

    def __enter__(self) -> "FinanceUnitOfWork":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        return None
