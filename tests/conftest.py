"""Shared pytest fixtures for lifeos_finance tests."""

import os
import tempfile
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

import pytest

from lifeos_finance.database.factories import create_sqlite_store
from lifeos_finance.domain.entities import (
    Account,
    Budget,
    Category,
    JournalEntry,
    Merchant,
    Receipt,
    Reconciliation,
    Transaction,
)
from lifeos_finance.domain.periods import month_period
from lifeos_finance.domain.types import (
    USD,
    AccountType,
    CategoryType,
    ReconciliationStatus,
    TransactionStatus,
)
from lifeos_finance.repositories import FinanceUnitOfWork

CREATED = datetime(2025, 1, 3, 9, 30, tzinfo=UTC)


@pytest.fixture
def temp_store():
    """Create a temporary SQLite document store for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    store = create_sqlite_store(database_path=db_path)
    # Store the path for tests that need it
    store.database_path = db_path
    store.connect()
    store.initialize_schema()

    yield store

    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def uow(temp_store):
    """Create a unit of work over the temporary store."""
    return FinanceUnitOfWork.from_store(temp_store)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def make_account():
    """Build Account entities with sensible defaults."""

    def build(account_id="acc1", **overrides):
        fields = dict(
            id=account_id,
            name="Everyday Checking",
            account_type=AccountType.CHECKING,
            currency=USD,
            opening_balance=Decimal("100.00"),
            current_balance=Decimal("100.00"),
            created_at=CREATED,
            updated_at=CREATED,
            institution="First Bank",
            account_number="1234",
        )
        fields.update(overrides)
        return Account(**fields)

    return build


@pytest.fixture
def make_transaction():
    """Build Transaction entities with sensible defaults."""

    def build(transaction_id="txn1", **overrides):
        fields = dict(
            id=transaction_id,
            account_id="acc1",
            amount=Decimal("-42.17"),
            description="Groceries",
            posted_at=datetime(2025, 1, 10, 15, 0, tzinfo=UTC),
            status=TransactionStatus.POSTED,
            created_at=CREATED,
            updated_at=CREATED,
            category_id="cat-food",
            tags=("food", "weekly", "food"),
        )
        fields.update(overrides)
        return Transaction(**fields)

    return build


@pytest.fixture
def make_category():
    """Build Category entities with sensible defaults."""

    def build(category_id="cat-food", **overrides):
        fields = dict(
            id=category_id,
            name="Food",
            category_type=CategoryType.EXPENSE,
            created_at=CREATED,
            updated_at=CREATED,
        )
        fields.update(overrides)
        return Category(**fields)

    return build


@pytest.fixture
def make_merchant():
    """Build Merchant entities with sensible defaults."""

    def build(merchant_id="m1", **overrides):
        fields = dict(
            id=merchant_id,
            name="Corner Market",
            created_at=CREATED,
            updated_at=CREATED,
            default_category_id="cat-food",
            city="Springfield",
        )
        fields.update(overrides)
        return Merchant(**fields)

    return build


@pytest.fixture
def make_budget():
    """Build Budget entities with sensible defaults."""

    def build(budget_id="b1", **overrides):
        fields = dict(
            id=budget_id,
            period=month_period(2025, 1),
            category_id="cat-food",
            budgeted_amount=Decimal("400.00"),
            spent_amount=Decimal("120.50"),
            rollover_amount=Decimal("0.00"),
            created_at=CREATED,
            updated_at=CREATED,
        )
        fields.update(overrides)
        return Budget(**fields)

    return build


@pytest.fixture
def make_journal_entry():
    """Build JournalEntry entities with sensible defaults."""

    def build(entry_id="je1", **overrides):
        fields = dict(
            id=entry_id,
            transaction_id="txn1",
            account_id="acc1",
            debit=Decimal("42.17"),
            credit=Decimal("0.00"),
            entry_date=datetime(2025, 1, 10, tzinfo=UTC),
            created_at=CREATED,
        )
        fields.update(overrides)
        return JournalEntry(**fields)

    return build


@pytest.fixture
def make_receipt():
    """Build Receipt entities with sensible defaults."""

    def build(receipt_id="r1", **overrides):
        fields = dict(
            id=receipt_id,
            file_name="receipt.jpg",
            content_type="image/jpeg",
            file_size=20480,
            storage_key="receipts/2025/01/receipt.jpg",
            uploaded_at=CREATED,
            created_at=CREATED,
            updated_at=CREATED,
            transaction_id="txn1",
        )
        fields.update(overrides)
        return Receipt(**fields)

    return build


@pytest.fixture
def make_reconciliation():
    """Build Reconciliation entities with sensible defaults."""

    def build(reconciliation_id="rec1", **overrides):
        fields = dict(
            id=reconciliation_id,
            account_id="acc1",
            statement_date=datetime(2025, 1, 31, tzinfo=UTC),
            statement_balance=Decimal("1000.00"),
            cleared_balance=Decimal("990.00"),
            difference=Decimal("10.00"),
            status=ReconciliationStatus.IN_PROGRESS,
            created_at=CREATED,
            updated_at=CREATED,
            matched_transaction_ids=("txn2", "txn1"),
        )
        fields.update(overrides)
        return Reconciliation(**fields)

    return build


@pytest.fixture
def later():
    """Return a timestamp helper counting minutes after the fixture creation time."""

    def at(minutes: int) -> datetime:
        return CREATED + timedelta(minutes=minutes)

    return at


@pytest.fixture
def anchor_day():
    """A known pay date used as pay period anchor."""
    return date(2025, 1, 3)
