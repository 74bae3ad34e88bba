"""SQLAlchemy model backing the document collections.

Every collection lives in the single ``documents`` table; a document is
addressed by (collection, key) and its fields are kept in the JSON ``body``.
"""

from sqlalchemy import JSON, Column, Integer, String, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base = declarative_base()


class Collections:
    """Names of the finance collections."""

    ACCOUNTS = "financial_accounts"
    TRANSACTIONS = "financial_transactions"
    CATEGORIES = "financial_categories"
    MERCHANTS = "financial_merchants"
    BUDGETS = "financial_budgets"
    JOURNAL_ENTRIES = "financial_journal_entries"
    RECEIPTS = "financial_receipts"
    RECONCILIATIONS = "financial_reconciliations"
    PAY_PERIOD_CONFIG = "pay_period_config"


class Document(Base):
    """One stored document."""

    __tablename__ = "documents"

    collection = Column(String(64), primary_key=True)
    key = Column(String(255), primary_key=True)
    revision = Column(Integer, nullable=False, default=1)
    body = Column(JSON, nullable=False)


def create_database_engine(database_url: str) -> Engine:
    """Create the engine and make sure the schema exists."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Writers wait for the file lock instead of failing straight away
        connect_args["timeout"] = 30
    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    Base.metadata.create_all(engine)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory bound to engine."""
    return sessionmaker(bind=engine)
