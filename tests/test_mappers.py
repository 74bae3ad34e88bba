"""Tests for domain/document mappers."""

from datetime import UTC, date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from lifeos_finance.database.mappers import (
    QueryResult,
    SkippedDocument,
    account_from_document,
    account_to_document,
    budget_from_document,
    budget_to_document,
    category_from_document,
    category_to_document,
    format_timestamp,
    journal_entry_from_document,
    journal_entry_to_document,
    map_documents,
    merchant_from_document,
    merchant_to_document,
    parse_timestamp,
    pay_period_config_from_document,
    pay_period_config_to_document,
    receipt_from_document,
    receipt_to_document,
    reconciliation_from_document,
    reconciliation_to_document,
    to_domain,
    transaction_from_document,
    transaction_to_document,
)
from lifeos_finance.domain.entities import PayPeriodConfig
from lifeos_finance.domain.errors import InvalidDocumentError
from lifeos_finance.domain.periods import create_period
from lifeos_finance.domain.types import (
    AccountType,
    BudgetPeriodType,
    Currency,
    ReconciliationStatus,
    TransactionStatus,
)


class TestRoundTrip:
    """Every entity survives to_document followed by from_document."""

    def test_account(self, make_account):
        account = make_account(currency=Currency("eur"), is_active=False)
        assert account_from_document(account_to_document(account)) == account

    def test_transaction(self, make_transaction):
        transaction = make_transaction(
            merchant_id="m1",
            memo="weekly shop",
            authorized_at=datetime(2025, 1, 9, 8, 0, tzinfo=UTC),
            external_id="BANK-991",
            check_number="1044",
            receipt_id="r1",
            reconciliation_id="rec1",
        )
        assert transaction_from_document(transaction_to_document(transaction)) == transaction

    def test_transaction_tags_keep_order_and_duplicates(self, make_transaction):
        transaction = make_transaction(tags=("b", "a", "b"))
        document = transaction_to_document(transaction)

        assert document["tags"] == ["b", "a", "b"]
        assert transaction_from_document(document).tags == ("b", "a", "b")

    def test_blank_tags_are_kept(self, make_transaction):
        transaction = make_transaction(tags=("a", "", "a", " "))
        assert transaction_from_document(transaction_to_document(transaction)) == transaction

    def test_blank_matched_transaction_ids_are_kept(self, make_reconciliation):
        reconciliation = make_reconciliation(matched_transaction_ids=("txn2", "", "txn1"))
        document = reconciliation_to_document(reconciliation)

        assert document["matchedTransactionKeys"] == ["txn2", "", "txn1"]
        assert reconciliation_from_document(document) == reconciliation

    def test_sub_cent_amount(self, make_account):
        account = make_account(current_balance=Decimal("10.005"))
        assert account_from_document(account_to_document(account)) == account

    def test_naive_timestamps(self, make_account, make_transaction):
        account = make_account(created_at=datetime(2025, 1, 1, 12), updated_at=datetime(2025, 1, 1, 12))
        transaction = make_transaction(authorized_at=datetime(2025, 1, 9, 8, 0, 0, 123456))

        assert account_from_document(account_to_document(account)) == account
        assert transaction_from_document(transaction_to_document(transaction)) == transaction

    def test_category(self, make_category):
        category = make_category(parent_id="cat-root", icon="cart", color="#00ff00")
        assert category_from_document(category_to_document(category)) == category

    def test_merchant(self, make_merchant):
        merchant = make_merchant(
            address="1 Main St",
            state="IL",
            postal_code="62701",
            phone="555-0100",
            website="https://corner.example",
            notes="Cash only",
        )
        assert merchant_from_document(merchant_to_document(merchant)) == merchant

    def test_budget(self, make_budget):
        budget = make_budget(notes="holidays", rollover_amount=Decimal("15.25"))
        assert budget_from_document(budget_to_document(budget)) == budget

    def test_budget_with_pay_period(self, make_budget):
        period = create_period(BudgetPeriodType.PAY_PERIOD, date(2025, 1, 3), date(2025, 1, 16))
        budget = make_budget(period=period)
        document = budget_to_document(budget)

        assert document["periodKey"] == "pp-2025-01-03"
        assert document["year"] == 2025
        assert document["month"] == 1
        assert budget_from_document(document) == budget

    def test_journal_entry(self, make_journal_entry):
        entry = make_journal_entry(memo="groceries leg")
        assert journal_entry_from_document(journal_entry_to_document(entry)) == entry

    def test_receipt(self, make_receipt):
        receipt = make_receipt(
            merchant_id="m1",
            receipt_date=datetime(2025, 1, 10, tzinfo=UTC),
            total_amount=Decimal("42.17"),
            tax_amount=Decimal("3.12"),
            notes="scanned",
            ocr_text="CORNER MARKET TOTAL 42.17",
        )
        assert receipt_from_document(receipt_to_document(receipt)) == receipt

    def test_reconciliation(self, make_reconciliation):
        reconciliation = make_reconciliation(
            status=ReconciliationStatus.COMPLETED,
            notes="done",
            completed_at=datetime(2025, 2, 1, tzinfo=UTC),
        )
        document = reconciliation_to_document(reconciliation)

        assert document["matchedTransactionKeys"] == ["txn2", "txn1"]
        assert reconciliation_from_document(document) == reconciliation

    def test_pay_period_config(self):
        config = PayPeriodConfig(anchor_date=date(2025, 1, 3), period_length_days=7)
        document = pay_period_config_to_document(
            config, "default", datetime(2025, 1, 1, tzinfo=UTC), datetime(2025, 1, 2, tzinfo=UTC)
        )

        assert document["_key"] == "default"
        assert document["anchorDate"] == "2025-01-03"
        assert pay_period_config_from_document(document) == config


class TestDocumentLayout:
    """Tests for field names and value formats of stored documents."""

    def test_account_document_fields(self, make_account):
        document = account_to_document(make_account(account_type=AccountType.CREDIT_CARD))

        assert document["_key"] == "acc1"
        assert document["type"] == "CreditCard"
        assert document["currency"] == "USD"
        assert document["currentBalance"] == 100.0
        assert document["isActive"] is True
        assert document["createdAt"] == "2025-01-03T09:30:00.000000Z"

    def test_transaction_references_use_key_fields(self, make_transaction):
        document = transaction_to_document(make_transaction(merchant_id="m1"))

        assert document["accountKey"] == "acc1"
        assert document["merchantKey"] == "m1"
        assert document["categoryKey"] == "cat-food"
        assert document["status"] == "Posted"

    def test_money_is_rounded_to_cents(self, make_account):
        document = account_to_document(make_account(current_balance=Decimal("10.005")))
        assert document["currentBalance"] == 10.01

    def test_large_amounts_keep_cents(self, make_account):
        account = make_account(current_balance=Decimal("98765432109.87"))
        document = account_to_document(account)

        assert document["currentBalance"] == 98765432109.87
        assert account_from_document(document).current_balance == Decimal("98765432109.87")

    def test_naive_timestamp_is_treated_as_utc(self):
        assert format_timestamp(datetime(2025, 1, 3, 12, 0)) == "2025-01-03T12:00:00.000000Z"

    def test_offset_timestamp_is_converted_to_utc(self):
        eastern = timezone(timedelta(hours=-5))
        value = datetime(2025, 1, 3, 7, 0, tzinfo=eastern)
        assert format_timestamp(value) == "2025-01-03T12:00:00.000000Z"

    def test_parse_timestamp_accepts_other_iso_forms(self):
        expected = datetime(2025, 1, 3, 12, 0, tzinfo=UTC)
        assert parse_timestamp("2025-01-03T12:00:00Z") == expected
        assert parse_timestamp("2025-01-03T07:00:00-05:00") == expected
        assert parse_timestamp("2025-01-03T12:00:00") == expected

    def test_timestamp_strings_sort_chronologically(self):
        early = format_timestamp(datetime(2025, 1, 3, 9, 0, 0, tzinfo=UTC))
        late = format_timestamp(datetime(2025, 1, 3, 9, 0, 0, 500, tzinfo=UTC))
        assert early < late


class TestOptionalFields:
    """Empty optional strings read back as absent."""

    def test_empty_strings_become_none(self, make_merchant):
        merchant = make_merchant(address="", notes="   ", city=None)
        restored = merchant_from_document(merchant_to_document(merchant))

        assert restored.address is None
        assert restored.notes is None
        assert restored.city is None

    def test_missing_optional_fields_default(self):
        document = {
            "_key": "acc9",
            "name": "Wallet",
            "type": "Cash",
            "createdAt": "2025-01-03T09:30:00Z",
            "updatedAt": "2025-01-03T09:30:00Z",
        }
        account = account_from_document(document)

        assert account.currency.code == "USD"
        assert account.current_balance == Decimal("0.00")
        assert account.is_active is True
        assert account.institution is None

    def test_transaction_status_defaults_to_posted(self, make_transaction):
        document = transaction_to_document(make_transaction())
        del document["status"]
        assert transaction_from_document(document).status == TransactionStatus.POSTED


class TestInvalidDocuments:
    """Documents that cannot become entities."""

    def test_unknown_enum_value(self, make_account):
        document = account_to_document(make_account())
        document["type"] = "Piggybank"

        with pytest.raises(InvalidDocumentError) as exc_info:
            account_from_document(document)
        assert exc_info.value.key == "acc1"
        assert "Piggybank" in exc_info.value.reason

    def test_enum_aliases_are_accepted(self, make_account):
        document = account_to_document(make_account())
        document["type"] = "credit_card"
        assert account_from_document(document).account_type == AccountType.CREDIT_CARD

    def test_invalid_currency(self, make_account):
        document = account_to_document(make_account())
        document["currency"] = "DOLLARS"
        with pytest.raises(InvalidDocumentError):
            account_from_document(document)

    def test_missing_required_field(self, make_transaction):
        document = transaction_to_document(make_transaction())
        del document["accountKey"]
        with pytest.raises(InvalidDocumentError, match="accountKey"):
            transaction_from_document(document)

    @pytest.mark.parametrize("length", [0, -7, 32])
    def test_pay_period_length_out_of_range(self, length):
        document = {"_key": "default", "anchorDate": "2025-01-03", "periodLengthDays": length}
        with pytest.raises(InvalidDocumentError, match="periodLengthDays"):
            pay_period_config_from_document(document)

    def test_unparseable_timestamp(self, make_category):
        document = category_to_document(make_category())
        document["createdAt"] = "last tuesday"
        with pytest.raises(InvalidDocumentError, match="createdAt"):
            category_from_document(document)

    def test_non_numeric_money(self, make_budget):
        document = budget_to_document(make_budget())
        document["spentAmount"] = "lots"
        with pytest.raises(InvalidDocumentError, match="spentAmount"):
            budget_from_document(document)

    def test_missing_key(self, make_merchant):
        document = merchant_to_document(make_merchant())
        del document["_key"]
        with pytest.raises(InvalidDocumentError) as exc_info:
            merchant_from_document(document)
        assert exc_info.value.key is None


class TestLegacyBudgets:
    """Budget documents written before period types existed."""

    def test_year_month_fallback(self):
        document = {
            "_key": "b-old",
            "year": 2024,
            "month": 2,
            "categoryKey": "cat-food",
            "budgetedAmount": 300,
            "spentAmount": 0,
            "rolloverAmount": 0,
            "createdAt": "2024-02-01T00:00:00Z",
            "updatedAt": "2024-02-01T00:00:00Z",
        }
        budget = budget_from_document(document)

        assert budget.period.period_type == BudgetPeriodType.MONTHLY
        assert budget.period.start_date == date(2024, 2, 1)
        assert budget.period.end_date == date(2024, 2, 29)
        assert budget.period.period_key == "2024-02"
        assert budget.budgeted_amount == Decimal("300.00")

    def test_invalid_month_is_rejected(self):
        document = {
            "_key": "b-bad",
            "year": 2024,
            "month": 13,
            "categoryKey": "cat-food",
            "createdAt": "2024-02-01T00:00:00Z",
            "updatedAt": "2024-02-01T00:00:00Z",
        }
        with pytest.raises(InvalidDocumentError):
            budget_from_document(document)

    def test_period_type_aliases(self, make_budget):
        document = budget_to_document(make_budget())
        document["periodType"] = "semi-monthly"
        assert budget_from_document(document).period.period_type == BudgetPeriodType.SEMI_MONTHLY


class TestMapHelpers:
    """Tests for to_domain and map_documents."""

    def test_to_domain_none_document(self):
        assert to_domain(account_from_document, None) is None

    def test_to_domain_invalid_document_is_absent(self, make_account):
        document = account_to_document(make_account())
        document["type"] = "Nope"
        assert to_domain(account_from_document, document) is None

    def test_to_domain_reports_invalid_document(self, make_account):
        document = account_to_document(make_account())
        document["type"] = "Nope"
        errors = []

        assert to_domain(account_from_document, document, errors.append) is None
        assert len(errors) == 1
        assert errors[0].key == "acc1"

    def test_map_documents_skips_invalid(self, make_account):
        good = account_to_document(make_account("a1"))
        bad = account_to_document(make_account("a2"))
        bad["currency"] = "??"
        other = account_to_document(make_account("a3"))

        result = map_documents(account_from_document, [good, bad, other])

        assert isinstance(result, QueryResult)
        assert [account.id for account in result] == ["a1", "a3"]
        assert len(result.skipped) == 1
        assert isinstance(result.skipped[0], SkippedDocument)
        assert result.skipped[0].key == "a2"
