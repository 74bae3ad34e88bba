"""Tests for budget period and pay period calculations."""

from datetime import date

import pytest

from lifeos_finance.domain.entities import PayPeriodConfig
from lifeos_finance.domain.errors import ValidationError
from lifeos_finance.domain.periods import (
    create_period,
    make_pay_period_config,
    month_period,
    pay_period_containing,
    pay_period_span,
    period_contains,
    period_key,
)
from lifeos_finance.domain.types import BudgetPeriodType, TransactionStatus


class TestPeriodKeys:
    """Tests for period key generation."""

    @pytest.mark.parametrize(
        "period_type, expected",
        [
            (BudgetPeriodType.MONTHLY, "2025-01"),
            (BudgetPeriodType.WEEKLY, "w-2025-01-03"),
            (BudgetPeriodType.BI_WEEKLY, "bw-2025-01-03"),
            (BudgetPeriodType.SEMI_MONTHLY, "sm-2025-01-03"),
            (BudgetPeriodType.CUSTOM, "c-2025-01-03"),
            (BudgetPeriodType.PAY_PERIOD, "pp-2025-01-03"),
        ],
    )
    def test_key_per_type(self, period_type, expected):
        assert period_key(period_type, date(2025, 1, 3)) == expected

    def test_period_type_aliases(self):
        assert BudgetPeriodType.from_string("bi-weekly") == BudgetPeriodType.BI_WEEKLY
        assert BudgetPeriodType.from_string("PAY-PERIOD") == BudgetPeriodType.PAY_PERIOD


class TestPeriods:
    """Tests for period construction and containment."""

    def test_month_period_handles_leap_years(self):
        period = month_period(2024, 2)
        assert period.start_date == date(2024, 2, 1)
        assert period.end_date == date(2024, 2, 29)
        assert period.period_key == "2024-02"

    def test_invalid_month(self):
        with pytest.raises(ValidationError):
            month_period(2024, 0)

    def test_end_before_start(self):
        with pytest.raises(ValidationError):
            create_period(BudgetPeriodType.CUSTOM, date(2025, 1, 5), date(2025, 1, 4))

    def test_single_day_period(self):
        period = create_period(BudgetPeriodType.CUSTOM, date(2025, 1, 5), date(2025, 1, 5))
        assert period_contains(period, date(2025, 1, 5))

    def test_contains_is_inclusive(self):
        period = month_period(2025, 1)
        assert period_contains(period, date(2025, 1, 1))
        assert period_contains(period, date(2025, 1, 31))
        assert not period_contains(period, date(2025, 2, 1))


class TestPayPeriods:
    """Tests for pay period arithmetic."""

    def test_period_containing_anchor(self, anchor_day):
        config = PayPeriodConfig(anchor_date=anchor_day)
        period = pay_period_containing(config, anchor_day)

        assert period.start_date == date(2025, 1, 3)
        assert period.end_date == date(2025, 1, 16)
        assert period.period_key == "pp-2025-01-03"

    def test_period_after_anchor(self, anchor_day):
        config = PayPeriodConfig(anchor_date=anchor_day)
        period = pay_period_containing(config, date(2025, 1, 17))
        assert period.start_date == date(2025, 1, 17)

    def test_period_before_anchor(self, anchor_day):
        config = PayPeriodConfig(anchor_date=anchor_day)
        period = pay_period_containing(config, date(2025, 1, 2))

        assert period.start_date == date(2024, 12, 20)
        assert period.end_date == date(2025, 1, 2)

    def test_span_of_several_periods(self, anchor_day):
        config = PayPeriodConfig(anchor_date=anchor_day)
        period = pay_period_span(config, date(2025, 1, 10), 2)

        assert period.start_date == date(2025, 1, 3)
        assert period.end_date == date(2025, 1, 30)

    def test_span_needs_positive_count(self, anchor_day):
        with pytest.raises(ValidationError):
            pay_period_span(PayPeriodConfig(anchor_date=anchor_day), anchor_day, 0)

    @pytest.mark.parametrize("length", [0, -14, 32, True, 14.0])
    def test_invalid_period_length(self, anchor_day, length):
        with pytest.raises(ValidationError):
            make_pay_period_config(anchor_day, length)

    def test_valid_config(self, anchor_day):
        assert make_pay_period_config(anchor_day, 7).period_length_days == 7


class TestTransactionStatus:
    """Tests for transaction status transitions."""

    def test_legal_transitions(self):
        assert TransactionStatus.PENDING.can_transition_to(TransactionStatus.POSTED)
        assert TransactionStatus.POSTED.can_transition_to(TransactionStatus.CLEARED)
        assert TransactionStatus.CLEARED.can_transition_to(TransactionStatus.RECONCILED)
        assert TransactionStatus.CLEARED.can_transition_to(TransactionStatus.VOID)

    def test_illegal_transitions(self):
        assert not TransactionStatus.POSTED.can_transition_to(TransactionStatus.PENDING)
        assert not TransactionStatus.RECONCILED.can_transition_to(TransactionStatus.VOID)
        assert not TransactionStatus.VOID.can_transition_to(TransactionStatus.POSTED)
