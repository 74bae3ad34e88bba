"""Budget period and pay period calculations."""

from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from lifeos_finance.domain.entities import BudgetPeriod, PayPeriodConfig
from lifeos_finance.domain.errors import ValidationError
from lifeos_finance.domain.types import BudgetPeriodType

MAX_PAY_PERIOD_DAYS = 31

_KEY_PREFIXES = {
    BudgetPeriodType.WEEKLY: "w-",
    BudgetPeriodType.BI_WEEKLY: "bw-",
    BudgetPeriodType.SEMI_MONTHLY: "sm-",
    BudgetPeriodType.CUSTOM: "c-",
    BudgetPeriodType.PAY_PERIOD: "pp-",
}


def period_key(period_type: BudgetPeriodType, start: date) -> str:
    """Generate the unique key of a period.

    Monthly periods use "YYYY-MM"; every other type uses a type prefix and
    the start date, e.g. "pp-2025-01-03".
    """
    if period_type == BudgetPeriodType.MONTHLY:
        return start.strftime("%Y-%m")
    return _KEY_PREFIXES[period_type] + start.isoformat()


def create_period(period_type: BudgetPeriodType, start: date, end: date) -> BudgetPeriod:
    """Create a budget period with its generated key.

    Raises:
        ValidationError: If end is before start
    """
    if end < start:
        raise ValidationError("End date must not be before start date")
    return BudgetPeriod(
        period_type=period_type,
        start_date=start,
        end_date=end,
        period_key=period_key(period_type, start),
    )


def month_period(year: int, month: int) -> BudgetPeriod:
    """Return the monthly period covering the whole of year-month."""
    try:
        start = date(year, month, 1)
    except ValueError as e:
        raise ValidationError(f"Invalid month {year}-{month}: {e}") from e
    end = start + relativedelta(months=1, days=-1)
    return create_period(BudgetPeriodType.MONTHLY, start, end)


def period_contains(period: BudgetPeriod, day: date) -> bool:
    """Check if a date falls within the period (both ends inclusive)."""
    return period.start_date <= day <= period.end_date


def make_pay_period_config(anchor_date: date, period_length_days: int = 14) -> PayPeriodConfig:
    """Create a validated pay period configuration.

    Raises:
        ValidationError: If the period length is not between 1 and 31 days
    """
    if isinstance(period_length_days, bool) or not isinstance(period_length_days, int):
        raise ValidationError("Period length must be a whole number of days")
    if period_length_days <= 0:
        raise ValidationError("Period length must be positive")
    if period_length_days > MAX_PAY_PERIOD_DAYS:
        raise ValidationError(f"Period length cannot exceed {MAX_PAY_PERIOD_DAYS} days")
    return PayPeriodConfig(anchor_date=anchor_date, period_length_days=period_length_days)


def pay_period_containing(config: PayPeriodConfig, day: date) -> BudgetPeriod:
    """Return the pay period that contains day.

    Periods repeat every period_length_days starting at the anchor date, in
    both directions.
    """
    length = config.period_length_days
    elapsed = (day - config.anchor_date).days // length
    start = config.anchor_date + timedelta(days=elapsed * length)
    end = start + timedelta(days=length - 1)
    return create_period(BudgetPeriodType.PAY_PERIOD, start, end)


def pay_period_span(config: PayPeriodConfig, day: date, count: int) -> BudgetPeriod:
    """Return a window of count consecutive pay periods starting at the one containing day."""
    if count <= 0:
        raise ValidationError("Period count must be positive")
    first = pay_period_containing(config, day)
    end = first.start_date + timedelta(days=config.period_length_days * count - 1)
    return create_period(BudgetPeriodType.PAY_PERIOD, first.start_date, end)
