"""Amount parsing utilities."""

import re
from decimal import Decimal

from lifeos_finance.domain.errors import ValidationError
from lifeos_finance.domain.types import to_money

_CURRENCY_SYMBOLS = re.compile(r"[$€£¥]")


def parse_amount(amount_str: str) -> Decimal:
    """Parse a user supplied amount into a monetary Decimal.

    Accepts "123.45", "-$123.45", "1,234.56" and accounting style negatives
    such as "(123.45)". The result is rounded to two places.

    Raises:
        ValidationError: If the string is not an amount
    """
    if not amount_str or not amount_str.strip():
        raise ValidationError("Empty amount string")

    text = amount_str.strip()

    is_negative = False
    if text.startswith("(") and text.endswith(")"):
        is_negative = True
        text = text[1:-1]

    text = _CURRENCY_SYMBOLS.sub("", text).replace(",", "").strip()
    try:
        amount = to_money(text)
    except ValidationError as e:
        raise ValidationError(f"Could not parse amount '{amount_str}'") from e
    return -amount if is_negative else amount
