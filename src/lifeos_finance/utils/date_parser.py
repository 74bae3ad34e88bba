"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser

from lifeos_finance.domain.errors import ValidationError


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports ISO and other absolute formats ("2025-01-03", "January 3, 2025")
    and the relative words "today", "yesterday" and "tomorrow".

    Args:
        date_str: Date string
        today: Reference day for relative words (defaults to date.today())

    Raises:
        ValidationError: If the string is not a date
    """
    if not date_str or not date_str.strip():
        raise ValidationError("Empty date string")

    text = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in relative_dates:
        return relative_dates[text]

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValidationError(f"Could not parse date '{date_str}': {e}") from e
