"""Utility functions for lifeos_finance."""

from lifeos_finance.utils.amount_parser import parse_amount
from lifeos_finance.utils.date_parser import parse_date

__all__ = ["parse_amount", "parse_date"]
