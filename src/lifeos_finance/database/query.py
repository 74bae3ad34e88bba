"""Filtered, sorted and paginated document queries."""

from dataclasses import dataclass, replace
from typing import Any, Optional

from lifeos_finance.domain.errors import ValidationError

EQ = "=="
GTE = ">="
LTE = "<="
CONTAINS_CI = "contains_ci"  # case-insensitive substring

FILTER_OPERATORS = (EQ, GTE, LTE, CONTAINS_CI)


@dataclass(frozen=True)
class Filter:
    """A single predicate on a top-level document field."""

    field: str
    op: str
    value: Any


@dataclass(frozen=True)
class DocumentQuery:
    """Immutable description of a collection query.

    Filters are joined with AND. Results are ordered by sort_field (string
    comparison, ties broken by document key) or by key when no sort field is
    set.
    """

    collection: str
    filters: tuple[Filter, ...] = ()
    sort_field: Optional[str] = None
    descending: bool = False
    limit: Optional[int] = None
    offset: int = 0

    def where(self, field: str, op: str, value: Any) -> "DocumentQuery":
        """Return a copy with one more filter."""
        if op not in FILTER_OPERATORS:
            raise ValidationError(f"Unsupported filter operator: {op}")
        if op == CONTAINS_CI and not isinstance(value, str):
            raise ValidationError("Substring filters need a string value")
        return replace(self, filters=self.filters + (Filter(field, op, value),))

    def order_by(self, field: str, descending: bool = False) -> "DocumentQuery":
        return replace(self, sort_field=field, descending=descending)

    def paginate(self, limit: Optional[int], offset: int = 0) -> "DocumentQuery":
        """Return a copy limited to limit documents after skipping offset."""
        if limit is not None and limit < 0:
            raise ValidationError("Limit must be non-negative")
        if offset < 0:
            raise ValidationError("Offset must be non-negative")
        return replace(self, limit=limit, offset=offset)
