"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as a duplicate key or a stale revision."""


class InvalidDocumentError(ValidationError):
    """A stored document cannot be mapped to a domain entity."""

    def __init__(self, reason: str, key: Optional[str] = None):
        self.reason = reason
        self.key = key
        prefix = f"Document '{key}'" if key else "Document"
        super().__init__(f"{prefix} is invalid: {reason}")


def require_value(value, name: str):
    """Fail fast when a required argument is missing.

    Strings must also be non-blank. Returns the value unchanged.

    Raises:
        ValidationError: If the value is None or a blank string
    """
    if value is None:
        raise ValidationError(f"{name} is required")
    if isinstance(value, str) and not value.strip():
        raise ValidationError(f"{name} cannot be empty")
    return value


def account_not_found(account_id: str) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def pay_period_not_configured() -> str:
    """Return message when no pay period configuration is stored."""
    return "Pay period is not configured. Run 'pay-period set' first."


def invalid_enum_value(kind: str, value: object) -> str:
    """Return message for an unknown enumeration value."""
    return f"Unknown {kind}: {value}"
