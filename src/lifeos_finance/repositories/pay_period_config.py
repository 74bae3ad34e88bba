"""Pay period configuration repository."""

from datetime import datetime, timezone
from typing import Optional

from lifeos_finance.database.base import DocumentStore
from lifeos_finance.database.mappers import (
    parse_timestamp,
    pay_period_config_from_document,
    pay_period_config_to_document,
    to_domain,
)
from lifeos_finance.database.models import Collections
from lifeos_finance.domain.entities import PayPeriodConfig
from lifeos_finance.domain.errors import InvalidDocumentError, require_value
from lifeos_finance.domain.periods import make_pay_period_config
from lifeos_finance.logging_setup import get_logger

logger = get_logger(__name__)

CONFIG_KEY = "default"


class PayPeriodConfigRepository:
    """Repository for the single pay period configuration document."""

    collection = Collections.PAY_PERIOD_CONFIG

    def __init__(self, store: DocumentStore):
        """Initialize repository.

        Args:
            store: Document store shared by all repositories
        """
        self.store = store

    def get(self) -> Optional[PayPeriodConfig]:
        """Get the configuration, or None if it is missing or invalid."""
        return to_domain(
            pay_period_config_from_document,
            self.store.get(self.collection, CONFIG_KEY),
            self._log_invalid,
        )

    def _log_invalid(self, error: InvalidDocumentError) -> None:
        logger.warning("Invalid pay period configuration read as missing: %s", error.reason)

    def save(self, config: PayPeriodConfig) -> PayPeriodConfig:
        """Store the configuration, keeping the original createdAt.

        Raises:
            ValidationError: If the anchor date is missing or the period
                length is not between 1 and 31 days
        """
        require_value(config, "config")
        require_value(config.anchor_date, "anchor date")
        make_pay_period_config(config.anchor_date, config.period_length_days)
        now = datetime.now(timezone.utc)
        created_at = now
        existing = self.store.get(self.collection, CONFIG_KEY)
        if existing is not None and isinstance(existing.get("createdAt"), str):
            try:
                created_at = parse_timestamp(existing["createdAt"])
            except (ValueError, OverflowError):
                logger.warning("Unreadable createdAt on pay period configuration replaced")
        document = pay_period_config_to_document(config, CONFIG_KEY, created_at, now)
        self.store.upsert(self.collection, CONFIG_KEY, document)
        logger.debug("Saved pay period configuration anchored at %s", config.anchor_date)
        return config

    def delete(self) -> bool:
        """Remove the configuration. Returns False if none was stored."""
        return self.store.delete(self.collection, CONFIG_KEY)
