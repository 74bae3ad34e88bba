#!/usr/bin/env python3
"""Migration script to backfill period fields on budget documents.

Budgets written before period types existed only carry ``year`` and
``month``. This migration adds the fields of the matching monthly period:
- periodType = "Monthly"
- startDate  = first day of the month
- endDate    = last day of the month
- periodKey  = "YYYY-MM"

Documents that already have all three of startDate, endDate and periodKey are
left alone, so the migration can be run repeatedly. Documents without a
usable year/month are reported and skipped.

Usage:
    python migrations/migrate_budget_periods.py [--db-path PATH]
"""

import sys
from pathlib import Path

# Add src to path so we can import lifeos_finance modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from lifeos_finance.database.base import KEY_FIELD, REVISION_FIELD, strip_system_fields
from lifeos_finance.database.errors import RevisionConflictError
from lifeos_finance.database.factories import create_sqlite_store
from lifeos_finance.database.mappers import format_date
from lifeos_finance.database.models import Collections
from lifeos_finance.database.query import DocumentQuery
from lifeos_finance.domain.errors import ValidationError
from lifeos_finance.domain.periods import month_period

PERIOD_FIELDS = ("startDate", "endDate", "periodKey")


def needs_backfill(document: dict) -> bool:
    """Check if a budget document is missing any period field.

    Args:
        document: Budget document

    Returns:
        True if startDate, endDate or periodKey is missing or blank
    """
    for field in PERIOD_FIELDS:
        value = document.get(field)
        if not isinstance(value, str) or not value.strip():
            return True
    return False


def backfilled_body(document: dict) -> dict:
    """Return the document body with the monthly period fields added.

    Raises:
        ValidationError: If year and month do not name a valid month
    """
    year = document.get("year")
    month = document.get("month")
    if not isinstance(year, int) or not isinstance(month, int):
        raise ValidationError("year and month must be integers")

    period = month_period(year, month)
    body = strip_system_fields(document)
    body["periodType"] = period.period_type.value
    body["startDate"] = format_date(period.start_date)
    body["endDate"] = format_date(period.end_date)
    body["periodKey"] = period.period_key
    return body


def migrate_database(database_path: str | None = None) -> tuple[int, int, int]:
    """Backfill period fields on legacy budget documents.

    Args:
        database_path: Path to database file. If None, uses default location.

    Returns:
        Tuple of (updated, already current, skipped) document counts
    """
    store = create_sqlite_store(database_path=database_path)
    store.connect()

    updated = current = skipped = 0
    try:
        print("Starting migration: backfilling budget periods...")
        documents = store.query(DocumentQuery(Collections.BUDGETS))

        for document in documents:
            key = document[KEY_FIELD]
            if not needs_backfill(document):
                current += 1
                continue

            try:
                body = backfilled_body(document)
            except ValidationError as e:
                print(f"  Skipped {key}: {e}")
                skipped += 1
                continue

            try:
                store.replace(
                    Collections.BUDGETS, key, body, expected_revision=document[REVISION_FIELD]
                )
            except RevisionConflictError:
                # Saved by another writer meanwhile; a rerun picks it up
                print(f"  Skipped {key}: changed during migration")
                skipped += 1
                continue
            print(f"  Updated {key}: period {body['periodKey']}")
            updated += 1

        print(
            f"Migration completed: {updated} updated, {current} already current, {skipped} skipped"
        )
        return updated, current, skipped

    except Exception as e:
        print(f"Migration failed: {e}")
        raise
    finally:
        store.disconnect()


def main():
    """Main entry point for migration script."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Backfill period fields on legacy budget documents"
    )
    parser.add_argument(
        "--db-path",
        type=str,
        help="Path to database file (overrides LIFEOS_DB_PATH environment variable)",
    )
    args = parser.parse_args()

    try:
        migrate_database(database_path=args.db_path)
        return 0
    except Exception as e:
        print(f"\nMigration failed: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
