"""
Database seeding service for loading activity logs from CSV files.

Usage:
    from carbon_ledger.services.seed_database import DatabaseSeeder

    async with DatabaseSeeder() as seeder:
        await seeder.seed_all(clear_existing=True)

CSV columns: owner_id, type, date (YYYY-MM-DD), quantity, unit, notes.
Quantities that cannot be parsed are stored as null and count as 1 in
the ledger.
"""

import csv
import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.database.repositories import ActivityLogRepository
from carbon_ledger.database.schemas import ActivityLogDBModel, PayoutDBModel
from carbon_ledger.database.session_manager.db_session import Database

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "test" / "test_data"
ACTIVITY_LOGS_FILE = "Activity_Logs.csv"


def parse_quantity(raw: str | None) -> Decimal | None:
    """Parse a CSV quantity; None when blank, non-numeric or negative."""
    if raw is None or not raw.strip():
        return None
    try:
        value = Decimal(raw.strip().replace(",", ""))
    except InvalidOperation:
        return None
    if not value.is_finite() or value < 0:
        return None
    return value


class DatabaseSeeder:
    """Service for seeding the database with activity logs from CSV files."""

    def __init__(
        self,
        session: AsyncSession | None = None,
        data_dir: str | Path = DEFAULT_DATA_DIR,
    ):
        """
        Initialize the database seeder.

        Args:
            session: Optional async database session. If not provided, will create one.
            data_dir: Directory containing CSV files

        Raises:
            ValueError: If the data directory does not exist
        """
        self._session = session
        self._external_session = session is not None
        self.data_dir = Path(data_dir)

        if not self.data_dir.exists():
            raise ValueError(f"Data directory not found: {self.data_dir}")

    async def __aenter__(self):
        """Context manager entry."""
        if not self._external_session:
            db = Database()
            self._session = await db.__aenter__()
            self._db_context = db
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        if not self._external_session and hasattr(self, "_db_context"):
            await self._db_context.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def session(self) -> AsyncSession:
        """Get the database session."""
        if not self._session:
            raise RuntimeError("Session not initialized. Use as context manager.")
        return self._session

    async def seed_all(self, clear_existing: bool = False) -> dict[str, Any]:
        """
        Seed all data from CSV files.

        Args:
            clear_existing: If True, delete existing logs and payouts first

        Returns:
            Dictionary with seeding statistics
        """
        logger.info("Starting database seeding")

        stats = {"activity_logs": 0, "owners": 0, "errors": []}

        try:
            if clear_existing:
                await self._clear_existing_data()

            created, owners, errors = await self.seed_activity_logs()
            stats["activity_logs"] = created
            stats["owners"] = len(owners)
            stats["errors"].extend(errors)

            await self.session.commit()
            logger.info(f"Database seeding completed: {stats}")
            return stats

        except Exception as e:
            logger.error(f"Error during database seeding: {e}", exc_info=True)
            await self.session.rollback()
            raise

    async def _clear_existing_data(self):
        """Delete all activity logs and payouts."""
        logger.info("Clearing existing data")
        await self.session.execute(delete(PayoutDBModel))
        await self.session.execute(delete(ActivityLogDBModel))
        await self.session.commit()
        logger.info("Existing data cleared")

    async def seed_activity_logs(self) -> tuple[int, set[str], list[str]]:
        """
        Load activity logs from Activity_Logs.csv.

        Returns:
            (number of logs created, owner ids seen, row errors)
        """
        csv_file = self.data_dir / ACTIVITY_LOGS_FILE
        if not csv_file.exists():
            logger.warning(f"File not found: {csv_file}")
            return 0, set(), []

        logger.info(f"Loading activity logs from {csv_file}")
        repo = ActivityLogRepository(self.session)
        count = 0
        owners: set[str] = set()
        errors: list[str] = []

        with open(csv_file, "r", newline="") as f:
            reader = csv.DictReader(f)
            for line_number, row in enumerate(reader, start=2):
                try:
                    owner_id = (row.get("owner_id") or "").strip()
                    activity_type = (row.get("type") or "").strip()
                    if not owner_id or not activity_type:
                        raise ValueError("owner_id and type are required")

                    await repo.create(
                        owner_id=owner_id,
                        type=activity_type,
                        date=date.fromisoformat(row["date"].strip()),
                        quantity=parse_quantity(row.get("quantity")),
                        unit=(row.get("unit") or "").strip() or None,
                        notes=(row.get("notes") or "").strip(),
                        raw_data=dict(row),
                    )
                    owners.add(owner_id)
                    count += 1

                except (KeyError, ValueError) as e:
                    message = f"Line {line_number}: {e}"
                    logger.warning(f"Failed to create activity log from row {row}: {e}")
                    errors.append(message)
                    continue

        logger.info(f"Created {count} activity logs for {len(owners)} owners")
        return count, owners, errors
